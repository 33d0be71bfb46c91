from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AppError:
    """Base class for application errors."""
    message: str


@dataclass(frozen=True)
class ConfigError(AppError):
    """Invalid or unreadable configuration file."""
    pass


@dataclass(frozen=True)
class DirectoryError(AppError):
    """The destination directory could not be created."""
    pass


@dataclass(frozen=True)
class DownloaderError(AppError):
    """The yt-dlp process failed to start or exited with a non-zero code."""
    exit_code: Optional[int] = None
    stderr: str = ""

    @property
    def log_payload(self) -> str:
        return self.stderr or self.message
