import logging
import shlex
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional, Tuple

import yaml
from pymonad.either import Either, Left, Right

from media_grabber.domain.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "media-grabber.yml"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """Runtime settings; every field can be overridden from media-grabber.yml."""
    root: Path = field(default_factory=Path.cwd)
    cookie_file: Path = Path("cookies.txt")
    downloader_command: Tuple[str, ...] = ("yt-dlp",)
    probe_timeout: float = 8.0
    socket_timeout: int = 5
    log_level: str = "WARNING"
    lang: Optional[str] = None


def _parse_command(value) -> Tuple[str, ...]:
    if isinstance(value, str):
        parts = shlex.split(value)
    elif isinstance(value, list) and all(isinstance(part, str) for part in value):
        parts = list(value)
    else:
        raise ValueError("'downloader' must be a string or a list of strings")
    if not parts:
        raise ValueError("'downloader' must not be empty")
    return tuple(parts)


def _parse_positive(value, key: str, kind):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"'{key}' must be a positive number")
    try:
        parsed = kind(value)
    except OverflowError:
        raise ValueError(f"'{key}' must be a finite number")
    if parsed != value or parsed <= 0:
        raise ValueError(f"'{key}' must be a positive {kind.__name__}")
    return parsed


def _parse_log_level(value) -> str:
    level = str(value).upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"'log_level' must be one of {', '.join(LOG_LEVELS)}")
    return level


_PARSERS = {
    "cookie_file": ("cookie_file", lambda v: Path(str(v))),
    "downloader": ("downloader_command", _parse_command),
    "probe_timeout": ("probe_timeout", lambda v: _parse_positive(v, "probe_timeout", float)),
    "socket_timeout": ("socket_timeout", lambda v: _parse_positive(v, "socket_timeout", int)),
    "log_level": ("log_level", _parse_log_level),
    "lang": ("lang", lambda v: str(v)),
}


def load_settings(root: Optional[Path] = None, config_file: Optional[Path] = None) -> Either[ConfigError, Settings]:
    """
    Builds the settings for a run rooted at `root` (the working directory by default).

    The YAML file is optional; when it is absent the defaults apply.
    """
    root = Path(root or Path.cwd()).resolve()
    config_file = config_file or root / CONFIG_FILE_NAME
    overrides = {}

    if config_file.exists():
        logger.info(f"Loading configuration from '{config_file}'.")
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (yaml.YAMLError, OSError) as e:
            logger.error(f"Could not read configuration file: {e}")
            return Left(ConfigError(f"Could not read '{config_file}': {e}"))

        if not isinstance(data, dict):
            return Left(ConfigError(f"'{config_file}' must contain a mapping of settings."))

        for key, value in data.items():
            if key not in _PARSERS:
                return Left(ConfigError(f"Unknown setting '{key}' in '{config_file}'."))
            attribute, parse = _PARSERS[key]
            try:
                overrides[attribute] = parse(value)
            except ValueError as e:
                return Left(ConfigError(f"Invalid value in '{config_file}': {e}"))
    else:
        logger.debug(f"No configuration file at '{config_file}', using defaults.")

    settings = replace(Settings(root=root), **overrides)
    if not settings.cookie_file.is_absolute():
        settings = replace(settings, cookie_file=root / settings.cookie_file)
    return Right(settings)
