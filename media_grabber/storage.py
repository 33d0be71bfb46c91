import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from toolz import pipe

from media_grabber.domain.models import MediaFormat

logger = logging.getLogger(__name__)

MAX_PLAYLIST_NAME_LENGTH = 50
ERROR_LOG_NAME = "download_errors.log"
PLAYLIST_ROOT = "download"
SINGLE_ROOT = "downloaded-media"

_SPECIAL_CHARS = re.compile(r"[^a-zA-Z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_timestamp(moment: datetime) -> str:
    """Renders an instant as UTC ISO-8601 with milliseconds, e.g. 2024-03-01T12:34:56.789Z."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def sanitize_playlist_name(raw: str) -> str:
    """Turns an untrusted playlist title into a short lowercase slug."""
    return pipe(
        raw,
        lambda s: _SPECIAL_CHARS.sub("", s),
        lambda s: _WHITESPACE.sub("-", s),
        str.lower,
        lambda s: s[:MAX_PLAYLIST_NAME_LENGTH],
    )


def download_directory_for(
    root: Path,
    media_format: Union[MediaFormat, str],
    is_playlist: bool = False,
    playlist_name: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Path:
    """
    Computes where a download goes, without touching the filesystem.

    Playlists:    <root>/download/<date>/<playlist_name>
    Single items: <root>/downloaded-media/<FORMAT>/<timestamp with ':' and '.' as '-'>
    """
    stamp = iso_timestamp(now or utc_now())
    root = Path(root).resolve()

    if is_playlist and playlist_name:
        return root / PLAYLIST_ROOT / stamp.split("T")[0] / playlist_name

    fmt = MediaFormat(media_format).value.upper()
    return root / SINGLE_ROOT / fmt / re.sub(r"[:.]", "-", stamp)


def create_download_directory(
    root: Path,
    media_format: Union[MediaFormat, str],
    is_playlist: bool = False,
    playlist_name: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Path:
    """Creates (if needed) and returns the destination directory. OSError propagates."""
    directory = download_directory_for(root, media_format, is_playlist, playlist_name, now)
    directory.mkdir(parents=True, exist_ok=True)
    logger.info(f"Download directory ready: {directory}")
    return directory


def log_error_to_file(directory: Path, url: str, error: str, now: Optional[datetime] = None) -> Path:
    """Appends a failure block to the directory's error log and returns the log path."""
    log_path = Path(directory) / ERROR_LOG_NAME
    entry = (
        "- Error when attempting this step.\n"
        f"URL: {url}\n"
        f"Error log: `{error}`\n"
        f"Timestamp: {iso_timestamp(now or utc_now())}\n"
        "\n"
    )
    with open(log_path, "a", encoding="utf-8") as log_file:
        log_file.write(entry)
    logger.info(f"Error for '{url}' appended to '{log_path}'.")
    return log_path
