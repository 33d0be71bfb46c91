import logging
from pathlib import Path

logger = logging.getLogger(__name__)

PLACEHOLDER_DOMAIN = "example.com"
COMMENT_PREFIXES = ("#", "//")


def _is_cookie_line(line: str) -> bool:
    stripped = line.strip()
    return bool(stripped) and not stripped.startswith(COMMENT_PREFIXES)


def has_cookies(cookie_file: Path) -> bool:
    """
    Tells whether the cookie file holds real cookies worth passing to yt-dlp.

    A missing or unreadable file, a file with only comments, or the template
    shipped with the placeholder domain all count as "no cookies".
    """
    if not cookie_file.is_file():
        return False

    try:
        content = cookie_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Could not read cookie file '{cookie_file}': {e}")
        return False

    if not content.strip() or PLACEHOLDER_DOMAIN in content:
        return False
    return any(_is_cookie_line(line) for line in content.splitlines())
