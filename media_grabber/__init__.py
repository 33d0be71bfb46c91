"""Interactive yt-dlp front end that files downloads into dated folders."""

__version__ = "0.1.0"
