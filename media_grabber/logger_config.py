import logging
import sys


def setup_logger(level: str = "WARNING"):
    """Configures the root logger for the application."""
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    # Console handler
    handler = logging.StreamHandler(sys.stdout)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    handler.setFormatter(formatter)

    # Add the handler only once
    if not logger.handlers:
        logger.addHandler(handler)
