import sys

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}"


def configure_logging(level: str = "INFO", serialize: bool = False) -> None:
    """Route loguru output to stderr; ``serialize`` switches to JSON lines."""
    logger.configure(
        handlers=[
            {
                "sink": sys.stderr,
                "format": LOG_FORMAT,
                "serialize": serialize,
                "level": level,
            }
        ]
    )
