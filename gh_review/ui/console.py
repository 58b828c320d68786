"""Console logging control while a full-screen app owns the terminal."""

import logging


def suppress_console_logging() -> list[logging.StreamHandler]:
    """Remove stream handlers from root logger, return them for later restore."""
    root_logger = logging.getLogger()
    stream_handlers = [
        h
        for h in root_logger.handlers
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
    ]
    for handler in stream_handlers:
        root_logger.removeHandler(handler)
    return stream_handlers


def restore_console_logging(handlers: list[logging.StreamHandler]) -> None:
    """Re-add stream handlers to root logger."""
    root_logger = logging.getLogger()
    for handler in handlers:
        root_logger.addHandler(handler)
