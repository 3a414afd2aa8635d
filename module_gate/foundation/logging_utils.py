"""Logging helpers for the command-line entry point."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


def setup_logging(level: str = "WARNING", *, log_file: str | None = None) -> logging.Logger:
    """
    Route `modulekit` and `module_gate` diagnostics to stderr (and optionally a file).
    """

    numeric_level = logging.getLevelName(str(level).strip().upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level!r}")

    formatter = logging.Formatter(LOG_FORMAT)

    handlers: list[logging.Handler] = []
    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(numeric_level)
    stream_handler.setFormatter(formatter)
    handlers.append(stream_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    for name in ("modulekit", "module_gate"):
        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG if log_file else numeric_level)
        for existing in list(logger.handlers):
            logger.removeHandler(existing)
            existing.close()
        for handler in handlers:
            logger.addHandler(handler)

    logger = logging.getLogger("module_gate")
    logger.debug("Logging initialized (level=%s, log_file=%s)", level, log_file)
    return logger
