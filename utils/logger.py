# utils/logger.py

import logging
import os


def _level_from_env() -> int:
    debug = os.getenv("DEBUG_MODE", "false").strip().lower() in ("1", "true", "yes")
    return logging.DEBUG if debug else logging.INFO


def setup_logger(name="deep_search"):
    """
    Central logging setup so we don’t rely on print() everywhere.
    Logs go to stderr: stdout is reserved for the MCP stdio transport.
    DEBUG_MODE=true turns on debug output.

    The handler sits on the top-level logger of the dotted name only, so
    "deep_search.crawler.crawler" and "deep_search" write through the same
    handler and every record is printed once.
    """
    owner = logging.getLogger(name.split(".")[0])
    if not owner.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
            "%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        owner.addHandler(handler)
        owner.setLevel(_level_from_env())
    return logging.getLogger(name)


def set_debug(enabled: bool):
    """Switch every logger created through setup_logger to DEBUG (or back to INFO)."""
    level = logging.DEBUG if enabled else logging.INFO
    for logger in logging.Logger.manager.loggerDict.values():
        if isinstance(logger, logging.Logger) and logger.handlers:
            logger.setLevel(level)
