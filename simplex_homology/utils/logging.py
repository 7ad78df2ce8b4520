# simplex_homology/utils/logging.py
"""
Logger registry for simplex_homology.

Every engine module does ``logger = setup_logger(__name__)``. Loggers are cached
by name so repeated imports never stack handlers; the registry is guarded by a
lock because callers are free to run the engine from worker threads.
"""

from __future__ import annotations

import logging
import sys
import threading
from pathlib import Path
from typing import Dict, Optional

_loggers: Dict[str, logging.Logger] = {}
_lock = threading.Lock()

_FORMATS = {
    "standard": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    "detailed": "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
    "simple": "%(levelname)s - %(message)s",
}


def setup_logger(
    name: str,
    level: str = "INFO",
    log_file: Optional[Path] = None,
    format_type: str = "standard",
) -> logging.Logger:
    """
    Configure (once) and return the logger called ``name``.

    Parameters
    ----------
    name : str
        Logger name, usually the module's ``__name__``.
    level : str
        One of DEBUG, INFO, WARNING, ERROR, CRITICAL.
    log_file : optional Path
        Extra file handler (always in the 'detailed' format).
    format_type : str
        'standard', 'detailed' or 'simple'.

    Raises
    ------
    ValueError
        If ``level`` is not a logging level name.
    """
    with _lock:
        if name in _loggers:
            return _loggers[name]

        numeric_level = getattr(logging, str(level).upper(), None)
        if not isinstance(numeric_level, int):
            raise ValueError(f"Invalid log level: {level}")

        logger = logging.getLogger(name)
        logger.setLevel(numeric_level)
        if logger.handlers:
            logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(_get_formatter(format_type))
        console_handler.setLevel(numeric_level)
        logger.addHandler(console_handler)

        if log_file is not None:
            try:
                log_file.parent.mkdir(parents=True, exist_ok=True)
                file_handler = logging.FileHandler(log_file, mode="a")
                file_handler.setFormatter(_get_formatter("detailed"))
                file_handler.setLevel(numeric_level)
                logger.addHandler(file_handler)
            except OSError as e:
                logger.warning(f"Could not create file handler for {log_file}: {e}")

        logger.propagate = False
        _loggers[name] = logger
        return logger


def _get_formatter(format_type: str) -> logging.Formatter:
    return logging.Formatter(_FORMATS.get(format_type, _FORMATS["standard"]))


def get_logger(name: str) -> logging.Logger:
    """Registered logger for ``name``, created with defaults if needed."""
    if name in _loggers:
        return _loggers[name]
    return setup_logger(name)


def set_level(level: str) -> None:
    """Change the level of every registered logger and its handlers."""
    numeric_level = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")
    with _lock:
        for logger in _loggers.values():
            logger.setLevel(numeric_level)
            for handler in logger.handlers:
                handler.setLevel(numeric_level)


def shutdown_logging() -> None:
    """Close all handlers and forget every registered logger."""
    with _lock:
        for logger in _loggers.values():
            for handler in logger.handlers:
                handler.close()
            logger.handlers.clear()
        _loggers.clear()
