from .exceptions import HomologyError, InvariantViolation, ValidationError
from .logging import get_logger, set_level, setup_logger, shutdown_logging

__all__ = [
    "HomologyError",
    "InvariantViolation",
    "ValidationError",
    "get_logger",
    "set_level",
    "setup_logger",
    "shutdown_logging",
]
