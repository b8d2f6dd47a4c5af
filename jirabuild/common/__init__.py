"""Common utilities and shared functionality."""

from .logging_utils import (
    setup_logging,
    log_build_message,
)

__all__ = [
    # Logging utilities
    "setup_logging",
    "log_build_message",
]
