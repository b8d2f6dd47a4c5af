"""Logging utilities for consistent logging across modules."""

import logging
import os
from pathlib import Path
from typing import Optional, TextIO

logger = logging.getLogger(__name__)

BUILD_LOG_PREFIX = "[JIRA]"


def setup_logging(log_dir: Optional[str] = None, level: int = logging.INFO) -> None:
    """Setup logging configuration."""
    log_dir = log_dir or os.getenv("JIRABUILD_LOG_DIR", "logs")
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_path / "jirabuild.log"),
            logging.StreamHandler()
        ]
    )


def log_build_message(sink: Optional[TextIO], message: str) -> None:
    """Write one line to the build log.

    The build log is what users see next to the build, so every line carries
    the ``[JIRA]`` prefix.
    """
    if sink is None:
        return
    sink.write(f"{BUILD_LOG_PREFIX} {message}\n")
    sink.flush()
