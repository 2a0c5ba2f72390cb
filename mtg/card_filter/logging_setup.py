"""Logging setup for the card filter CLI."""

import logging
import sys
from pathlib import Path
from typing import Optional


def configure_logging(level: str = "INFO", log_file: Optional[str | Path] = None) -> None:
    """Configure root logging to stdout, and optionally to a file."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True
    )
