"""Utilities shared by pdfdirmerge modules."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(_LOG_FORMAT)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False
    return logger


def configure_logging(verbose: bool = False) -> None:
    """Configure the ``pdfdirmerge`` logger hierarchy for command line use."""

    logger = get_logger("pdfdirmerge")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def resolve_path(path: PathLike | None) -> Path:
    if path is None:
        raise ValueError("Path must not be None")
    # Symlinks are kept so output names follow the path the caller gave.
    return Path(os.path.abspath(Path(path).expanduser()))


__all__ = ["PathLike", "get_logger", "configure_logging", "resolve_path"]
