"""Directory discovery helpers for the merge workflow."""

from __future__ import annotations

import logging
from pathlib import Path

from ..core.utils import PathLike, resolve_path
from ..exceptions import DirectoryNotFoundError, DirectoryReadError, NoCandidateFilesError

LOGGER = logging.getLogger("pdfdirmerge.merge")

PDF_EXTENSION = "pdf"

__all__ = [
    "PDF_EXTENSION",
    "ensure_directory",
    "modification_time",
    "find_pdf_files",
    "sort_by_mtime",
    "collect_inputs",
    "count_pdf_files",
    "output_path_for",
]


def ensure_directory(path: PathLike) -> Path:
    """Return the resolved directory or raise :class:`DirectoryNotFoundError`."""

    directory = resolve_path(path)
    if not directory.is_dir():
        LOGGER.error("Directory %s does not exist", path)
        raise DirectoryNotFoundError(path)
    return directory


def find_pdf_files(path: PathLike) -> list[Path]:
    """Return files in *path* whose extension is exactly ``pdf``.

    The match is case-sensitive and not recursive.  Entries are returned in
    name order so that later stable sorting is reproducible.
    """

    directory = ensure_directory(path)
    try:
        entries = sorted(directory.iterdir())
    except OSError as exc:
        LOGGER.error("Failed to read directory %s: %s", directory, exc)
        raise DirectoryReadError(directory, exc) from exc

    candidates = [
        entry
        for entry in entries
        if entry.suffix == f".{PDF_EXTENSION}" and entry.is_file()
    ]
    LOGGER.debug("Found %d PDF file(s) in %s", len(candidates), directory)
    return candidates


def modification_time(path: Path) -> float:
    """Return the mtime of *path*, or ``0.0`` when it cannot be read."""

    try:
        return path.stat().st_mtime
    except OSError:
        LOGGER.warning("Unable to read modification time of %s", path)
        return 0.0


def sort_by_mtime(paths: list[Path]) -> list[Path]:
    """Sort *paths* by ascending modification time, keeping ties in order."""

    return sorted(paths, key=modification_time)


def collect_inputs(path: PathLike) -> list[Path]:
    """Return the PDF files of *path* in merge order.

    Raises:
        DirectoryNotFoundError: If *path* is not a directory.
        DirectoryReadError: If the directory cannot be listed.
        NoCandidateFilesError: If the directory holds no PDF files.
    """

    candidates = find_pdf_files(path)
    if not candidates:
        raise NoCandidateFilesError(path)
    return sort_by_mtime(candidates)


def count_pdf_files(path: PathLike) -> int:
    return len(find_pdf_files(path))


def output_path_for(path: PathLike) -> Path:
    """Return ``<parent>/<directory name>.pdf`` for the directory *path*."""

    directory = resolve_path(path)
    return directory.parent / f"{directory.name}.{PDF_EXTENSION}"
