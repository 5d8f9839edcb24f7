"""Merge every PDF in a directory into one structurally valid document."""

from __future__ import annotations

from pathlib import Path

from .core import CommandResult, Document, ObjectId, load_document, save, serialize
from .exceptions import (
    DirectoryNotFoundError,
    DirectoryReadError,
    DocumentLoadError,
    NoCandidateFilesError,
    OutputWriteError,
    PdfMergeError,
)
from .merge import (
    IdAllocator,
    MergeContext,
    collect_inputs,
    count_pdf_files,
    merge_directory,
    merge_documents,
    merge_pdfs,
    output_path_for,
)
from .tools import load_builtin_plugins
from .tools.merger import count_pdfs_command, merge_directory_command, preview_directory_command

__version__ = "0.1.0"

load_builtin_plugins()

__all__ = [
    "__version__",
    "CommandResult",
    "Document",
    "ObjectId",
    "IdAllocator",
    "MergeContext",
    "load_document",
    "save",
    "serialize",
    "collect_inputs",
    "count_pdf_files",
    "merge_directory",
    "merge_documents",
    "merge_pdfs",
    "output_path_for",
    "merge_directory_command",
    "count_pdfs_command",
    "preview_directory_command",
    "merge_folder",
    "count_pdfs",
    "PdfMergeError",
    "DirectoryNotFoundError",
    "DirectoryReadError",
    "NoCandidateFilesError",
    "DocumentLoadError",
    "OutputWriteError",
]


def merge_folder(dir_path: str | Path) -> str:
    """Merge *dir_path* and return the user-facing outcome message.

    The message either confirms the output path or describes the failure.
    """

    return merge_directory_command(str(dir_path)).message


def count_pdfs(dir_path: str | Path) -> int:
    """Convenience wrapper around :func:`merge.count_pdf_files`."""

    return count_pdf_files(dir_path)
