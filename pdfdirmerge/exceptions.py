"""
Custom exceptions for pdfdirmerge.

Every failure aborts the merge it belongs to.  Messages are written for end
users and always name the offending path.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

Cause = Union[BaseException, str, None]


class PdfMergeError(Exception):
    """Base exception for all merge errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown PDF merge error occurred."


class DirectoryNotFoundError(PdfMergeError):
    """Raised when the input path does not resolve to a directory."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = path
        super().__init__(f"Directory '{path}' does not exist.")


class DirectoryReadError(PdfMergeError):
    """Raised when the directory exists but cannot be listed."""

    def __init__(self, path: Union[str, Path], cause: Cause = None) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to read directory '{path}': {cause}")


class NoCandidateFilesError(PdfMergeError):
    """Raised when a directory holds no PDF files."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = path
        super().__init__(f"No PDF files found in the directory '{path}'.")


class DocumentLoadError(PdfMergeError):
    """Raised when a candidate file cannot be parsed as a PDF."""

    def __init__(self, path: Union[str, Path], cause: Cause = None) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to load PDF '{path}': {cause}")


class OutputWriteError(PdfMergeError):
    """Raised when the merged document cannot be serialized or written."""

    def __init__(self, path: Union[str, Path], cause: Cause = None) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to save merged PDF '{path}': {cause}")


__all__ = [
    "PdfMergeError",
    "DirectoryNotFoundError",
    "DirectoryReadError",
    "NoCandidateFilesError",
    "DocumentLoadError",
    "OutputWriteError",
]
