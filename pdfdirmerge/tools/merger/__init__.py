"""Directory merge commands exposed through the tools namespace."""

from __future__ import annotations

from .commands import (
    CountPdfsTool,
    MergeDirectoryTool,
    PreviewDirectoryTool,
    count_pdfs_command,
    merge_directory_command,
    preview_directory_command,
)

__all__ = [
    "CountPdfsTool",
    "MergeDirectoryTool",
    "PreviewDirectoryTool",
    "count_pdfs_command",
    "merge_directory_command",
    "preview_directory_command",
]
