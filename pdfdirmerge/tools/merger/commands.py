"""Directory commands exposed through the tool registry.

Each command takes a directory path string and reports its outcome as a
:class:`~pdfdirmerge.core.model.CommandResult`.  Merge failures never escape
as exceptions from this layer; their message becomes the result message.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from ...core.model import CommandResult
from ...core.parser import read_page_count
from ...core.utils import get_logger
from ...exceptions import PdfMergeError
from ...merge.merger import merge_directory
from ...merge.scanner import collect_inputs, count_pdf_files, modification_time
from ..common.interfaces import BaseTool, ToolContext
from ..common.pipeline import register_tool, registry

LOGGER = get_logger("pdfdirmerge.tools")

__all__ = [
    "MergeDirectoryTool",
    "CountPdfsTool",
    "PreviewDirectoryTool",
    "merge_directory_command",
    "count_pdfs_command",
    "preview_directory_command",
]


@register_tool("merge-directory")
class MergeDirectoryTool(BaseTool):
    name = "merge-directory"

    def run(self) -> CommandResult:
        directory = self.context.require_input()
        atomic = self.context.config.get("atomic", True)
        LOGGER.debug("Merging PDFs in %s (atomic=%s)", directory, atomic)
        try:
            output = merge_directory(directory, atomic=atomic)
        except PdfMergeError as exc:
            LOGGER.debug("Merge of %s failed: %s", directory, exc)
            return CommandResult(ok=False, message=str(exc))
        return CommandResult(ok=True, message=f"PDFs merged into '{output}'", output=output)


@register_tool("count-pdfs")
class CountPdfsTool(BaseTool):
    name = "count-pdfs"

    def run(self) -> CommandResult:
        directory = self.context.require_input()
        try:
            count = count_pdf_files(directory)
        except PdfMergeError as exc:
            return CommandResult(ok=False, message=str(exc))
        return CommandResult(ok=True, message=f"{count} PDF file(s) in '{directory}'", value=count)


@register_tool("preview-directory")
class PreviewDirectoryTool(BaseTool):
    """List the files of a directory in merge order with their page counts."""

    name = "preview-directory"

    def run(self) -> CommandResult:
        directory = self.context.require_input()
        try:
            inputs = collect_inputs(directory)
            entries = [_describe(path) for path in inputs]
        except PdfMergeError as exc:
            return CommandResult(ok=False, message=str(exc))
        total = sum(entry["pages"] for entry in entries)
        return CommandResult(
            ok=True,
            message=f"{len(entries)} PDF file(s), {total} page(s) in '{directory}'",
            value=entries,
            details={"total_pages": total},
        )


def _describe(path: Path) -> dict[str, object]:
    return {
        "path": path,
        "modified": datetime.fromtimestamp(modification_time(path)),
        "pages": read_page_count(path),
    }


def merge_directory_command(dir_path: str, *, atomic: bool = True) -> CommandResult:
    """Merge the PDFs of *dir_path* into ``<parent>/<name>.pdf``."""

    context = ToolContext(input_path=dir_path, config={"atomic": atomic})
    return registry.run("merge-directory", context)


def count_pdfs_command(dir_path: str) -> CommandResult:
    return registry.run("count-pdfs", ToolContext(input_path=dir_path))


def preview_directory_command(dir_path: str) -> CommandResult:
    return registry.run("preview-directory", ToolContext(input_path=dir_path))
