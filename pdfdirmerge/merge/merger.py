"""Merge functionality for the :mod:`pdfdirmerge.merge` package."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import Iterable, Sequence

from ..core.model import DEFAULT_VERSION, Document, IdMap, ObjectId
from ..core.parser import load_document
from ..core.utils import PathLike, resolve_path
from ..core.writer import save
from ..exceptions import PdfMergeError
from .allocator import IdAllocator
from .catalog import build_catalog
from .graph import dangling_references
from .pagetree import build_page_tree, collect_page_order
from .rewriter import build_id_map, copy_objects
from .scanner import collect_inputs, output_path_for

LOGGER = logging.getLogger("pdfdirmerge.merge")

__all__ = ["MergeContext", "merge_documents", "merge_pdfs", "merge_directory"]


def _version_key(version: str) -> tuple[int, ...]:
    parts: list[int] = []
    for part in version.split("."):
        digits = "".join(ch for ch in part if ch.isdigit())
        parts.append(int(digits) if digits else 0)
    return tuple(parts)


@dataclass
class MergeContext:
    """State owned by exactly one merge operation."""

    allocator: IdAllocator = field(default_factory=IdAllocator)
    merged: Document = field(default_factory=Document)
    sources: list[tuple[Document, IdMap]] = field(default_factory=list)

    def add(self, document: Document) -> IdMap:
        """Copy *document* into the merged table and return its id map."""

        id_map = build_id_map(document, self.allocator)
        copy_objects(document, id_map, self.merged)
        self.sources.append((document, id_map))
        LOGGER.debug(
            "Copied %d object(s) and %d page(s) from %s",
            len(document),
            document.page_count,
            document.path,
        )
        return id_map

    def finalize(self) -> Document:
        """Attach the page tree, catalog and trailer and return the result."""

        pages_id: ObjectId = build_page_tree(self.sources, self.allocator, self.merged)
        build_catalog(pages_id, self.allocator, self.merged)
        versions = [document.version for document, _ in self.sources]
        self.merged.version = max(versions, key=_version_key, default=DEFAULT_VERSION)
        self.merged.page_ids = tuple(collect_page_order(self.sources))
        return self.merged


def merge_documents(documents: Iterable[Document]) -> Document:
    """Concatenate *documents* in order into a new :class:`Document`.

    Sources are only read.  The result holds every source object under a
    fresh id plus one new ``/Pages`` node and one new ``/Catalog``.
    """

    context = MergeContext()
    for document in documents:
        context.add(document)
    merged = context.finalize()
    if LOGGER.isEnabledFor(logging.DEBUG):
        dangling = dangling_references(merged)
        if dangling:
            LOGGER.debug("Carried over %d dangling reference(s) from the sources", len(dangling))
    LOGGER.info(
        "Merged %d document(s): %d object(s), %d page(s)",
        len(context.sources),
        len(merged),
        merged.page_count,
    )
    return merged


def merge_pdfs(
    inputs: Sequence[PathLike],
    output: PathLike,
    *,
    atomic: bool = True,
) -> Path:
    """Merge the PDF files *inputs*, in order, into *output*.

    Every input is loaded before anything is written; the first failure
    aborts the merge.

    Raises:
        PdfMergeError: If no inputs are given.
        DocumentLoadError: If an input cannot be parsed.
        OutputWriteError: If the merged file cannot be written.
    """

    pdf_paths = [resolve_path(path) for path in inputs]
    if not pdf_paths:
        raise PdfMergeError("No input PDFs provided")

    output_path = resolve_path(output)
    documents = []
    for pdf_path in pdf_paths:
        LOGGER.debug("Processing input PDF %s", pdf_path)
        documents.append(load_document(pdf_path))

    merged = merge_documents(documents)
    save(merged, output_path, atomic=atomic)
    LOGGER.info("Merged %d PDFs into %s", len(pdf_paths), output_path)
    return output_path


def merge_directory(directory: PathLike, *, atomic: bool = True) -> Path:
    """Merge every PDF in *directory* into ``<parent>/<directory>.pdf``.

    Files are ordered by ascending modification time.
    """

    inputs = collect_inputs(directory)
    return merge_pdfs(inputs, output_path_for(directory), atomic=atomic)
