"""Object-graph merge engine for the :mod:`pdfdirmerge` package."""

from __future__ import annotations

from .allocator import IdAllocator
from .catalog import build_catalog
from .graph import dangling_references, objects_of_type, reachable_ids
from .merger import MergeContext, merge_directory, merge_documents, merge_pdfs
from .pagetree import build_page_tree, collect_page_order
from .rewriter import build_id_map, copy_objects, iter_references, rewrite_references
from .scanner import collect_inputs, count_pdf_files, find_pdf_files, output_path_for, sort_by_mtime

__all__ = [
    "IdAllocator",
    "MergeContext",
    "build_catalog",
    "build_id_map",
    "build_page_tree",
    "collect_inputs",
    "collect_page_order",
    "copy_objects",
    "count_pdf_files",
    "dangling_references",
    "find_pdf_files",
    "iter_references",
    "merge_directory",
    "merge_documents",
    "merge_pdfs",
    "objects_of_type",
    "output_path_for",
    "reachable_ids",
    "rewrite_references",
    "sort_by_mtime",
]
