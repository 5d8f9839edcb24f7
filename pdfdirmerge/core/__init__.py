"""Document model, loading and serialization for pdfdirmerge."""

from __future__ import annotations

from .model import DEFAULT_VERSION, CommandResult, Document, IdMap, ObjectId
from .parser import load_document, read_page_count
from .writer import save, serialize, write_document

__all__ = [
    "DEFAULT_VERSION",
    "CommandResult",
    "Document",
    "IdMap",
    "ObjectId",
    "load_document",
    "read_page_count",
    "save",
    "serialize",
    "write_document",
]
