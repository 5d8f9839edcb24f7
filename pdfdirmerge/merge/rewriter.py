"""Copy object tables between documents while relabeling references.

Copying happens in two passes per source document.  :func:`build_id_map`
assigns a fresh id to every object first, so forward references resolve no
matter in which order objects are visited.  :func:`copy_objects` then inserts
every object under its new id after :func:`rewrite_references` has relabeled
the references it contains.

:func:`rewrite_references` walks container structure only.  A reference is
relabeled in place of following it, so the recursion depth is bounded by how
deeply dictionaries and arrays nest, never by cycles in the reference graph.
Containers are rebuilt rather than mutated, which keeps source documents
untouched.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator

from pypdf.generic import (
    ArrayObject,
    DecodedStreamObject,
    DictionaryObject,
    EncodedStreamObject,
    IndirectObject,
    PdfObject,
    StreamObject,
)

from ..core.model import Document, IdMap, ObjectId
from .allocator import IdAllocator

LOGGER = logging.getLogger("pdfdirmerge.merge")

__all__ = ["build_id_map", "rewrite_references", "copy_objects", "iter_references"]


def build_id_map(document: Document, allocator: IdAllocator) -> IdMap:
    """Allocate a new id for every object of *document*."""

    id_map: IdMap = {}
    for old_id in sorted(document.objects):
        id_map[old_id] = allocator.allocate()
    LOGGER.debug(
        "Mapped %d object(s) from %s onto ids %s..%s",
        len(id_map),
        document.path,
        min(id_map.values()).number if id_map else "-",
        max(id_map.values()).number if id_map else "-",
    )
    return id_map


def rewrite_references(obj: PdfObject, id_map: IdMap, pdf: Any = None) -> PdfObject:
    """Return a copy of *obj* whose references point at mapped ids.

    References missing from *id_map* are returned unchanged.  Rewritten
    references are bound to *pdf* so they can be resolved with
    ``get_object()``.  Stream payloads are shared, not copied or decoded.
    """

    if isinstance(obj, IndirectObject):
        new_id = id_map.get(ObjectId(obj.idnum, obj.generation))
        if new_id is None:
            return obj
        return IndirectObject(new_id.number, new_id.generation, pdf)
    if isinstance(obj, StreamObject):
        stream = EncodedStreamObject() if isinstance(obj, EncodedStreamObject) else DecodedStreamObject()
        stream._data = obj._data
        _rewrite_items(obj, stream, id_map, pdf)
        return stream
    if isinstance(obj, DictionaryObject):
        dictionary = DictionaryObject()
        _rewrite_items(obj, dictionary, id_map, pdf)
        return dictionary
    if isinstance(obj, ArrayObject):
        return ArrayObject(rewrite_references(item, id_map, pdf) for item in obj)
    return obj


def copy_objects(source: Document, id_map: IdMap, merged: Document) -> None:
    """Insert every object of *source* into *merged* under its mapped id."""

    for old_id, obj in source.objects.items():
        merged.add_object(id_map[old_id], rewrite_references(obj, id_map, merged))


def iter_references(obj: PdfObject) -> Iterator[IndirectObject]:
    """Yield every reference contained in *obj* without following any."""

    if isinstance(obj, IndirectObject):
        yield obj
    elif isinstance(obj, DictionaryObject):
        for value in obj.values():
            yield from iter_references(value)
    elif isinstance(obj, ArrayObject):
        for item in obj:
            yield from iter_references(item)


def _rewrite_items(
    source: DictionaryObject,
    target: DictionaryObject,
    id_map: IdMap,
    pdf: Any,
) -> None:
    for key, value in source.items():
        target[key] = rewrite_references(value, id_map, pdf)
