"""Build the single page tree node of a merged document."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from pypdf.generic import ArrayObject, DictionaryObject, IndirectObject, NameObject, NumberObject

from ..core.model import Document, IdMap, ObjectId
from .allocator import IdAllocator

LOGGER = logging.getLogger("pdfdirmerge.merge")

__all__ = ["INHERITABLE_PAGE_KEYS", "collect_page_order", "build_page_tree"]

INHERITABLE_PAGE_KEYS = ("/Resources", "/MediaBox", "/CropBox", "/Rotate")


def collect_page_order(sources: Iterable[tuple[Document, IdMap]]) -> list[ObjectId]:
    """Return merged page ids, document by document in ingestion order."""

    order: list[ObjectId] = []
    for document, id_map in sources:
        pages = document.get_pages()
        for page_number in sorted(pages):
            order.append(id_map[pages[page_number]])
    return order


def build_page_tree(
    sources: Sequence[tuple[Document, IdMap]],
    allocator: IdAllocator,
    merged: Document,
) -> ObjectId:
    """Insert one ``/Pages`` node listing every page and re-parent the pages.

    Returns the id of the new node.  An empty page list is accepted and
    produces ``/Count 0``.
    """

    page_ids = collect_page_order(sources)
    pages_id = allocator.allocate()
    merged.add_object(
        pages_id,
        DictionaryObject(
            {
                NameObject("/Type"): NameObject("/Pages"),
                NameObject("/Kids"): ArrayObject(merged.reference(page_id) for page_id in page_ids),
                NameObject("/Count"): NumberObject(len(page_ids)),
            }
        ),
    )

    parent = merged.reference(pages_id)
    for page_id in page_ids:
        page = merged.objects[page_id]
        if not isinstance(page, DictionaryObject):
            LOGGER.warning("Page object %s is not a dictionary; leaving it untouched", page_id)
            continue
        _inherit_attributes(page, merged)
        page[NameObject("/Parent")] = parent

    LOGGER.debug("Built page tree %s with %d page(s)", pages_id, len(page_ids))
    return pages_id


def _inherit_attributes(page: DictionaryObject, merged: Document) -> None:
    """Copy attributes the page inherits from its current ancestors onto it."""

    missing = [key for key in INHERITABLE_PAGE_KEYS if key not in page]
    visited: set[ObjectId] = set()
    parent_ref = page.get("/Parent")
    while missing and isinstance(parent_ref, IndirectObject):
        parent_id = ObjectId(parent_ref.idnum, parent_ref.generation)
        if parent_id in visited:
            break
        visited.add(parent_id)
        node = merged.objects.get(parent_id)
        if not isinstance(node, DictionaryObject):
            break
        for key in list(missing):
            if key in node:
                page[NameObject(key)] = node.raw_get(key)
                missing.remove(key)
        parent_ref = node.get("/Parent")
