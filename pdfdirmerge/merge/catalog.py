"""Synthesize the root catalog and trailer of a merged document."""

from __future__ import annotations

import logging

from pypdf.generic import DictionaryObject, NameObject

from ..core.model import Document, ObjectId
from .allocator import IdAllocator

LOGGER = logging.getLogger("pdfdirmerge.merge")

__all__ = ["build_catalog"]


def build_catalog(pages_id: ObjectId, allocator: IdAllocator, merged: Document) -> ObjectId:
    """Insert a catalog pointing at *pages_id* and make it the trailer root."""

    catalog_id = allocator.allocate()
    merged.add_object(
        catalog_id,
        DictionaryObject(
            {
                NameObject("/Type"): NameObject("/Catalog"),
                NameObject("/Pages"): merged.reference(pages_id),
            }
        ),
    )
    merged.trailer[NameObject("/Root")] = merged.reference(catalog_id)
    merged.max_id = allocator.last
    LOGGER.debug("Built catalog %s (max id %d)", catalog_id, merged.max_id)
    return catalog_id
