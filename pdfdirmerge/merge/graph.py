"""Read-only checks over a document's reference graph."""

from __future__ import annotations

from collections import deque

from pypdf.generic import DictionaryObject

from ..core.model import Document, ObjectId
from .rewriter import iter_references

__all__ = ["reachable_ids", "dangling_references", "objects_of_type"]


def reachable_ids(document: Document) -> set[ObjectId]:
    """Return ids reachable from the trailer that exist in the table."""

    seen: set[ObjectId] = set()
    queue = deque(iter_references(document.trailer))
    while queue:
        reference = queue.popleft()
        object_id = ObjectId(reference.idnum, reference.generation)
        if object_id in seen or object_id not in document.objects:
            continue
        seen.add(object_id)
        queue.extend(iter_references(document.objects[object_id]))
    return seen


def dangling_references(document: Document) -> list[tuple[ObjectId, ObjectId]]:
    """Return ``(holder, target)`` pairs whose target is not in the table."""

    dangling: list[tuple[ObjectId, ObjectId]] = []
    for holder in sorted(document.objects):
        for reference in iter_references(document.objects[holder]):
            target = ObjectId(reference.idnum, reference.generation)
            if target not in document.objects:
                dangling.append((holder, target))
    return dangling


def objects_of_type(document: Document, type_name: str, *, reachable_only: bool = True) -> list[ObjectId]:
    """Return ids of dictionaries whose ``/Type`` equals *type_name*."""

    candidates = reachable_ids(document) if reachable_only else set(document.objects)
    return sorted(
        object_id
        for object_id in candidates
        if isinstance(document.objects[object_id], DictionaryObject)
        and document.objects[object_id].get("/Type") == type_name
    )
