"""In-memory document model used by the merge engine.

A :class:`Document` is an arena of indirect objects keyed by
:class:`ObjectId`.  Object values are pypdf's generic PDF objects
(:class:`~pypdf.generic.DictionaryObject`, :class:`~pypdf.generic.ArrayObject`,
:class:`~pypdf.generic.StreamObject`, :class:`~pypdf.generic.IndirectObject`
and the scalar types).  References are stored as plain
:class:`~pypdf.generic.IndirectObject` values and are never owning pointers,
so cyclic page trees need no special handling.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, NamedTuple

from pypdf.generic import DictionaryObject, IndirectObject, PdfObject

__all__ = ["ObjectId", "IdMap", "Document", "CommandResult", "DEFAULT_VERSION"]

DEFAULT_VERSION = "1.4"

_MAX_OBJECT_NUMBER = 2**32 - 1
_MAX_GENERATION = 2**16 - 1


class ObjectId(NamedTuple):
    """``(object_number, generation)`` pair naming an indirect object."""

    number: int
    generation: int = 0

    @classmethod
    def of(cls, number: int, generation: int = 0) -> "ObjectId":
        number = int(number)
        generation = int(generation)
        if not 0 <= number <= _MAX_OBJECT_NUMBER:
            raise ValueError(f"Object number out of range: {number}")
        if not 0 <= generation <= _MAX_GENERATION:
            raise ValueError(f"Generation out of range: {generation}")
        return cls(number, generation)

    @classmethod
    def from_reference(cls, reference: IndirectObject) -> "ObjectId":
        return cls.of(reference.idnum, reference.generation)

    def reference(self, pdf: Any = None) -> IndirectObject:
        """Return an :class:`IndirectObject` pointing at this id."""

        return IndirectObject(self.number, self.generation, pdf)

    def __str__(self) -> str:
        return f"{self.number} {self.generation} R"


IdMap = dict[ObjectId, ObjectId]


@dataclass(slots=True, eq=False)
class Document:
    """Object table, trailer and version of one PDF document."""

    objects: dict[ObjectId, PdfObject] = field(default_factory=dict)
    trailer: DictionaryObject = field(default_factory=DictionaryObject)
    max_id: int = 0
    version: str = DEFAULT_VERSION
    page_ids: tuple[ObjectId, ...] = ()
    path: Path | None = None

    def __len__(self) -> int:
        return len(self.objects)

    def __contains__(self, object_id: object) -> bool:
        return object_id in self.objects

    @property
    def page_count(self) -> int:
        return len(self.page_ids)

    def get_pages(self) -> dict[int, ObjectId]:
        """Return ``{page_number: page_id}`` with 1-based page numbers."""

        return {index: page_id for index, page_id in enumerate(self.page_ids, start=1)}

    def add_object(self, object_id: ObjectId, obj: PdfObject) -> None:
        if object_id in self.objects:
            raise ValueError(f"Object {object_id} already present")
        self.objects[object_id] = obj
        self.max_id = max(self.max_id, object_id.number)

    def get_object(self, reference: ObjectId | IndirectObject | int) -> PdfObject | None:
        """Resolve *reference* against the object table.

        Accepts the same inputs as ``PdfReader.get_object`` so that
        ``IndirectObject(n, g, document).get_object()`` works on merged
        documents.
        """

        if isinstance(reference, IndirectObject):
            key = ObjectId(reference.idnum, reference.generation)
        elif isinstance(reference, ObjectId):
            key = reference
        else:
            key = ObjectId(int(reference), 0)
        return self.objects.get(key)

    def reference(self, object_id: ObjectId) -> IndirectObject:
        """Return a reference to *object_id* bound to this document."""

        return object_id.reference(self)

    @property
    def root(self) -> DictionaryObject | None:
        root_ref = self.trailer.get("/Root")
        if not isinstance(root_ref, IndirectObject):
            return None
        catalog = self.get_object(root_ref)
        return catalog if isinstance(catalog, DictionaryObject) else None


@dataclass(slots=True)
class CommandResult:
    """Outcome of a command, reported to the user as a single message."""

    ok: bool
    message: str
    output: Path | None = None
    value: Any = None
    details: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.message
