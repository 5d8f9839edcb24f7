"""Load PDF files into :class:`~pdfdirmerge.core.model.Document` tables.

The heavy lifting (tokenizing, cross-reference recovery, object streams) is
done by :class:`pypdf.PdfReader`.  This module only walks the reader's
cross-reference data to enumerate every live indirect object and records the
page order reported by the reader's page tree flattening.
"""

from __future__ import annotations

from io import BytesIO
import logging

from pypdf import PdfReader
from pypdf.errors import PdfReadError
from pypdf.generic import DictionaryObject, IndirectObject, NameObject, PdfObject, StreamObject

from ..exceptions import DocumentLoadError
from .model import DEFAULT_VERSION, Document, ObjectId
from .utils import PathLike, resolve_path

LOGGER = logging.getLogger("pdfdirmerge.core")

__all__ = ["load_document", "read_page_count"]

# Cross-reference and object streams describe file layout only; their members
# are loaded as regular objects.
_CONTAINER_TYPES = frozenset({"/ObjStm", "/XRef"})
_TRAILER_KEYS = ("/Root", "/Info", "/ID", "/Encrypt")


def load_document(path: PathLike) -> Document:
    """Parse the PDF at *path* into a read-only :class:`Document`.

    Raises:
        DocumentLoadError: If the file cannot be read, is encrypted or is not
            a well-formed PDF.
    """

    pdf_path = resolve_path(path)
    LOGGER.debug("Loading PDF %s", pdf_path)
    try:
        raw_bytes = pdf_path.read_bytes()
    except OSError as exc:
        LOGGER.error("Unable to read PDF %s: %s", pdf_path, exc)
        raise DocumentLoadError(pdf_path, exc) from exc

    try:
        reader = PdfReader(BytesIO(raw_bytes))
        if reader.is_encrypted:
            raise DocumentLoadError(pdf_path, "encrypted documents are not supported")
        page_ids = _read_page_ids(reader)
        objects = _read_objects(reader, page_ids)
        trailer = _read_trailer(reader)
        version = _read_version(reader)
    except DocumentLoadError:
        raise
    except PdfReadError as exc:
        LOGGER.error("Corrupted or invalid PDF %s: %s", pdf_path, exc)
        raise DocumentLoadError(pdf_path, exc) from exc
    except Exception as exc:  # pypdf surfaces malformed input through many types
        LOGGER.error("Unexpected error reading PDF %s: %s", pdf_path, exc)
        raise DocumentLoadError(pdf_path, exc) from exc

    missing_pages = [page_id for page_id in page_ids if page_id not in objects]
    if missing_pages:
        LOGGER.warning("Dropping %d unresolvable page(s) from %s", len(missing_pages), pdf_path)
        page_ids = tuple(page_id for page_id in page_ids if page_id in objects)

    max_id = max((object_id.number for object_id in objects), default=0)
    document = Document(
        objects=objects,
        trailer=trailer,
        max_id=max_id,
        version=version,
        page_ids=page_ids,
        path=pdf_path,
    )
    LOGGER.info(
        "Loaded %s: version=%s, objects=%d, pages=%d",
        pdf_path,
        document.version,
        len(document),
        document.page_count,
    )
    return document


def read_page_count(path: PathLike) -> int:
    """Return the number of pages of the PDF at *path*."""

    return load_document(path).page_count


def _candidate_ids(reader: PdfReader) -> list[ObjectId]:
    candidates: set[ObjectId] = set()
    for generation, entries in reader.xref.items():
        free_entries = reader.xref_free_entry.get(generation, {})
        for number in entries:
            if number == 0 or free_entries.get(number, False):
                continue
            candidates.add(ObjectId.of(number, generation))
    for number in reader.xref_objStm:
        candidates.add(ObjectId.of(number, 0))
    return sorted(candidates)


def _read_objects(reader: PdfReader, page_ids: tuple[ObjectId, ...] = ()) -> dict[ObjectId, PdfObject]:
    objects: dict[ObjectId, PdfObject] = {}
    # Recovered files may reach pages that the cross-reference data misses.
    for object_id in sorted(set(_candidate_ids(reader)).union(page_ids)):
        obj = reader.get_object(IndirectObject(object_id.number, object_id.generation, reader))
        if obj is None:
            LOGGER.debug("Skipping unresolvable object %s", object_id)
            continue
        if isinstance(obj, StreamObject) and obj.get("/Type") in _CONTAINER_TYPES:
            LOGGER.debug("Skipping %s container stream %s", obj.get("/Type"), object_id)
            continue
        objects[object_id] = obj
    return objects


def _read_page_ids(reader: PdfReader) -> tuple[ObjectId, ...]:
    page_ids: list[ObjectId] = []
    for index, page in enumerate(reader.pages):
        reference = page.indirect_reference
        if not isinstance(reference, IndirectObject):
            LOGGER.warning("Page %d is not an indirect object; skipping", index + 1)
            continue
        page_ids.append(ObjectId.from_reference(reference))
    return tuple(page_ids)


def _read_trailer(reader: PdfReader) -> DictionaryObject:
    trailer = DictionaryObject()
    for key in _TRAILER_KEYS:
        value = reader.trailer.raw_get(key) if key in reader.trailer else None
        if value is not None:
            trailer[NameObject(key)] = value
    return trailer


def _read_version(reader: PdfReader) -> str:
    header = reader.pdf_header
    if header.startswith("%PDF-"):
        version = header[5:].strip()
        if version:
            return version
    return DEFAULT_VERSION
