"""Serialize :class:`~pdfdirmerge.core.model.Document` tables to PDF bytes.

Object syntax is produced by pypdf's ``write_to_stream`` implementations;
this module lays out the file body, a classic cross-reference table and the
trailer around them.
"""

from __future__ import annotations

from io import BytesIO
import logging
import os
from pathlib import Path
import tempfile
from typing import BinaryIO

from pypdf.generic import DictionaryObject, NameObject, NumberObject

from ..exceptions import OutputWriteError
from .model import Document, ObjectId
from .utils import PathLike, resolve_path

LOGGER = logging.getLogger("pdfdirmerge.core")

__all__ = ["serialize", "write_document", "save"]

_BINARY_MARKER = b"%\xe2\xe3\xcf\xd3\n"


def write_document(document: Document, stream: BinaryIO) -> None:
    """Write *document* as a complete PDF file to *stream*."""

    start = stream.tell()
    stream.write(f"%PDF-{document.version}\n".encode("ascii"))
    stream.write(_BINARY_MARKER)

    offsets: dict[int, tuple[int, int]] = {}
    for object_id in sorted(document.objects):
        offsets[object_id.number] = (stream.tell() - start, object_id.generation)
        _write_object(stream, object_id, document.objects[object_id])

    size = max(document.max_id, max(offsets, default=0)) + 1
    xref_offset = stream.tell() - start
    stream.write(f"xref\n0 {size}\n".encode("ascii"))
    stream.write(b"0000000000 65535 f \n")
    for number in range(1, size):
        entry = offsets.get(number)
        if entry is None:
            stream.write(b"0000000000 65535 f \n")
        else:
            offset, generation = entry
            stream.write(f"{offset:010d} {generation:05d} n \n".encode("ascii"))

    trailer = DictionaryObject()
    trailer[NameObject("/Size")] = NumberObject(size)
    for key, value in document.trailer.items():
        if key != "/Size":
            trailer[key] = value
    stream.write(b"trailer\n")
    trailer.write_to_stream(stream)
    stream.write(f"\nstartxref\n{xref_offset}\n%%EOF\n".encode("ascii"))


def serialize(document: Document) -> bytes:
    buffer = BytesIO()
    write_document(document, buffer)
    return buffer.getvalue()


def save(document: Document, path: PathLike, *, atomic: bool = True) -> Path:
    """Write *document* to *path*.

    With ``atomic`` the bytes go to a temporary file next to *path* which
    then replaces the destination, so a failed write never leaves a
    truncated file behind.

    Raises:
        OutputWriteError: If serialization or the filesystem write fails.
    """

    output_path = resolve_path(path)
    try:
        data = serialize(document)
    except Exception as exc:  # pypdf raises a range of types for unwritable objects
        LOGGER.error("Failed to serialize merged PDF for %s: %s", output_path, exc)
        raise OutputWriteError(output_path, exc) from exc

    if not atomic:
        try:
            output_path.write_bytes(data)
        except OSError as exc:
            LOGGER.error("Failed to write merged PDF to %s: %s", output_path, exc)
            raise OutputWriteError(output_path, exc) from exc
        LOGGER.debug("Wrote %d bytes to %s", len(data), output_path)
        return output_path

    temp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "wb",
            dir=output_path.parent,
            prefix=f".{output_path.stem}-",
            suffix=".tmp",
            delete=False,
        ) as handle:
            temp_name = handle.name
            handle.write(data)
        os.replace(temp_name, output_path)
    except OSError as exc:
        LOGGER.error("Failed to write merged PDF to %s: %s", output_path, exc)
        if temp_name is not None and os.path.exists(temp_name):
            os.unlink(temp_name)
        raise OutputWriteError(output_path, exc) from exc

    LOGGER.debug("Atomically wrote %d bytes to %s", len(data), output_path)
    return output_path


def _write_object(stream: BinaryIO, object_id: ObjectId, obj) -> None:
    stream.write(f"{object_id.number} {object_id.generation} obj\n".encode("ascii"))
    obj.write_to_stream(stream)
    stream.write(b"\nendobj\n")
