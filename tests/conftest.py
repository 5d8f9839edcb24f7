from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Sequence
import sys

import pytest
from pypdf import PdfReader, PdfWriter
from pypdf.generic import (
    ArrayObject,
    DecodedStreamObject,
    DictionaryObject,
    NameObject,
    NumberObject,
)

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pdfdirmerge.core.model import Document, ObjectId  # noqa: E402

PdfFactory = Callable[..., Path]


def content_for(label: str) -> bytes:
    return f"% page {label}\n".encode("ascii")


def write_labelled_pdf(path: Path, labels: Sequence[str]) -> Path:
    """Write a PDF with one blank page per label; each page's content names it."""

    writer = PdfWriter()
    for label in labels:
        page = writer.add_blank_page(width=200, height=200)
        stream = DecodedStreamObject()
        stream.set_data(content_for(label))
        page[NameObject("/Contents")] = writer._add_object(stream)
    with path.open("wb") as handle:
        writer.write(handle)
    return path


def page_labels(path: Path) -> list[bytes]:
    reader = PdfReader(str(path))
    return [page["/Contents"].get_data() for page in reader.pages]


@pytest.fixture()
def pdf_factory(tmp_path: Path) -> PdfFactory:
    def _create(
        filename: str,
        labels: Sequence[str] = ("1",),
        *,
        directory: Path | None = None,
        mtime: float | None = None,
    ) -> Path:
        target_dir = directory or tmp_path
        target_dir.mkdir(parents=True, exist_ok=True)
        path = write_labelled_pdf(target_dir / filename, labels)
        if mtime is not None:
            os.utime(path, (mtime, mtime))
        return path

    return _create


@pytest.fixture()
def input_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "scans"
    directory.mkdir()
    return directory


def build_document(labels: Sequence[str], *, first_id: int = 1) -> Document:
    """Build an in-memory document: catalog, pages node, then page + content pairs."""

    document = Document()
    catalog_id = ObjectId(first_id)
    pages_id = ObjectId(first_id + 1)
    page_ids: list[ObjectId] = []
    next_number = first_id + 2
    for label in labels:
        page_id = ObjectId(next_number)
        content_id = ObjectId(next_number + 1)
        next_number += 2
        stream = DecodedStreamObject()
        stream.set_data(content_for(label))
        document.add_object(content_id, stream)
        document.add_object(
            page_id,
            DictionaryObject(
                {
                    NameObject("/Type"): NameObject("/Page"),
                    NameObject("/Parent"): document.reference(pages_id),
                    NameObject("/MediaBox"): ArrayObject([NumberObject(0), NumberObject(0), NumberObject(200), NumberObject(200)]),
                    NameObject("/Contents"): document.reference(content_id),
                }
            ),
        )
        page_ids.append(page_id)

    document.add_object(
        pages_id,
        DictionaryObject(
            {
                NameObject("/Type"): NameObject("/Pages"),
                NameObject("/Kids"): ArrayObject(document.reference(page_id) for page_id in page_ids),
                NameObject("/Count"): NumberObject(len(page_ids)),
            }
        ),
    )
    document.add_object(
        catalog_id,
        DictionaryObject(
            {
                NameObject("/Type"): NameObject("/Catalog"),
                NameObject("/Pages"): document.reference(pages_id),
            }
        ),
    )
    document.trailer[NameObject("/Root")] = document.reference(catalog_id)
    document.page_ids = tuple(page_ids)
    return document


@pytest.fixture()
def document_factory() -> Callable[..., Document]:
    return build_document
