from __future__ import annotations

from io import BytesIO
from pathlib import Path

import pytest
from pypdf import PdfReader, PdfWriter
from pypdf.generic import NameObject

from pdfdirmerge.core.model import ObjectId
from pdfdirmerge.core.parser import load_document
from pdfdirmerge.exceptions import (
    DirectoryNotFoundError,
    DocumentLoadError,
    NoCandidateFilesError,
    PdfMergeError,
)
from pdfdirmerge.merge.graph import dangling_references, objects_of_type, reachable_ids
from pdfdirmerge.merge.merger import MergeContext, merge_directory, merge_documents, merge_pdfs

from conftest import content_for, page_labels


def _snapshot(document) -> dict[ObjectId, bytes]:
    snapshot = {}
    for object_id, obj in document.objects.items():
        buffer = BytesIO()
        obj.write_to_stream(buffer)
        snapshot[object_id] = buffer.getvalue()
    return snapshot


def test_merge_documents_concatenates_pages(document_factory) -> None:
    first = document_factory(["a", "b"])
    second = document_factory(["c", "d", "e"], first_id=40)

    merged = merge_documents([first, second])

    assert merged.page_count == 5
    assert [merged.objects[page_id]["/Contents"].get_data() for page_id in merged.page_ids] == [
        content_for(label) for label in "abcde"
    ]
    assert len(merged) == len(first) + len(second) + 2
    assert merged.max_id == len(merged)
    assert sorted(object_id.number for object_id in merged.objects) == list(range(1, len(merged) + 1))


def test_merge_documents_single_source_adds_two_objects(document_factory) -> None:
    source = document_factory(["only"])

    merged = merge_documents([source])

    assert len(merged) == len(source) + 2
    assert merged.page_count == 1


def test_merge_documents_builds_one_reachable_root(document_factory) -> None:
    merged = merge_documents([document_factory(["a"]), document_factory(["b"])])

    catalogs = objects_of_type(merged, "/Catalog")
    page_trees = objects_of_type(merged, "/Pages")
    assert len(catalogs) == 1
    assert len(page_trees) == 1
    assert merged.trailer.raw_get("/Root").idnum == catalogs[0].number
    assert merged.root["/Pages"] is merged.objects[page_trees[0]]
    for page_id in merged.page_ids:
        parent = merged.objects[page_id].raw_get("/Parent")
        assert ObjectId(parent.idnum, parent.generation) == page_trees[0]
        assert page_id in reachable_ids(merged)


def test_merge_documents_leaves_sources_untouched(document_factory) -> None:
    first = document_factory(["a"])
    second = document_factory(["b"])
    before = [_snapshot(first), _snapshot(second)]

    merge_documents([first, second])

    assert [_snapshot(first), _snapshot(second)] == before


def test_merge_documents_adds_no_dangling_references(document_factory) -> None:
    first = document_factory(["a"])
    second = document_factory(["b"])
    second.objects[second.page_ids[0]][NameObject("/Annots")] = second.reference(ObjectId(400))

    merged = merge_documents([first, second])

    dangling = dangling_references(merged)
    assert [target for _, target in dangling] == [ObjectId(400)]


def test_merge_documents_picks_highest_version(document_factory) -> None:
    first = document_factory(["a"])
    second = document_factory(["b"])
    first.version = "1.7"
    second.version = "1.3"

    assert merge_documents([first, second]).version == "1.7"


def test_merge_context_allocator_spans_documents(document_factory) -> None:
    context = MergeContext()
    first_map = context.add(document_factory(["a"]))
    second_map = context.add(document_factory(["b"]))

    assert max(first_map.values()) < min(second_map.values())
    assert not set(first_map.values()) & set(second_map.values())


def test_merge_pdfs_round_trip(tmp_path: Path, pdf_factory) -> None:
    first = pdf_factory("first.pdf", ["1", "2"])
    second = pdf_factory("second.pdf", ["3"])
    output = tmp_path / "merged.pdf"

    result = merge_pdfs([first, second], output)

    assert result == output.resolve()
    assert page_labels(output) == [content_for("1"), content_for("2"), content_for("3")]
    reader = PdfReader(str(output))
    assert reader.trailer["/Root"]["/Pages"]["/Count"] == 3
    assert dangling_references(load_document(output)) == []


def test_merge_pdfs_requires_inputs(tmp_path: Path) -> None:
    with pytest.raises(PdfMergeError, match="No input PDFs provided"):
        merge_pdfs([], tmp_path / "out.pdf")


def test_merge_pdfs_aborts_on_invalid_input(tmp_path: Path, pdf_factory) -> None:
    valid = pdf_factory("valid.pdf")
    broken = tmp_path / "broken.pdf"
    broken.write_bytes(b"%PDF-1.4\nthis is not really a pdf")
    output = tmp_path / "out.pdf"

    with pytest.raises(DocumentLoadError) as excinfo:
        merge_pdfs([valid, broken], output)

    assert excinfo.value.path == broken.resolve()
    assert not output.exists()


def test_merge_directory_orders_by_mtime(input_dir: Path, pdf_factory) -> None:
    pdf_factory("a.pdf", ["a1", "a2"], directory=input_dir, mtime=2_000_000)
    pdf_factory("b.pdf", ["b1"], directory=input_dir, mtime=1_000_000)

    output = merge_directory(input_dir)

    assert output == input_dir.resolve().parent / "scans.pdf"
    assert page_labels(output) == [content_for("b1"), content_for("a1"), content_for("a2")]
    assert sorted(path.name for path in input_dir.parent.iterdir()) == ["scans", "scans.pdf"]


def test_merge_directory_empty_writes_nothing(input_dir: Path) -> None:
    with pytest.raises(NoCandidateFilesError):
        merge_directory(input_dir)

    assert not (input_dir.parent / "scans.pdf").exists()


def test_merge_directory_missing() -> None:
    with pytest.raises(DirectoryNotFoundError, match="Directory '/no/such/dir' does not exist."):
        merge_directory("/no/such/dir")


def test_merge_directory_replaces_previous_output(input_dir: Path, pdf_factory) -> None:
    pdf_factory("a.pdf", ["new"], directory=input_dir)
    previous = input_dir.parent / "scans.pdf"
    previous.write_bytes(b"old output")

    merge_directory(input_dir, atomic=False)

    assert page_labels(previous) == [content_for("new")]


def test_merge_directory_through_symlink(tmp_path: Path, pdf_factory) -> None:
    target = tmp_path / "data" / "scans"
    pdf_factory("a.pdf", ["linked"], directory=target)
    home = tmp_path / "home"
    home.mkdir()
    link = home / "mylink"
    link.symlink_to(target, target_is_directory=True)

    output = merge_directory(link)

    assert output == home / "mylink.pdf"
    assert page_labels(output) == [content_for("linked")]
    assert not (tmp_path / "data" / "scans.pdf").exists()


def test_merge_pdfs_skips_pageless_source(tmp_path: Path, pdf_factory) -> None:
    empty = tmp_path / "empty.pdf"
    with empty.open("wb") as handle:
        PdfWriter().write(handle)
    single = pdf_factory("single.pdf", ["x"])
    output = tmp_path / "out.pdf"

    merge_pdfs([empty, single], output)

    assert page_labels(output) == [content_for("x")]
    assert PdfReader(str(output)).trailer["/Root"]["/Pages"]["/Count"] == 1
