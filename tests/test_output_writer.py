import pytest

from conftest import read_widths
from splittt.errors import OutputWriteError, SerializationError
from splittt.pdf import output_writer
from splittt.pdf.chunk_extractor import extract_chunk
from splittt.pdf.output_writer import chunk_file_name, write_chunk
from splittt.pdf.partitioner import PageRange
from splittt.pdf.source_document import load_source


@pytest.mark.parametrize(
    "sequence_number,total_chunks,expected",
    [
        (1, 4, "input_1.pdf"),
        (1, 12, "input_01.pdf"),
        (12, 12, "input_12.pdf"),
        (7, 100, "input_007.pdf"),
    ],
)
def test_chunk_file_name(sequence_number, total_chunks, expected):
    assert chunk_file_name("input", sequence_number, total_chunks) == expected


def test_names_sort_in_chunk_order():
    names = [chunk_file_name("doc", n, 12) for n in range(1, 13)]
    assert sorted(names) == names


@pytest.fixture
def chunk(ten_page_pdf):
    return extract_chunk(load_source(ten_page_pdf), PageRange(6, 9))


def test_write_chunk_creates_one_file(chunk, tmp_path):
    out = tmp_path / "out"
    out.mkdir()

    chunk_file = write_chunk(chunk, out, sequence_number=3, total_chunks=4, stem="input")

    assert chunk_file.path == out / "input_3.pdf"
    assert chunk_file.sequence_number == 3
    assert chunk_file.page_range == PageRange(6, 9)
    assert chunk_file.size == chunk_file.path.stat().st_size
    assert read_widths(chunk_file.path) == [106, 107, 108]
    assert [p.name for p in out.iterdir()] == ["input_3.pdf"]


def test_existing_file_is_not_overwritten(chunk, tmp_path):
    existing = tmp_path / "input_1.pdf"
    existing.write_bytes(b"keep me")

    with pytest.raises(OutputWriteError) as excinfo:
        write_chunk(chunk, tmp_path, sequence_number=1, total_chunks=1, stem="input")
    assert excinfo.value.sequence_number == 1
    assert existing.read_bytes() == b"keep me"


def test_file_created_during_write_is_not_replaced(chunk, tmp_path, monkeypatch):
    out = tmp_path / "out"
    out.mkdir()
    target = out / "input_1.pdf"
    real_serialize = output_writer.serialize_chunk

    def serialize_then_race(chunk, sequence_number):
        target.write_bytes(b"written by someone else")
        return real_serialize(chunk, sequence_number)

    monkeypatch.setattr(output_writer, "serialize_chunk", serialize_then_race)

    with pytest.raises(OutputWriteError) as excinfo:
        write_chunk(chunk, out, sequence_number=1, total_chunks=1, stem="input")
    assert "already exists" in str(excinfo.value)
    assert target.read_bytes() == b"written by someone else"
    assert [p.name for p in out.iterdir()] == ["input_1.pdf"]


def test_overwrite_replaces_existing_file(chunk, tmp_path):
    existing = tmp_path / "input_1.pdf"
    existing.write_bytes(b"old")

    write_chunk(
        chunk, tmp_path, sequence_number=1, total_chunks=1, stem="input", overwrite=True
    )

    assert read_widths(existing) == [106, 107, 108]


def test_missing_directory_is_a_write_error(chunk, tmp_path):
    with pytest.raises(OutputWriteError) as excinfo:
        write_chunk(
            chunk, tmp_path / "nope", sequence_number=2, total_chunks=2, stem="input"
        )
    assert "chunk 2" in str(excinfo.value)
    assert isinstance(excinfo.value.cause, OSError)


def test_serialization_failure_leaves_no_file(chunk, tmp_path, monkeypatch):
    def broken_write(stream):
        raise RuntimeError("boom")

    monkeypatch.setattr(chunk.writer, "write", broken_write)
    out = tmp_path / "out"
    out.mkdir()

    with pytest.raises(SerializationError) as excinfo:
        write_chunk(chunk, out, sequence_number=1, total_chunks=1, stem="input")
    assert excinfo.value.sequence_number == 1
    assert list(out.iterdir()) == []


def test_sequence_numbers_start_at_one(chunk, tmp_path):
    with pytest.raises(ValueError):
        write_chunk(chunk, tmp_path, sequence_number=0, total_chunks=1, stem="input")
