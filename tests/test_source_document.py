import pytest

from splittt.errors import SourceLoadError
from splittt.pdf.source_document import load_source


def test_load_source(ten_page_pdf):
    source = load_source(ten_page_pdf)

    assert source.page_count == 10
    assert source.stem == "input"
    assert source.data == ten_page_pdf.read_bytes()


def test_views_are_independent(ten_page_pdf):
    source = load_source(ten_page_pdf)

    first = source.open_view()
    second = source.open_view()

    assert first is not second
    assert len(first.pages) == len(second.pages) == 10


def test_missing_file(tmp_path):
    with pytest.raises(SourceLoadError) as excinfo:
        load_source(tmp_path / "missing.pdf")
    assert excinfo.value.stage == "load"


@pytest.mark.parametrize("content", [b"", b"hello, not a pdf"])
def test_not_a_pdf(tmp_path, content):
    bogus = tmp_path / "bogus.pdf"
    bogus.write_bytes(content)

    with pytest.raises(SourceLoadError):
        load_source(bogus)


def test_directory_is_not_a_source(tmp_path):
    with pytest.raises(SourceLoadError):
        load_source(tmp_path)
