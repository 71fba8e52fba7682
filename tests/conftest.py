import os

# Keep test runs from writing log files into the working directory
os.environ.setdefault("SPLITTT_LOG_TO_FILE", "false")

import pytest
from PyPDF2 import PdfReader, PdfWriter
from PyPDF2.generic import (
    ArrayObject,
    DecodedStreamObject,
    DictionaryObject,
    IndirectObject,
    NameObject,
    NumberObject,
)


def page_width(page) -> int:
    """Test PDFs give page i a width of 100 + i points."""
    return int(float(page.mediabox.width))


def make_pdf(path, page_count, shared_font=False):
    """Write a PDF of blank pages whose widths encode their position."""
    writer = PdfWriter()
    font_ref = None
    if shared_font:
        font = DictionaryObject(
            {
                NameObject("/Type"): NameObject("/Font"),
                NameObject("/Subtype"): NameObject("/Type1"),
                NameObject("/BaseFont"): NameObject("/Helvetica"),
            }
        )
        font_ref = writer._add_object(font)

    for idx in range(page_count):
        writer.add_blank_page(width=100 + idx, height=200)
        if font_ref is not None:
            writer.pages[idx][NameObject("/Resources")] = DictionaryObject(
                {NameObject("/Font"): DictionaryObject({NameObject("/F1"): font_ref})}
            )

    with open(path, "wb") as f:
        writer.write(f)
    return path


def _ref_of(writer, obj):
    # PdfWriter numbers objects by their position in its object list
    idnum = next(n for n, stored in enumerate(writer._objects, 1) if stored is obj)
    return IndirectObject(idnum, 0, writer)


def make_toc_pdf(path, page_count, content_size=100_000):
    """
    Page 0 carries one link per later page, alternating /Dest and GoTo /A
    forms. Every later page has a large content stream.
    """
    writer = PdfWriter()
    for idx in range(page_count):
        writer.add_blank_page(width=100 + idx, height=200)

    for idx in range(1, page_count):
        content = DecodedStreamObject()
        content.set_data(b"0 0 m\n" * (content_size // 6))
        writer.pages[idx][NameObject("/Contents")] = writer._add_object(content)

    links = ArrayObject()
    for idx in range(1, page_count):
        dest = ArrayObject([_ref_of(writer, writer.pages[idx]), NameObject("/Fit")])
        rect = [0, idx * 10, 50, idx * 10 + 8]
        link = DictionaryObject(
            {
                NameObject("/Type"): NameObject("/Annot"),
                NameObject("/Subtype"): NameObject("/Link"),
                NameObject("/Rect"): ArrayObject([NumberObject(n) for n in rect]),
            }
        )
        if idx % 2:
            link[NameObject("/Dest")] = dest
        else:
            link[NameObject("/A")] = DictionaryObject(
                {NameObject("/S"): NameObject("/GoTo"), NameObject("/D"): dest}
            )
        links.append(link)
    writer.pages[0][NameObject("/Annots")] = links

    with open(path, "wb") as f:
        writer.write(f)
    return path


@pytest.fixture
def pdf_factory(tmp_path):
    def factory(page_count, name="input.pdf", shared_font=False):
        return make_pdf(tmp_path / name, page_count, shared_font=shared_font)

    return factory


@pytest.fixture
def ten_page_pdf(pdf_factory):
    return pdf_factory(10)


@pytest.fixture
def output_dir(tmp_path):
    return tmp_path / "chunks"


def read_widths(path):
    return [page_width(page) for page in PdfReader(str(path)).pages]


@pytest.fixture
def toc_pdf(tmp_path):
    return make_toc_pdf(tmp_path / "toc.pdf", 6)
