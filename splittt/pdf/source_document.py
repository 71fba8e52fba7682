from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path

from PyPDF2 import PdfReader

from splittt.errors import SourceLoadError
from splittt.utils.logger import setup_logger

logger = setup_logger("splittt.source_document")


@dataclass(frozen=True)
class SourceDocument:
    """
    Read-only handle over a loaded input PDF.

    The raw bytes are kept so every worker can open its own reader; PyPDF2
    resolves objects lazily by seeking in the stream, so a single reader must
    not be shared between threads.
    """

    path: Path
    data: bytes = field(repr=False)
    page_count: int

    @property
    def stem(self) -> str:
        return self.path.stem

    def open_view(self) -> PdfReader:
        return PdfReader(BytesIO(self.data))


def load_source(input_pdf: Path) -> SourceDocument:
    input_pdf = Path(input_pdf)
    logger.info(f"Loading PDF: {input_pdf}")

    if not input_pdf.is_file():
        raise SourceLoadError(f"input file not found: {input_pdf}")
    try:
        data = input_pdf.read_bytes()
    except OSError as e:
        raise SourceLoadError(f"cannot read {input_pdf}: {e}") from e

    try:
        reader = PdfReader(BytesIO(data))
        if reader.is_encrypted:
            raise SourceLoadError(f"encrypted PDFs are not supported: {input_pdf}")
        page_count = len(reader.pages)
    except SourceLoadError:
        raise
    except Exception as e:
        raise SourceLoadError(f"not a valid PDF: {input_pdf} ({e})") from e

    logger.info(f"Loaded {input_pdf.name}: {page_count} page(s)")
    return SourceDocument(path=input_pdf, data=data, page_count=page_count)
