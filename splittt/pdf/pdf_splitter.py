from pathlib import Path
from typing import List

from splittt.errors import OutputWriteError
from splittt.pdf.chunk_extractor import extract_chunk
from splittt.pdf.output_writer import ChunkFile, write_chunk
from splittt.pdf.partitioner import PageRange, partition
from splittt.pdf.source_document import SourceDocument, load_source
from splittt.pdf.split_spec import parse_split_spec
from splittt.utils.batch_processor import process_jobs
from splittt.utils.logger import setup_logger

logger = setup_logger("splittt.pdf_splitter")


def plan_pdf_split(input_pdf: Path, split_spec: str) -> List[PageRange]:
    """
    Parse the split spec, load the PDF and return the chunk ranges without
    writing anything.
    """
    mode = parse_split_spec(split_spec)
    source = load_source(input_pdf)
    ranges = partition(source.page_count, mode)
    logger.info(
        f"Split spec '{mode}' gives {len(ranges)} chunk(s) "
        f"for {source.page_count} page(s)"
    )
    return ranges


def _split_one_chunk(
    page_range: PageRange,
    chunk_idx: int,
    source: SourceDocument,
    output_dir: Path,
    total_chunks: int,
    overwrite: bool,
) -> ChunkFile:
    # A reader per job, PyPDF2 readers are not safe to share between threads
    chunk = extract_chunk(source.open_view(), page_range)
    return write_chunk(
        chunk,
        output_dir,
        sequence_number=chunk_idx + 1,
        total_chunks=total_chunks,
        stem=source.stem,
        overwrite=overwrite,
    )


def run_pdf_split(
    input_pdf: Path,
    output_dir: Path,
    split_spec: str,
    workers: int = 1,
    overwrite: bool = False,
    show_progress: bool = True,
) -> List[ChunkFile]:
    """
    Splits a PDF into standalone chunk PDFs according to ``split_spec``.
    Returns the written chunk files in chunk order.

    Stops at the first failure; chunks written before it stay on disk.
    """
    mode = parse_split_spec(split_spec)
    source = load_source(Path(input_pdf))
    ranges = partition(source.page_count, mode)

    output_dir = Path(output_dir)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputWriteError(
            None, f"cannot create output directory {output_dir}", e
        ) from e

    logger.info(
        f"Splitting {source.path.name} ({source.page_count} pages) "
        f"with spec '{mode}' into {len(ranges)} chunk(s)"
    )

    chunk_files = list(
        process_jobs(
            ranges,
            _split_one_chunk,
            workers=workers,
            description="Writing chunks",
            show_progress=show_progress,
            source=source,
            output_dir=output_dir,
            total_chunks=len(ranges),
            overwrite=overwrite,
        )
    )

    logger.info("PDF splitting complete.")
    return chunk_files
