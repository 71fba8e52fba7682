import os
import tempfile
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

from splittt.errors import OutputWriteError, SerializationError
from splittt.pdf.chunk_extractor import ChunkDocument
from splittt.pdf.partitioner import PageRange
from splittt.utils.logger import setup_logger

logger = setup_logger("splittt.output_writer")


@dataclass(frozen=True)
class ChunkFile:
    path: Path
    sequence_number: int
    page_range: PageRange
    size: int


def chunk_file_name(stem: str, sequence_number: int, total_chunks: int) -> str:
    """
    ``<stem>_<n>.pdf`` with ``n`` zero-padded to the width of ``total_chunks``,
    so sorting the names sorts the chunks.
    """
    width = len(str(total_chunks))
    return f"{stem}_{sequence_number:0{width}d}.pdf"


def serialize_chunk(chunk: ChunkDocument, sequence_number: int) -> bytes:
    buffer = BytesIO()
    try:
        chunk.writer.write(buffer)
    except Exception as e:
        raise SerializationError(sequence_number, "cannot serialize chunk", e) from e
    return buffer.getvalue()


def write_chunk(
    chunk: ChunkDocument,
    output_dir: Path,
    sequence_number: int,
    total_chunks: int,
    stem: str,
    overwrite: bool = False,
) -> ChunkFile:
    """
    Serialize ``chunk`` and store it in ``output_dir``.

    The bytes go to a temporary file in the same directory which is then
    moved onto the final name, so an interrupted write never leaves a
    truncated chunk behind. Without ``overwrite`` the move is a hard link,
    which fails instead of replacing a file that already exists.
    """
    if sequence_number < 1:
        raise ValueError(f"sequence numbers start at 1, got {sequence_number}")

    output_dir = Path(output_dir)
    chunk_path = output_dir / chunk_file_name(stem, sequence_number, total_chunks)

    if chunk_path.exists() and not overwrite:
        raise OutputWriteError(
            sequence_number, f"{chunk_path} already exists (use --overwrite)"
        )

    data = serialize_chunk(chunk, sequence_number)

    tmp_path = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{chunk_path.stem}.", suffix=".tmp", dir=output_dir
        )
        tmp_path = Path(tmp_name)
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        # mkstemp creates the file owner-only
        os.chmod(tmp_path, 0o644)
        if overwrite:
            os.replace(tmp_path, chunk_path)
        else:
            # fails if the target appeared after the check above
            os.link(tmp_path, chunk_path)
    except FileExistsError as e:
        raise OutputWriteError(
            sequence_number, f"{chunk_path} already exists (use --overwrite)", e
        ) from e
    except OSError as e:
        raise OutputWriteError(sequence_number, f"cannot write {chunk_path}", e) from e
    finally:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()

    logger.info(
        f"Written chunk {sequence_number}/{total_chunks} "
        f"({chunk.page_range.label()}): {chunk_path}"
    )
    return ChunkFile(
        path=chunk_path,
        sequence_number=sequence_number,
        page_range=chunk.page_range,
        size=len(data),
    )
