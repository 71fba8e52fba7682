"""
Error taxonomy for the split pipeline.

Every failure raised by splittt derives from SplitttError and records the
pipeline stage it came from, so callers can report it without a debugger.
"""

from typing import Optional


class SplitttError(Exception):
    stage = "pipeline"
    exit_code = 1

    def __str__(self) -> str:
        return f"[{self.stage}] {super().__str__()}"


class InvalidSplitSpec(SplitttError):
    stage = "parse"
    exit_code = 2

    def __init__(self, spec: str, reason: str):
        self.spec = spec
        self.reason = reason
        super().__init__(f"invalid split spec {spec!r}: {reason}")


class SourceLoadError(SplitttError):
    stage = "load"
    exit_code = 2


class EmptyDocument(SplitttError):
    stage = "partition"
    exit_code = 2

    def __init__(self):
        super().__init__("document has no pages")


class TooManyChunksRequested(SplitttError):
    stage = "partition"
    exit_code = 2

    def __init__(self, requested: int, total_pages: int):
        self.requested = requested
        self.total_pages = total_pages
        super().__init__(
            f"cannot split {total_pages} page(s) into {requested} non-empty chunks"
        )


class PageExtractionError(SplitttError):
    stage = "extract"

    def __init__(self, page_index: int, message: str):
        self.page_index = page_index
        super().__init__(f"page {page_index + 1} (index {page_index}): {message}")


class ChunkWriteFailure(SplitttError):
    """Base for failures producing or persisting one chunk file."""

    stage = "write"

    def __init__(
        self,
        sequence_number: Optional[int],
        message: str,
        cause: Optional[BaseException] = None,
    ):
        self.sequence_number = sequence_number
        self.cause = cause
        detail = message
        if sequence_number is not None:
            detail = f"chunk {sequence_number}: {message}"
        if cause is not None:
            detail += f" ({cause})"
        super().__init__(detail)


class SerializationError(ChunkWriteFailure):
    pass


class OutputWriteError(ChunkWriteFailure):
    pass


class ConfigurationError(SplitttError, ValueError):
    """Invalid settings file or command-line option."""

    stage = "config"
    exit_code = 2
