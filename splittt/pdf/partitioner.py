from dataclasses import dataclass
from typing import Iterator, List

from splittt.errors import EmptyDocument, TooManyChunksRequested
from splittt.pdf.split_spec import ByChunkCount, ByPageCount, SplitMode


@dataclass(frozen=True)
class PageRange:
    """
    Half-open interval [start, end) of zero-based page indices.
    """

    start: int
    end: int

    def __post_init__(self):
        if self.start < 0 or self.end <= self.start:
            raise ValueError(f"invalid page range [{self.start}, {self.end})")

    def __len__(self) -> int:
        return self.end - self.start

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.start, self.end))

    def label(self) -> str:
        """1-based, inclusive description used in log messages."""
        if len(self) == 1:
            return f"page {self.start + 1}"
        return f"pages {self.start + 1}-{self.end}"


def chunk_count(total_pages: int, mode: SplitMode) -> int:
    if total_pages <= 0:
        raise EmptyDocument()
    if isinstance(mode, ByPageCount):
        return (total_pages + mode.pages - 1) // mode.pages
    if not isinstance(mode, ByChunkCount):
        raise TypeError(f"unsupported split mode: {mode!r}")
    if mode.chunks > total_pages:
        raise TooManyChunksRequested(mode.chunks, total_pages)
    return mode.chunks


def partition(total_pages: int, mode: SplitMode) -> List[PageRange]:
    """
    Split [0, total_pages) into contiguous chunk ranges.

    ByPageCount(n) yields ranges of n pages with a shorter final range for the
    remainder. ByChunkCount(n) yields exactly n ranges whose lengths differ by
    at most one, the longer ranges first.
    """
    count = chunk_count(total_pages, mode)

    if isinstance(mode, ByPageCount):
        return [
            PageRange(start, min(start + mode.pages, total_pages))
            for start in range(0, total_pages, mode.pages)
        ]

    base, extra = divmod(total_pages, count)
    ranges = []
    start = 0
    for idx in range(count):
        size = base + 1 if idx < extra else base
        ranges.append(PageRange(start, start + size))
        start += size
    return ranges
