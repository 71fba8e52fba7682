from dataclasses import dataclass
from typing import Optional, Union

from PyPDF2 import PageObject, PdfReader, PdfWriter
from PyPDF2.generic import ArrayObject, DictionaryObject, NameObject

from splittt.errors import PageExtractionError
from splittt.pdf.object_graph import (
    LINK_KEYS,
    ObjectKey,
    UnreadableObject,
    collect_reachable,
    link_target,
    shared_objects,
)
from splittt.pdf.partitioner import PageRange
from splittt.pdf.source_document import SourceDocument
from splittt.utils.logger import setup_logger

logger = setup_logger("splittt.chunk_extractor")


@dataclass
class ChunkDocument:
    """
    A standalone document holding copies of one range's pages and everything
    they reference. Owned by the extraction that built it.
    """

    writer: PdfWriter
    page_range: PageRange
    object_count: int
    shared_count: int

    @property
    def page_count(self) -> int:
        return len(self.writer.pages)


def _page_key(page) -> Optional[ObjectKey]:
    ref = getattr(page, "indirect_reference", None)
    if ref is None:
        return None
    return (ref.idnum, ref.generation)


def _detach_links(page, chunk_pages):
    """
    Return a copy of ``page`` whose link annotations hold no explicit page
    destination, and the destinations aimed at pages of the chunk as
    (annotation index, key, value) for _reattach_links.

    A destination holds its target page, cloning it would clone that page.
    """
    if "/Annots" not in page:
        return page, []

    annots = page.raw_get("/Annots").get_object()
    detached = ArrayObject()
    kept_links = []
    changed = False

    for idx, item in enumerate(annots):
        annot = item.get_object()
        targets = {}
        if isinstance(annot, DictionaryObject):
            for key in LINK_KEYS:
                target = link_target(annot, key)
                if target is not None:
                    targets[key] = target
        if not targets:
            detached.append(item)
            continue

        changed = True
        copy = DictionaryObject()
        for name in annot:
            if name not in targets:
                copy[name] = annot.raw_get(name)
        for key, target in targets.items():
            if (target.idnum, target.generation) in chunk_pages:
                kept_links.append((idx, key, annot.raw_get(key)))
        detached.append(copy)

    if not changed:
        return page, []

    # Same indirect reference, so /P back-pointers still map to the copy
    page_copy = PageObject(page.pdf, page.indirect_reference)
    page_copy.update(page)
    page_copy[NameObject("/Annots")] = detached
    return page_copy, kept_links


def _reattach_links(writer: PdfWriter, new_page, kept_links) -> None:
    annots = new_page["/Annots"]
    for idx, key, value in kept_links:
        # every chunk page is in the writer now, so the target maps to its copy
        annots[idx].get_object()[NameObject(key)] = value.clone(writer)


def extract_chunk(
    source: Union[SourceDocument, PdfReader], page_range: PageRange
) -> ChunkDocument:
    """
    Copy the pages of ``page_range`` into a new document.

    Each page is walked first so that a broken reference is reported against
    the page that needs it. The writer then clones the page together with the
    objects it references; an object used by several pages of the chunk is
    cloned once and referenced from each of them. Links to pages outside the
    range are dropped, links inside it point at the copied pages. ``source``
    is not modified.
    """
    reader = source.open_view() if isinstance(source, SourceDocument) else source
    total_pages = len(reader.pages)

    chunk_pages = {
        _page_key(reader.pages[idx]) for idx in page_range if 0 <= idx < total_pages
    }
    chunk_pages.discard(None)

    writer = PdfWriter()
    graphs = []
    relinks = []

    for page_index in page_range:
        if not 0 <= page_index < total_pages:
            raise PageExtractionError(
                page_index, f"out of bounds for a {total_pages}-page document"
            )
        try:
            page, kept_links = _detach_links(reader.pages[page_index], chunk_pages)
            graphs.append(collect_reachable(page))
            new_page = writer.add_page(page)
            if kept_links:
                relinks.append((page_index, new_page, kept_links))
        except UnreadableObject as e:
            raise PageExtractionError(page_index, str(e)) from e
        except Exception as e:
            raise PageExtractionError(page_index, f"cannot copy page: {e}") from e

    for page_index, new_page, kept_links in relinks:
        try:
            _reattach_links(writer, new_page, kept_links)
        except Exception as e:
            raise PageExtractionError(page_index, f"cannot relink page: {e}") from e

    object_count = len(set().union(*graphs)) if graphs else 0
    shared_count = len(shared_objects(graphs))
    logger.debug(
        f"Extracted {page_range.label()}: {object_count} object(s) reached, "
        f"{shared_count} shared between pages"
    )
    return ChunkDocument(
        writer=writer,
        page_range=page_range,
        object_count=object_count,
        shared_count=shared_count,
    )
