from __future__ import annotations

import asyncio
import logging

from pdfcrop import capability
from pdfcrop.errors import ExtractionError, InvalidRange
from pdfcrop.models import PageRange
from pdfcrop.pdf_utils import PdfToolkit
from pdfcrop.validation import is_valid_range

log = logging.getLogger(__name__)


def _extract(toolkit: PdfToolkit, pdf_bytes: bytes, page_range: PageRange) -> bytes:
    try:
        reader = toolkit.open(pdf_bytes)
        total_pages = len(reader.pages)
    except Exception as exc:
        raise ExtractionError(f"Could not re-open source document: {exc}") from exc

    # The range was validated against metadata that may be stale.
    if not is_valid_range(page_range.start, page_range.end, total_pages):
        raise InvalidRange(page_range.start, page_range.end, total_pages)

    try:
        writer = toolkit.copy_pages(reader, page_range.indices())
        output = toolkit.save(writer)
        written = len(toolkit.open(output).pages)
    except Exception as exc:
        raise ExtractionError(
            f"Failed to copy pages {page_range.start}-{page_range.end}: {exc}"
        ) from exc

    if written != page_range.page_count:
        raise ExtractionError(
            f"Expected {page_range.page_count} pages in output, got {written}"
        )
    return output


async def extract_pages(
    pdf_bytes: bytes,
    page_range: PageRange,
    module_name: str | None = None,
) -> bytes:
    """Copy pages [start, end] (1-indexed, inclusive) into a new PDF.

    Pages are copied in ascending order and left otherwise untouched.

    Raises:
        InvalidRange: If the range does not fit the source document.
        ExtractionError: If copying or serializing fails.
        LibraryLoadError: If the PDF library is unavailable.
    """
    toolkit = await capability.get_toolkit(module_name)
    output = await asyncio.to_thread(_extract, toolkit, pdf_bytes, page_range)
    log.info(
        "Extracted pages %d-%d into %d bytes",
        page_range.start, page_range.end, len(output),
    )
    return output
