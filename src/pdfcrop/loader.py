from __future__ import annotations

import asyncio
import logging

from pdfcrop import capability
from pdfcrop.config import PDF_MEDIA_TYPE
from pdfcrop.errors import CorruptDocument, InvalidFileType
from pdfcrop.models import DocumentMetadata, SourceFile

log = logging.getLogger(__name__)


def check_media_type(source: SourceFile) -> None:
    """Reject anything not declared as a PDF before it reaches the parser.

    Raises:
        InvalidFileType: If the declared media type is not application/pdf.
    """
    if source.media_type != PDF_MEDIA_TYPE:
        raise InvalidFileType(source.media_type)


async def load_metadata(source: SourceFile, module_name: str | None = None) -> DocumentMetadata:
    """Parse the uploaded bytes and report the page count.

    Raises:
        CorruptDocument: If the bytes cannot be parsed as a PDF with pages.
        LibraryLoadError: If the PDF library is unavailable.
    """
    toolkit = await capability.get_toolkit(module_name)
    try:
        total_pages = await asyncio.to_thread(toolkit.get_total_pages, source.data)
    except Exception as exc:
        raise CorruptDocument(f"Could not parse {source.name or 'document'}: {exc}") from exc

    if total_pages < 1:
        raise CorruptDocument(f"{source.name or 'document'} has no pages")

    log.info("Loaded %s: %d pages (%d bytes)", source.name, total_pages, source.size)
    return DocumentMetadata(total_pages=total_pages)
