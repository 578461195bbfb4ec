"""Thin wrapper over the PDF library's reader/writer API.

Everything here is synchronous and CPU bound; async callers run it through
``asyncio.to_thread``. The library module is injected so that it can be
loaded lazily (see ``pdfcrop.capability``).
"""
from __future__ import annotations

import io
from types import ModuleType
from typing import Any, Sequence


class PdfToolkit:
    """Parse, count, copy and serialize PDF pages with a pypdf-compatible module."""

    def __init__(self, lib: ModuleType):
        self.lib = lib
        self.version = getattr(lib, "__version__", "unknown")

    def open(self, pdf_bytes: bytes) -> Any:
        """Parse PDF bytes into a page-addressable reader."""
        reader = self.lib.PdfReader(io.BytesIO(pdf_bytes))
        if reader.is_encrypted:
            raise ValueError("Encrypted PDFs are not supported")
        return reader

    def get_total_pages(self, pdf_bytes: bytes) -> int:
        """Return total page count from PDF bytes."""
        return len(self.open(pdf_bytes).pages)

    def copy_pages(self, reader: Any, indices: Sequence[int]) -> Any:
        """Copy pages at zero-based ``indices`` (in the given order) into a new document."""
        writer = self.lib.PdfWriter()
        for i in indices:
            writer.add_page(reader.pages[i])
        return writer

    def save(self, writer: Any) -> bytes:
        output = io.BytesIO()
        writer.write(output)
        return output.getvalue()
