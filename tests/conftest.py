"""Shared fixtures: in-memory PDFs whose pages can be told apart by width."""
from __future__ import annotations

import io

import pytest
from pypdf import PdfReader, PdfWriter

from pdfcrop import artifacts, capability
from pdfcrop.models import SourceFile

BASE_WIDTH = 100


def make_pdf(num_pages: int) -> bytes:
    """Build a PDF where page n (1-indexed) is BASE_WIDTH + n points wide."""
    writer = PdfWriter()
    for n in range(1, num_pages + 1):
        writer.add_blank_page(width=BASE_WIDTH + n, height=200)
    output = io.BytesIO()
    writer.write(output)
    return output.getvalue()


def page_numbers(pdf_bytes: bytes) -> list[int]:
    """Recover the source page numbers of each page in ``pdf_bytes``."""
    reader = PdfReader(io.BytesIO(pdf_bytes))
    return [round(float(page.mediabox.width)) - BASE_WIDTH for page in reader.pages]


def make_source(num_pages: int = 10, name: str = "report.pdf") -> SourceFile:
    return SourceFile(data=make_pdf(num_pages), media_type="application/pdf", name=name)


@pytest.fixture(autouse=True)
def clean_state():
    capability.reset()
    artifacts._registry.clear()
    yield
    capability.reset()
    artifacts._registry.clear()


@pytest.fixture
def ten_page_source() -> SourceFile:
    return make_source(10)
