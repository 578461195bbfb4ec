"""Tests for media type checks and metadata loading."""
import pytest

from conftest import make_pdf, make_source
from pdfcrop.errors import CorruptDocument, InvalidFileType, LibraryLoadError
from pdfcrop.loader import check_media_type, load_metadata
from pdfcrop.models import SourceFile


def test_check_media_type_accepts_pdf():
    check_media_type(make_source(1))


@pytest.mark.parametrize("media_type", ["", "text/plain", "image/png", "application/PDF"])
def test_check_media_type_rejects_others(media_type):
    source = SourceFile(data=make_pdf(1), media_type=media_type, name="x.pdf")
    with pytest.raises(InvalidFileType):
        check_media_type(source)


@pytest.mark.asyncio
@pytest.mark.parametrize("num_pages", [1, 2, 10, 37])
async def test_reports_true_page_count(num_pages):
    metadata = await load_metadata(make_source(num_pages))
    assert metadata.total_pages == num_pages


@pytest.mark.asyncio
@pytest.mark.parametrize("data", [b"", b"not a pdf at all", b"%PDF-1.7\n garbage"])
async def test_corrupt_bytes_raise_corrupt_document(data):
    source = SourceFile(data=data, media_type="application/pdf", name="broken.pdf")
    with pytest.raises(CorruptDocument):
        await load_metadata(source)


@pytest.mark.asyncio
async def test_missing_library_raises_library_load_error():
    with pytest.raises(LibraryLoadError):
        await load_metadata(make_source(2), module_name="pdfcrop_no_such_library")
