from __future__ import annotations


class PdfCropError(Exception):
    """Base class for failures surfaced on the session's error channel."""

    message_key = "unexpected"


class InvalidFileType(PdfCropError):
    """Raised when the selected file is not declared as a PDF."""

    message_key = "invalid_file_type"

    def __init__(self, media_type: str):
        self.media_type = media_type
        super().__init__(f"Unsupported media type: {media_type or '<empty>'}")


class CorruptDocument(PdfCropError):
    """Raised when the document capability cannot parse the uploaded bytes."""

    message_key = "corrupt_document"


class InvalidRange(PdfCropError):
    """Raised when extraction is asked for pages outside the document."""

    message_key = "invalid_range"

    def __init__(self, start: int, end: int, total_pages: int):
        self.start = start
        self.end = end
        self.total_pages = total_pages
        super().__init__(
            f"Page range {start}-{end} is not valid for a "
            f"{total_pages}-page document"
        )


class ExtractionError(PdfCropError):
    """Raised when copying or serializing the selected pages fails."""

    message_key = "extraction_failed"


class LibraryLoadError(PdfCropError):
    """Raised when the document capability cannot be loaded."""

    message_key = "library_unavailable"


class ArtifactRevoked(PdfCropError):
    """Raised when resolving a download reference that is no longer live."""

    message_key = "artifact_revoked"

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Artifact reference is not live: {url}")
