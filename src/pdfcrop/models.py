from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from pdfcrop.config import PDF_MEDIA_TYPE

ARTIFACT_URL_PREFIX = "blob:pdfcrop/"


class Phase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    EXTRACTING = "extracting"


class SourceFile(BaseModel):
    """An uploaded file as handed over by the file picker."""

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(repr=False)
    media_type: str = ""
    name: str = ""

    @property
    def size(self) -> int:
        return len(self.data)


class DocumentMetadata(BaseModel):
    """What the loader learned about the source document."""

    model_config = ConfigDict(frozen=True)

    total_pages: int = Field(gt=0)


class PageRange(BaseModel):
    """1-indexed, inclusive page range. May hold invalid values while editing."""

    start: int = 1
    end: int = 1

    @property
    def page_count(self) -> int:
        return self.end - self.start + 1

    def indices(self) -> list[int]:
        """Zero-based source page indices, ascending."""
        return list(range(self.start - 1, self.end))


def _new_artifact_url() -> str:
    return ARTIFACT_URL_PREFIX + uuid.uuid4().hex


class ExtractedArtifact(BaseModel):
    """Serialized output document plus its download reference."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(default_factory=_new_artifact_url)
    data: bytes = Field(repr=False)
    media_type: str = PDF_MEDIA_TYPE
    page_count: int = 0
    file_name: str = "cropped.pdf"
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def token(self) -> str:
        return self.url.removeprefix(ARTIFACT_URL_PREFIX)


class SessionSnapshot(BaseModel):
    """Read-only view of a session for the presentation layer."""

    phase: Phase
    file_name: str | None = None
    total_pages: int = 0
    start: int = 1
    end: int = 1
    is_valid: bool = False
    processing: bool = False
    error_message: str | None = None
    download_url: str | None = None
    artifact_pages: int | None = None


class RangeUpdate(BaseModel):
    """Request body for PUT /sessions/{id}/range.

    Values arrive straight from form fields, so strings are accepted and
    parsed by the session.
    """

    start: int | str | None = None
    end: int | str | None = None


class SessionResponse(SessionSnapshot):
    """Snapshot returned by the HTTP surface, tagged with its session id."""

    session_id: str
    download_path: str | None = None
