"""Per-upload session: owns the source file, the page range and the artifact.

All mutation goes through the transition methods below. ``processing`` is
derived from the phase, and every awaiting transition leaves LOADING or
EXTRACTING in a ``finally`` block.

A reset (explicit or via a new file) bumps ``_generation``. Operations still
in flight from an older generation run to completion but publish nothing.
"""
from __future__ import annotations

import logging
import re

from pdfcrop import config
from pdfcrop.artifacts import ArtifactManager
from pdfcrop.errors import InvalidFileType, PdfCropError
from pdfcrop.extraction import extract_pages
from pdfcrop.loader import check_media_type, load_metadata
from pdfcrop.messages import message_for
from pdfcrop.models import (
    DocumentMetadata,
    ExtractedArtifact,
    PageRange,
    Phase,
    SessionSnapshot,
    SourceFile,
)
from pdfcrop.validation import is_valid_range

log = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?)0*(\d+)")
_MAX_DIGITS = 9


def parse_page_number(value: int | str | None) -> int:
    """Read a page number the way the range form does: junk or 0 becomes 1.

    Numbers longer than ``_MAX_DIGITS`` digits are clamped to the largest
    value of that width, which no document can satisfy.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value or 1
    match = _LEADING_INT.match(str(value or ""))
    if match is None:
        return 1
    sign, digits = match.groups()
    if len(digits) > _MAX_DIGITS:
        digits = "9" * _MAX_DIGITS
    return int(sign + digits) or 1


class CropSession:
    def __init__(self, locale: str | None = None, module_name: str | None = None):
        self.locale = locale or config.LOCALE
        self.module_name = module_name
        self.artifacts = ArtifactManager()
        self._generation = 0
        self._range_version = 0
        self._clear()

    def _clear(self) -> None:
        self.source: SourceFile | None = None
        self.metadata: DocumentMetadata | None = None
        self.page_range = PageRange()
        self.phase = Phase.IDLE
        self.error_message: str | None = None
        self.artifacts.revoke()

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------
    @property
    def processing(self) -> bool:
        return self.phase in (Phase.LOADING, Phase.EXTRACTING)

    @property
    def total_pages(self) -> int:
        return self.metadata.total_pages if self.metadata is not None else 0

    @property
    def is_valid(self) -> bool:
        return is_valid_range(self.page_range.start, self.page_range.end, self.total_pages)

    @property
    def artifact(self) -> ExtractedArtifact | None:
        return self.artifacts.live

    @property
    def file_name(self) -> str:
        return self.source.name if self.source is not None else config.DEFAULT_FILE_NAME

    def snapshot(self) -> SessionSnapshot:
        artifact = self.artifact
        return SessionSnapshot(
            phase=self.phase,
            file_name=self.source.name if self.source is not None else None,
            total_pages=self.total_pages,
            start=self.page_range.start,
            end=self.page_range.end,
            is_valid=self.is_valid,
            processing=self.processing,
            error_message=self.error_message,
            download_url=artifact.url if artifact is not None else None,
            artifact_pages=artifact.page_count if artifact is not None else None,
        )

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    def _report(self, exc: Exception) -> None:
        if isinstance(exc, PdfCropError):
            log.warning("%s: %s", type(exc).__name__, exc)
        else:
            log.exception("Unexpected failure in crop session")
        key = getattr(exc, "message_key", PdfCropError.message_key)
        self.error_message = message_for(key, self.locale)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    async def select_file(self, file: SourceFile | None) -> None:
        """Accept a new upload and load its page count.

        A file not declared as PDF only sets the error message.
        """
        if file is None:
            return
        try:
            check_media_type(file)
        except InvalidFileType as exc:
            self._report(exc)
            return

        self.reset()
        generation = self._generation
        self.source = file
        self.phase = Phase.LOADING

        try:
            metadata = await load_metadata(file, self.module_name)
        except Exception as exc:
            if self._is_current(generation):
                self.reset()
                self._report(exc)
            else:
                log.info("Discarding load failure for superseded file %s", file.name)
            return
        finally:
            if self._is_current(generation) and self.phase is Phase.LOADING:
                self.phase = Phase.IDLE

        if not self._is_current(generation):
            log.info("Discarding metadata for superseded file %s", file.name)
            return
        self.metadata = metadata
        self.page_range = PageRange(start=1, end=metadata.total_pages)
        self.phase = Phase.READY

    def edit_start(self, value: int | str | None) -> None:
        self.edit_range(start=value)

    def edit_end(self, value: int | str | None) -> None:
        self.edit_range(end=value)

    def edit_range(
        self,
        start: int | str | None = None,
        end: int | str | None = None,
    ) -> None:
        """Update one or both bounds; the previous output no longer matches, so drop it."""
        if self.metadata is None:
            return
        update: dict[str, int] = {}
        if start is not None:
            update["start"] = parse_page_number(start)
        if end is not None:
            update["end"] = parse_page_number(end)
        if not update:
            return
        self.page_range = self.page_range.model_copy(update=update)
        self._range_version += 1
        self.artifacts.revoke()

    async def extract(self) -> ExtractedArtifact | None:
        """Cut the current range into a new artifact.

        Returns None without touching state unless the session is READY with
        a valid range. On failure the error message is set and no artifact is
        live.
        """
        if self.phase is not Phase.READY or self.source is None or not self.is_valid:
            log.debug("Extraction skipped (phase=%s, valid=%s)", self.phase.value, self.is_valid)
            return None

        generation = self._generation
        range_version = self._range_version
        page_range = self.page_range.model_copy()
        source = self.source

        self.phase = Phase.EXTRACTING
        self.error_message = None
        self.artifacts.revoke()

        try:
            data = await extract_pages(source.data, page_range, self.module_name)
        except Exception as exc:
            if self._is_current(generation):
                self._report(exc)
            return None
        finally:
            if self._is_current(generation) and self.phase is Phase.EXTRACTING:
                self.phase = Phase.READY

        if not self._is_current(generation) or range_version != self._range_version:
            log.info("Discarding extraction of pages %d-%d: session changed", page_range.start, page_range.end)
            return None
        return self.artifacts.publish(
            data,
            page_count=page_range.page_count,
            file_name=f"cropped_{source.name or config.DEFAULT_FILE_NAME}",
        )

    def reset(self) -> None:
        self._generation += 1
        self._clear()
