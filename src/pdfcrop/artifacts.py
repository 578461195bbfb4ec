"""In-memory registry of downloadable artifacts.

Each session owns one ``ArtifactManager`` and holds at most one live
reference at a time. References look like ``blob:pdfcrop/<hex>`` and stay
resolvable until revoked. All managers share one registry so the HTTP layer
can resolve a reference without knowing which session published it.
"""
from __future__ import annotations

import logging

from pdfcrop.errors import ArtifactRevoked
from pdfcrop.models import ARTIFACT_URL_PREFIX, ExtractedArtifact

log = logging.getLogger(__name__)

_registry: dict[str, ExtractedArtifact] = {}


def resolve(url: str) -> ExtractedArtifact:
    """Return the artifact behind a live reference (full url or bare token).

    Raises:
        ArtifactRevoked: If the reference was revoked or never existed.
    """
    if not url.startswith(ARTIFACT_URL_PREFIX):
        url = ARTIFACT_URL_PREFIX + url
    artifact = _registry.get(url)
    if artifact is None:
        raise ArtifactRevoked(url)
    return artifact


def is_live(url: str) -> bool:
    return url in _registry


def live_count() -> int:
    return len(_registry)


class ArtifactManager:
    def __init__(self) -> None:
        self._live: ExtractedArtifact | None = None

    @property
    def live(self) -> ExtractedArtifact | None:
        return self._live

    def publish(
        self, data: bytes, page_count: int = 0, file_name: str = "cropped.pdf"
    ) -> ExtractedArtifact:
        """Register ``data`` under a new reference, revoking the current one first."""
        self.revoke()
        artifact = ExtractedArtifact(data=data, page_count=page_count, file_name=file_name)
        _registry[artifact.url] = artifact
        self._live = artifact
        log.debug("Published %s (%d bytes)", artifact.url, len(data))
        return artifact

    def revoke(self, reference: ExtractedArtifact | str | None = None) -> None:
        """Release this manager's reference. Defaults to the live one.

        References this manager does not currently own (already revoked,
        unknown, or published by another manager) are ignored.
        """
        if self._live is None:
            return
        if reference is not None:
            url = reference if isinstance(reference, str) else reference.url
            if url != self._live.url:
                log.debug("Ignoring revoke of %s: not owned by this manager", url)
                return
        _registry.pop(self._live.url, None)
        log.debug("Revoked %s", self._live.url)
        self._live = None
