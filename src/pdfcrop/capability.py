"""Process-wide, lazily loaded handle to the PDF library.

The first caller triggers the import; callers arriving while it is in flight
await the same load. A failed load is not remembered, so the next call tries
again.
"""
from __future__ import annotations

import asyncio
import importlib
import logging

from pdfcrop import config
from pdfcrop.errors import LibraryLoadError
from pdfcrop.pdf_utils import PdfToolkit

log = logging.getLogger(__name__)

_REQUIRED_ATTRS = ("PdfReader", "PdfWriter")

_toolkit: PdfToolkit | None = None
_loading: asyncio.Task[PdfToolkit] | None = None
load_attempts = 0


async def _load(module_name: str) -> PdfToolkit:
    global load_attempts
    load_attempts += 1
    log.info("Loading PDF library %r (attempt %d)", module_name, load_attempts)
    try:
        lib = await asyncio.to_thread(importlib.import_module, module_name)
    except Exception as exc:
        raise LibraryLoadError(f"Could not import PDF library {module_name!r}: {exc}") from exc

    missing = [name for name in _REQUIRED_ATTRS if not hasattr(lib, name)]
    if missing:
        raise LibraryLoadError(
            f"PDF library {module_name!r} is missing {', '.join(missing)}"
        )
    toolkit = PdfToolkit(lib)
    log.info("Loaded PDF library %r version %s", module_name, toolkit.version)
    return toolkit


async def get_toolkit(module_name: str | None = None) -> PdfToolkit:
    """Return the shared toolkit, loading the library on first use.

    Concurrent callers share one in-flight load; cancelling one of them
    leaves the load running for the others.

    Raises:
        LibraryLoadError: If the library cannot be imported.
    """
    global _toolkit, _loading
    if _toolkit is not None:
        return _toolkit

    if _loading is None:
        _loading = asyncio.create_task(_load(module_name or config.CAPABILITY_MODULE))
    task = _loading
    try:
        toolkit = await asyncio.shield(task)
    except LibraryLoadError:
        log.warning("PDF library load failed; the next call will retry")
        raise
    finally:
        if _loading is task and task.done():
            _loading = None

    _toolkit = toolkit
    return toolkit


def is_loaded() -> bool:
    return _toolkit is not None


def reset() -> None:
    """Forget the cached toolkit (the next call loads again)."""
    global _toolkit, _loading, load_attempts
    _toolkit = None
    _loading = None
    load_attempts = 0
