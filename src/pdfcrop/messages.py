"""User-facing error text, keyed by ``PdfCropError.message_key``."""

from __future__ import annotations

from pdfcrop import config

FALLBACK_LOCALE = "en"

_MESSAGES: dict[str, dict[str, str]] = {
    "zh-TW": {
        "invalid_file_type": "請上傳一個 PDF 檔案。",
        "corrupt_document": "讀取 PDF 失敗。檔案可能已損壞。",
        "invalid_range": "頁碼範圍無效。",
        "extraction_failed": "裁切 PDF 時發生錯誤。",
        "library_unavailable": "無法載入 PDF 處理元件，請稍後再試。",
        "artifact_revoked": "下載連結已失效。",
        "unexpected": "發生未預期的錯誤。",
    },
    "en": {
        "invalid_file_type": "Please upload a PDF file.",
        "corrupt_document": "Failed to read the PDF. The file may be corrupted.",
        "invalid_range": "The page range is not valid.",
        "extraction_failed": "An error occurred while cropping the PDF.",
        "library_unavailable": "The PDF processing library could not be loaded. Please try again.",
        "artifact_revoked": "The download link has expired.",
        "unexpected": "An unexpected error occurred.",
    },
}


def supported_locales() -> list[str]:
    return sorted(_MESSAGES)


def message_for(key: str, locale: str | None = None) -> str:
    """Return the message for ``key`` in ``locale``, falling back to English."""
    table = _MESSAGES.get(locale or config.LOCALE, _MESSAGES[FALLBACK_LOCALE])
    fallback = _MESSAGES[FALLBACK_LOCALE]
    return table.get(key) or fallback.get(key) or fallback["unexpected"]
