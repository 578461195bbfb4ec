"""Runtime settings read from the environment (and a local .env file)."""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

LOCALE = os.environ.get("PDFCROP_LOCALE", "zh-TW")
CAPABILITY_MODULE = os.environ.get("PDFCROP_CAPABILITY_MODULE", "pypdf")
ENVIRONMENT = os.environ.get("PDFCROP_ENVIRONMENT", "development")
HOST = os.environ.get("PDFCROP_HOST", "127.0.0.1")
PORT = int(os.environ.get("PDFCROP_PORT", "8000"))
SESSION_TTL = float(os.environ.get("PDFCROP_SESSION_TTL", "1800"))
MAX_SESSIONS = int(os.environ.get("PDFCROP_MAX_SESSIONS", "100"))

PDF_MEDIA_TYPE = "application/pdf"
DEFAULT_FILE_NAME = "unknown.pdf"
