from __future__ import annotations

import io
import logging
import time

from PyPDF2 import PdfReader

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF"


def looks_like_pdf(data: bytes) -> bool:
    return data[:1024].lstrip().startswith(PDF_MAGIC)


def extract_text_from_pdf_bytes(pdf_bytes: bytes) -> str:
    """Extract plain text from every page of a PDF, pages joined by newlines."""
    reader = PdfReader(io.BytesIO(pdf_bytes))
    pages = [page.extract_text() or "" for page in reader.pages]
    text = "\n".join(pages).strip()
    logger.info(f"Extracted {len(text)} chars from {len(pages)} PDF pages")
    return text


def truncate_text(text: str | None, max_chars: int) -> str:
    if not text:
        return ""
    return text[:max_chars]


def now_ms() -> int:
    return int(time.time() * 1000)
