from __future__ import annotations

import logging
from io import BytesIO
from typing import Any

from pypdf import PasswordType, PdfReader
from pypdf.errors import FileNotDecryptedError, WrongPasswordError

from app.services.errors import ExtractionError

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"
PDF_MAGIC = b"%PDF-"
# Below this many characters the PDF is treated as a scanned image.
MIN_READABLE_CHARS = 50


def is_pdf_mime(declared_mime_type: str | None) -> bool:
    base = (declared_mime_type or "").split(";")[0].strip().lower()
    return base == PDF_MIME_TYPE


def _page_fragments(page: Any) -> list[str]:
    fragments: list[str] = []

    def visitor(text, cm, tm, font_dict, font_size):
        fragments.append(text)

    page.extract_text(visitor_text=visitor)
    return fragments


def _open_reader(file_bytes: bytes) -> PdfReader:
    reader = PdfReader(BytesIO(file_bytes))
    if reader.is_encrypted and reader.decrypt("") == PasswordType.NOT_DECRYPTED:
        raise ExtractionError("password_protected", "PDF requires a password to open.")
    return reader


def extract_text(file_bytes: bytes, declared_mime_type: str | None) -> str:
    """Return the text of every page, in page order, one line-terminated block per page.

    Raises ``ExtractionError`` with one of the extraction kinds. A non-PDF mime type
    is rejected before the bytes are looked at.
    """
    if not is_pdf_mime(declared_mime_type):
        raise ExtractionError("unsupported_format", f"Declared type '{declared_mime_type}' is not a PDF.")

    if not file_bytes.startswith(PDF_MAGIC):
        logger.warning("pdf_signature_mismatch size=%s", len(file_bytes))
        raise ExtractionError("corrupt_or_unreadable", "File signature does not match .pdf content.")

    try:
        reader = _open_reader(file_bytes)
        page_texts: list[str] = []
        for page in reader.pages:
            page_texts.append(" ".join(_page_fragments(page)) + "\n")
    except ExtractionError:
        logger.warning("pdf_password_protected size=%s", len(file_bytes))
        raise
    except (FileNotDecryptedError, WrongPasswordError) as exc:
        logger.warning("pdf_password_protected size=%s: %s", len(file_bytes), exc)
        raise ExtractionError("password_protected", str(exc)) from exc
    except Exception as exc:  # noqa: BLE001 - any reader failure means an unreadable file
        logger.warning("pdf_parse_failed size=%s: %s", len(file_bytes), exc)
        raise ExtractionError("corrupt_or_unreadable", str(exc)) from exc

    full_text = "".join(page_texts)
    if len(full_text.strip()) < MIN_READABLE_CHARS:
        logger.info("pdf_no_readable_text pages=%s chars=%s", len(page_texts), len(full_text.strip()))
        raise ExtractionError("no_readable_text", "Extracted text is below the readable threshold.")
    return full_text
