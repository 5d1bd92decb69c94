"""
Document Text Extractor - Turn uploaded resume bytes into sanitized text.

Supports:
- PDF (.pdf): text from every page via pypdf
- Word (.docx, .doc): paragraph and table text via python-docx

The output is always sanitized before it leaves this module: capped in
length, free of null bytes, whitespace collapsed to single spaces.
"""
import io
import logging
import re
from pathlib import Path
from typing import Optional

from docx import Document
from pypdf import PdfReader

from etl.resume.exceptions import ExtractionError

logger = logging.getLogger(__name__)

MAX_TEXT_LENGTH = 500_000

PDF_MIME_TYPES = {'application/pdf'}
WORD_MIME_TYPES = {
    'application/msword',
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
}

_WHITESPACE_RE = re.compile(r'\s+')


def sanitize_extracted_text(text: str) -> str:
    """Cap, strip null bytes and collapse whitespace.

    Truncation happens first so the regex work is bounded by MAX_TEXT_LENGTH.
    """
    if len(text) > MAX_TEXT_LENGTH:
        text = text[:MAX_TEXT_LENGTH]
    text = text.replace('\x00', '')
    return _WHITESPACE_RE.sub(' ', text).strip()


def detect_document_kind(declared: Optional[str]) -> Optional[str]:
    """Map a MIME type, extension or filename to 'pdf' or 'word'.

    Returns None when the declared type is neither.
    """
    if not declared:
        return None
    value = declared.strip().lower()

    if value in PDF_MIME_TYPES:
        return 'pdf'
    if value in WORD_MIME_TYPES:
        return 'word'

    if value.startswith('.'):
        # Path('.pdf').suffix is empty: a leading dot marks a bare extension
        suffix = value
    elif '.' in value:
        suffix = Path(value).suffix
    else:
        suffix = f'.{value}'
    if suffix == '.pdf':
        return 'pdf'
    if suffix in ('.doc', '.docx'):
        return 'word'
    return None


class DocumentTextExtractor:
    """Extract plain text from PDF and Word resumes held in memory."""

    SUPPORTED_FORMATS = {'.pdf', '.doc', '.docx'}

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def extract(self, data: bytes, declared_type: str) -> str:
        """Decode document bytes and return sanitized text.

        Args:
            data: Raw file content
            declared_type: MIME type, extension or filename of the upload

        Returns:
            Sanitized text (possibly empty if the document holds no text)

        Raises:
            ExtractionError: If the type is unsupported or the codec fails
        """
        kind = detect_document_kind(declared_type)
        if kind == 'pdf':
            raw = self._extract_pdf(data)
        elif kind == 'word':
            raw = self._extract_word(data)
        else:
            raise ExtractionError(f"Unsupported document type: {declared_type}")

        text = sanitize_extracted_text(raw)
        self.logger.debug(f"Extracted {len(text)} chars from {kind} document ({len(data)} bytes)")
        return text

    def _extract_pdf(self, data: bytes) -> str:
        """Extract text from all PDF pages.

        A page that fails on its own is skipped; a document that cannot be
        opened at all is an ExtractionError.
        """
        try:
            reader = PdfReader(io.BytesIO(data))
            pages = reader.pages
            page_count = len(pages)
        except Exception as e:
            raise ExtractionError("Failed to extract text from PDF") from e

        pages_text = []
        for i in range(page_count):
            try:
                page_text = pages[i].extract_text()
                if page_text and page_text.strip():
                    pages_text.append(page_text)
            except Exception as e:
                self.logger.warning(f"Failed to extract text from page {i + 1}: {e}")

        if not pages_text:
            self.logger.warning(
                "No text extracted from PDF. "
                "The PDF may be scanned images or have text extraction disabled."
            )
        return '\n'.join(pages_text)

    def _extract_word(self, data: bytes) -> str:
        """Extract paragraph and table text from a Word document."""
        try:
            doc = Document(io.BytesIO(data))
        except Exception as e:
            raise ExtractionError("Failed to extract text from Word document") from e

        paragraphs = [para.text for para in doc.paragraphs if para.text.strip()]

        # Tables are common in resumes
        for table in doc.tables:
            for row in table.rows:
                row_texts = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if row_texts:
                    paragraphs.append(' '.join(row_texts))

        return '\n'.join(paragraphs)

    def is_supported(self, filename: str) -> bool:
        return Path(filename).suffix.lower() in self.SUPPORTED_FORMATS

    @classmethod
    def get_supported_formats(cls) -> list[str]:
        return sorted(cls.SUPPORTED_FORMATS)
