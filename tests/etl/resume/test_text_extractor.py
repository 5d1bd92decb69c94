"""Tests for document text extraction and sanitization."""
import io
from unittest import TestCase
from unittest.mock import MagicMock, patch

from docx import Document
from pypdf import PdfWriter

from etl.resume.exceptions import ExtractionError
from etl.resume.text_extractor import (
    MAX_TEXT_LENGTH,
    DocumentTextExtractor,
    detect_document_kind,
    sanitize_extracted_text,
)


def _docx_bytes(*paragraphs, table_rows=None) -> bytes:
    doc = Document()
    for para in paragraphs:
        doc.add_paragraph(para)
    if table_rows:
        table = doc.add_table(rows=len(table_rows), cols=len(table_rows[0]))
        for r, row in enumerate(table_rows):
            for c, value in enumerate(row):
                table.cell(r, c).text = value
    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


def _blank_pdf_bytes() -> bytes:
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


class TestSanitizeExtractedText(TestCase):

    def test_collapses_whitespace_and_trims(self):
        self.assertEqual(
            sanitize_extracted_text("  Senior\tEngineer \n\n  at   Acme  "),
            "Senior Engineer at Acme",
        )

    def test_strips_null_bytes(self):
        self.assertEqual(sanitize_extracted_text("Py\x00thon\x00"), "Python")

    def test_truncates_to_limit(self):
        result = sanitize_extracted_text("a" * (MAX_TEXT_LENGTH + 1000))
        self.assertEqual(len(result), MAX_TEXT_LENGTH)

    def test_output_invariants_hold_for_messy_input(self):
        """Length cap, no null bytes, no whitespace runs."""
        messy = ("word\x00 \t\r\n" * 100_000) + ("\n\n" * 50_000)
        result = sanitize_extracted_text(messy)

        self.assertLessEqual(len(result), MAX_TEXT_LENGTH)
        self.assertNotIn('\x00', result)
        self.assertNotRegex(result, r'\s{2,}')

    def test_empty_input(self):
        self.assertEqual(sanitize_extracted_text(""), "")
        self.assertEqual(sanitize_extracted_text(" \n\t "), "")


class TestDetectDocumentKind(TestCase):

    def test_mime_types(self):
        self.assertEqual(detect_document_kind('application/pdf'), 'pdf')
        self.assertEqual(detect_document_kind('application/msword'), 'word')
        self.assertEqual(
            detect_document_kind('application/vnd.openxmlformats-officedocument.wordprocessingml.document'),
            'word',
        )

    def test_extensions_and_filenames(self):
        self.assertEqual(detect_document_kind('.PDF'), 'pdf')
        self.assertEqual(detect_document_kind('docx'), 'word')
        self.assertEqual(detect_document_kind('My Resume.doc'), 'word')
        self.assertEqual(detect_document_kind('.docx'), 'word')
        self.assertEqual(detect_document_kind('pdf'), 'pdf')

    def test_unknown(self):
        self.assertIsNone(detect_document_kind('text/plain'))
        self.assertIsNone(detect_document_kind('resume.txt'))
        self.assertIsNone(detect_document_kind(None))


class TestDocumentTextExtractor(TestCase):

    def setUp(self):
        self.extractor = DocumentTextExtractor()

    def test_extracts_docx_paragraphs_and_tables(self):
        data = _docx_bytes(
            'Jane Doe',
            'Software Engineer   at Acme',
            table_rows=[['Python', 'Docker']],
        )

        text = self.extractor.extract(data, 'resume.docx')

        self.assertIn('Jane Doe', text)
        self.assertIn('Software Engineer at Acme', text)
        self.assertIn('Python Docker', text)
        self.assertNotIn('\n', text)

    def test_bare_extension_as_declared_type(self):
        text = self.extractor.extract(_docx_bytes('Jane Doe'), '.docx')
        self.assertEqual(text, 'Jane Doe')

        self.assertEqual(self.extractor.extract(_blank_pdf_bytes(), '.pdf'), '')

    def test_blank_pdf_yields_empty_text(self):
        text = self.extractor.extract(_blank_pdf_bytes(), 'application/pdf')
        self.assertEqual(text, '')

    def test_pdf_pages_are_joined_and_sanitized(self):
        pages = [MagicMock(), MagicMock()]
        pages[0].extract_text.return_value = "Built a\n\nscheduler"
        pages[1].extract_text.return_value = "Led   a team\x00"
        with patch('etl.resume.text_extractor.PdfReader') as reader_cls:
            reader_cls.return_value.pages = pages
            text = self.extractor.extract(b'%PDF-fake', 'resume.pdf')

        self.assertEqual(text, 'Built a scheduler Led a team')

    def test_failing_pdf_page_is_skipped(self):
        pages = [MagicMock(), MagicMock()]
        pages[0].extract_text.side_effect = RuntimeError("bad page")
        pages[1].extract_text.return_value = "Second page text"
        with patch('etl.resume.text_extractor.PdfReader') as reader_cls:
            reader_cls.return_value.pages = pages
            text = self.extractor.extract(b'%PDF-fake', 'resume.pdf')

        self.assertEqual(text, 'Second page text')

    def test_corrupt_pdf_raises_extraction_error(self):
        with self.assertRaises(ExtractionError):
            self.extractor.extract(b'this is not a pdf', 'application/pdf')

    def test_corrupt_word_raises_extraction_error(self):
        with self.assertRaises(ExtractionError):
            self.extractor.extract(b'\xd0\xcf\x11\xe0 legacy doc bytes', 'resume.doc')

    def test_unsupported_type_raises_extraction_error(self):
        with self.assertRaises(ExtractionError):
            self.extractor.extract(b'plain text', 'text/plain')

    def test_is_supported(self):
        self.assertTrue(self.extractor.is_supported('resume.PDF'))
        self.assertTrue(self.extractor.is_supported('resume.docx'))
        self.assertFalse(self.extractor.is_supported('resume.txt'))

    def test_supported_formats(self):
        self.assertEqual(DocumentTextExtractor.get_supported_formats(), ['.doc', '.docx', '.pdf'])
