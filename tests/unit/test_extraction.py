"""Unit tests for file kind detection and text extraction"""

import pytest
import pypdf
from docx import Document as DocxDocument

from catalog_service.core.exceptions import ExtractionError
from catalog_service.core.knowledge.extraction import (
    ExtractionResult,
    TextExtractor,
    classify_file_kind,
)
from catalog_service.models.document import FileKind


@pytest.mark.unit
class TestClassifyFileKind:
    """Test file kind detection from file names"""

    @pytest.mark.parametrize("file_name,expected", [
        ("report.pdf", FileKind.PDF),
        ("brief.docx", FileKind.DOCX),
        ("notes.txt", FileKind.TXT),
        ("README.md", FileKind.MD),
        ("page.html", FileKind.HTML),
        ("logo.png", FileKind.IMAGE),
        ("photo.JPEG", FileKind.IMAGE),
        ("icon.svg", FileKind.IMAGE),
        ("banner.webp", FileKind.IMAGE),
        ("data.csv", FileKind.OTHER),
        ("Makefile", FileKind.OTHER),
        ("legacy.doc", FileKind.OTHER),
    ])
    def test_extension_mapping(self, file_name, expected):
        """Happy path: extension decides the kind, case-insensitively"""
        assert classify_file_kind(file_name) == expected

    def test_uppercase_extension(self):
        """Edge case: uppercase extensions are recognised"""
        assert classify_file_kind("REPORT.PDF") == FileKind.PDF

    def test_only_last_extension_counts(self):
        """Edge case: multiple dots use the final extension"""
        assert classify_file_kind("archive.pdf.zip") == FileKind.OTHER
        assert classify_file_kind("notes.final.md") == FileKind.MD


@pytest.mark.unit
class TestTextExtractor:
    """Test text extraction per file kind"""

    @pytest.fixture
    def extractor(self):
        return TextExtractor()

    @pytest.mark.parametrize("kind,suffix", [
        (FileKind.TXT, ".txt"),
        (FileKind.MD, ".md"),
        (FileKind.HTML, ".html"),
    ])
    async def test_plain_kinds_are_verbatim(self, extractor, tmp_path, kind, suffix):
        """Happy path: text, markdown and HTML keep their markup"""
        raw = "<h1>Brand</h1>\n# Heading\n*bold* café"
        path = tmp_path / f"doc{suffix}"
        path.write_text(raw, encoding="utf-8")

        assert await extractor.extract(str(path), kind) == raw

    async def test_invalid_utf8_is_replaced(self, extractor, tmp_path):
        """Edge case: undecodable bytes do not fail extraction"""
        path = tmp_path / "binary.txt"
        path.write_bytes(b"ok \xff\xfe end")

        text = await extractor.extract(str(path), FileKind.TXT)
        assert text.startswith("ok ")
        assert text.endswith(" end")

    async def test_docx_paragraphs(self, extractor, tmp_path):
        """Happy path: DOCX paragraphs are joined by newlines"""
        path = tmp_path / "brief.docx"
        doc = DocxDocument()
        doc.add_paragraph("Quarterly campaign brief")
        doc.add_paragraph("Launch plan for April")
        doc.save(str(path))

        text = await extractor.extract(str(path), FileKind.DOCX)
        assert "Quarterly campaign brief\nLaunch plan for April" in text

    async def test_pdf_without_text(self, extractor, tmp_path):
        """Edge case: a PDF page without text extracts to whitespace"""
        path = tmp_path / "blank.pdf"
        writer = pypdf.PdfWriter()
        writer.add_blank_page(width=72, height=72)
        with open(path, "wb") as f:
            writer.write(f)

        result = await extractor.extract_result(str(path), FileKind.PDF)
        assert result.ok
        assert result.text.strip() == ""

    @pytest.mark.parametrize("kind", [FileKind.IMAGE, FileKind.OTHER])
    async def test_kinds_without_text(self, extractor, tmp_path, kind):
        """Edge case: images and other files yield empty text"""
        path = tmp_path / "file.bin"
        path.write_bytes(b"\x89PNG\r\n")

        result = await extractor.extract_result(str(path), kind)
        assert result == ExtractionResult()
        assert result.ok

    async def test_unknown_kind_string(self, extractor, tmp_path):
        """Edge case: an unrecognised declared kind yields empty text"""
        assert await extractor.extract(str(tmp_path / "x"), "spreadsheet") == ""

    async def test_kind_given_as_string(self, extractor, tmp_path):
        """Happy path: declared kind may be a plain string"""
        path = tmp_path / "notes.txt"
        path.write_text("plain words", encoding="utf-8")
        assert await extractor.extract(str(path), "TXT") == "plain words"

    async def test_corrupt_docx_reports_error(self, extractor, tmp_path):
        """Error case: a corrupt DOCX returns an error result with empty text"""
        path = tmp_path / "broken.docx"
        path.write_bytes(b"this is not a zip archive")

        result = await extractor.extract_result(str(path), FileKind.DOCX)
        assert not result.ok
        assert result.text == ""
        assert isinstance(result.error, ExtractionError)
        assert result.error.details == {"file_kind": "docx"}

    async def test_extract_degrades_to_empty_text(self, extractor, tmp_path):
        """Error case: extract swallows extraction failures as empty text"""
        path = tmp_path / "broken.docx"
        path.write_bytes(b"garbage")
        assert await extractor.extract(str(path), FileKind.DOCX) == ""

    async def test_missing_file_reports_error(self, extractor, tmp_path):
        """Error case: a vanished file is an extraction error, not an exception"""
        result = await extractor.extract_result(str(tmp_path / "gone.pdf"), FileKind.PDF)
        assert not result.ok
        assert result.text == ""
