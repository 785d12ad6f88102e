"""Best-effort text extraction from uploaded files.

Supported kinds:
  pdf        page text via pypdf
  docx       paragraph text via python-docx
  txt/md/html  raw bytes decoded as UTF-8, markup kept verbatim
  image/other  no text

Extraction never fails ingestion: errors are returned as an
``ExtractionResult`` carrying an ``ExtractionError`` and collapse to an empty
string in ``TextExtractor.extract``.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional, Union

import pypdf
from docx import Document as DocxDocument

from ...models.document import FileKind
from ..exceptions import ExtractionError

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {"jpg", "jpeg", "png", "gif", "svg", "webp"}
TEXT_EXTENSIONS = {"pdf", "docx", "txt", "md", "html"}


def classify_file_kind(file_name: str) -> FileKind:
    """Derive the file kind from a file name's extension."""
    extension = os.path.splitext(file_name or "")[1].lower().lstrip(".")

    if extension in IMAGE_EXTENSIONS:
        return FileKind.IMAGE
    if extension in TEXT_EXTENSIONS:
        return FileKind(extension)
    return FileKind.OTHER


@dataclass(frozen=True)
class ExtractionResult:
    """Outcome of a text extraction attempt."""

    text: str = ""
    error: Optional[ExtractionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class TextExtractor:
    """Extracts plain text from stored files by declared kind."""

    def __init__(self):
        self.extractors = {
            FileKind.PDF: self._extract_text_pdf,
            FileKind.DOCX: self._extract_text_docx,
            FileKind.TXT: self._extract_text_plain,
            FileKind.MD: self._extract_text_plain,
            FileKind.HTML: self._extract_text_plain,
        }

    async def extract_result(self, file_path: str, file_kind: Union[FileKind, str]) -> ExtractionResult:
        """Extract text, reporting failures as a typed outcome.

        Args:
            file_path: Path to the stored file
            file_kind: Declared kind of the file

        Returns:
            ExtractionResult with the text, or an empty text and the error
        """
        try:
            kind = FileKind(str(getattr(file_kind, "value", file_kind)).lower())
        except ValueError:
            return ExtractionResult()

        extractor = self.extractors.get(kind)
        if extractor is None:
            return ExtractionResult()

        try:
            return ExtractionResult(text=extractor(file_path))
        except Exception as e:
            return ExtractionResult(
                error=ExtractionError(
                    f"Could not extract text from {file_path}: {e}",
                    details={"file_kind": kind.value},
                )
            )

    async def extract(self, file_path: str, file_kind: Union[FileKind, str]) -> str:
        """Extract text, degrading to an empty string on failure."""
        result = await self.extract_result(file_path, file_kind)
        if not result.ok:
            logger.warning(f"Text extraction failed, continuing with empty content: {result.error}")
        return result.text

    def _extract_text_plain(self, file_path: str) -> str:
        """Extract text from plain text, markdown and HTML files"""
        with open(file_path, "rb") as f:
            return f.read().decode("utf-8", errors="replace")

    def _extract_text_pdf(self, file_path: str) -> str:
        """Extract text from PDF files"""
        with open(file_path, "rb") as f:
            pdf_reader = pypdf.PdfReader(f)
            text = ""
            for page in pdf_reader.pages:
                text += (page.extract_text() or "") + "\n"
            return text

    def _extract_text_docx(self, file_path: str) -> str:
        """Extract text from DOCX files"""
        doc = DocxDocument(file_path)
        return "\n".join(paragraph.text for paragraph in doc.paragraphs)
