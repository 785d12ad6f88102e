"""Document data models."""

from datetime import datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from ..utils.formatting import format_file_size


class FileKind(str, Enum):
    """Closed set of supported input formats."""
    PDF = "pdf"
    DOCX = "docx"
    TXT = "txt"
    MD = "md"
    HTML = "html"
    IMAGE = "image"
    OTHER = "other"


class DocumentSummary(BaseModel):
    """Stored document without its extracted content."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str = Field(..., min_length=1)
    description: str = ""
    file_name: str
    file_path: str
    file_type: FileKind
    file_size: int = Field(..., ge=0)
    category: str = "Uncategorized"
    project: str = "General"
    team: str = "General"
    tags: List[str] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)
    uploaded_by: str = "System"
    upload_date: datetime
    last_modified: datetime
    view_count: int = Field(default=0, ge=0)
    created_at: datetime
    updated_at: datetime


class Document(DocumentSummary):
    """Full document model including extracted content."""
    content: str = ""


class DocumentUpdate(BaseModel):
    """Editable document metadata. Empty values leave a field unchanged."""
    title: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = None
    category: Optional[str] = None
    project: Optional[str] = None
    team: Optional[str] = None
    tags: Optional[List[str]] = None


class DocumentResponse(BaseModel):
    """API response model for a single document."""
    id: str
    title: str
    description: str
    file_name: str
    file_type: FileKind
    file_size: int
    file_size_display: str
    content: Optional[str] = None
    category: str
    project: str
    team: str
    tags: List[str]
    keywords: List[str]
    uploaded_by: str
    upload_date: str
    last_modified: str
    view_count: int
    created_at: str
    updated_at: str

    @classmethod
    def from_document(cls, doc: DocumentSummary):
        """Convert Document or DocumentSummary to DocumentResponse."""
        return cls(
            id=doc.id,
            title=doc.title,
            description=doc.description,
            file_name=doc.file_name,
            file_type=doc.file_type,
            file_size=doc.file_size,
            file_size_display=format_file_size(doc.file_size),
            content=getattr(doc, "content", None),
            category=doc.category,
            project=doc.project,
            team=doc.team,
            tags=doc.tags,
            keywords=doc.keywords,
            uploaded_by=doc.uploaded_by,
            upload_date=doc.upload_date.isoformat(),
            last_modified=doc.last_modified.isoformat(),
            view_count=doc.view_count,
            created_at=doc.created_at.isoformat(),
            updated_at=doc.updated_at.isoformat(),
        )
