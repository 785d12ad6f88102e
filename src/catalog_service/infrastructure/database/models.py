"""SQLAlchemy ORM models for documents and categories."""

from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, Text, JSON, Integer, BigInteger, Index, column, table
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DocumentModel(Base):
    """Uploaded document with extracted text and inferred labels."""
    __tablename__ = "documents"

    document_id = Column(String(36), primary_key=True)
    title = Column(String(500), nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    file_name = Column(String(500), nullable=False)
    file_path = Column(String(1000), nullable=False)
    file_type = Column(String(20), nullable=False)
    file_size = Column(BigInteger, nullable=False)
    content = Column(Text, nullable=False, default="")
    category = Column(String(200), nullable=False, default="Uncategorized", index=True)
    project = Column(String(200), nullable=False, default="General", index=True)
    team = Column(String(200), nullable=False, default="General", index=True)
    tags = Column(JSON, nullable=False, default=list)
    keywords = Column(JSON, nullable=False, default=list)
    uploaded_by = Column(String(200), nullable=False, default="System")
    upload_date = Column(DateTime, nullable=False, default=utcnow, index=True)
    last_modified = Column(DateTime, nullable=False, default=utcnow)
    view_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index("ix_documents_category_project_team", "category", "project", "team"),
    )

    @property
    def id(self) -> str:
        return self.document_id

    def __repr__(self):
        return f"<DocumentModel(document_id={self.document_id}, title={self.title})>"


class CategoryModel(Base):
    """Category label with a running document count."""
    __tablename__ = "categories"

    category_id = Column(String(36), primary_key=True)
    name = Column(String(200), nullable=False, unique=True)  # lowercase
    display_name = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    color = Column(String(20), nullable=False, default="#3B82F6")
    document_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    @property
    def id(self) -> str:
        return self.category_id

    def __repr__(self):
        return f"<CategoryModel(name={self.name}, document_count={self.document_count})>"


# SQLite FTS5 table holding the stems of each document's indexed fields.
# Created outside Base.metadata; rows are kept in step by DatabaseClient.
DOCUMENTS_FTS = "documents_fts"

DOCUMENTS_FTS_DDL = (
    f"CREATE VIRTUAL TABLE IF NOT EXISTS {DOCUMENTS_FTS} USING fts5("
    "document_id UNINDEXED, title, description, content, tags, "
    "tokenize = \"unicode61 tokenchars '_'\")"
)

documents_fts = table(
    DOCUMENTS_FTS,
    column("document_id"),
    column("title"),
    column("description"),
    column("content"),
    column("tags"),
)
