"""Relational storage for documents and categories."""

from .client import DatabaseClient
from .models import Base, CategoryModel, DocumentModel

__all__ = ["DatabaseClient", "Base", "CategoryModel", "DocumentModel"]
