"""Data models for the Document Catalog Service."""

from .document import Document, DocumentSummary, DocumentUpdate, DocumentResponse, FileKind
from .category import Category, CategoryCreate, CategoryStats, LabelCount
from .requests import (
    SearchFilters,
    SortOption,
    Pagination,
    DocumentListResponse,
    SuggestionsResponse,
    PopularTermsResponse,
    CategoryListResponse,
    CategoryStatsResponse,
    HealthResponse,
    ErrorResponse,
)

__all__ = [
    "Document",
    "DocumentSummary",
    "DocumentUpdate",
    "DocumentResponse",
    "FileKind",
    "Category",
    "CategoryCreate",
    "CategoryStats",
    "LabelCount",
    "SearchFilters",
    "SortOption",
    "Pagination",
    "DocumentListResponse",
    "SuggestionsResponse",
    "PopularTermsResponse",
    "CategoryListResponse",
    "CategoryStatsResponse",
    "HealthResponse",
    "ErrorResponse",
]
