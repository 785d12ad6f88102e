"""Request and response models for API endpoints."""

from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from .category import Category, CategoryStats
from .document import DocumentResponse, FileKind


class SortOption(str, Enum):
    """Listing order used when no search query is given."""
    RELEVANCE = "relevance"
    DATE = "date"
    VIEWS = "views"
    NAME = "name"


class SearchFilters(BaseModel):
    """Equality constraints combined with AND."""
    category: Optional[str] = None
    project: Optional[str] = None
    team: Optional[str] = None
    file_type: Optional[FileKind] = None

    def to_store_filter(self) -> Dict[str, Any]:
        """Only the constraints that are set, with enum values unwrapped."""
        return {
            key: getattr(value, "value", value)
            for key, value in self.model_dump().items()
            if value
        }


class Pagination(BaseModel):
    """Pagination block of a listing response."""
    page: int
    limit: int
    total: int
    pages: int


class DocumentListResponse(BaseModel):
    """Response model for listing and searching documents."""
    documents: List[DocumentResponse]
    pagination: Pagination
    query: Optional[str] = None


class SuggestionsResponse(BaseModel):
    """Autocomplete suggestions for a partial query."""
    query: str
    suggestions: List[str]


class PopularTermsResponse(BaseModel):
    """Terms mined from the most viewed documents."""
    terms: List[str]


class CategoryListResponse(BaseModel):
    """Response model for listing categories."""
    categories: List[Category]


class CategoryStatsResponse(CategoryStats):
    """Response model for label statistics."""


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    service: str
    version: str
    database_connected: bool


class ErrorResponse(BaseModel):
    """Error body returned for service errors."""
    success: bool = False
    message: str
    code: str
    details: Dict[str, Any] = Field(default_factory=dict)
