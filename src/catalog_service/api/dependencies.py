"""Shared API dependencies."""

from typing import Optional

from fastapi import Depends, Query

from ..config.settings import Settings, get_settings
from ..models.document import FileKind
from ..models.requests import SearchFilters


class PageParams:
    """Validated page/limit query parameters."""

    def __init__(self, page: int, limit: int):
        self.page = page
        self.limit = limit


def get_page_params(
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: Optional[int] = Query(None, ge=1, description="Page size"),
    settings: Settings = Depends(get_settings),
) -> PageParams:
    """Extract pagination, defaulting and capping the page size from settings."""
    size = min(limit or settings.default_page_size, settings.max_page_size)
    return PageParams(page=page, limit=size)


def get_search_filters(
    category: Optional[str] = Query(None),
    project: Optional[str] = Query(None),
    team: Optional[str] = Query(None),
    file_type: Optional[FileKind] = Query(None),
) -> SearchFilters:
    """Extract category/project/team/file type equality filters."""
    return SearchFilters(category=category, project=project, team=team, file_type=file_type)
