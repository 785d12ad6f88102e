"""Search endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ...core.search_manager import SearchManager
from ...models.document import DocumentResponse
from ...models.requests import (
    DocumentListResponse,
    Pagination,
    PopularTermsResponse,
    SearchFilters,
    SuggestionsResponse,
)
from ..dependencies import PageParams, get_page_params, get_search_filters

router = APIRouter(prefix="/api/v1/search", tags=["search"])
logger = logging.getLogger(__name__)

# These will be set by main.py
search_manager: SearchManager = None


def set_search_manager(manager: SearchManager):
    """Set the search manager instance (called from main.py)."""
    globals()['search_manager'] = manager


@router.get(
    "",
    response_model=DocumentListResponse,
    summary="Search Documents",
    description="""
Full-text search with optional filters.

**Query Parameters**:
- `q`: free-text query over title, description, content and tags
- `category`, `project`, `team`, `file_type`: equality filters (combined with AND)
- `sort_by`: `relevance` (default), `date`, `views` or `name`; only used without `q`
- `page`, `limit`: pagination

**Ranking**:
- With `q`: relevance, then view count, then newest upload
- Without `q`: `date` newest first, `views` most viewed then newest,
  `name` title ascending, otherwise most viewed then newest

Extracted content is omitted from results.
    """,
    responses={
        200: {"description": "Search completed successfully"},
        422: {"description": "Invalid search parameters"},
        500: {"description": "Internal server error during search"}
    }
)
async def search_documents(
    q: Optional[str] = Query(None, max_length=1000),
    sort_by: str = Query("relevance"),
    pages: PageParams = Depends(get_page_params),
    filters: SearchFilters = Depends(get_search_filters),
):
    """Search documents."""
    result = await search_manager.search(
        query=q,
        filters=filters,
        sort=sort_by,
        page=pages.page,
        limit=pages.limit,
    )

    return DocumentListResponse(
        documents=[DocumentResponse.from_document(doc) for doc in result.results],
        pagination=Pagination(
            page=result.page,
            limit=result.limit,
            total=result.total,
            pages=result.pages,
        ),
        query=q or None,
    )


@router.get(
    "/suggestions",
    response_model=SuggestionsResponse,
    summary="Search Suggestions",
    description="""
Autocomplete for a partial query (at least 2 characters).

Returns up to 8 distinct document titles and tags that contain the query,
matched case-insensitively against titles, tags and keywords.
    """,
)
async def get_suggestions(q: Optional[str] = Query(None, max_length=200)):
    """Suggest titles and tags for a partial query."""
    suggestions = await search_manager.suggest(q)
    return SuggestionsResponse(query=q or "", suggestions=suggestions)


@router.get(
    "/popular",
    response_model=PopularTermsResponse,
    summary="Popular Search Terms",
    description="Up to 10 keywords and tags taken from the most viewed documents.",
)
async def get_popular_terms():
    """Popular terms from the most viewed documents."""
    terms = await search_manager.popular()
    return PopularTermsResponse(terms=terms)
