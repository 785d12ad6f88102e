"""Search, suggestion and popular-term business logic."""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Union

from ..infrastructure.database.client import DatabaseClient, SortSpec
from ..models.document import DocumentSummary
from ..models.requests import SearchFilters, SortOption

logger = logging.getLogger(__name__)

MOST_VIEWED: SortSpec = (("view_count", "desc"), ("upload_date", "desc"))

SORT_ORDERS = {
    SortOption.DATE: (("upload_date", "desc"),),
    SortOption.VIEWS: MOST_VIEWED,
    SortOption.NAME: (("title", "asc"),),
}


@dataclass
class SearchPage:
    """One page of search results with pagination totals."""

    results: List[DocumentSummary]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


def sort_spec(sort: Optional[Union[SortOption, str]]) -> SortSpec:
    """Store sort order for a listing option; unknown options mean most viewed."""
    try:
        option = SortOption(sort) if sort is not None else SortOption.RELEVANCE
    except ValueError:
        option = SortOption.RELEVANCE
    return SORT_ORDERS.get(option, MOST_VIEWED)


class SearchManager:
    """Business logic for relevance search, filtered listing and suggestions."""

    def __init__(
        self,
        db_client: DatabaseClient,
        suggestion_min_length: int = 2,
        suggestion_candidates: int = 10,
        suggestion_limit: int = 8,
        popular_documents: int = 10,
        popular_limit: int = 10,
    ):
        """Initialize search manager.

        Args:
            db_client: Database client for document records
            suggestion_min_length: Shortest partial query that is looked up
            suggestion_candidates: Documents mined per suggestion lookup
            suggestion_limit: Maximum suggestions returned
            popular_documents: Most viewed documents mined for popular terms
            popular_limit: Maximum popular terms returned
        """
        self.db = db_client
        self.suggestion_min_length = suggestion_min_length
        self.suggestion_candidates = suggestion_candidates
        self.suggestion_limit = suggestion_limit
        self.popular_documents = popular_documents
        self.popular_limit = popular_limit

    async def search(
        self,
        query: Optional[str] = None,
        filters: Optional[SearchFilters] = None,
        sort: Optional[Union[SortOption, str]] = None,
        page: int = 1,
        limit: int = 20,
    ) -> SearchPage:
        """Search or list documents.

        With a non-blank query, documents are ranked by text relevance, then
        view count, then upload date (newest first) and ``sort`` is ignored.
        Without one, ``sort`` picks the order.

        Args:
            query: Free-text query
            filters: Equality constraints on category/project/team/file type
            sort: Listing order when no query is given
            page: 1-based page number
            limit: Page size

        Returns:
            SearchPage with content-less documents and the total match count
        """
        page = max(page, 1)
        limit = max(limit, 1)
        skip = (page - 1) * limit
        store_filter = (filters or SearchFilters()).to_store_filter()

        if query and query.strip():
            scored = await self.db.text_search(store_filter, query)
            scored.sort(
                key=lambda item: (item[1], item[0].view_count, item[0].upload_date),
                reverse=True,
            )
            total = len(scored)
            results = [
                DocumentSummary.model_validate(doc)
                for doc, _ in scored[skip:skip + limit]
            ]
            logger.info(f"Search for '{query}' matched {total} documents")
        else:
            documents = await self.db.find_documents(
                filters=store_filter,
                sort=sort_spec(sort),
                skip=skip,
                limit=limit,
                exclude_content=True,
            )
            total = await self.db.count_documents(store_filter)
            results = [DocumentSummary.model_validate(doc) for doc in documents]

        return SearchPage(results=results, total=total, page=page, limit=limit)

    async def suggest(self, partial_query: Optional[str]) -> List[str]:
        """Autocomplete titles and tags containing a partial query.

        Args:
            partial_query: Text typed so far

        Returns:
            Up to ``suggestion_limit`` distinct titles and tags, first seen first
        """
        term = (partial_query or "").strip()
        if len(term) < self.suggestion_min_length:
            return []

        documents = await self.db.find_documents_containing(term, self.suggestion_candidates)

        needle = term.lower()
        suggestions = {}
        for doc in documents:
            if needle in doc.title.lower():
                suggestions.setdefault(doc.title)
            for tag in doc.tags or []:
                if needle in tag.lower():
                    suggestions.setdefault(tag)

        return list(suggestions)[:self.suggestion_limit]

    async def popular(self) -> List[str]:
        """Leading keywords and tags of the most viewed documents."""
        documents = await self.db.find_documents(
            sort=MOST_VIEWED,
            limit=self.popular_documents,
            exclude_content=True,
        )

        terms = {}
        for doc in documents:
            for keyword in (doc.keywords or [])[:3]:
                terms.setdefault(keyword)
            for tag in (doc.tags or [])[:2]:
                terms.setdefault(tag)

        return list(terms)[:self.popular_limit]
