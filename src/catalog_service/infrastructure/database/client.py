"""Database client for documents and categories."""

import functools
import json
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple
from uuid import uuid4

from sqlalchemy import Text, cast, delete, func, insert, literal_column, or_, select, text, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import defer
from sqlalchemy.pool import StaticPool

from ...core.exceptions import DuplicateKeyError, ServiceError, StoreError
from .models import (
    DOCUMENTS_FTS,
    DOCUMENTS_FTS_DDL,
    Base,
    CategoryModel,
    DocumentModel,
    documents_fts,
    utcnow,
)
from .text_index import INDEXED_FIELDS, index_row, match_expression, query_terms, text_score

logger = logging.getLogger(__name__)

FILTER_FIELDS = ("category", "project", "team", "file_type")
COUNTER_FIELDS = ("view_count",)
AGGREGATE_FIELDS = ("category", "project", "team")

# [(column name, "asc" | "desc"), ...]
SortSpec = Sequence[Tuple[str, str]]

# suggestion candidates fetched per requested match
SUGGESTION_SCAN_FACTOR = 5


def store_operation(func_):
    """Wrap SQLAlchemy failures of a store call in StoreError."""

    @functools.wraps(func_)
    async def wrapper(*args, **kwargs):
        try:
            return await func_(*args, **kwargs)
        except ServiceError:
            raise
        except SQLAlchemyError as e:
            logger.error(f"Store operation {func_.__name__} failed: {e}")
            raise StoreError(
                f"Store operation {func_.__name__} failed",
                details={"error": str(e)},
            ) from e

    return wrapper


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class DatabaseClient:
    """Async database client for document and category records."""

    def __init__(self, database_url: str):
        """Initialize database client.

        Args:
            database_url: SQLAlchemy database URL (e.g., sqlite+aiosqlite:///./catalog.db)
        """
        engine_kwargs: Dict[str, Any] = {
            "echo": False,
            "json_serializer": lambda obj: json.dumps(obj, ensure_ascii=False),
        }
        if database_url.startswith("sqlite") and ":memory:" in database_url:
            engine_kwargs["poolclass"] = StaticPool
            engine_kwargs["connect_args"] = {"check_same_thread": False}

        self.engine = create_async_engine(database_url, **engine_kwargs)
        self.async_session = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )
        # FTS5 narrowing is SQLite-only; other dialects score every filtered row
        self.full_text = self.engine.dialect.name == "sqlite"

    @store_operation
    async def verify_connection(self) -> bool:
        """Verify the database answers a trivial query."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    async def initialize(self):
        """Create database tables."""
        await self.verify_connection()

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            if self.full_text:
                await conn.execute(text(DOCUMENTS_FTS_DDL))

        if self.full_text and await self._text_index_stale():
            await self.rebuild_text_index()
        logger.info("Database initialized successfully")

    async def close(self):
        """Close database connections."""
        await self.engine.dispose()

    @staticmethod
    def _apply_filters(query, filters: Optional[Dict[str, Any]]):
        for field, value in (filters or {}).items():
            if field not in FILTER_FIELDS:
                raise ValueError(f"Unsupported filter field: {field}")
            if value is not None:
                query = query.where(getattr(DocumentModel, field) == value)
        return query

    @staticmethod
    def _apply_sort(query, sort: Optional[SortSpec]):
        for field, direction in sort or ():
            column = getattr(DocumentModel, field)
            query = query.order_by(column.desc() if direction == "desc" else column.asc())
        # stable pagination across equal sort keys
        return query.order_by(DocumentModel.document_id.asc())

    # ------------------------------------------------------------------
    # Full-text index
    # ------------------------------------------------------------------

    async def _index_document(self, session: AsyncSession, document: DocumentModel):
        """Replace a document's full-text row within the caller's transaction."""
        if not self.full_text:
            return
        await session.execute(
            delete(documents_fts).where(documents_fts.c.document_id == document.document_id)
        )
        await session.execute(
            insert(documents_fts).values(
                document_id=document.document_id,
                **index_row({field: getattr(document, field) for field in INDEXED_FIELDS}),
            )
        )

    async def _text_index_stale(self) -> bool:
        async with self.async_session() as session:
            documents = await session.scalar(select(func.count()).select_from(DocumentModel))
            indexed = await session.scalar(select(func.count()).select_from(documents_fts))
        return documents != indexed

    @store_operation
    async def rebuild_text_index(self) -> int:
        """Re-derive every full-text row from the documents table."""
        if not self.full_text:
            return 0

        async with self.async_session() as session:
            await session.execute(delete(documents_fts))
            result = await session.execute(select(DocumentModel))
            documents = result.scalars().all()
            for document in documents:
                await self._index_document(session, document)
            await session.commit()

        logger.info(f"Rebuilt full-text index for {len(documents)} documents")
        return len(documents)

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    @store_operation
    async def insert_document(self, document: DocumentModel) -> str:
        """Insert a document and its full-text row, assigning its id. Returns the id."""
        if not document.document_id:
            document.document_id = str(uuid4())
        async with self.async_session() as session:
            session.add(document)
            await self._index_document(session, document)
            await session.commit()
            await session.refresh(document)
            return document.document_id

    @store_operation
    async def get_document(self, document_id: str) -> Optional[DocumentModel]:
        """Get document by ID."""
        async with self.async_session() as session:
            result = await session.execute(
                select(DocumentModel).where(DocumentModel.document_id == document_id)
            )
            return result.scalar_one_or_none()

    @store_operation
    async def find_documents(
        self,
        filters: Optional[Dict[str, Any]] = None,
        sort: Optional[SortSpec] = None,
        skip: int = 0,
        limit: Optional[int] = None,
        exclude_content: bool = False,
    ) -> List[DocumentModel]:
        """Find documents matching equality filters, sorted and paginated."""
        async with self.async_session() as session:
            query = self._apply_sort(self._apply_filters(select(DocumentModel), filters), sort)
            if exclude_content:
                query = query.options(defer(DocumentModel.content))
            if skip:
                query = query.offset(skip)
            if limit is not None:
                query = query.limit(limit)
            result = await session.execute(query)
            return list(result.scalars().all())

    @store_operation
    async def count_documents(self, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count documents matching equality filters."""
        async with self.async_session() as session:
            query = self._apply_filters(
                select(func.count()).select_from(DocumentModel), filters
            )
            result = await session.execute(query)
            return result.scalar_one()

    @store_operation
    async def update_document(self, document_id: str, **updates) -> Optional[DocumentModel]:
        """Update document fields. Returns None when the document is missing."""
        async with self.async_session() as session:
            result = await session.execute(
                select(DocumentModel).where(DocumentModel.document_id == document_id)
            )
            document = result.scalar_one_or_none()

            if not document:
                return None

            for key, value in updates.items():
                if hasattr(document, key) and value is not None:
                    setattr(document, key, value)
            if set(updates) & set(INDEXED_FIELDS):
                await self._index_document(session, document)

            await session.commit()
            await session.refresh(document)
            return document

    @store_operation
    async def delete_document(self, document_id: str) -> bool:
        """Delete a document and its full-text row. Returns False if it was already gone."""
        async with self.async_session() as session:
            result = await session.execute(
                delete(DocumentModel).where(DocumentModel.document_id == document_id)
            )
            if self.full_text:
                await session.execute(
                    delete(documents_fts).where(documents_fts.c.document_id == document_id)
                )
            await session.commit()
            return result.rowcount > 0

    @store_operation
    async def increment_field(self, document_id: str, field: str, delta: int = 1) -> bool:
        """Atomically add delta to a counter column in a single UPDATE."""
        if field not in COUNTER_FIELDS:
            raise ValueError(f"Unsupported counter field: {field}")

        column = getattr(DocumentModel, field)
        async with self.async_session() as session:
            result = await session.execute(
                update(DocumentModel)
                .where(DocumentModel.document_id == document_id)
                .values({column: column + delta})
            )
            await session.commit()
            return result.rowcount > 0

    @store_operation
    async def text_search(
        self, filters: Optional[Dict[str, Any]], query: str
    ) -> List[Tuple[DocumentModel, float]]:
        """Score filtered documents against a free-text query.

        Returns only documents with a positive relevance score, unordered.
        On SQLite only rows whose full-text entry holds a query term are loaded.
        """
        terms = query_terms(query)
        if not terms:
            return []

        query_ = self._apply_filters(select(DocumentModel), filters)
        if self.full_text:
            matching = select(documents_fts.c.document_id).where(
                literal_column(DOCUMENTS_FTS).op("MATCH")(match_expression(terms))
            )
            query_ = query_.where(DocumentModel.document_id.in_(matching))

        async with self.async_session() as session:
            result = await session.execute(query_)
            documents = result.scalars().all()

        scored = []
        for doc in documents:
            score = text_score(terms, {
                "title": doc.title,
                "description": doc.description,
                "content": doc.content,
                "tags": doc.tags or [],
            })
            if score > 0:
                scored.append((doc, score))
        return scored

    @store_operation
    async def find_documents_containing(self, term: str, limit: int) -> List[DocumentModel]:
        """Documents whose title, a tag or a keyword contains term (case-insensitive).

        Candidates are narrowed in SQL and confirmed per element, in upload order.
        Tags and keywords are matched against their JSON text, so the term is
        JSON-escaped on that side. SQLite's lower() folds ASCII only; non-ASCII
        case variants are still found when the stored text uses the same case.
        At most ``limit * SUGGESTION_SCAN_FACTOR`` candidates are examined.
        """
        pattern = f"%{_escape_like(term)}%"
        json_pattern = f"%{_escape_like(json.dumps(term, ensure_ascii=False)[1:-1])}%"
        needle = term.lower()

        async with self.async_session() as session:
            result = await session.execute(
                select(DocumentModel)
                .options(defer(DocumentModel.content))
                .where(or_(
                    DocumentModel.title.ilike(pattern, escape="\\"),
                    cast(DocumentModel.tags, Text).ilike(json_pattern, escape="\\"),
                    cast(DocumentModel.keywords, Text).ilike(json_pattern, escape="\\"),
                ))
                .order_by(DocumentModel.upload_date.asc(), DocumentModel.document_id.asc())
                .limit(limit * SUGGESTION_SCAN_FACTOR)
            )
            candidates = result.scalars().all()

        matches = []
        for doc in candidates:
            values = [doc.title, *(doc.tags or []), *(doc.keywords or [])]
            if any(needle in value.lower() for value in values):
                matches.append(doc)
                if len(matches) >= limit:
                    break
        return matches

    @store_operation
    async def aggregate_counts(self, field: str) -> List[Tuple[str, int]]:
        """Distinct values of a label field with their document counts, count desc."""
        if field not in AGGREGATE_FIELDS:
            raise ValueError(f"Unsupported aggregate field: {field}")

        column = getattr(DocumentModel, field)
        count = func.count().label("count")
        async with self.async_session() as session:
            result = await session.execute(
                select(column, count).group_by(column).order_by(count.desc(), column.asc())
            )
            return [(value, total) for value, total in result.all()]

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def _insert(self):
        if self.engine.dialect.name == "postgresql":
            return postgresql.insert
        return sqlite.insert

    @store_operation
    async def upsert_increment_category(
        self,
        name: str,
        delta: int,
        display_name: str,
        color: str,
        description: str = "",
    ) -> CategoryModel:
        """Increment a category's count, creating it with defaults if absent.

        Runs as one INSERT ... ON CONFLICT DO UPDATE so concurrent callers
        never lose an increment.
        """
        normalized = name.lower()
        now = utcnow()
        stmt = self._insert()(CategoryModel).values(
            category_id=str(uuid4()),
            name=normalized,
            display_name=display_name,
            description=description,
            color=color,
            document_count=delta,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[CategoryModel.name],
            set_={
                "document_count": CategoryModel.document_count + delta,
                "updated_at": now,
            },
        )

        async with self.async_session() as session:
            await session.execute(stmt)
            await session.commit()
            result = await session.execute(
                select(CategoryModel).where(CategoryModel.name == normalized)
            )
            return result.scalar_one()

    @store_operation
    async def increment_category_count(self, name: str, delta: int) -> bool:
        """Add delta to an existing category's count. No-op if it does not exist."""
        async with self.async_session() as session:
            result = await session.execute(
                update(CategoryModel)
                .where(CategoryModel.name == name.lower())
                .values(
                    document_count=CategoryModel.document_count + delta,
                    updated_at=utcnow(),
                )
            )
            await session.commit()
            return result.rowcount > 0

    @store_operation
    async def insert_category(self, category: CategoryModel) -> CategoryModel:
        """Create a category. Raises DuplicateKeyError if the name exists."""
        if not category.category_id:
            category.category_id = str(uuid4())
        category.name = category.name.lower()

        async with self.async_session() as session:
            session.add(category)
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                raise DuplicateKeyError(
                    f"Category '{category.name}' already exists",
                    details={"name": category.name},
                ) from e
            await session.refresh(category)
            return category

    @store_operation
    async def get_category(self, name: str) -> Optional[CategoryModel]:
        """Get category by (case-insensitive) name."""
        async with self.async_session() as session:
            result = await session.execute(
                select(CategoryModel).where(CategoryModel.name == name.lower())
            )
            return result.scalar_one_or_none()

    @store_operation
    async def list_categories(self) -> List[CategoryModel]:
        """All categories, most documents first."""
        async with self.async_session() as session:
            result = await session.execute(
                select(CategoryModel).order_by(
                    CategoryModel.document_count.desc(), CategoryModel.name.asc()
                )
            )
            return list(result.scalars().all())
