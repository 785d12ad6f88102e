"""Category management and label statistics."""

import logging
from typing import List

from ..infrastructure.database.client import DatabaseClient
from ..infrastructure.database.models import CategoryModel
from ..models.category import Category, CategoryCreate, CategoryStats, LabelCount
from .exceptions import ValidationError

logger = logging.getLogger(__name__)


class CategoryManager:
    """Business logic for category records and label aggregations."""

    def __init__(self, db_client: DatabaseClient, default_color: str = "#3B82F6"):
        self.db = db_client
        self.default_color = default_color

    async def list_categories(self) -> List[Category]:
        """All categories, most documents first."""
        categories = await self.db.list_categories()
        return [Category.model_validate(c) for c in categories]

    async def create_category(self, data: CategoryCreate) -> Category:
        """Explicitly create a category.

        Raises:
            ValidationError: If the name is blank
            DuplicateKeyError: If a category with the same name exists
        """
        name = data.name.strip()
        if not name:
            raise ValidationError("Category name is required")

        created = await self.db.insert_category(CategoryModel(
            name=name.lower(),
            display_name=data.display_name or name,
            description=data.description or "",
            color=data.color or self.default_color,
            document_count=0,
        ))
        logger.info(f"Created category '{created.name}'")
        return Category.model_validate(created)

    async def get_stats(self) -> CategoryStats:
        """Document counts per category, project and team, largest first."""
        stats = {}
        for field in ("category", "project", "team"):
            counts = await self.db.aggregate_counts(field)
            stats[field] = [LabelCount(value=value, count=count) for value, count in counts]

        return CategoryStats(
            categories=stats["category"],
            projects=stats["project"],
            teams=stats["team"],
        )
