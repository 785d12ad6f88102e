"""Category endpoints."""

import logging

from fastapi import APIRouter

from ...core.category_manager import CategoryManager
from ...models.category import Category, CategoryCreate
from ...models.requests import CategoryListResponse, CategoryStatsResponse

router = APIRouter(prefix="/api/v1/categories", tags=["categories"])
logger = logging.getLogger(__name__)

# Set by main.py
category_manager: CategoryManager = None


def set_category_manager(manager: CategoryManager):
    """Set the category manager instance (called from main.py)."""
    globals()['category_manager'] = manager


@router.get(
    "",
    response_model=CategoryListResponse,
    summary="List Categories",
    description="All categories with their running document counts, largest first.",
)
async def list_categories():
    """List categories."""
    categories = await category_manager.list_categories()
    return CategoryListResponse(categories=categories)


@router.get(
    "/stats",
    response_model=CategoryStatsResponse,
    summary="Label Statistics",
    description="""
Document counts per distinct category, project and team, each sorted by count
descending. Used to populate filter options.
    """,
)
async def get_category_stats():
    """Get category, project and team statistics."""
    stats = await category_manager.get_stats()
    return CategoryStatsResponse(**stats.model_dump())


@router.post(
    "",
    response_model=Category,
    status_code=201,
    summary="Create Category",
    responses={
        201: {"description": "Category created successfully"},
        409: {"description": "Category already exists"},
        422: {"description": "Invalid category data"},
    }
)
async def create_category(data: CategoryCreate):
    """Create a category."""
    return await category_manager.create_category(data)
