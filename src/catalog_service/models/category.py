"""Category data models."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class CategoryCreate(BaseModel):
    """Model for explicitly creating a category."""
    name: str = Field(..., min_length=1, max_length=200)
    display_name: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None
    color: Optional[str] = Field(None, max_length=20)


class Category(BaseModel):
    """Category label with its running document count."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    display_name: str
    description: str = ""
    color: str
    document_count: int
    created_at: datetime
    updated_at: datetime


class LabelCount(BaseModel):
    """Number of documents carrying a label value."""
    value: str
    count: int


class CategoryStats(BaseModel):
    """Document counts per category, project and team."""
    categories: List[LabelCount]
    projects: List[LabelCount]
    teams: List[LabelCount]
