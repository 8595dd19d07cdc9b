"""
Pydantic models for the static category list.

``count`` is filled in by the category grid from a scan of the
business collection; elsewhere it stays at zero.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class CategoryRead(BaseModel):
    id: int = Field(..., examples=[2])
    name: str = Field(..., examples=["Retail & Shopping"])
    description: str = ""
    image: str = ""
    color: str = ""
    count: int = 0


class CategoryGrid(BaseModel):
    categories: List[CategoryRead] = Field(default_factory=list)
    error: Optional[str] = None
