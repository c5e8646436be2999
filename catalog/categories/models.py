from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class CategoryNode:
    """A single stored category. ``parent_id`` of ``None`` marks a root."""

    id: int
    parent_id: int | None = None
    active: bool = True
    name: str = ""

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


class CategoryOut(BaseModel):
    id: int
    name: str
    parent_id: int | None = None
    active: bool


class SubcategoryIdsResponse(BaseModel):
    category_id: int
    include_inactive: bool
    subcategory_ids: list[int] = Field(default_factory=list)


class CategoryDepthResponse(BaseModel):
    category_id: int
    depth: int
