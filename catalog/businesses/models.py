from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel


@dataclass(frozen=True)
class BusinessRankingInput:
    id: int
    rating: float = 0.0
    review_count: int = 0
    category_ids: frozenset[int] = field(default_factory=frozenset)
    name: str = ""
    active: bool = True


@dataclass(frozen=True)
class BusinessPage:
    """One page as returned by the business store."""

    content: list[BusinessRankingInput]
    total_elements: int
    page: int
    page_size: int


class RankedBusinessOut(BaseModel):
    id: int
    name: str
    rating: float
    review_count: int
    weighted_rating: float
    category_ids: list[int]
    # Prior the score was computed with
    confidence_threshold: int
    global_mean: float


class BusinessPageResponse(BaseModel):
    content: list[RankedBusinessOut]
    total_elements: int
    total_pages: int
    page_number: int
    page_size: int
    first: bool
    last: bool
    empty: bool
