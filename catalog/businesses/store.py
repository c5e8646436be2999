from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Protocol

import pandas as pd

from .models import BusinessPage, BusinessRankingInput

logger = logging.getLogger(__name__)

SortKey = Callable[[BusinessRankingInput], Any]


class BusinessStore(Protocol):
    def find_businesses_by_category_set(
        self,
        category_ids: Iterable[int],
        active_only: bool,
        page: int,
        page_size: int,
        sort_key: SortKey | None = None,
    ) -> BusinessPage: ...


def _row_to_input(row: pd.Series) -> BusinessRankingInput:
    rating = row.get("rating")
    return BusinessRankingInput(
        id=int(row["id"]),
        name=str(row.get("name", "") or ""),
        active=bool(row.get("active", True)),
        rating=float(rating) if pd.notna(rating) else 0.0,
        review_count=int(row.get("review_count", 0) or 0),
        category_ids=frozenset(int(c) for c in row.get("category_ids", []) or []),
    )


class InMemoryBusinessStore:
    """
    Business snapshot backed by a DataFrame with the canonical columns
    ``id, name, active, rating, review_count, category_ids``
    (``category_ids`` holds a list of ints per row).
    """

    def __init__(self, df: pd.DataFrame) -> None:
        self._df = df.reset_index(drop=True)

    @classmethod
    def from_inputs(cls, businesses: Iterable[BusinessRankingInput]) -> InMemoryBusinessStore:
        records = [
            {
                "id": b.id,
                "name": b.name,
                "active": b.active,
                "rating": b.rating,
                "review_count": b.review_count,
                "category_ids": sorted(b.category_ids),
            }
            for b in businesses
        ]
        columns = ["id", "name", "active", "rating", "review_count", "category_ids"]
        return cls(pd.DataFrame(records, columns=columns))

    def __len__(self) -> int:
        return len(self._df)

    def find_businesses_by_category_set(
        self,
        category_ids: Iterable[int],
        active_only: bool,
        page: int,
        page_size: int,
        sort_key: SortKey | None = None,
    ) -> BusinessPage:
        """
        Return one page of businesses belonging to any of ``category_ids``.

        Without ``sort_key`` rows are ordered by id so pagination stays stable.
        """
        if page < 0:
            raise ValueError(f"page must be >= 0, got {page}")
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")

        wanted = set(category_ids)
        df = self._df

        mask = df["category_ids"].apply(lambda ids: bool(wanted & set(ids or []))).astype(bool)
        if active_only:
            mask = mask & df["active"].astype(bool)

        matches = [_row_to_input(row) for _, row in df.loc[mask].iterrows()]
        matches.sort(key=sort_key or (lambda b: b.id))

        start = page * page_size
        content = matches[start:start + page_size]

        logger.debug(
            "Business lookup: %d categories, %d matches, page %d returned %d",
            len(wanted), len(matches), page, len(content),
        )
        return BusinessPage(
            content=content,
            total_elements=len(matches),
            page=page,
            page_size=page_size,
        )
