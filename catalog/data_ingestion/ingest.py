from __future__ import annotations

import logging
from pathlib import Path
from typing import List

import pandas as pd

from ..categories.models import CategoryNode

logger = logging.getLogger(__name__)


BUSINESS_COLUMNS: List[str] = [
    "id",
    "name",
    "active",
    "rating",
    "review_count",
    "category_ids",
]

_TRUE_VALUES = {"true", "1", "yes", "y", "t"}


def _parse_bool(value: object, default: bool = True) -> bool:
    raw = str(value).strip().lower() if value is not None else ""
    if not raw:
        return default
    return raw in _TRUE_VALUES


def _parse_optional_id(value: object) -> int | None:
    raw = str(value).strip() if value is not None else ""
    if not raw:
        return None
    try:
        return int(float(raw))
    except (ValueError, OverflowError):
        return None


def _normalize_rating(rating: object) -> float:
    if rating is None:
        return 0.0
    raw = str(rating).strip()
    # Handle "X/5" format (e.g. "4.1/5")
    if "/" in raw:
        raw = raw.split("/")[0].strip()
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0.0
    if value != value:  # NaN
        return 0.0

    # Clamp to [0, 5]
    return max(0.0, min(5.0, value))


def _normalize_review_count(count: object) -> int:
    try:
        value = int(float(str(count).strip()))
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(0, value)


def _parse_category_ids(value: object) -> list[int]:
    ids: list[int] = []
    for part in str(value or "").replace(",", ";").split(";"):
        parsed = _parse_optional_id(part)
        if parsed is not None:
            ids.append(parsed)
    return sorted(set(ids))


def load_categories(path: Path) -> list[CategoryNode]:
    """Read ``id,name,parent_id,active`` rows. Empty ``parent_id`` marks a root."""
    df = pd.read_csv(path, dtype=str, keep_default_na=False)

    nodes: list[CategoryNode] = []
    for _, row in df.iterrows():
        category_id = _parse_optional_id(row.get("id"))
        if category_id is None:
            logger.warning("Skipping category row without a valid id: %s", row.to_dict())
            continue
        nodes.append(CategoryNode(
            id=category_id,
            parent_id=_parse_optional_id(row.get("parent_id")),
            active=_parse_bool(row.get("active")),
            name=str(row.get("name", "")).strip(),
        ))
    return nodes


def load_businesses(path: Path) -> pd.DataFrame:
    """Read the business snapshot into the canonical columns.

    Ratings accept the ``"4.1/5"`` form and are clamped to [0, 5]; unrated
    rows get 0.0. ``category_ids`` holds ``;``-separated ids.
    """
    raw = pd.read_csv(path, dtype=str, keep_default_na=False)

    canonical = pd.DataFrame()
    canonical["id"] = raw["id"].apply(_parse_optional_id)
    canonical["name"] = raw["name"].str.strip() if "name" in raw.columns else ""
    canonical["active"] = (
        raw["active"].apply(_parse_bool) if "active" in raw.columns else True
    )
    canonical["rating"] = (
        raw["rating"].apply(_normalize_rating) if "rating" in raw.columns else 0.0
    )
    canonical["review_count"] = (
        raw["review_count"].apply(_normalize_review_count)
        if "review_count" in raw.columns else 0
    )
    canonical["category_ids"] = (
        raw["category_ids"].apply(_parse_category_ids)
        if "category_ids" in raw.columns
        else pd.Series([[] for _ in range(len(raw))], index=raw.index, dtype=object)
    )

    invalid = canonical["id"].isna()
    if invalid.any():
        logger.warning("Dropping %d business rows without a valid id", int(invalid.sum()))
        canonical = canonical.loc[~invalid].copy()
    canonical["id"] = canonical["id"].astype(int)

    return canonical[BUSINESS_COLUMNS].reset_index(drop=True)
