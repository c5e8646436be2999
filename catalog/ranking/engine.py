from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Iterable

from ..businesses.models import BusinessRankingInput
from .config import RankingConfig


@dataclass(frozen=True)
class WeightedRatingResult:
    business_id: int
    score: float
    raw_rating: float
    review_count: int
    confidence_threshold: int
    global_mean: float


def weighted_rating(
    raw_rating: float | None,
    review_count: int,
    config: RankingConfig,
) -> float:
    """
    Blend a business's own rating with the catalog-wide prior.

        score = n / (n + C) * raw + C / (n + C) * m

    With no reviews the score is exactly ``config.global_mean``. Never raises:
    a missing rating counts as 0.0 and negative review counts as 0. Raw
    ratings are used as given, without clamping.
    """
    n = max(int(review_count or 0), 0)
    if n == 0:
        return config.global_mean

    raw = 0.0 if raw_rating is None or math.isnan(raw_rating) else float(raw_rating)
    c = config.confidence_threshold
    total = n + c
    return (n / total) * raw + (c / total) * config.global_mean


def score_business(
    business: BusinessRankingInput, config: RankingConfig
) -> WeightedRatingResult:
    return WeightedRatingResult(
        business_id=business.id,
        score=weighted_rating(business.rating, business.review_count, config),
        raw_rating=business.rating,
        review_count=business.review_count,
        confidence_threshold=config.confidence_threshold,
        global_mean=config.global_mean,
    )


def ranking_sort_key(
    config: RankingConfig,
) -> Callable[[BusinessRankingInput], tuple[float, int]]:
    """Key ordering businesses by weighted rating desc, then id asc."""

    def _key(business: BusinessRankingInput) -> tuple[float, int]:
        return (-weighted_rating(business.rating, business.review_count, config), business.id)

    return _key


def rank_businesses(
    businesses: Iterable[BusinessRankingInput],
    config: RankingConfig,
) -> list[WeightedRatingResult]:
    results = [score_business(b, config) for b in businesses]
    results.sort(key=lambda r: (-r.score, r.business_id))
    return results
