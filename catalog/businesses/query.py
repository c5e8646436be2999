from __future__ import annotations

import logging
import math
import time
from typing import Callable

from ..analytics.store import record_browse, record_hierarchy_error
from ..categories.config import DEFAULT_HIERARCHY_CONFIG
from ..categories.exceptions import CategoryHierarchyError, CategoryNotFoundError
from ..categories.hierarchy import resolve_descendants
from ..categories.store import CategoryStore
from ..ranking.config import RankingConfig, get_current_ranking_config
from ..ranking.engine import rank_businesses, ranking_sort_key
from .models import BusinessPageResponse, RankedBusinessOut
from .store import BusinessStore

logger = logging.getLogger(__name__)


class CategoryBusinessQuery:
    """
    "Browse businesses in category X" including every active subcategory.

    ``max_depth`` is a system setting, never taken from the request, so a deep
    or malicious hierarchy cannot be used to blow up traversal cost.
    """

    def __init__(
        self,
        category_store: CategoryStore,
        business_store: BusinessStore,
        config_provider: Callable[[], RankingConfig] = get_current_ranking_config,
        max_depth: int = DEFAULT_HIERARCHY_CONFIG.max_depth,
    ) -> None:
        self.category_store = category_store
        self.business_store = business_store
        self.config_provider = config_provider
        self.max_depth = max_depth

    def find_active_businesses_in_category_tree(
        self, category_id: int, page: int = 0, page_size: int = 10
    ) -> BusinessPageResponse:
        start_time = time.time()

        if page < 0:
            raise ValueError(f"page must be >= 0, got {page}")
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")

        # --- Existence check (ordinary not-found, before any traversal) ---
        if not self.category_store.is_category_active(category_id):
            raise CategoryNotFoundError(category_id)

        # One snapshot for the whole call
        config = self.config_provider()

        # --- Hierarchy resolution ---
        try:
            category_ids = resolve_descendants(
                self.category_store, category_id, self.max_depth, include_inactive=False,
            )
        except CategoryHierarchyError as exc:
            record_hierarchy_error(category_id, exc)
            raise
        category_ids.add(category_id)

        # --- Storage-level pagination, globally ordered by weighted rating ---
        result_page = self.business_store.find_businesses_by_category_set(
            category_ids,
            active_only=True,
            page=page,
            page_size=page_size,
            sort_key=ranking_sort_key(config),
        )

        # --- Scoring ---
        by_id = {business.id: business for business in result_page.content}
        items: list[RankedBusinessOut] = []
        for scored in rank_businesses(result_page.content, config):
            business = by_id[scored.business_id]
            items.append(RankedBusinessOut(
                id=scored.business_id,
                name=business.name,
                rating=scored.raw_rating,
                review_count=scored.review_count,
                weighted_rating=scored.score,
                category_ids=sorted(business.category_ids),
                confidence_threshold=scored.confidence_threshold,
                global_mean=scored.global_mean,
            ))

        total = result_page.total_elements
        total_pages = math.ceil(total / page_size) if total else 0
        response = BusinessPageResponse(
            content=items,
            total_elements=total,
            total_pages=total_pages,
            page_number=page,
            page_size=page_size,
            first=page == 0,
            last=page >= total_pages - 1,
            empty=not items,
        )

        elapsed_ms = round((time.time() - start_time) * 1000, 1)
        record_browse(
            category_id,
            resolved_categories=len(category_ids),
            results_returned=len(items),
            total_elements=total,
            response_time_ms=elapsed_ms,
        )
        logger.debug(
            "Category %s browse: %d categories, %d/%d businesses in %.1f ms",
            category_id, len(category_ids), len(items), total, elapsed_ms,
        )
        return response
