from __future__ import annotations

import logging
import os
from dataclasses import asdict

from fastapi import Depends, FastAPI, Query

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events
from .businesses.models import BusinessPageResponse
from .businesses.query import CategoryBusinessQuery
from .categories.config import DEFAULT_HIERARCHY_CONFIG
from .categories.hierarchy import depth_from_root, find_subcategory_ids
from .categories.models import CategoryDepthResponse, CategoryOut, SubcategoryIdsResponse
from .categories.store import CategoryStore, InMemoryCategoryStore
from .data_store import get_business_store, get_category_store
from .errors import register_exception_handlers
from .ranking.config import get_current_ranking_config

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(title="Category Business Ranking API", version="1.0.0")
register_exception_handlers(app)


def category_store_dependency() -> CategoryStore:
    return get_category_store()


def category_query_dependency() -> CategoryBusinessQuery:
    return CategoryBusinessQuery(
        get_category_store(),
        get_business_store(),
        config_provider=get_current_ranking_config,
        max_depth=DEFAULT_HIERARCHY_CONFIG.max_depth,
    )


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata(store: InMemoryCategoryStore = Depends(get_category_store)) -> dict:
    roots = [
        CategoryOut(id=r.id, name=r.name, parent_id=r.parent_id, active=r.active)
        for r in sorted(store.root_categories(), key=lambda r: r.id)
    ]
    return {
        "root_categories": [r.model_dump() for r in roots],
        "max_hierarchy_depth": DEFAULT_HIERARCHY_CONFIG.max_depth,
    }


@app.get(
    "/businesses/category/{category_id}",
    response_model=BusinessPageResponse,
)
def businesses_in_category_tree(
    category_id: int,
    page: int = Query(default=0, ge=0),
    size: int = Query(default=10, ge=1, le=100),
    query: CategoryBusinessQuery = Depends(category_query_dependency),
) -> BusinessPageResponse:
    return query.find_active_businesses_in_category_tree(category_id, page, size)


# ── Category hierarchy endpoints ─────────────────────────────────────────


@app.get(
    "/categories/{category_id}/subcategories/ids",
    response_model=SubcategoryIdsResponse,
)
def subcategory_ids(
    category_id: int,
    include_inactive: bool = False,
    store: CategoryStore = Depends(category_store_dependency),
) -> SubcategoryIdsResponse:
    ids = find_subcategory_ids(
        store, category_id, DEFAULT_HIERARCHY_CONFIG.max_depth, include_inactive,
    )
    return SubcategoryIdsResponse(
        category_id=category_id,
        include_inactive=include_inactive,
        subcategory_ids=sorted(ids),
    )


@app.get("/categories/{category_id}/depth", response_model=CategoryDepthResponse)
def category_depth(
    category_id: int,
    store: CategoryStore = Depends(category_store_dependency),
) -> CategoryDepthResponse:
    depth = depth_from_root(store, category_id, DEFAULT_HIERARCHY_CONFIG.max_depth)
    return CategoryDepthResponse(category_id=category_id, depth=depth)


# ── Operational endpoints ────────────────────────────────────────────────


@app.get("/ranking/config")
def ranking_config() -> dict:
    return asdict(get_current_ranking_config())


@app.get("/analytics")
def analytics() -> dict:
    return compute_analytics(get_events())
