from __future__ import annotations

import logging

from .businesses.store import InMemoryBusinessStore
from .categories.store import InMemoryCategoryStore
from .data_ingestion.config import DEFAULT_INGESTION_CONFIG, IngestionConfig
from .data_ingestion.ingest import load_businesses, load_categories

logger = logging.getLogger(__name__)

_category_store: InMemoryCategoryStore | None = None
_business_store: InMemoryBusinessStore | None = None


def load_stores(
    config: IngestionConfig = DEFAULT_INGESTION_CONFIG,
) -> tuple[InMemoryCategoryStore, InMemoryBusinessStore]:
    """(Re)load both snapshots from disk and make them the process-wide stores."""
    global _category_store, _business_store
    _category_store = InMemoryCategoryStore(load_categories(config.categories_path))
    _business_store = InMemoryBusinessStore(load_businesses(config.businesses_path))
    logger.info(
        "Loaded %d categories and %d businesses from %s",
        len(_category_store), len(_business_store), config.data_dir,
    )
    return _category_store, _business_store


def get_category_store() -> InMemoryCategoryStore:
    """Return the in-memory category store, loading it on first call."""
    if _category_store is None:
        load_stores()
    return _category_store


def get_business_store() -> InMemoryBusinessStore:
    """Return the in-memory business store, loading it on first call."""
    if _business_store is None:
        load_stores()
    return _business_store
