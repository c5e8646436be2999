from __future__ import annotations

import os
import time
from collections import deque
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

# Oldest events are dropped once the buffer is full
MAX_EVENTS = int(os.getenv("ANALYTICS_MAX_EVENTS", "10000"))

_events: deque[dict[str, Any]] = deque(maxlen=MAX_EVENTS)


def record_event(event_type: str, data: dict[str, Any]) -> None:
    _events.append({
        "type": event_type,
        "timestamp": time.time(),
        **data,
    })


def record_browse(
    category_id: int,
    resolved_categories: int,
    results_returned: int,
    total_elements: int,
    response_time_ms: float,
) -> None:
    record_event("category_browse", {
        "category_id": category_id,
        "resolved_categories": resolved_categories,
        "results_returned": results_returned,
        "total_elements": total_elements,
        "response_time_ms": response_time_ms,
    })


def record_hierarchy_error(category_id: int, exc: Exception) -> None:
    record_event("hierarchy_error", {
        "category_id": category_id,
        "error_type": type(exc).__name__,
    })


def get_events(event_type: str | None = None) -> list[dict[str, Any]]:
    """Snapshot of the buffered events, optionally of one type only."""
    if event_type is None:
        return list(_events)
    return [e for e in _events if e["type"] == event_type]


def clear_events() -> None:
    _events.clear()
