from __future__ import annotations

import logging
from collections import defaultdict
from typing import Iterable, Protocol

from .models import CategoryNode

logger = logging.getLogger(__name__)


class CategoryStore(Protocol):
    """Read-only category capabilities consumed by the hierarchy resolver."""

    def get_direct_children(
        self, category_id: int, include_inactive: bool
    ) -> list[CategoryNode]: ...

    def get_category(self, category_id: int) -> CategoryNode | None: ...

    def category_exists(self, category_id: int) -> bool: ...

    def is_category_active(self, category_id: int) -> bool: ...


class InMemoryCategoryStore:
    """Category snapshot indexed by id and by parent id.

    Relationships are resolved through the ``parent_id -> child ids`` index,
    so malformed parent pointers (cycles, unknown parents) are representable
    without building any object graph.
    """

    def __init__(self, nodes: Iterable[CategoryNode]) -> None:
        self._by_id: dict[int, CategoryNode] = {}
        self._children: dict[int, list[int]] = defaultdict(list)
        for node in nodes:
            if node.id in self._by_id:
                logger.warning("Duplicate category id %s, keeping the last record", node.id)
                self._children[self._by_id[node.id].parent_id].remove(node.id)
            self._by_id[node.id] = node
            self._children[node.parent_id].append(node.id)

        dangling = {
            n.parent_id for n in self._by_id.values()
            if n.parent_id is not None and n.parent_id not in self._by_id
        }
        if dangling:
            logger.warning("Categories reference unknown parents: %s", sorted(dangling))

    def __len__(self) -> int:
        return len(self._by_id)

    def get_direct_children(
        self, category_id: int, include_inactive: bool
    ) -> list[CategoryNode]:
        children = [self._by_id[cid] for cid in self._children.get(category_id, [])]
        if include_inactive:
            return children
        return [c for c in children if c.active]

    def get_category(self, category_id: int) -> CategoryNode | None:
        return self._by_id.get(category_id)

    def category_exists(self, category_id: int) -> bool:
        return category_id in self._by_id

    def is_category_active(self, category_id: int) -> bool:
        node = self._by_id.get(category_id)
        return bool(node and node.active)

    def root_categories(self, include_inactive: bool = False) -> list[CategoryNode]:
        roots = [n for n in self._by_id.values() if n.is_root]
        if include_inactive:
            return roots
        return [r for r in roots if r.active]
