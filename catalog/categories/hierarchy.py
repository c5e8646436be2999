"""
Category hierarchy resolution.

Two independent safety nets guard every traversal:

* a "visited on current path" set, which rejects any cycle as soon as a
  category is reached a second time on the same descent path, and
* a depth ceiling, which rejects hierarchies deeper than ``max_depth``
  (depth of a descendant = number of edges from the root).

Exceeding the ceiling is always an error. Results are never truncated,
otherwise "all businesses under a category" would silently undercount.
"""

from __future__ import annotations

import logging

from .exceptions import (
    CategoryNotFoundError,
    CircularReferenceError,
    HierarchyDepthExceededError,
)
from .models import CategoryNode
from .store import CategoryStore

logger = logging.getLogger(__name__)


def resolve_descendants(
    store: CategoryStore,
    root_id: int,
    max_depth: int,
    include_inactive: bool = False,
) -> set[int]:
    """Return the ids of every category reachable below ``root_id``.

    The root itself is not part of the result. With ``include_inactive`` off,
    inactive children are neither included nor descended through.

    Raises ``CircularReferenceError`` or ``HierarchyDepthExceededError`` on
    corrupt data. Errors raised by ``store`` propagate unchanged.
    """
    if max_depth < 0:
        raise ValueError(f"max_depth must be >= 0, got {max_depth}")

    result: set[int] = set()
    # Children are fetched once per node even when shared paths reach it again
    children_of: dict[int, list[CategoryNode]] = {}
    stack: list[tuple[int, int, tuple[int, ...]]] = [(root_id, 0, (root_id,))]

    while stack:
        category_id, depth, path = stack.pop()
        children = children_of.get(category_id)
        if children is None:
            children = list(store.get_direct_children(category_id, include_inactive))
            children_of[category_id] = children

        child_depth = depth + 1
        for child in children:
            if child.id in path:
                err = CircularReferenceError(child.id, category_id, path)
                logger.error("%s", err)
                raise err

            if child_depth > max_depth:
                err = HierarchyDepthExceededError(child.id, max_depth, child_depth)
                logger.error("%s (root %s)", err, root_id)
                raise err

            result.add(child.id)

        stack.extend(
            (child.id, child_depth, path + (child.id,)) for child in reversed(children)
        )

    logger.debug(
        "Resolved %d descendants of category %s (include_inactive=%s)",
        len(result), root_id, include_inactive,
    )
    return result


def find_subcategory_ids(
    store: CategoryStore,
    category_id: int,
    max_depth: int,
    include_inactive: bool = False,
) -> set[int]:
    """Existence-checked variant of :func:`resolve_descendants`."""
    if not store.category_exists(category_id):
        raise CategoryNotFoundError(category_id)
    return resolve_descendants(store, category_id, max_depth, include_inactive)


def depth_from_root(store: CategoryStore, category_id: int, max_depth: int) -> int:
    """Count parent hops from ``category_id`` up to its root (roots are 0).

    A parent id that is not in the store ends the walk like a root would.
    """
    node = store.get_category(category_id)
    if node is None:
        raise CategoryNotFoundError(category_id)

    depth = 0
    visited: list[int] = []
    while node.parent_id is not None:
        if node.id in visited:
            err = CircularReferenceError(node.id, node.parent_id, tuple(visited))
            logger.error("%s", err)
            raise err
        visited.append(node.id)

        parent = store.get_category(node.parent_id)
        if parent is None:
            logger.warning(
                "Category %s points to missing parent %s, treating it as a root",
                node.id, node.parent_id,
            )
            break

        if depth >= max_depth:
            raise HierarchyDepthExceededError(node.id, max_depth, depth + 1)
        depth += 1
        node = parent

    return depth


def validate_parent_depth(store: CategoryStore, parent_id: int, max_depth: int) -> int:
    """Check that a new child can be attached below ``parent_id``.

    Returns the depth the new child would have.
    """
    parent_depth = depth_from_root(store, parent_id, max_depth)
    child_depth = parent_depth + 1
    if child_depth > max_depth:
        raise HierarchyDepthExceededError(parent_id, max_depth, child_depth)
    return child_depth
