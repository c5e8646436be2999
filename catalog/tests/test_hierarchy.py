from __future__ import annotations

import random
from unittest.mock import MagicMock

import pytest

from catalog.categories.exceptions import (
    CategoryNotFoundError,
    CircularReferenceError,
    HierarchyDepthExceededError,
)
from catalog.categories.hierarchy import (
    depth_from_root,
    find_subcategory_ids,
    resolve_descendants,
    validate_parent_depth,
)
from catalog.categories.models import CategoryNode
from catalog.categories.store import InMemoryCategoryStore


def _tree() -> list[CategoryNode]:
    #      1
    #    / | \
    #   2  3  4 (inactive)
    #   |     |
    #   6     5
    return [
        CategoryNode(1, None),
        CategoryNode(2, 1),
        CategoryNode(3, 1),
        CategoryNode(4, 1, active=False),
        CategoryNode(5, 4),
        CategoryNode(6, 2),
        CategoryNode(10, None),
        CategoryNode(11, 10),
    ]


def _chain(length: int) -> InMemoryCategoryStore:
    """Root 0 with a single chain 1..length below it."""
    nodes = [CategoryNode(0, None)]
    nodes += [CategoryNode(i, i - 1) for i in range(1, length + 1)]
    return InMemoryCategoryStore(nodes)


class _GraphStore:
    """Store over an explicit adjacency map, for shapes parent pointers can't express."""

    def __init__(self, edges: dict[int, list[int]]) -> None:
        self.edges = edges

    def get_direct_children(self, category_id, include_inactive):
        return [CategoryNode(c, category_id) for c in self.edges.get(category_id, [])]

    def get_category(self, category_id):
        return CategoryNode(category_id)

    def category_exists(self, category_id):
        return True

    def is_category_active(self, category_id):
        return True


# ── Descendant resolution ────────────────────────────────────────────────


def test_resolves_all_active_descendants_excluding_root():
    store = InMemoryCategoryStore(_tree())
    assert resolve_descendants(store, 1, max_depth=5) == {2, 3, 6}


def test_include_inactive_expands_inactive_nodes():
    store = InMemoryCategoryStore(_tree())
    assert resolve_descendants(store, 1, max_depth=5, include_inactive=True) == {2, 3, 4, 5, 6}


def test_inactive_node_hides_its_active_children():
    store = InMemoryCategoryStore(_tree())
    result = resolve_descendants(store, 1, max_depth=5, include_inactive=False)
    assert 4 not in result
    assert 5 not in result


def test_leaf_category_returns_empty_set():
    store = InMemoryCategoryStore(_tree())
    assert resolve_descendants(store, 6, max_depth=5) == set()


def test_result_is_independent_of_record_order():
    expected = resolve_descendants(InMemoryCategoryStore(_tree()), 1, max_depth=5)
    rng = random.Random(7)
    for _ in range(10):
        nodes = _tree()
        rng.shuffle(nodes)
        store = InMemoryCategoryStore(nodes)
        assert resolve_descendants(store, 1, max_depth=5) == expected


def test_shared_descendant_reported_once():
    store = _GraphStore({1: [2, 3], 2: [4], 3: [4]})
    assert resolve_descendants(store, 1, max_depth=5) == {2, 3, 4}


def test_shared_descendant_children_fetched_once():
    store = _GraphStore({1: [2, 3], 2: [4], 3: [4], 4: [5]})
    store.get_direct_children = MagicMock(wraps=store.get_direct_children)
    assert resolve_descendants(store, 1, max_depth=5) == {2, 3, 4, 5}
    fetched = [c.args[0] for c in store.get_direct_children.call_args_list]
    assert fetched.count(4) == 1
    assert fetched.count(5) == 1


def test_chain_deeper_than_interpreter_stack():
    store = _chain(1500)
    assert resolve_descendants(store, 0, max_depth=2000) == set(range(1, 1501))


def test_negative_max_depth_rejected():
    store = InMemoryCategoryStore(_tree())
    with pytest.raises(ValueError):
        resolve_descendants(store, 1, max_depth=-1)


# ── Cycles ───────────────────────────────────────────────────────────────


def test_two_node_cycle_detected():
    # B is a child of A, and A was (incorrectly) made a child of B
    store = InMemoryCategoryStore([CategoryNode(1, 2), CategoryNode(2, 1)])
    with pytest.raises(CircularReferenceError) as exc_info:
        resolve_descendants(store, 1, max_depth=5)
    err = exc_info.value
    assert err.category_id == 1
    assert err.parent_id == 2
    assert err.path == (1, 2)


def test_self_loop_detected():
    store = InMemoryCategoryStore([CategoryNode(1, 1)])
    with pytest.raises(CircularReferenceError):
        resolve_descendants(store, 1, max_depth=5)


def test_cycle_below_root_detected():
    store = _GraphStore({1: [2], 2: [3], 3: [2]})
    with pytest.raises(CircularReferenceError) as exc_info:
        resolve_descendants(store, 1, max_depth=10)
    assert exc_info.value.category_id == 2
    assert exc_info.value.parent_id == 3


def test_cycle_shorter_than_ceiling_is_reported_as_cycle():
    store = _GraphStore({1: [2], 2: [3], 3: [1]})
    with pytest.raises(CircularReferenceError):
        resolve_descendants(store, 1, max_depth=100)


# ── Depth ceiling ────────────────────────────────────────────────────────


def test_chain_of_exactly_max_depth_succeeds():
    store = _chain(3)
    assert resolve_descendants(store, 0, max_depth=3) == {1, 2, 3}


def test_chain_one_level_deeper_than_max_fails():
    store = _chain(4)
    with pytest.raises(HierarchyDepthExceededError) as exc_info:
        resolve_descendants(store, 0, max_depth=3)
    err = exc_info.value
    assert err.category_id == 4
    assert err.max_depth == 3
    assert err.depth == 4


def test_zero_max_depth_allows_only_leaf_roots():
    assert resolve_descendants(_chain(0), 0, max_depth=0) == set()
    with pytest.raises(HierarchyDepthExceededError):
        resolve_descendants(_chain(1), 0, max_depth=0)


def test_depth_is_checked_for_inactive_branches_only_when_included():
    nodes = [CategoryNode(0), CategoryNode(1, 0, active=False), CategoryNode(2, 1)]
    store = InMemoryCategoryStore(nodes)
    assert resolve_descendants(store, 0, max_depth=1) == set()
    with pytest.raises(HierarchyDepthExceededError):
        resolve_descendants(store, 0, max_depth=1, include_inactive=True)


# ── Store failures ───────────────────────────────────────────────────────


def test_lookup_failure_propagates_unchanged():
    store = MagicMock()
    store.get_direct_children.side_effect = ConnectionError("categories service down")
    with pytest.raises(ConnectionError):
        resolve_descendants(store, 1, max_depth=5)
    assert store.get_direct_children.call_count == 1


# ── Existence-checked resolution ─────────────────────────────────────────


def test_find_subcategory_ids_unknown_category():
    store = InMemoryCategoryStore(_tree())
    with pytest.raises(CategoryNotFoundError):
        find_subcategory_ids(store, 999, max_depth=5)


def test_find_subcategory_ids_matches_resolver():
    store = InMemoryCategoryStore(_tree())
    assert find_subcategory_ids(store, 10, max_depth=5) == {11}


# ── Depth from root / parent validation ──────────────────────────────────


def test_depth_from_root():
    store = InMemoryCategoryStore(_tree())
    assert depth_from_root(store, 1, max_depth=5) == 0
    assert depth_from_root(store, 2, max_depth=5) == 1
    assert depth_from_root(store, 6, max_depth=5) == 2


def test_depth_from_root_missing_parent_is_dead_end():
    store = InMemoryCategoryStore([CategoryNode(1, 42), CategoryNode(2, 1)])
    assert depth_from_root(store, 2, max_depth=5) == 1


def test_depth_from_root_missing_parent_at_ceiling():
    # 0 (parent 42 missing) <- 1 <- 2 <- 3
    nodes = [CategoryNode(0, 42)] + [CategoryNode(i, i - 1) for i in range(1, 4)]
    store = InMemoryCategoryStore(nodes)
    assert depth_from_root(store, 3, max_depth=3) == 3


def test_depth_from_root_unknown_category():
    store = InMemoryCategoryStore(_tree())
    with pytest.raises(CategoryNotFoundError):
        depth_from_root(store, 999, max_depth=5)


def test_depth_from_root_cycle():
    store = InMemoryCategoryStore([CategoryNode(1, 2), CategoryNode(2, 3), CategoryNode(3, 1)])
    with pytest.raises(CircularReferenceError):
        depth_from_root(store, 1, max_depth=10)


def test_depth_from_root_exceeds_ceiling():
    with pytest.raises(HierarchyDepthExceededError):
        depth_from_root(_chain(4), 4, max_depth=3)


def test_validate_parent_depth_allows_last_level():
    assert validate_parent_depth(_chain(2), 2, max_depth=3) == 3


def test_validate_parent_depth_rejects_too_deep():
    with pytest.raises(HierarchyDepthExceededError) as exc_info:
        validate_parent_depth(_chain(3), 3, max_depth=3)
    assert exc_info.value.depth == 4


def test_validate_parent_depth_unknown_parent():
    with pytest.raises(CategoryNotFoundError):
        validate_parent_depth(_chain(2), 77, max_depth=3)
