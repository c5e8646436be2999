from __future__ import annotations


class CategoryNotFoundError(LookupError):
    """Raised when a requested category does not exist (or is not visible)."""

    def __init__(self, category_id: int) -> None:
        self.category_id = category_id
        super().__init__(f"Category not found with id {category_id}")


class CategoryHierarchyError(Exception):
    """Base class for corrupt or abusive category hierarchies."""


class CircularReferenceError(CategoryHierarchyError):
    """A category was reached twice on the same descent path."""

    def __init__(
        self,
        category_id: int,
        parent_id: int | None,
        path: tuple[int, ...] = (),
    ) -> None:
        self.category_id = category_id
        self.parent_id = parent_id
        self.path = tuple(path)
        chain = " -> ".join(str(i) for i in (*self.path, category_id))
        super().__init__(
            f"Circular reference detected: category {category_id} already visited "
            f"in hierarchy when processing parent {parent_id} (chain: {chain})"
        )


class HierarchyDepthExceededError(CategoryHierarchyError):
    """Traversal went deeper than the configured ceiling."""

    def __init__(self, category_id: int, max_depth: int, depth: int) -> None:
        self.category_id = category_id
        self.max_depth = max_depth
        self.depth = depth
        super().__init__(
            f"Category {category_id}: hierarchy depth ({depth}) exceeded "
            f"maximum allowed depth of {max_depth} levels"
        )
