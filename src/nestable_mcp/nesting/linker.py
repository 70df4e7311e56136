"""Attach parent back-references to a nested forest."""

from typing import Any, Optional

from .flattener import walk_tree
from .records import set_field


def link_parents(forest: Any, children_field: Optional[str] = None, relation: str = "parent") -> Any:
    """Set ``relation`` on every non-root record to the record containing it.

    Lets callers navigate upward without looking parents up again. Roots are
    left untouched. ``Record`` instances hold the parent through a weak
    reference. Returns ``forest``.
    """
    if children_field is None:
        children_field = getattr(forest, "children_field", "items")

    for record, _, parent in walk_tree(forest, children_field):
        if parent is not None:
            set_field(record, relation, parent)
    return forest
