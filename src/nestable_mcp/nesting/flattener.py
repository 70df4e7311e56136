"""Flatten a forest into an indented listing for display."""

from typing import Any, Hashable, Iterable, Iterator, Optional

from .records import get_field


def walk_tree(nodes: Iterable[Any], children_field: str = "items") -> Iterator[tuple[Any, int, Any]]:
    """Yield (record, depth, parent) in depth-first pre-order.

    Roots have depth 0 and parent None.
    """
    stack = [(node, 0, None) for node in reversed(list(nodes))]
    while stack:
        node, depth, parent = stack.pop()
        yield node, depth, parent
        children = get_field(node, children_field) or ()
        stack.extend((child, depth + 1, node) for child in reversed(list(children)))


def flatten_tree(
    forest: Iterable[Any],
    display_field: str = "title",
    indent: str = "    ",
    qualified: bool = False,
    children_field: Optional[str] = None,
) -> dict[Hashable, str]:
    """Flatten a forest into an ordered ``{id: label}`` mapping.

    Unqualified labels are the display value prefixed with ``indent`` once
    per level of depth. Qualified labels join the parent's label, ``indent``
    and the display value, so every label spells out its full path. Roots
    are never prefixed.

    The forest is not modified.
    """
    if children_field is None:
        children_field = getattr(forest, "children_field", "items")

    flattened: dict[Hashable, str] = {}
    for record, depth, parent in walk_tree(forest, children_field):
        value = get_field(record, display_field)
        value = "" if value is None else str(value)

        if not qualified:
            label = indent * depth + value
        elif parent is None:
            label = value
        else:
            label = flattened[get_field(parent, "id")] + indent + value

        flattened[get_field(record, "id")] = label
    return flattened
