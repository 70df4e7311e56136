"""Nest records - turn a flat parent-id list into a tree."""

from typing import Optional

from ..nesting import NestingError, build_tree


def nest_records(
    records: list[dict],
    parent_field: str = "parent_id",
    children_field: str = "items",
    prune_missing_ancestors: bool = True,
) -> dict:
    """Nest flat records into a tree.

    Args:
        records: Flat records, each with an "id" and a parent reference
        parent_field: Name of the parent reference field
        children_field: Name under which children are nested in the output
        prune_missing_ancestors: Drop records whose ancestor chain is broken

    Returns:
        Dict with input total, retained count and the nested tree
    """
    try:
        copies = [_copy_record(r, children_field) for r in records]
        forest = build_tree(
            copies,
            parent_field=parent_field,
            children_field=children_field,
            prune_missing_ancestors=prune_missing_ancestors,
        )
    except NestingError as e:
        return {"error": str(e)}
    except KeyError as e:
        return {"error": f"Record is missing required field: {e}"}

    tree = list(forest)

    return {
        "total": forest.total(),
        "count": _count(tree, children_field),
        "tree": tree,
    }


def _copy_record(d: dict, children_field: Optional[str] = None) -> dict:
    """Shallow-copy an input record, dropping any incoming children."""
    if "id" not in d:
        raise KeyError("id")
    return {k: v for k, v in d.items() if k != children_field}


def _count(nodes: list[dict], children_field: str) -> int:
    return sum(1 + _count(n[children_field], children_field) for n in nodes)
