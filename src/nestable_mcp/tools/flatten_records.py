"""Flatten records - indented select-list labels from flat records."""

import os
from typing import Optional

from ..nesting import NestingError, build_tree, flatten_tree
from .nest_records import _copy_record

# Internal to this tool; never part of the output.
CHILDREN_FIELD = "__children__"


def flatten_records(
    records: list[dict],
    display_field: str = "title",
    indent: Optional[str] = None,
    qualified: bool = False,
    parent_field: str = "parent_id",
    prune_missing_ancestors: bool = True,
) -> dict:
    """Nest flat records, then flatten them into labelled options.

    Args:
        records: Flat records, each with an "id" and a parent reference
        display_field: Field rendered as the option label
        indent: Indent string; defaults to NESTABLE_INDENT or four spaces
        qualified: Prefix each label with its ancestors' labels
        parent_field: Name of the parent reference field
        prune_missing_ancestors: Drop records whose ancestor chain is broken

    Returns:
        Dict with input total, option count and ordered options
    """
    if indent is None:
        indent = os.environ.get("NESTABLE_INDENT", "    ")

    try:
        copies = [_copy_record(r, CHILDREN_FIELD) for r in records]
        forest = build_tree(
            copies,
            parent_field=parent_field,
            children_field=CHILDREN_FIELD,
            prune_missing_ancestors=prune_missing_ancestors,
        )
    except NestingError as e:
        return {"error": str(e)}
    except KeyError as e:
        return {"error": f"Record is missing required field: {e}"}

    flattened = flatten_tree(forest, display_field=display_field, indent=indent, qualified=qualified)

    # Options stay a list so non-string ids survive JSON encoding.
    options = [{"id": record_id, "label": label} for record_id, label in flattened.items()]

    return {
        "total": forest.total(),
        "count": len(options),
        "options": options,
    }
