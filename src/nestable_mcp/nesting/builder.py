"""Build a forest from a flat, parent-referencing record list."""

import logging
from typing import Any, Hashable, Optional, Sequence

from .errors import CyclicReferenceError, DuplicateIdError
from .records import Forest, Record, get_field, is_root_reference, set_field

logger = logging.getLogger(__name__)


def index_records(records: Sequence[Any]) -> dict[Hashable, Any]:
    """Map each record's id to the record.

    Raises DuplicateIdError if two records share an id.
    """
    index = {}
    for record in records:
        record_id = get_field(record, "id")
        if record_id in index:
            logger.warning("Duplicate record id %r in input", record_id)
            raise DuplicateIdError(record_id)
        index[record_id] = record
    return index


def an_ancestor_is_missing(
    record: Any,
    index: dict[Hashable, Any],
    parent_field: str = "parent_id",
    memo: Optional[dict[Hashable, bool]] = None,
) -> bool:
    """Check whether any ancestor of ``record`` is absent from ``index``.

    Walks parent, grandparent, ... until a root, a missing id or an already
    memoized answer. Every id visited on the way gets the same answer in
    ``memo``, so repeated calls over a whole input stay linear.

    Raises CyclicReferenceError for a self-parenting record, or when the
    chain grows longer than the index without terminating.
    """
    if memo is None:
        memo = {}

    chain = []
    current = record
    while True:
        current_id = get_field(current, "id")
        if current_id in memo:
            missing = memo[current_id]
            break

        parent_id = get_field(current, parent_field)
        if is_root_reference(parent_id):
            missing = False
            chain.append(current_id)
            break
        if parent_id == current_id:
            raise CyclicReferenceError(current_id)

        chain.append(current_id)
        if len(chain) > len(index):
            raise CyclicReferenceError(get_field(record, "id"), depth=len(index))

        if parent_id not in index:
            missing = True
            break
        current = index[parent_id]

    for visited_id in chain:
        memo[visited_id] = missing
    return missing


def build_tree(
    records: Sequence[Any],
    parent_field: str = "parent_id",
    children_field: str = "items",
    prune_missing_ancestors: bool = True,
) -> Forest:
    """Nest a flat ordered record list into a forest.

    Records whose parent is present are appended, in input order, to the
    parent's ``children_field`` list and removed from the top level.

    With ``prune_missing_ancestors`` (the default), records with a broken
    ancestor chain are dropped along with everything below them. Without
    it, such records stay at the top level as orphan roots.

    Raises DuplicateIdError or CyclicReferenceError on malformed input.
    Cycles are reported whether or not pruning is enabled. Raises ValueError
    when ``children_field`` names one of Record's own attributes.
    """
    records = list(records)
    if children_field in Record.RESERVED and any(isinstance(r, Record) for r in records):
        raise ValueError(f"{children_field!r} is a Record attribute and cannot hold children")
    index = index_records(records)

    # Every record gets a container before anything is appended to it.
    for record in records:
        if get_field(record, children_field) is None:
            set_field(record, children_field, [])

    memo: dict[Hashable, bool] = {}
    survivors = []
    for record in records:
        missing = an_ancestor_is_missing(record, index, parent_field, memo)
        if missing and prune_missing_ancestors:
            logger.debug(
                "Pruning record %r: ancestor of parent %r is missing",
                get_field(record, "id"),
                get_field(record, parent_field),
            )
            continue
        survivors.append(record)

    surviving = {get_field(r, "id"): r for r in survivors}

    moved = set()
    for record in survivors:
        parent_id = get_field(record, parent_field)
        if not is_root_reference(parent_id) and parent_id in surviving:
            get_field(surviving[parent_id], children_field).append(record)
            moved.add(get_field(record, "id"))

    roots = [r for r in survivors if get_field(r, "id") not in moved]

    pruned = len(records) - len(survivors)
    if pruned:
        logger.info("Pruned %d of %d records with a missing ancestor", pruned, len(records))

    return Forest(roots, total=len(records), children_field=children_field)
