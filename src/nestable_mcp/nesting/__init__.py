"""Nesting package for turning flat parent-id records into trees and back."""

from .records import Record, Forest, get_field, set_field, is_root_reference
from .errors import NestingError, DuplicateIdError, CyclicReferenceError
from .builder import build_tree, an_ancestor_is_missing, index_records
from .flattener import walk_tree, flatten_tree
from .linker import link_parents
from .collection import NestableCollection

__all__ = [
    "Record",
    "Forest",
    "get_field",
    "set_field",
    "is_root_reference",
    "NestingError",
    "DuplicateIdError",
    "CyclicReferenceError",
    "build_tree",
    "an_ancestor_is_missing",
    "index_records",
    "walk_tree",
    "flatten_tree",
    "link_parents",
    "NestableCollection",
]
