"""Errors raised while nesting flat records."""

from typing import Hashable


class NestingError(Exception):
    """Base class for structural errors in the input records."""


class DuplicateIdError(NestingError):
    """Two input records share the same id."""

    def __init__(self, record_id: Hashable):
        self.id = record_id
        super().__init__(f"Duplicate record id: {record_id!r}")


class CyclicReferenceError(NestingError):
    """The ancestor chain of a record loops back on itself."""

    def __init__(self, record_id: Hashable, depth: int = 0):
        self.id = record_id
        self.depth = depth
        if depth:
            message = f"Cyclic parent reference: ancestor chain of {record_id!r} exceeds {depth} records"
        else:
            message = f"Cyclic parent reference: record {record_id!r} is its own parent"
        super().__init__(message)
