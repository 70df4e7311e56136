"""Record type, named-field accessors and the Forest container."""

import weakref
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass, field
from typing import Any, Hashable, Iterable, Optional


@dataclass(eq=False)
class Record:
    """A flat row that can be nested under another row by parent id."""

    # Attribute names that cannot hold a children container.
    RESERVED = frozenset({"id", "parent_id", "fields", "parent", "_parent"})

    id: Hashable                                       # Unique within one input set
    parent_id: Optional[Hashable] = None               # None/0 for roots
    fields: dict[str, Any] = field(default_factory=dict)  # Display fields (title, slug, ...)
    _parent: Optional[weakref.ref] = field(default=None, init=False, repr=False)

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails: fall back to display fields.
        fields = self.__dict__.get("fields")
        if fields is not None and name in fields:
            return fields[name]
        raise AttributeError(f"{type(self).__name__!s} has no field {name!r}")

    @property
    def parent(self) -> Optional["Record"]:
        """Parent record set by link_parents, or None for roots and unlinked records."""
        if self._parent is None:
            return None
        return self._parent()

    @parent.setter
    def parent(self, value: Optional["Record"]) -> None:
        self._parent = weakref.ref(value) if value is not None else None


def get_field(record: Any, name: str, default: Any = None) -> Any:
    """Read a field by name from a mapping or an attribute object.

    On a Record, display fields shadow every attribute except ``id`` and
    ``parent_id``.
    """
    if isinstance(record, Mapping):
        return record.get(name, default)
    if isinstance(record, Record) and name not in ("id", "parent_id") and name in record.fields:
        return record.fields[name]
    return getattr(record, name, default)


def set_field(record: Any, name: str, value: Any) -> None:
    """Write a field by name on a mapping or an attribute object."""
    if isinstance(record, MutableMapping):
        record[name] = value
    elif isinstance(record, Record) and name not in ("id", "parent_id") and name in record.fields:
        record.fields[name] = value
    else:
        setattr(record, name, value)


def is_root_reference(parent_id: Any) -> bool:
    """True for parent values that mean "no parent": None, 0, "" and "0"."""
    return not parent_id or parent_id == "0"


class Forest(list):
    """Ordered root records, each owning its descendants.

    ``total()`` is the size of the flat input the forest was built from. It
    is fixed at construction and does not shrink when records are pruned.
    """

    def __init__(
        self,
        roots: Iterable[Any] = (),
        total: Optional[int] = None,
        children_field: str = "items",
    ):
        super().__init__(roots)
        self._total = len(self) if total is None else total
        self.children_field = children_field

    def total(self) -> int:
        """Number of records in the original flat input."""
        return self._total
