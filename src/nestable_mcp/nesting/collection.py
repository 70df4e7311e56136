"""Chainable collection wrapper around the nesting functions."""

from typing import Any, Hashable, Iterable, Optional

from .builder import an_ancestor_is_missing, build_tree
from .flattener import flatten_tree
from .linker import link_parents
from .records import Forest, get_field


class NestableCollection(Forest):
    """A list of records that can nest itself, flatten and link parents.

    Configuration setters return the collection so calls can be chained::

        menu = NestableCollection(rows).children_name("children").nest()
        options = menu.lists_flattened("title")
    """

    def __init__(self, records: Iterable[Any] = ()):
        super().__init__(records)
        self._parent_column: Optional[str] = "parent_id"
        self._remove_items_with_missing_ancestor = True
        self._indent_chars = "    "

    def children_name(self, name: str) -> "NestableCollection":
        self.children_field = name
        return self

    def parent_column(self, name: Optional[str]) -> "NestableCollection":
        self._parent_column = name
        return self

    def set_indent(self, indent_chars: str) -> "NestableCollection":
        """Change the characters used to indent flattened lists."""
        self._indent_chars = indent_chars
        return self

    def no_cleaning(self) -> "NestableCollection":
        """Keep records whose ancestor chain is broken, as top-level orphans."""
        self._remove_items_with_missing_ancestor = False
        return self

    def nest(self) -> "NestableCollection":
        """Replace the flat contents with the nested forest."""
        if not self._parent_column:
            return self
        forest = build_tree(
            self,
            parent_field=self._parent_column,
            children_field=self.children_field,
            prune_missing_ancestors=self._remove_items_with_missing_ancestor,
        )
        self[:] = forest
        return self

    def lists_flattened(self, column: str = "title", indent_chars: Optional[str] = None) -> dict[Hashable, str]:
        """Flatten to ``{id: label}`` with labels indented by depth."""
        return flatten_tree(
            self,
            display_field=column,
            indent=indent_chars or self._indent_chars,
            children_field=self.children_field,
        )

    def lists_flattened_qualified(self, column: str = "title", indent_chars: Optional[str] = None) -> dict[Hashable, str]:
        """Flatten to ``{id: label}`` with every label prefixed by its ancestors' labels."""
        return flatten_tree(
            self,
            display_field=column,
            indent=indent_chars or self._indent_chars,
            qualified=True,
            children_field=self.children_field,
        )

    def an_ancestor_is_missing(self, record: Any) -> bool:
        index = {get_field(r, "id"): r for r in self}
        return an_ancestor_is_missing(record, index, self._parent_column or "parent_id")

    def set_parents(self, relation: str = "parent") -> "NestableCollection":
        """Point each nested record at its parent so it needs no second lookup."""
        link_parents(self, children_field=self.children_field, relation=relation)
        return self
