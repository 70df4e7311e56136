"""Tests for the chainable NestableCollection."""

import pytest
from nestable_mcp.nesting import NestableCollection, Record, CyclicReferenceError, DuplicateIdError


def make_rows():
    return [
        {"id": 1, "parent_id": None, "title": "A"},
        {"id": 2, "parent_id": 1, "title": "B"},
        {"id": 3, "parent_id": 99, "title": "C"},
    ]


def test_nest_returns_self():
    """Test that nest() restructures the collection in place."""
    collection = NestableCollection(make_rows())
    result = collection.nest()

    assert result is collection
    assert [r["id"] for r in collection] == [1]
    assert collection[0]["items"][0]["id"] == 2


def test_total_survives_nesting():
    """Test total() keeps the flat input size."""
    collection = NestableCollection(make_rows()).nest()

    assert collection.total() == 3
    assert len(collection) == 1


def test_no_cleaning_keeps_orphans():
    """Test that no_cleaning() keeps records with a missing ancestor."""
    collection = NestableCollection(make_rows()).no_cleaning().nest()

    assert [r["id"] for r in collection] == [1, 3]


def test_children_name():
    """Test nesting under a custom children name."""
    collection = NestableCollection(make_rows()).children_name("children").nest()

    assert collection[0]["children"][0]["title"] == "B"
    assert "items" not in collection[0]


def test_parent_column():
    """Test nesting on a custom parent column."""
    rows = [{"id": 1, "menu_id": None}, {"id": 2, "menu_id": 1}]
    collection = NestableCollection(rows).parent_column("menu_id").nest()

    assert len(collection) == 1
    assert collection[0]["items"][0]["id"] == 2


def test_no_parent_column_leaves_collection_flat():
    """Test that nest() is a no-op without a parent column."""
    collection = NestableCollection(make_rows()).parent_column(None).nest()

    assert [r["id"] for r in collection] == [1, 2, 3]


def test_lists_flattened():
    """Test flattened listing with the default and a custom indent."""
    collection = NestableCollection(make_rows()).nest()

    assert collection.lists_flattened() == {1: "A", 2: "    B"}
    assert collection.lists_flattened("title", "  ") == {1: "A", 2: "  B"}
    assert collection.set_indent("--").lists_flattened() == {1: "A", 2: "--B"}


def test_lists_flattened_qualified():
    """Test qualified flattened listing."""
    collection = NestableCollection(make_rows()).set_indent(" / ").nest()

    assert collection.lists_flattened_qualified() == {1: "A", 2: "A / B"}


def test_set_parents():
    """Test set_parents() on Record instances."""
    records = [Record(id=1), Record(id=2, parent_id=1)]
    collection = NestableCollection(records).nest().set_parents()

    assert collection[0].items[0].parent is collection[0]
    assert collection[0].parent is None


def test_an_ancestor_is_missing():
    """Test the ancestor check against the flat collection."""
    rows = make_rows()
    collection = NestableCollection(rows)

    assert collection.an_ancestor_is_missing(rows[1]) is False
    assert collection.an_ancestor_is_missing(rows[2]) is True


def test_an_ancestor_is_missing_cycle():
    """Test that the ancestor check reports self-parenting."""
    rows = [{"id": 5, "parent_id": 5}]
    collection = NestableCollection(rows)

    with pytest.raises(CyclicReferenceError):
        collection.an_ancestor_is_missing(rows[0])


def test_nest_duplicate_id_raises():
    """Test that nest() reports duplicate ids."""
    rows = [{"id": 1, "title": "A"}, {"id": 1, "title": "B"}]

    with pytest.raises(DuplicateIdError):
        NestableCollection(rows).nest()
