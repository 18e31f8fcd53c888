"""Tests for shotgun_api.api.query module."""

from shotgun_api.api.query import (
    FilterExpression,
    Filters,
    PageParam,
    SortDirection,
    SortParam,
    serialize_sort,
)


class TestFilters:
    """Test filter serialization."""

    def test_empty(self):
        """No expressions serialize to an empty list."""
        assert Filters().serialize() == []

    def test_add_is_chainable_and_ordered(self):
        """add() returns the same Filters and keeps insertion order."""
        filters = Filters().add("project.Project.id", "is", 85).add("id", "greater_than", 10)
        assert filters.serialize() == [["project.Project.id", "is", 85], ["id", "greater_than", 10]]

    def test_from_expressions(self):
        """Filters can be built from expression objects."""
        filters = Filters([FilterExpression("code", "contains", "sh0")])
        assert filters.serialize() == [["code", "contains", "sh0"]]


class TestSort:
    """Test sort serialization."""

    def test_ascending_and_descending(self):
        """Descending fields get a leading dash."""
        params = [SortParam("code"), SortParam("created_at", SortDirection.DESCENDING)]
        assert serialize_sort(params) == "code,-created_at"

    def test_none_is_empty(self):
        """No sort yields an empty string."""
        assert serialize_sort(None) == ""
        assert serialize_sort([]) == ""


class TestPageParam:
    """Test page serialization."""

    def test_zero_values_omitted(self):
        """Zero size and number are left out."""
        assert PageParam().serialize() == {}
        assert PageParam(size=1).serialize() == {"size": 1}
        assert PageParam(size=25, number=3).serialize() == {"size": 25, "number": 3}
