import pytest

from gqlcore.errors import Location, QueryError


def test_before_earlier_line():
    assert Location(1, 9).before(Location(2, 1)) is True
    assert Location(2, 1).before(Location(1, 9)) is False


def test_before_same_line_compares_columns():
    assert Location(3, 2).before(Location(3, 7)) is True
    assert Location(3, 7).before(Location(3, 2)) is False


def test_before_is_strict():
    loc = Location(4, 4)
    assert loc.before(Location(4, 4)) is False


def test_sorting_by_before_is_consistent():
    locs = [Location(5, 1), Location(1, 3), Location(1, 2), Location(3, 9)]
    ordered = sorted(locs, key=lambda loc: (loc.line, loc.column))
    for earlier, later in zip(ordered, ordered[1:]):
        assert earlier.before(later)
        assert not later.before(earlier)


def test_query_error_keeps_fields():
    loc = Location(1, 9)
    err = QueryError("something went wrong", [loc], rule="SomeRule")
    assert err.message == "something went wrong"
    assert err.locations == [loc]
    assert err.rule == "SomeRule"
    assert err.path == []


def test_query_error_str_contains_message_and_location():
    err = QueryError("bad field", [Location(1, 9)])
    text = str(err)
    assert "bad field" in text
    assert "line 1" in text
    assert "column 9" in text


def test_query_error_without_locations_can_be_raised():
    err = QueryError("boom")
    assert err.message == "boom"
    assert err.locations == []
    assert "boom" in str(err)
    with pytest.raises(QueryError, match="boom"):
        raise err