from eventmixin.utils import (
    filter_excluding,
    find_first,
    is_non_empty_string_array,
    normalize_event_names,
)


def test_find_first_returns_first_match():
    assert find_first([1, 2, 3, 4], lambda item: item % 2 == 0) == 2


def test_find_first_handles_missing_input():
    assert find_first(None, bool) is None
    assert find_first([1, 2], None) is None
    assert find_first([1, 2], lambda item: item > 5) is None


def test_filter_excluding_does_not_mutate_input():
    items = [1, 2, 3, 4]
    assert filter_excluding(items, lambda item: item % 2 == 0) == [1, 3]
    assert items == [1, 2, 3, 4]


def test_filter_excluding_returns_empty_list_for_invalid_input():
    assert filter_excluding(None, bool) == []
    assert filter_excluding([1, 2], "not callable") == []


def test_is_non_empty_string_array():
    assert is_non_empty_string_array(["a", "b"])
    assert is_non_empty_string_array(("a",))
    assert not is_non_empty_string_array([])
    assert not is_non_empty_string_array(["a", 1])
    assert not is_non_empty_string_array("a")
    assert not is_non_empty_string_array(None)


def test_normalize_event_names_splits_on_whitespace():
    assert normalize_event_names("a b  c") == ["a", "b", "c"]
    assert normalize_event_names(["a b", "c", "a"]) == ["a", "b", "c"]
    assert normalize_event_names("   ") == []
    assert normalize_event_names(5) is None
    assert normalize_event_names([]) is None


def test_normalize_event_names_can_keep_duplicates():
    assert normalize_event_names(["a", "a b"], unique=False) == ["a", "a", "b"]
    assert normalize_event_names("a a", unique=False) == ["a", "a"]
