"""Small sequence helpers used by the listener registry."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Sequence, TypeVar

T = TypeVar("T")


def find_first(items: Iterable[T] | None, predicate: Callable[[T], Any]) -> T | None:
    """Return the first item for which ``predicate`` is truthy, else ``None``."""
    if items is None or not callable(predicate):
        return None
    for item in items:
        if predicate(item):
            return item
    return None


def filter_excluding(items: Iterable[T] | None, predicate: Callable[[T], Any]) -> list[T]:
    """Return a new list without the items matching ``predicate``.

    The input is never mutated. Missing input or a non-callable predicate
    yields an empty list.
    """
    if items is None or not callable(predicate):
        return []
    return [item for item in items if not predicate(item)]


def is_non_empty_string_array(value: Any) -> bool:
    """``True`` for a non-empty list or tuple whose elements are all strings."""
    return (
        isinstance(value, (list, tuple))
        and len(value) > 0
        and all(isinstance(item, str) for item in value)
    )


def normalize_event_names(
    value: str | Sequence[str], *, unique: bool = True
) -> list[str] | None:
    """Expand ``value`` into a list of single event names.

    Strings are split on whitespace, so ``"a b"`` names two events. Repeated
    names are dropped unless ``unique`` is false. Returns ``None`` when
    ``value`` is neither a string nor a valid string array.
    """
    if isinstance(value, str):
        raw = [value]
    elif is_non_empty_string_array(value):
        raw = list(value)
    else:
        return None

    names: list[str] = []
    for chunk in raw:
        for name in chunk.split():
            if not unique or name not in names:
                names.append(name)
    return names


__all__ = [
    "filter_excluding",
    "find_first",
    "is_non_empty_string_array",
    "normalize_event_names",
]
