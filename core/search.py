"""Search and grouping helpers for list views."""

from collections import defaultdict
from decimal import Decimal
from typing import Any, Callable, Dict, Hashable, Iterable, List, Sequence, TypeVar

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


def _field_value(item: Any, field: str) -> Any:
    if isinstance(item, dict):
        return item.get(field)
    return getattr(item, field, None)


def _matches(value: Any, needle: str) -> bool:
    if isinstance(value, bool) or value is None:
        return False
    if isinstance(value, str):
        return needle in value.lower()
    if isinstance(value, (int, float, Decimal)):
        return needle in str(value)
    if isinstance(value, (list, tuple)):
        return any(_matches(v, needle) for v in value)
    return False


def search_items(items: Sequence[T], term: str, fields: Iterable[str]) -> List[T]:
    """Case-insensitive substring search over the given fields.

    A blank term returns every item. String fields match on substring,
    numeric fields on their decimal representation, and list fields when
    any element matches.
    """
    if not term or not term.strip():
        return list(items)

    needle = term.lower()
    fields = list(fields)
    return [
        item for item in items
        if any(_matches(_field_value(item, f), needle) for f in fields)
    ]


def group_by(items: Iterable[T], key: Callable[[T], K]) -> Dict[K, List[T]]:
    """Group items by a key function, preserving input order within groups."""
    groups: Dict[K, List[T]] = defaultdict(list)
    for item in items:
        groups[key(item)].append(item)
    return dict(groups)
