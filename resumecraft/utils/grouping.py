"""Stable grouping primitive."""

from typing import Callable, Dict, Hashable, Iterable, List, TypeVar

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


def group_by(items: Iterable[T], key: Callable[[T], K]) -> Dict[K, List[T]]:
    """
    Group items by key, preserving first-seen key order and item order within groups.

    Example:
        >>> group_by(["apple", "bean", "avocado"], key=lambda s: s[0])
        {'a': ['apple', 'avocado'], 'b': ['bean']}
    """
    groups: Dict[K, List[T]] = {}
    for item in items:
        groups.setdefault(key(item), []).append(item)
    return groups
