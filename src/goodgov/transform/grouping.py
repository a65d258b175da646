"""Stable group-by of records into per-country groups."""

from typing import Callable, Dict, Hashable, Iterable, List, Tuple, TypeVar

from goodgov.models import Group, Record

T = TypeVar("T")


def nest(items: Iterable[T], key_func: Callable[[T], Hashable]) -> List[Tuple[Hashable, List[T]]]:
    """Partition items by key.

    Groups come out in the order their key is first seen, and members
    keep their relative input order.
    """
    buckets: Dict[Hashable, List[T]] = {}
    for item in items:
        buckets.setdefault(key_func(item), []).append(item)
    return list(buckets.items())


def group_by_country(records: Iterable[Record]) -> List[Group]:
    """Group records by country; values keep input (year) order."""
    return [
        Group(key=country, values=tuple(members))
        for country, members in nest(records, lambda record: record.country)
    ]
