"""Attribute sets built from legacy label keys and values."""

from collections.abc import Iterable, Iterator, Mapping, Sequence

from metricbridge.core.errors import AttributeArityMismatchError
from metricbridge.core.legacy import LabelKey, LabelValue


class AttributeSet(Mapping[str, str]):
    """Immutable, canonical set of string attributes.

    Pairs are deduplicated by key (last write wins) and stored sorted by key,
    so two sets holding the same pairs are equal and hash the same regardless
    of the order they were built in.
    """

    __slots__ = ("_items",)

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()) -> None:
        deduped = dict(pairs)
        self._items: tuple[tuple[str, str], ...] = tuple(sorted(deduped.items()))

    def __getitem__(self, key: str) -> str:
        for k, v in self._items:
            if k == key:
                return v
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        return (k for k, _ in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AttributeSet):
            return self._items == other._items
        return super().__eq__(other)

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"AttributeSet({dict(self._items)!r})"

    def items_tuple(self) -> tuple[tuple[str, str], ...]:
        """Return the sorted (key, value) pairs."""
        return self._items


def build_attribute_set(
    keys: Sequence[LabelKey],
    values: Sequence[LabelValue],
) -> AttributeSet:
    """Build an attribute set from parallel label keys and values.

    Args:
        keys: Label keys of the metric descriptor.
        values: Label values of one time series, positionally matching keys.

    Returns:
        AttributeSet with one string attribute per present value. Absent
        values produce no attribute. Duplicate keys keep the last value.

    Raises:
        AttributeArityMismatchError: If keys and values differ in length.
    """
    if len(keys) != len(values):
        raise AttributeArityMismatchError(len(keys), len(values))
    return AttributeSet(
        (key.key, value.value)
        for key, value in zip(keys, values, strict=True)
        if value.present
    )
