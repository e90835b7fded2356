"""
Property merging for graph records.

A property mapping holds, per key, a list of distinct values in first-seen
order:

    {"color": ["red", "blue"], "tag": ["x", "y"]}

add_properties() merges (key, values) updates into a plain dict of that shape.
PropertyAccumulator does the same but keeps its values as OrderedValueSet
until they are read back.

Values are compared with Python hashing/equality, except that True/False are
not merged into 1/0. Values must be hashable.
"""

import logging
from collections.abc import Iterable
from typing import Any, Dict, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)


def _dedup_key(value: Any) -> Tuple[bool, Any]:
    # bools stay distinct from the ints they compare equal to
    return (type(value) is bool, value)


class OrderedValueSet:
    """
    Insertion-ordered set of hashable values.

    True/False are kept apart from 1/0; other values dedupe by ==, so 1 and
    1.0 are one value (the first one seen is kept).
    """

    def __init__(self, values: Iterable = ()):
        self._items: Dict[Tuple[bool, Any], Any] = {}
        self.update(values)

    def add(self, value: Any) -> None:
        self._items.setdefault(_dedup_key(value), value)

    def update(self, values: Iterable) -> None:
        for value in values:
            self.add(value)

    def to_list(self) -> List[Any]:
        return list(self._items.values())

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, value: object) -> bool:
        try:
            return _dedup_key(value) in self._items
        except TypeError:
            return False

    def __repr__(self) -> str:
        return f"OrderedValueSet({self.to_list()!r})"


def new_properties() -> Dict[str, List[Any]]:
    """Return a fresh, empty property mapping."""
    return {}


def _value_list(key: Any, values: Any, what: str = "values") -> List[Any]:
    """
    Materialize one key's values into a list, checking that the container is
    iterable and every value hashable.
    """
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        raise TypeError(
            f"{what} for property {key!r} must be a non-string iterable, got {type(values).__name__}"
        )
    materialized = list(values)
    for value in materialized:
        try:
            hash(value)
        except TypeError:
            raise TypeError(
                f"Property {key!r} has unhashable value {value!r} ({type(value).__name__})"
            ) from None
    return materialized


def _read_updates(updates: Any) -> List[Tuple[Any, List[Any]]]:
    """
    Validate and materialize an iterable of (key, values) pairs.

    Runs to completion before any accumulator is touched, so a bad update
    never leaves a half-merged result behind.
    """
    if isinstance(updates, (str, bytes)) or not isinstance(updates, Iterable):
        raise TypeError(f"updates must be an iterable of (key, values) pairs, got {type(updates).__name__}")

    batch = []
    for index, pair in enumerate(updates):
        try:
            key, values = pair
        except (TypeError, ValueError):
            raise ValueError(f"Update #{index} is not a (key, values) pair: {pair!r}") from None
        batch.append((key, _value_list(key, values)))
    return batch


def add_properties(updates: Iterable, properties: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Merge (key, values) updates into a property mapping.

    For each key, values already present keep their position and new ones are
    appended in encounter order; duplicates are dropped. Keys not named in
    `updates` are left as they are. The mapping is mutated in place and
    returned; pass None (or nothing) to start from new_properties().

    Example:
        props = add_properties([("tag", ["x"])])
        add_properties([("tag", ["y", "x"])], props)
        # props == {"tag": ["x", "y"]}
    """
    if properties is None:
        properties = new_properties()

    batch = _read_updates(updates)

    merged: Dict[Any, OrderedValueSet] = {}
    for key, values in batch:
        value_set = merged.get(key)
        if value_set is None:
            if key in properties:
                existing = _value_list(key, properties[key], what="Existing value")
                value_set = OrderedValueSet(existing)
            else:
                value_set = OrderedValueSet()
            merged[key] = value_set
        value_set.update(values)

    for key, value_set in merged.items():
        properties[key] = value_set.to_list()

    logger.debug(f"Merged {len(batch)} updates into {len(merged)} properties")
    return properties


class PropertyAccumulator:
    """
    Accumulates property updates across several merge() calls.

    Values are held as OrderedValueSet per key and only turned into lists
    when read back (to_dict(), item access).

    Usage:
        acc = PropertyAccumulator()
        acc.merge([("tag", ["x"])]).merge([("tag", ["y", "x"])])
        acc.to_dict()  # {"tag": ["x", "y"]}
    """

    def __init__(self, initial: Optional[Dict[str, Iterable]] = None):
        self._values: Dict[Any, OrderedValueSet] = {}
        if initial:
            for key, values in initial.items():
                self._values[key] = OrderedValueSet(_value_list(key, values))

    def merge(self, updates: Iterable) -> "PropertyAccumulator":
        """Add (key, values) updates and return self."""
        batch = _read_updates(updates)
        for key, values in batch:
            value_set = self._values.get(key)
            if value_set is None:
                value_set = self._values[key] = OrderedValueSet()
            value_set.update(values)
        return self

    def to_dict(self) -> Dict[Any, List[Any]]:
        """Return a new {key: [values]} mapping."""
        return {key: value_set.to_list() for key, value_set in self._values.items()}

    def keys(self) -> List[Any]:
        return list(self._values)

    def __getitem__(self, key: Any) -> List[Any]:
        return self._values[key].to_list()

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"PropertyAccumulator({self.to_dict()!r})"
