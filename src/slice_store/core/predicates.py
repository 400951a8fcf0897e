"""Slice and key predicates.

A SlicePredicate selects a subset of one partition's columns, either by an
explicit list of names or by a bounded name range. A KeyPredicate pairs a
predicate with the partition key it applies to. Both are immutable and fully
validated when constructed.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .errors import InvalidPredicateError
from .types import ColumnName, PartitionKey

DEFAULT_SLICE_COUNT = 100


def _require_bytes(value: object, what: str) -> None:
    if not isinstance(value, bytes):
        raise InvalidPredicateError(f"{what} must be bytes, got {type(value).__name__}")


@dataclass(frozen=True)
class SliceRange:
    """Bounded scan over a partition's column names.

    ``start`` and ``finish`` name the entry and exit points of the scan, so
    in reversed mode ``start`` is the upper bound. An empty bound is open.

    Attributes:
        start: First name to consider (inclusive), or b"" for unbounded
        finish: Last name to consider (inclusive), or b"" for unbounded
        count: Maximum number of columns returned
        reversed: Scan in descending name order
    """

    start: ColumnName = b""
    finish: ColumnName = b""
    count: int = DEFAULT_SLICE_COUNT
    reversed: bool = False

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        _require_bytes(self.start, "range start")
        _require_bytes(self.finish, "range finish")
        if isinstance(self.count, bool) or not isinstance(self.count, int):
            raise InvalidPredicateError(f"range count must be an int, got {self.count!r}")
        if self.count < 0:
            raise InvalidPredicateError(f"range count must be non-negative, got {self.count}")

    def is_crossed(self) -> bool:
        """True when both bounds are set and point against the scan direction."""
        if not self.start or not self.finish:
            return False
        if self.reversed:
            return self.start < self.finish
        return self.start > self.finish


@dataclass(frozen=True)
class SlicePredicate:
    """Selection of columns from one partition.

    Exactly one of ``column_names`` and ``slice_range`` is set. Prefer the
    ``names`` and ``range`` factories over the constructor.
    """

    column_names: tuple[ColumnName, ...] | None = None
    slice_range: SliceRange | None = None

    def __post_init__(self) -> None:
        if self.column_names is not None and not isinstance(self.column_names, (str, bytes)):
            # Freeze list inputs; duplicate names collapse to their first occurrence.
            try:
                names = tuple(dict.fromkeys(self.column_names))
            except TypeError as e:
                raise InvalidPredicateError(f"column_names must be a sequence of bytes: {e}") from e
            object.__setattr__(self, "column_names", names)
        self.validate()

    @classmethod
    def names(cls, *column_names: ColumnName) -> SlicePredicate:
        return cls(column_names=column_names)

    @classmethod
    def range(
        cls,
        start: ColumnName = b"",
        finish: ColumnName = b"",
        count: int = DEFAULT_SLICE_COUNT,
        reversed: bool = False,
    ) -> SlicePredicate:
        return cls(slice_range=SliceRange(start, finish, count, reversed))

    @property
    def is_names(self) -> bool:
        return self.column_names is not None

    def validate(self) -> None:
        """Raise InvalidPredicateError unless exactly one case is populated."""
        if self.column_names is None and self.slice_range is None:
            raise InvalidPredicateError("SlicePredicate needs column_names or slice_range, got neither")
        if self.column_names is not None and self.slice_range is not None:
            raise InvalidPredicateError("SlicePredicate needs column_names or slice_range, got both")

        if self.column_names is not None:
            if not isinstance(self.column_names, tuple):
                raise InvalidPredicateError("column_names must be a sequence of bytes")
            for name in self.column_names:
                _require_bytes(name, "column name")
        else:
            if not isinstance(self.slice_range, SliceRange):
                raise InvalidPredicateError(
                    f"slice_range must be a SliceRange, got {type(self.slice_range).__name__}"
                )
            self.slice_range.validate()


@dataclass(frozen=True)
class KeyPredicate:
    """A slice predicate bound to a partition key; one element of a batch."""

    key: PartitionKey
    predicate: SlicePredicate

    def __post_init__(self) -> None:
        self.validate()

    @classmethod
    def for_columns(cls, key: PartitionKey, *column_names: ColumnName) -> KeyPredicate:
        return cls(key, SlicePredicate.names(*column_names))

    @classmethod
    def for_range(
        cls,
        key: PartitionKey,
        start: ColumnName = b"",
        finish: ColumnName = b"",
        count: int = DEFAULT_SLICE_COUNT,
        reversed: bool = False,
    ) -> KeyPredicate:
        return cls(key, SlicePredicate.range(start, finish, count, reversed))

    def validate(self) -> None:
        _require_bytes(self.key, "partition key")
        if not isinstance(self.predicate, SlicePredicate):
            raise InvalidPredicateError(
                f"predicate must be a SlicePredicate, got {type(self.predicate).__name__}"
            )
        self.predicate.validate()


def validate_requests(requests: Iterable[object]) -> None:
    """Validate every request of a batch, failing on the first bad one."""
    for index, request in enumerate(requests):
        if not isinstance(request, KeyPredicate):
            raise InvalidPredicateError(
                f"request {index} must be a KeyPredicate, got {type(request).__name__}"
            )
        request.validate()
