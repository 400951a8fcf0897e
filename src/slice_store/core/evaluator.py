"""Slice evaluation against a single partition.

Evaluates one SlicePredicate against one partition's name-sorted columns.
"""

from __future__ import annotations

from collections.abc import Iterable
from itertools import islice

from .predicates import SlicePredicate, SliceRange
from .types import Column, ColumnName, Partition, as_partition


class SimpleSliceEvaluator:
    """Pure evaluator for slice predicates.

    Invariants:
        - Names results follow the requested name order; missing names are skipped
        - Forward range results are strictly ascending by name
        - Reversed range results are strictly descending by name
        - A range result never holds more than ``count`` columns
    """

    def evaluate(self, columns: Iterable[Column], predicate: SlicePredicate) -> list[Column]:
        """Return the columns of ``columns`` selected by ``predicate``.

        Plain sequences are sorted on every call; pass a Partition to skip that.
        """
        partition = as_partition(columns)
        if predicate.column_names is not None:
            return self._select_names(partition, predicate.column_names)
        return self._scan_range(partition, predicate.slice_range)

    def _select_names(self, partition: Partition, names: tuple[ColumnName, ...]) -> list[Column]:
        result = []
        for name in names:
            column = find_column(partition, name)
            if column is not None:
                result.append(column)
        return result

    def _scan_range(self, partition: Partition, slice_range: SliceRange) -> list[Column]:
        if slice_range.count == 0 or slice_range.is_crossed():
            return []

        # Empty bounds are open ends of the scan.
        start = slice_range.start or None
        finish = slice_range.finish or None
        if slice_range.reversed:
            scan = partition.irange_key(min_key=finish, max_key=start, reverse=True)
        else:
            scan = partition.irange_key(min_key=start, max_key=finish)
        return list(islice(scan, slice_range.count))


def find_column(partition: Partition, name: ColumnName) -> Column | None:
    """Binary search ``partition`` for the column called ``name``."""
    pos = partition.bisect_key_left(name)
    if pos < len(partition) and partition[pos].name == name:
        return partition[pos]
    return None


_default_evaluator = SimpleSliceEvaluator()


def evaluate_slice(columns: Iterable[Column], predicate: SlicePredicate) -> list[Column]:
    """Evaluate ``predicate`` with the shared stateless evaluator."""
    return _default_evaluator.evaluate(columns, predicate)
