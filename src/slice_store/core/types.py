"""Common type definitions for the slice store.

Defines the column record and the sorted partition container shared by
every component.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from sortedcontainers import SortedKeyList

# Core primitive types
PartitionKey = bytes
ColumnName = bytes
Value = bytes
Timestamp = int


@dataclass(frozen=True)
class Column:
    """A named, timestamped value within a partition.

    Columns order by the bytewise order of ``name``; value and timestamp
    play no part in ordering.
    """

    name: ColumnName
    value: Value
    timestamp: Timestamp


def column_name(column: Column) -> ColumnName:
    """Sort key for partitions."""
    return column.name


# A partition is the name-sorted sequence of its columns.
Partition = SortedKeyList


def make_partition(columns: Iterable[Column] = ()) -> Partition:
    """Build a name-sorted partition from columns in any order."""
    return SortedKeyList(columns, key=column_name)


def as_partition(columns: Iterable[Column]) -> Partition:
    """Return ``columns`` as a Partition, wrapping it only when needed."""
    if isinstance(columns, SortedKeyList):
        return columns
    return make_partition(columns)
