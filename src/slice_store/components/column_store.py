"""In-memory column store.

Holds partitions as sorted name -> column maps using
sortedcontainers.SortedDict and serves immutable partition snapshots.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Iterator

from sortedcontainers import SortedDict

from ..core.types import (
    Column,
    ColumnName,
    Partition,
    PartitionKey,
    Timestamp,
    Value,
    make_partition,
)

logger = logging.getLogger(__name__)


class SimpleColumnStore:
    """Wide-column partitions kept in memory.

    Public API:
        - insert(key, name, value, timestamp=None): Write one column
        - insert_column(key, column): Write a prebuilt column
        - fetch_partition(key): Snapshot of a partition's sorted columns
        - partition_keys(): Keys of all partitions in sorted order
        - column_count(key): Number of columns in a partition

    Invariants:
        - Column names within a partition are unique and kept sorted
        - Last write wins by timestamp; an older write never replaces a newer one
        - Generated timestamps are monotonically increasing
        - Fetched partitions are copies, unaffected by later writes
    """

    def __init__(self):
        self._partitions: dict[PartitionKey, SortedDict] = {}
        self._lock = threading.Lock()
        self._timestamp_counter = int(time.time() * 1000)  # milliseconds

    def _next_timestamp(self) -> Timestamp:
        """Generate monotonically increasing timestamp (must hold lock)."""
        self._timestamp_counter += 1
        return self._timestamp_counter

    def insert(
        self,
        key: PartitionKey,
        name: ColumnName,
        value: Value,
        timestamp: Timestamp | None = None,
    ) -> Column:
        """Write a column, returning the column the partition now holds."""
        with self._lock:
            if timestamp is None:
                timestamp = self._next_timestamp()
            else:
                self._timestamp_counter = max(self._timestamp_counter, timestamp)
            return self._reconcile_locked(key, Column(name, value, timestamp))

    def insert_column(self, key: PartitionKey, column: Column) -> Column:
        """Write a prebuilt column with its own timestamp."""
        with self._lock:
            self._timestamp_counter = max(self._timestamp_counter, column.timestamp)
            return self._reconcile_locked(key, column)

    def _reconcile_locked(self, key: PartitionKey, column: Column) -> Column:
        row = self._partitions.setdefault(key, SortedDict())
        existing = row.get(column.name)
        if existing is not None and existing.timestamp > column.timestamp:
            logger.debug(f"Ignoring stale write to {key!r}/{column.name!r}")
            return existing
        row[column.name] = column
        return column

    def fetch_partition(self, key: PartitionKey) -> Partition:
        """Return a snapshot of the partition's columns in name order."""
        with self._lock:
            row = self._partitions.get(key)
            if row is None:
                return make_partition()
            return make_partition(row.values())

    def partition_keys(self) -> Iterator[PartitionKey]:
        with self._lock:
            keys = sorted(self._partitions)
        yield from keys

    def column_count(self, key: PartitionKey) -> int:
        with self._lock:
            row = self._partitions.get(key)
            return len(row) if row is not None else 0

    def __len__(self) -> int:
        return len(self._partitions)
