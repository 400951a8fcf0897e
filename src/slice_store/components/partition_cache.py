"""Per-batch partition fetch cache.

Deduplicates partition fetches by key within one batch. Only raw fetched
partitions are cached, never evaluation results.
"""

from __future__ import annotations

import logging
import threading

from ..core.types import Partition, PartitionKey, as_partition
from ..interfaces.store import ColumnSource

logger = logging.getLogger(__name__)


class BatchPartitionCache:
    """Fetch-through cache scoped to a single batch call.

    Args:
        source: Column source partitions are read from

    Invariants:
        - Each distinct key is fetched from the source at most once
        - Cached partitions are sorted once, when fetched
        - Fetch errors are not cached and propagate unchanged
        - Thread-safe; concurrent gets of one key may both fetch, last one wins
    """

    def __init__(self, source: ColumnSource):
        self._source = source
        self._partitions: dict[PartitionKey, Partition] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, key: PartitionKey) -> Partition:
        """Return the partition for ``key``, fetching it on first use."""
        with self._lock:
            partition = self._partitions.get(key)
            if partition is not None:
                self.hits += 1
                return partition
            self.misses += 1

        partition = fetch_partition(self._source, key)
        with self._lock:
            self._partitions[key] = partition
        return partition

    def __contains__(self, key: object) -> bool:
        return key in self._partitions

    def __len__(self) -> int:
        return len(self._partitions)


def fetch_partition(source: ColumnSource, key: PartitionKey) -> Partition:
    """Fetch one partition from ``source`` as a sorted Partition.

    Plain sequences are sorted here, once per fetch, so evaluation never
    re-sorts. Failures are logged and re-raised unchanged.
    """
    try:
        columns = source.fetch_partition(key)
    except Exception:
        logger.error(f"Failed to fetch partition {key!r}")
        raise
    return as_partition(columns)
