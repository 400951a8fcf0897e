"""Batch slice executor - main public API.

Validates a batch of key predicates, fetches the partitions they target and
evaluates every predicate independently against its partition.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from ..components.partition_cache import BatchPartitionCache, fetch_partition
from ..interfaces.evaluator import SliceEvaluator
from ..interfaces.store import ColumnSource
from .config import SliceQueryConfig
from .evaluator import SimpleSliceEvaluator
from .predicates import KeyPredicate, validate_requests
from .types import Column, Partition, PartitionKey

logger = logging.getLogger(__name__)

# Handles are submission indexes into the batch.
RequestHandle = int


@dataclass(frozen=True)
class SliceResult:
    """Evaluated columns for one submitted request."""

    handle: RequestHandle
    request: KeyPredicate
    columns: tuple[Column, ...]


class BatchSliceResult(Mapping[RequestHandle, tuple[Column, ...]]):
    """Ordered mapping from request handle to that request's columns.

    Keyed by submission index rather than by predicate value, so requests
    with equal key and predicate remain separate entries. Iteration follows
    submission order and the length always equals the batch size.
    """

    def __init__(self, results: Sequence[SliceResult]):
        self._results = tuple(results)

    def __getitem__(self, handle: RequestHandle) -> tuple[Column, ...]:
        return self._slice_result(handle).columns

    def __iter__(self) -> Iterator[RequestHandle]:
        return iter(range(len(self._results)))

    def __len__(self) -> int:
        return len(self._results)

    def __repr__(self) -> str:
        return f"BatchSliceResult({list(self._results)!r})"

    def _slice_result(self, handle: RequestHandle) -> SliceResult:
        if isinstance(handle, bool) or not isinstance(handle, int) or not 0 <= handle < len(self._results):
            raise KeyError(handle)
        return self._results[handle]

    def request(self, handle: RequestHandle) -> KeyPredicate:
        """Return the request submitted under ``handle``."""
        return self._slice_result(handle).request

    def results(self) -> Iterator[SliceResult]:
        return iter(self._results)

    def pairs(self) -> Iterator[tuple[KeyPredicate, tuple[Column, ...]]]:
        """Yield (request, columns) in submission order."""
        for result in self._results:
            yield result.request, result.columns

    def handle_of(self, request: KeyPredicate) -> RequestHandle:
        """Return the handle of the submitted object ``request`` (by identity)."""
        for result in self._results:
            if result.request is request:
                return result.handle
        raise KeyError(request)

    def get_for(self, request: KeyPredicate) -> tuple[Column, ...]:
        """Return the columns of the submitted object ``request`` (by identity)."""
        return self._results[self.handle_of(request)].columns


class BatchSliceExecutor:
    """Evaluates batches of key predicates against a column source.

    Args:
        source: Column source partitions are fetched from
        config: Executor configuration
        evaluator: Slice evaluator (defaults to SimpleSliceEvaluator)

    Public API:
        - execute(requests): Evaluate a batch, returning a BatchSliceResult

    Invariants:
        - The whole batch is validated before any partition is fetched
        - Output size equals input size; requests are never merged
        - Each request is evaluated on its own; only raw fetches are shared
        - Fetch errors abort the batch and propagate unchanged
    """

    def __init__(
        self,
        source: ColumnSource,
        config: SliceQueryConfig | None = None,
        evaluator: SliceEvaluator | None = None,
    ):
        self.source = source
        self.config = config if config is not None else SliceQueryConfig()
        self._evaluator = evaluator if evaluator is not None else SimpleSliceEvaluator()

    def execute(self, requests: Iterable[KeyPredicate]) -> BatchSliceResult:
        """Evaluate every request of the batch, in submission order."""
        requests = list(requests)
        validate_requests(requests)

        partitions = self._fetch_partitions(requests)

        results = []
        for handle, (request, partition) in enumerate(zip(requests, partitions, strict=True)):
            columns = self._evaluator.evaluate(partition, request.predicate)
            results.append(SliceResult(handle, request, tuple(columns)))

        return BatchSliceResult(results)

    def _fetch_partitions(self, requests: list[KeyPredicate]) -> list[Partition]:
        """Return the fetched partition of each request, index-aligned."""
        if not self.config.dedupe_fetches:
            logger.debug(f"Fetching {len(requests)} partitions without dedupe")
            return self._run_fetches(
                lambda key: fetch_partition(self.source, key),
                [request.key for request in requests],
            )

        cache = BatchPartitionCache(self.source)
        distinct_keys = list(dict.fromkeys(request.key for request in requests))
        self._run_fetches(cache.get, distinct_keys)
        logger.debug(
            f"Fetched {len(distinct_keys)} distinct partitions for {len(requests)} requests"
        )
        return [cache.get(request.key) for request in requests]

    def _run_fetches(
        self,
        fetch: Callable[[PartitionKey], Partition],
        keys: list[PartitionKey],
    ) -> list[Partition]:
        workers = min(self.config.fetch_workers, len(keys))
        if workers <= 1:
            return [fetch(key) for key in keys]

        # map() yields in key order and re-raises the first failure unchanged.
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="PartitionFetch") as pool:
            return list(pool.map(fetch, keys))


def batch_slice_query(
    source: ColumnSource,
    requests: Iterable[KeyPredicate],
    config: SliceQueryConfig | None = None,
) -> BatchSliceResult:
    """Evaluate one batch of key predicates against ``source``."""
    return BatchSliceExecutor(source, config).execute(requests)
