"""Configuration for batch slice queries.

Defines the tunable parameters of the batch executor.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class SliceQueryConfig:
    """Configuration parameters for BatchSliceExecutor.

    Attributes:
        dedupe_fetches: Share one partition fetch per distinct key in a batch
        fetch_workers: Number of threads fetching partitions (1 = sequential)
    """

    dedupe_fetches: bool = True
    fetch_workers: int = 1

    def __post_init__(self) -> None:
        if self.fetch_workers < 1:
            raise ValueError(f"fetch_workers must be >= 1, got {self.fetch_workers}")
