"""Protocol definition for the column source a batch reads from."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from ..core.types import Column, PartitionKey


class ColumnSource(Protocol):
    """Read interface onto a sorted wide-column store.

    Consistency, retry and replica selection are resolved behind this call.
    """

    def fetch_partition(self, key: PartitionKey) -> Sequence[Column]:
        """Return the name-sorted columns of ``key`` as of query time.

        An unknown key yields an empty sequence. Failures surface as
        exceptions, typically PartitionFetchError.
        """
        ...
