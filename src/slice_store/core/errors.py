"""Exception hierarchy for the slice store.

Defines all custom exceptions used throughout the implementation.
"""

from __future__ import annotations


class SliceQueryError(Exception):
    """Base exception for all slice store errors."""
    pass


class InvalidPredicateError(SliceQueryError):
    """Raised when a slice or key predicate is malformed.

    A batch containing an invalid predicate is rejected before any
    partition is fetched.
    """
    pass


class PartitionFetchError(SliceQueryError):
    """Raised by column sources when a partition cannot be read."""
    pass
