"""Slice Store - batched multi-slice reads over sorted wide-column partitions."""

from .components.column_store import SimpleColumnStore
from .core.config import SliceQueryConfig
from .core.errors import (
    SliceQueryError,
    InvalidPredicateError,
    PartitionFetchError,
)
from .core.evaluator import SimpleSliceEvaluator, evaluate_slice
from .core.executor import (
    BatchSliceExecutor,
    BatchSliceResult,
    SliceResult,
    batch_slice_query,
)
from .core.predicates import KeyPredicate, SlicePredicate, SliceRange
from .core.types import Column, ColumnName, Partition, PartitionKey, Timestamp, Value

__all__ = [
    "SliceQueryConfig",
    "SliceQueryError",
    "InvalidPredicateError",
    "PartitionFetchError",
    "SimpleColumnStore",
    "SimpleSliceEvaluator",
    "evaluate_slice",
    "BatchSliceExecutor",
    "BatchSliceResult",
    "SliceResult",
    "batch_slice_query",
    "KeyPredicate",
    "SlicePredicate",
    "SliceRange",
    "Column",
    "ColumnName",
    "Partition",
    "PartitionKey",
    "Timestamp",
    "Value",
]
