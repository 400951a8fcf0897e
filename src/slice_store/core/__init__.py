"""Slice store core."""

from .evaluator import SimpleSliceEvaluator
from .executor import BatchSliceExecutor, BatchSliceResult, SliceResult

__all__ = ["SimpleSliceEvaluator", "BatchSliceExecutor", "BatchSliceResult", "SliceResult"]
