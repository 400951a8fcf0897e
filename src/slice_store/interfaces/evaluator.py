"""Protocol definition for slice evaluators."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from ..core.predicates import SlicePredicate
from ..core.types import Column


class SliceEvaluator(Protocol):
    """Evaluates one predicate against one partition."""

    def evaluate(self, columns: Iterable[Column], predicate: SlicePredicate) -> list[Column]:
        """Return the selected columns, in result order. Must be side-effect free."""
        ...
