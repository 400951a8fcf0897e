"""Unit tests for the slice evaluator."""

import string

import pytest

from slice_store.core.evaluator import SimpleSliceEvaluator, evaluate_slice, find_column
from slice_store.core.predicates import SlicePredicate
from slice_store.core.types import Column, make_partition


def names_of(columns):
    return [c.name for c in columns]


@pytest.fixture
def evaluator():
    return SimpleSliceEvaluator()


@pytest.fixture
def alphabet():
    """Partition holding columns a..z with distinct timestamps."""
    return make_partition(
        Column(ch.encode(), b'', 1000 + i) for i, ch in enumerate(string.ascii_lowercase)
    )


def test_names_in_request_order(evaluator, alphabet):
    """Test that names results follow request order, not storage order."""
    result = evaluator.evaluate(alphabet, SlicePredicate.names(b'c', b'a', b'b'))

    assert names_of(result) == [b'c', b'a', b'b']


def test_names_skip_missing_columns(evaluator, alphabet):
    """Test that absent names are omitted without placeholders."""
    result = evaluator.evaluate(alphabet, SlicePredicate.names(b'a', b'missing', b'zz', b'b'))

    assert names_of(result) == [b'a', b'b']


def test_names_return_stored_columns(evaluator, alphabet):
    result = evaluator.evaluate(alphabet, SlicePredicate.names(b'd'))

    assert result == [Column(b'd', b'', 1003)]


def test_empty_names_yield_empty_result(evaluator, alphabet):
    assert evaluator.evaluate(alphabet, SlicePredicate.names()) == []


def test_forward_range_inclusive_bounds(evaluator, alphabet):
    result = evaluator.evaluate(alphabet, SlicePredicate.range(b'c', b'f'))

    assert names_of(result) == [b'c', b'd', b'e', b'f']


def test_forward_range_respects_count(evaluator, alphabet):
    result = evaluator.evaluate(alphabet, SlicePredicate.range(b'a', b'z', 3))

    assert names_of(result) == [b'a', b'b', b'c']


def test_reversed_range_scans_down_from_start(evaluator, alphabet):
    """Test that start is the upper bound of a reversed scan."""
    result = evaluator.evaluate(alphabet, SlicePredicate.range(b'z', b'a', 3, reversed=True))

    assert names_of(result) == [b'z', b'y', b'x']


def test_reversed_range_stops_at_finish(evaluator, alphabet):
    result = evaluator.evaluate(alphabet, SlicePredicate.range(b'e', b'c', 100, reversed=True))

    assert names_of(result) == [b'e', b'd', b'c']


def test_range_bounds_between_stored_names(evaluator):
    """Test bounds that fall between existing column names."""
    partition = make_partition(Column(n, b'', 1) for n in [b'b', b'd', b'f', b'h'])

    forward = evaluator.evaluate(partition, SlicePredicate.range(b'c', b'g'))
    backward = evaluator.evaluate(partition, SlicePredicate.range(b'g', b'c', reversed=True))

    assert names_of(forward) == [b'd', b'f']
    assert names_of(backward) == [b'f', b'd']


def test_zero_count_yields_empty(evaluator, alphabet):
    assert evaluator.evaluate(alphabet, SlicePredicate.range(b'a', b'z', 0)) == []


def test_forward_range_with_crossed_bounds_is_empty(evaluator, alphabet):
    assert evaluator.evaluate(alphabet, SlicePredicate.range(b'z', b'a', 10)) == []


def test_reversed_range_with_crossed_bounds_is_empty(evaluator, alphabet):
    assert evaluator.evaluate(alphabet, SlicePredicate.range(b'a', b'z', 10, reversed=True)) == []


def test_empty_bounds_are_unbounded(evaluator, alphabet):
    """Test that empty start and finish leave the scan open."""
    forward = evaluator.evaluate(alphabet, SlicePredicate.range(b'', b'', 2))
    backward = evaluator.evaluate(alphabet, SlicePredicate.range(b'', b'', 2, reversed=True))
    from_x = evaluator.evaluate(alphabet, SlicePredicate.range(b'x', b''))
    down_to_x = evaluator.evaluate(alphabet, SlicePredicate.range(b'', b'x', reversed=True))

    assert names_of(forward) == [b'a', b'b']
    assert names_of(backward) == [b'z', b'y']
    assert names_of(from_x) == [b'x', b'y', b'z']
    assert names_of(down_to_x) == [b'z', b'y', b'x']


def test_range_past_last_column_is_empty(evaluator, alphabet):
    assert evaluator.evaluate(alphabet, SlicePredicate.range(b'zz', b'zzz')) == []


def test_empty_partition_yields_empty(evaluator):
    partition = make_partition()

    assert evaluator.evaluate(partition, SlicePredicate.names(b'a')) == []
    assert evaluator.evaluate(partition, SlicePredicate.range(b'a', b'z')) == []
    assert evaluator.evaluate(partition, SlicePredicate.range(reversed=True)) == []


def test_plain_sequences_are_accepted(evaluator):
    """Test that unsorted plain lists are normalized before evaluation."""
    columns = [Column(b'c', b'', 3), Column(b'a', b'', 1), Column(b'b', b'', 2)]

    result = evaluator.evaluate(columns, SlicePredicate.range(b'a', b'b'))

    assert names_of(result) == [b'a', b'b']


def test_bytewise_ordering(evaluator):
    """Test that names order bytewise, not by text collation."""
    partition = make_partition(Column(n, b'', 1) for n in [b'a', b'B', b'\x00', b'\xff'])

    result = evaluator.evaluate(partition, SlicePredicate.range())

    assert names_of(result) == [b'\x00', b'B', b'a', b'\xff']


def test_range_results_strictly_ordered(evaluator, alphabet):
    forward = names_of(evaluator.evaluate(alphabet, SlicePredicate.range(b'b', b'q', 50)))
    backward = names_of(evaluator.evaluate(alphabet, SlicePredicate.range(b'q', b'b', 50, reversed=True)))

    assert all(x < y for x, y in zip(forward, forward[1:]))
    assert all(x > y for x, y in zip(backward, backward[1:]))


def test_evaluation_is_idempotent(evaluator, alphabet):
    """Test that repeated evaluation yields identical results."""
    predicate = SlicePredicate.range(b'k', b'c', 4, reversed=True)

    assert evaluator.evaluate(alphabet, predicate) == evaluator.evaluate(alphabet, predicate)
    assert len(alphabet) == 26


def test_evaluate_slice_helper(alphabet):
    assert names_of(evaluate_slice(alphabet, SlicePredicate.names(b'q'))) == [b'q']


def test_find_column(alphabet):
    assert find_column(alphabet, b'm') == Column(b'm', b'', 1012)
    assert find_column(alphabet, b'mm') is None
    assert find_column(make_partition(), b'a') is None
