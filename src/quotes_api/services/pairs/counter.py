"""Counting quote pairs whose combined text length fits a bound.

The input is a length-frequency map: text length -> number of quotes with
exactly that length. A pair is two distinct quotes, counted once regardless
of order, so ``k`` quotes of the same length contribute ``k*(k-1)/2`` pairs
among themselves and ``f_a * f_b`` pairs with every other compatible bucket.

Sorting the distinct lengths makes the compatible partners of a bucket a
contiguous run of larger lengths, found with one binary search and summed
with a prefix-sum lookup. Total cost is O(n log n) in the number of distinct
lengths, independent of how many quotes the corpus holds.
"""

from __future__ import annotations

from bisect import bisect_right
from itertools import accumulate
from typing import TYPE_CHECKING

from quotes_api.services.pairs.exceptions import (
    InvalidFrequencyError,
    InvalidLengthError,
)


if TYPE_CHECKING:
    from collections.abc import Mapping


def _validated_buckets(length_frequency: Mapping[int, int]) -> list[tuple[int, int]]:
    """Return (length, frequency) pairs sorted by length, rejecting bad input."""
    buckets = sorted(length_frequency.items())
    for length, frequency in buckets:
        if length < 0:
            raise InvalidLengthError(length)
        if frequency < 0:
            raise InvalidFrequencyError(length, frequency)
    return buckets


def count_valid_pairs(length_frequency: Mapping[int, int], max_length: int) -> int:
    """Count unordered pairs of quotes with ``len(a) + len(b) <= max_length``.

    Args:
        length_frequency: Text length -> number of quotes of that length.
            Lengths above ``max_length`` may be present and are ignored.
        max_length: Maximum allowed combined length. Negative bounds yield 0.

    Returns:
        Number of unordered pairs of distinct quotes within the bound.

    Raises:
        InvalidFrequencyError: If any frequency is negative.
        InvalidLengthError: If any length is negative.
    """
    buckets = _validated_buckets(length_frequency)
    if max_length < 0 or not buckets:
        return 0

    lengths = [length for length, _ in buckets]
    frequencies = [frequency for _, frequency in buckets]
    # prefix[k] == sum(frequencies[:k])
    prefix = [0, *accumulate(frequencies)]

    total = 0
    for i, (length, frequency) in enumerate(buckets):
        if frequency == 0:
            continue
        if 2 * length > max_length:
            # Every later bucket is at least as long, so nothing else fits
            break

        total += frequency * (frequency - 1) // 2

        # Last index j > i with lengths[j] <= max_length - length
        end = bisect_right(lengths, max_length - length, lo=i + 1)
        if end > i + 1:
            total += frequency * (prefix[end] - prefix[i + 1])

    return total


__all__ = ["count_valid_pairs"]
