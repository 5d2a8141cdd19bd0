"""Pair counting exceptions."""

from __future__ import annotations


class PairCountError(ValueError):
    """Base exception for malformed pair counting input."""


class InvalidFrequencyError(PairCountError):
    """Raised when a length bucket carries a negative quote count."""

    def __init__(self, length: int, frequency: int) -> None:
        self.length = length
        self.frequency = frequency
        super().__init__(
            f"Frequency for length {length} must be non-negative, got {frequency}"
        )


class InvalidLengthError(PairCountError):
    """Raised when a length bucket key is negative."""

    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__(f"Text length must be non-negative, got {length}")
