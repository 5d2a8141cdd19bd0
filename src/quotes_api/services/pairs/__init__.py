"""Quote pair counting package."""

from quotes_api.services.pairs.counter import count_valid_pairs
from quotes_api.services.pairs.exceptions import (
    InvalidFrequencyError,
    InvalidLengthError,
    PairCountError,
)
from quotes_api.services.pairs.service import PairsCount, QuotePairService


__all__ = [
    "InvalidFrequencyError",
    "InvalidLengthError",
    "PairCountError",
    "PairsCount",
    "QuotePairService",
    "count_valid_pairs",
]
