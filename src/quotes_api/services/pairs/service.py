"""Quote pair counting service.

Counts unordered pairs of quotes whose combined text length is at most a
bound. The count is either computed in process over the length-frequency
map, or pushed down into a single SQL aggregate; both give the same answer.
"""

from __future__ import annotations

from pydantic import BaseModel

from quotes_api.core.config import PairCountStrategy
from quotes_api.database.repositories.quote import QuoteRepository
from quotes_api.observability.logging import get_logger
from quotes_api.observability.metrics import PAIR_COUNT_COMPUTATIONS
from quotes_api.services.pairs.counter import count_valid_pairs


logger = get_logger(__name__)

# Text lengths are PostgreSQL integers; larger bounds admit every pair anyway
_PG_INT_MAX = 2**31 - 1


class PairsCount(BaseModel):
    """Pair count result paired with the bound it was computed for."""

    count: int
    max_length: int


class QuotePairService:
    """Service answering "how many quote pairs fit within N characters"."""

    def __init__(
        self,
        repository: QuoteRepository | None = None,
        strategy: PairCountStrategy = PairCountStrategy.IN_PROCESS,
    ) -> None:
        self._repository = repository or QuoteRepository()
        self._strategy = PairCountStrategy(strategy)

    @property
    def strategy(self) -> PairCountStrategy:
        """The configured counting strategy."""
        return self._strategy

    async def count_pairs_with_max_length(self, max_length: int) -> PairsCount:
        """Count pairs of quotes with combined text length <= ``max_length``.

        A negative bound admits no pair and returns 0 without a query.
        """
        if max_length < 0:
            return PairsCount(count=0, max_length=max_length)

        bound = min(max_length, _PG_INT_MAX)
        if self._strategy == PairCountStrategy.DATABASE:
            count = await self._repository.count_possible_pairs(bound)
        else:
            frequencies = await self._repository.get_length_frequency(bound)
            count = count_valid_pairs(frequencies, bound)

        PAIR_COUNT_COMPUTATIONS.labels(strategy=self._strategy.value).inc()
        logger.debug(
            "Counted quote pairs",
            max_length=max_length,
            strategy=self._strategy.value,
            count=count,
        )
        return PairsCount(count=count, max_length=max_length)
