from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Literal, Optional

from src.domain.models import Recommendation, RecommendationCreate

# Score boundary used by the random selection pools
RANDOM_SCORE_THRESHOLD = 10
# Ids and row limits are stored as 32-bit integers
MAX_STORED_INT = 2 ** 31 - 1

ScoreDirection = Literal["increment", "decrement"]


class ScoreFilter(str, Enum):
    GREATER_THAN = "gt"
    LESS_OR_EQUAL = "lte"


class RecommendationRepository(ABC):
    """
    Persistence gateway consumed by the recommendation service.
    Implementations own durable storage; the service never caches entities.
    """

    @abstractmethod
    async def find_by_name(self, name: str) -> Optional[Recommendation]:
        """Returns the recommendation with this exact name, or None."""

    @abstractmethod
    async def create(self, data: RecommendationCreate, score: int = 0) -> None:
        """Stores a new recommendation."""

    @abstractmethod
    async def find(self, recommendation_id: int) -> Optional[Recommendation]:
        """Returns the recommendation with this id, or None."""

    @abstractmethod
    async def update_score(self, recommendation_id: int, direction: ScoreDirection) -> Recommendation:
        """Atomically adds or subtracts one point and returns the updated entity."""

    @abstractmethod
    async def remove(self, recommendation_id: int) -> None:
        """Deletes the recommendation. No-op if it does not exist."""

    @abstractmethod
    async def find_all(self, score_filter: Optional[ScoreFilter] = None) -> List[Recommendation]:
        """
        Returns recommendations, newest first.

        Args:
            score_filter (Optional[ScoreFilter]): Restricts the result to scores
                greater than, or less than or equal to, RANDOM_SCORE_THRESHOLD.
        """

    @abstractmethod
    async def get_amount_by_score(self, amount: int) -> List[Recommendation]:
        """Returns at most `amount` recommendations ordered by descending score."""
