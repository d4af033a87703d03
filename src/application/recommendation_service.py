import logging
import math
import random
from typing import Callable, List, Optional

from src.domain.exceptions import conflict_error, not_found_error
from src.domain.models import Recommendation, RecommendationCreate
from src.domain.repository import RecommendationRepository, ScoreFilter

logger = logging.getLogger(__name__)

# A downvote leaving the score below this value deletes the recommendation
MIN_SCORE = -5
# Draws below this ratio pick from the well-scored pool
HIGH_SCORE_POOL_RATIO = 0.7
DUPLICATE_NAME_MESSAGE = "Recommendations names must be unique"


class RecommendationService:
    """
    Business rules for the recommendation catalog: unique names, voting,
    automatic removal of badly rated entries, and discovery queries.

    Every operation re-reads the current state through the repository;
    the service holds nothing between calls.
    """

    def __init__(
            self,
            repository: RecommendationRepository,
            random_fn: Optional[Callable[[], float]] = None,
    ):
        self.repository = repository
        self.random_fn = random_fn or random.random

    async def insert(self, data: RecommendationCreate) -> None:
        existing = await self.repository.find_by_name(data.name)
        if existing:
            logger.warning(f"Rejected duplicate recommendation name '{data.name}'.")
            raise conflict_error(DUPLICATE_NAME_MESSAGE)

        await self.repository.create(data)
        logger.info(f"Created recommendation '{data.name}'.")

    async def upvote(self, recommendation_id: int) -> None:
        await self.get_by_id(recommendation_id)
        await self.repository.update_score(recommendation_id, "increment")

    async def downvote(self, recommendation_id: int) -> None:
        """
        Subtracts one point and deletes the recommendation once its score
        falls strictly below MIN_SCORE. A score of exactly MIN_SCORE is kept.
        """
        await self.get_by_id(recommendation_id)

        updated = await self.repository.update_score(recommendation_id, "decrement")
        if updated.score < MIN_SCORE:
            await self.repository.remove(recommendation_id)
            logger.info(f"Removed recommendation {recommendation_id} (score {updated.score}).")

    async def get_by_id(self, recommendation_id: int) -> Recommendation:
        recommendation = await self.repository.find(recommendation_id)
        if not recommendation:
            logger.warning(f"Recommendation {recommendation_id} not found.")
            raise not_found_error()
        return recommendation

    async def get(self) -> List[Recommendation]:
        return await self.repository.find_all()

    async def get_top(self, amount: int) -> List[Recommendation]:
        return await self.repository.get_amount_by_score(amount)

    async def get_random(self) -> Recommendation:
        """
        Picks a random recommendation, favouring well-scored ones.

        A single draw decides both the pool and the index inside it:
        below HIGH_SCORE_POOL_RATIO the pool is scores above the threshold,
        otherwise the rest. An empty pool falls back to every recommendation.
        """
        draw = self.random_fn()
        score_filter = ScoreFilter.GREATER_THAN if draw < HIGH_SCORE_POOL_RATIO else ScoreFilter.LESS_OR_EQUAL

        recommendations = await self.repository.find_all(score_filter)
        if not recommendations:
            recommendations = await self.repository.find_all()

        if not recommendations:
            raise not_found_error()

        return recommendations[math.floor(draw * len(recommendations))]
