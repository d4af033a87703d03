import logging
import random
import uuid
from typing import List

from src.domain.models import RecommendationCreate
from src.infrastructure.database import PostgresRepository

logger = logging.getLogger(__name__)

DEFAULT_YOUTUBE_URL = "https://www.youtube.com/watch?v=QH2-TGUlwu4"
SEED_COUNT = 20
SEED_GROUP_SIZE = 10
HIGH_SEED_SCORE = 50
LOW_SEED_SCORE = -4

_NAME_WORDS = [
    "Aurora", "Blue", "Echo", "Falling", "Golden", "Harbor", "Midnight",
    "Neon", "Ocean", "Paper", "Quiet", "River", "Silver", "Velvet", "Winter",
]


def build_seed_recommendations(count: int = SEED_COUNT) -> List[RecommendationCreate]:
    """Random, unique names pointing at the same default video."""
    return [
        RecommendationCreate(
            name=f"{random.choice(_NAME_WORDS)} {uuid.uuid4().hex[:8]}",
            youtube_link=DEFAULT_YOUTUBE_URL,
        )
        for _ in range(count)
    ]


async def seed(repository: PostgresRepository) -> None:
    """
    Fills the catalog with sample data so every discovery path has candidates:
    the first names alphabetically get a high score, the last ones a score
    just above the removal threshold.
    """
    await repository.create_many(build_seed_recommendations())

    top_ids = await repository.find_ids_by_name(SEED_GROUP_SIZE)
    await repository.set_score(top_ids, HIGH_SEED_SCORE)

    bottom_ids = await repository.find_ids_by_name(SEED_GROUP_SIZE, descending=True)
    await repository.set_score(bottom_ids, LOW_SEED_SCORE)

    logger.info(
        f"Seed completed: {SEED_COUNT} recommendations, "
        f"{len(top_ids)} set to {HIGH_SEED_SCORE}, {len(bottom_ids)} set to {LOW_SEED_SCORE}."
    )
