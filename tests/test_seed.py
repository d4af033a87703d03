import unittest

from src.application.seed import (
    DEFAULT_YOUTUBE_URL,
    HIGH_SEED_SCORE,
    LOW_SEED_SCORE,
    SEED_COUNT,
    build_seed_recommendations,
    seed,
)


class _FakeSeedRepository:
    def __init__(self) -> None:
        self.names = []
        self.scores = {}

    async def create_many(self, items) -> None:
        self.names.extend(item.name for item in items)

    async def find_ids_by_name(self, limit, descending=False):
        ordered = sorted(range(len(self.names)), key=lambda i: self.names[i], reverse=descending)
        return ordered[:limit]

    async def set_score(self, ids, score) -> None:
        for i in ids:
            self.scores[i] = score


class TestSeed(unittest.IsolatedAsyncioTestCase):
    def test_seed_names_are_unique(self) -> None:
        items = build_seed_recommendations()

        self.assertEqual(len(items), SEED_COUNT)
        self.assertEqual(len({item.name for item in items}), SEED_COUNT)
        self.assertTrue(all(item.youtube_link == DEFAULT_YOUTUBE_URL for item in items))

    async def test_seed_splits_scores_by_name_order(self) -> None:
        repository = _FakeSeedRepository()

        await seed(repository)

        self.assertEqual(len(repository.names), SEED_COUNT)
        first_by_name = min(range(SEED_COUNT), key=lambda i: repository.names[i])
        last_by_name = max(range(SEED_COUNT), key=lambda i: repository.names[i])
        self.assertEqual(repository.scores[first_by_name], HIGH_SEED_SCORE)
        self.assertEqual(repository.scores[last_by_name], LOW_SEED_SCORE)
        self.assertEqual(sorted(set(repository.scores.values())), [LOW_SEED_SCORE, HIGH_SEED_SCORE])
