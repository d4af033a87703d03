import logging
from typing import Iterable, List, Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy import Table, Column, String, Integer, MetaData, text, select, insert, update, delete

from src.domain.exceptions import DatabaseException, conflict_error, not_found_error
from src.domain.models import Recommendation, RecommendationCreate
from src.domain.repository import (
    MAX_STORED_INT,
    RANDOM_SCORE_THRESHOLD,
    RecommendationRepository,
    ScoreDirection,
    ScoreFilter,
)
from src.infrastructure.acl import RecommendationTranslator

logger = logging.getLogger(__name__)

# SQLAlchemy core Table definition
metadata = MetaData()
recommendations_table = Table(
    'recommendations', metadata,
    Column('id', Integer, primary_key=True, autoincrement=True),
    Column('name', String, nullable=False, unique=True),
    Column('youtube_link', String, nullable=False),
    Column('score', Integer, nullable=False, server_default=text('0')),
)

class PostgresRepository(RecommendationRepository):
    """
    Repository class for interacting with the PostgreSQL database.
    Every method runs in its own transaction; score changes are single atomic UPDATE statements.
    """

    def __init__(self, db_url: str):
        self.engine = create_async_engine(db_url, echo=False)

    async def create_schema(self) -> None:
        """Creates the recommendations table if it does not exist yet."""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(metadata.create_all)
        except SQLAlchemyError as e:
            raise DatabaseException(f"Failed to create schema: {e}") from e

    async def dispose(self) -> None:
        await self.engine.dispose()

    async def _fetch_one(self, stmt) -> Optional[Recommendation]:
        async with self.engine.begin() as conn:
            result = await conn.execute(stmt)
            row = result.mappings().first()
        return RecommendationTranslator.to_domain(row) if row else None

    async def _fetch_all(self, stmt) -> List[Recommendation]:
        async with self.engine.begin() as conn:
            result = await conn.execute(stmt)
            rows = result.mappings().all()
        return [RecommendationTranslator.to_domain(row) for row in rows]

    async def find_by_name(self, name: str) -> Optional[Recommendation]:
        stmt = select(recommendations_table).where(recommendations_table.c.name == name)
        return await self._fetch_one(stmt)

    async def find(self, recommendation_id: int) -> Optional[Recommendation]:
        if recommendation_id > MAX_STORED_INT:
            return None  # No such row can exist
        stmt = select(recommendations_table).where(recommendations_table.c.id == recommendation_id)
        return await self._fetch_one(stmt)

    async def create(self, data: RecommendationCreate, score: int = 0) -> None:
        stmt = insert(recommendations_table).values(
            name=data.name,
            youtube_link=data.youtube_link,
            score=score,
        )
        try:
            async with self.engine.begin() as conn:
                await conn.execute(stmt)
        except IntegrityError as e:
            # Unique index on name: a concurrent insert won the race after the service's lookup
            logger.warning(f"Integrity error inserting '{data.name}': {e.orig}")
            raise conflict_error("Recommendations names must be unique") from e

    async def create_many(self, items: Iterable[RecommendationCreate]) -> None:
        """
        Inserts multiple recommendations in a single batch operation.

        Args:
            items (Iterable[RecommendationCreate]): Recommendations to insert with score 0.
        """
        values = [{'name': item.name, 'youtube_link': item.youtube_link} for item in items]
        if not values:
            return  # Nothing to insert

        async with self.engine.begin() as conn:
            await conn.execute(insert(recommendations_table).values(values))

    async def update_score(self, recommendation_id: int, direction: ScoreDirection) -> Recommendation:
        if direction not in ("increment", "decrement"):
            raise ValueError(f"Unknown score direction: {direction}")

        score = recommendations_table.c.score
        new_score = score + 1 if direction == "increment" else score - 1
        stmt = (
            update(recommendations_table)
            .where(recommendations_table.c.id == recommendation_id)
            .values(score=new_score)
            .returning(*recommendations_table.c)
        )
        updated = await self._fetch_one(stmt)
        if updated is None:
            # Row disappeared between the service's lookup and this update
            raise not_found_error()
        return updated

    async def set_score(self, recommendation_ids: List[int], score: int) -> None:
        if not recommendation_ids:
            return

        stmt = (
            update(recommendations_table)
            .where(recommendations_table.c.id.in_(recommendation_ids))
            .values(score=score)
        )
        async with self.engine.begin() as conn:
            await conn.execute(stmt)

    async def remove(self, recommendation_id: int) -> None:
        stmt = delete(recommendations_table).where(recommendations_table.c.id == recommendation_id)
        async with self.engine.begin() as conn:
            await conn.execute(stmt)

    async def delete_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.execute(delete(recommendations_table))

    async def find_all(self, score_filter: Optional[ScoreFilter] = None) -> List[Recommendation]:
        stmt = select(recommendations_table).order_by(recommendations_table.c.id.desc())

        if score_filter == ScoreFilter.GREATER_THAN:
            stmt = stmt.where(recommendations_table.c.score > RANDOM_SCORE_THRESHOLD)
        elif score_filter == ScoreFilter.LESS_OR_EQUAL:
            stmt = stmt.where(recommendations_table.c.score <= RANDOM_SCORE_THRESHOLD)

        return await self._fetch_all(stmt)

    async def find_ids_by_name(self, limit: int, descending: bool = False) -> List[int]:
        """Returns the ids of the first `limit` recommendations in name order."""
        order = recommendations_table.c.name.desc() if descending else recommendations_table.c.name.asc()
        stmt = select(recommendations_table.c.id).order_by(order).limit(limit)

        async with self.engine.begin() as conn:
            result = await conn.execute(stmt)
            return list(result.scalars().all())

    async def get_amount_by_score(self, amount: int) -> List[Recommendation]:
        if amount <= 0:
            return []

        stmt = (
            select(recommendations_table)
            .order_by(recommendations_table.c.score.desc(), recommendations_table.c.id.asc())
            .limit(amount)
        )
        return await self._fetch_all(stmt)
