from typing import Any, Dict, Mapping
from src.domain.models import Recommendation

class RecommendationTranslator:
    """
    Anti-corruption layer between storage rows, the domain model and the JSON wire format.
    """

    @staticmethod
    def to_domain(row: Mapping[str, Any]) -> Recommendation:
        """
        Transforms a `recommendations` table row into a Recommendation.

        Args:
            row (Mapping[str, Any]): Column name to value mapping, e.g. `Row._mapping`.

        Returns:
            Recommendation: The domain model instance.
        """
        if row.get('id') is None:
            raise ValueError("id is required to build Recommendation.")

        return Recommendation(
            id=row['id'],
            name=row.get('name', ''),
            youtube_link=row.get('youtube_link', ''),
            score=row.get('score', 0),
        )

    @staticmethod
    def to_wire(entity: Recommendation) -> Dict[str, Any]:
        """Serializes a Recommendation with the camelCase field names clients expect."""
        return entity.model_dump(by_alias=True)
