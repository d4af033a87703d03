from pydantic import AnyUrl, BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

_URL_ADAPTER = TypeAdapter(AnyUrl)

class RecommendationCreate(BaseModel):
    """
    Payload for submitting a new recommendation.
    Accepts the camelCase wire field `youtubeLink` as well as the Python name.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, str_strip_whitespace=True)

    name: str = Field(..., min_length=1, description="Unique display name of the recommendation")
    youtube_link: str = Field(..., alias="youtubeLink", min_length=1, description="Link to the video")

    @field_validator('youtube_link')
    @classmethod
    def _must_be_url(cls, value: str) -> str:
        try:
            _URL_ADAPTER.validate_python(value)
        except ValidationError:
            raise ValueError("youtubeLink must be a valid URL")
        return value


class Recommendation(BaseModel):
    """
    Immutable domain model representing a stored recommendation.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = Field(..., description="Identifier assigned by the store")
    name: str = Field(..., description="Unique display name")
    youtube_link: str = Field(..., alias="youtubeLink", description="Link to the video")
    score: int = Field(default=0, description="Sum of upvotes minus downvotes")
