from pydantic import BaseModel, ConfigDict, Field, model_validator


class Track(BaseModel):
    """One playlist entry and the artists credited on it, in credit order."""

    id: str | None = None
    name: str = ""
    artist_ids: list[str] = Field(default_factory=list)


class ArtistRecord(BaseModel):
    id: str
    name: str = ""
    genres: list[str] = Field(default_factory=list)


class AggregationResult(BaseModel):
    """
    Snapshot of a finished aggregation run.

    ``total`` is the number of genre-tag hits across all artist occurrences, not the
    artist or track count. It is the denominator for the percentage weighting.
    """

    model_config = ConfigDict(frozen=True)

    tally: dict[str, int] = Field(default_factory=dict)
    total: int = 0
    occurrences: int = 0
    skipped: int = 0

    @model_validator(mode="after")
    def _check_total(self) -> "AggregationResult":
        if self.total != sum(self.tally.values()):
            raise ValueError(f"total {self.total} does not match tally sum {sum(self.tally.values())}")
        return self


class RankedGenre(BaseModel):
    genre: str
    count: int
    percentage: float


class GenreReport(BaseModel):
    playlist_id: str
    genres: list[RankedGenre] = Field(default_factory=list)
    total: int = 0
    occurrences: int = 0
    skipped: int = 0
