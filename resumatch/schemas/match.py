from pydantic import BaseModel, Field

from resumatch.schemas.job import RankedMatch


class MatchResult(BaseModel):
    """Result of matching a resume against the job catalog."""

    matches: list[RankedMatch] = Field(
        default_factory=list,
        description="Closest listings, ordered by non-increasing similarity"
    )
    suggestions: str = Field(
        description="Markdown improvement suggestions generated by the LLM"
    )

    def to_response(self) -> dict:
        """Render the result in the JSON shape returned to clients."""
        return {
            "jobs": [
                {**match.listing.summary(), "similarity": match.similarity}
                for match in self.matches
            ],
            "suggestions": self.suggestions,
        }
