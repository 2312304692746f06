from pydantic import BaseModel, Field

SUMMARY_FIELDS = ("id", "title", "company", "location")


class JobListing(BaseModel):
    """A job listing read from the catalog. Never modified by the pipeline."""

    id: str | int = Field(description="Unique identifier for the listing")
    title: str | None = Field(default=None, description="Job title")
    company: str | None = Field(default=None, description="Company name")
    location: str | None = Field(default=None, description="Job location")

    def summary(self) -> dict:
        """Identifier and descriptive fields only."""
        return self.model_dump(include=set(SUMMARY_FIELDS))


class CatalogEntry(JobListing):
    """A listing together with its precomputed embedding (local catalog)."""

    embedding: list[float] = Field(description="Precomputed embedding of the listing")

    def to_listing(self) -> JobListing:
        return JobListing(**self.model_dump(exclude={"embedding"}))


class RankedMatch(BaseModel):
    """A listing paired with its similarity to the resume."""

    listing: JobListing = Field(description="The matched job listing")
    similarity: float = Field(
        description="1 - cosine distance; a relative ranking signal, not a probability"
    )
