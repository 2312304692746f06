"""Service layer for ResuMatch."""

from resumatch.services.match_service import PipelineStage, match_resume

__all__ = [
    "PipelineStage",
    "match_resume",
]
