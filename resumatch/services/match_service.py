"""Match service for running the resume-to-job matching pipeline.

The pipeline is a straight line of stages, each feeding the next:

    received -> normalized -> embedded -> retrieved -> composed -> done

Any failure stops the run and is raised as a PipelineFailure tagged with
the stage being entered. Nothing is retried and no partial result is
ever returned.
"""

import logging
import threading
from concurrent import futures
from enum import Enum

from resumatch.config import POOL_MAX_SIZE, TOP_JOBS_COUNT
from resumatch.embeddings.generator import embed_resume_text
from resumatch.errors import (
    InvalidInput,
    PipelineCancelled,
    PipelineFailure,
    ResumeMatchError,
)
from resumatch.matching.retriever import query_top_job_listings
from resumatch.resume.normalizer import normalize_resume
from resumatch.schemas.match import MatchResult
from resumatch.schemas.resume import ResumeInput
from resumatch.suggestions.composer import compose_suggestions

logger = logging.getLogger(__name__)

CANCEL_POLL_INTERVAL = 0.05  # seconds

_stage_executor = futures.ThreadPoolExecutor(
    max_workers=POOL_MAX_SIZE, thread_name_prefix="resumatch-stage"
)


class PipelineStage(str, Enum):
    """States of a single match run."""

    RECEIVED = "received"
    NORMALIZED = "normalized"
    EMBEDDED = "embedded"
    RETRIEVED = "retrieved"
    COMPOSED = "composed"
    DONE = "done"


def _ensure_active(cancel_event: threading.Event | None) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise PipelineCancelled("Match request was cancelled.")


def _run_stage(cancel_event: threading.Event | None, func, *args, **kwargs):
    """Run one network-bound stage, abandoning it if the caller cancels.

    Without a cancel event the stage runs on the calling thread. With one,
    it runs on a worker thread while the caller watches the event; on
    cancellation the in-flight call is left to finish in the background
    and its result is discarded.
    """
    if cancel_event is None:
        return func(*args, **kwargs)

    future = _stage_executor.submit(func, *args, **kwargs)
    while True:
        done, _ = futures.wait([future], timeout=CANCEL_POLL_INTERVAL)
        if done:
            return future.result()
        if cancel_event.is_set():
            future.cancel()
            logger.info("Abandoning in-flight call after cancellation")
            raise PipelineCancelled("Match request was cancelled.")


def match_resume(
    resume: ResumeInput,
    top_k: int = TOP_JOBS_COUNT,
    cancel_event: threading.Event | None = None,
) -> MatchResult:
    """Run the full matching pipeline for one resume.

    1. Normalize pasted text and/or uploaded document into resume text
    2. Embed the resume text
    3. Retrieve the top-K closest job listings
    4. Compose improvement suggestions grounded in those listings

    Args:
        resume: Resume sources for this request.
        top_k: Number of listings to retrieve (at least 1).
        cancel_event: Optional event; when set, the in-flight call is
            abandoned and no further stage runs.

    Returns:
        MatchResult with ranked listings and suggestion text.

    Raises:
        PipelineFailure: If any stage fails. Client-caused failures
            (empty input, bad top_k, cancellation) are raised before any
            network call is made.
    """
    stage = PipelineStage.RECEIVED
    try:
        if top_k < 1:
            raise InvalidInput(f"top_k must be at least 1, got {top_k}.")

        _ensure_active(cancel_event)
        stage = PipelineStage.NORMALIZED
        resume_text = normalize_resume(resume)
        logger.info(f"Normalized resume text ({len(resume_text)} chars)")

        _ensure_active(cancel_event)
        stage = PipelineStage.EMBEDDED
        embedding = _run_stage(cancel_event, embed_resume_text, resume_text)
        logger.info(f"Embedded resume (dimension {len(embedding)})")

        _ensure_active(cancel_event)
        stage = PipelineStage.RETRIEVED
        matches = _run_stage(cancel_event, query_top_job_listings, embedding, limit=top_k)
        logger.info(f"Retrieved {len(matches)} matching listings")

        _ensure_active(cancel_event)
        stage = PipelineStage.COMPOSED
        suggestions = _run_stage(cancel_event, compose_suggestions, resume_text, matches)
        logger.info("Composed improvement suggestions")

        stage = PipelineStage.DONE
        return MatchResult(matches=matches, suggestions=suggestions)

    except ResumeMatchError as e:
        failure = PipelineFailure(stage.value, e)
        if failure.is_client_error:
            logger.warning(f"Match rejected at {stage.value}: {failure.message}")
        else:
            logger.error(f"Match failed at {stage.value}: {failure.message}")
        raise failure from e

    except Exception as e:
        logger.exception(f"Unexpected error at {stage.value}")
        raise PipelineFailure(stage.value, e) from e
