"""Top-K retrieval of job listings by cosine similarity.

Uses pgvector's cosine distance operator (``<=>``) in PostgreSQL, or the
in-process ranker when CATALOG_BACKEND is "local". Either way the score
returned is ``1 - distance``, most similar first.
"""

import logging

import psycopg2
from psycopg2.extras import RealDictCursor

from resumatch.config import (
    CATALOG_BACKEND,
    CATALOG_PATH,
    JOB_EMBEDDING_COLUMN,
    JOB_TABLE,
    PGDATABASE,
    PGHOST,
    TOP_JOBS_COUNT,
)
from resumatch.db.connection import get_connection
from resumatch.db.queries import similarity_query, to_vector_literal
from resumatch.errors import InvalidInput, QueryError, redact_secrets
from resumatch.jobs.catalog import load_catalog
from resumatch.matching.ranker import rank_listings
from resumatch.schemas.job import JobListing, RankedMatch

logger = logging.getLogger(__name__)


def query_top_job_listings(
    embedding: list[float],
    limit: int = TOP_JOBS_COUNT,
) -> list[RankedMatch]:
    """Find the listings closest to an embedding.

    Args:
        embedding: Resume embedding vector.
        limit: Maximum number of listings to return (at least 1).

    Returns:
        Up to ``limit`` RankedMatch objects in non-increasing similarity
        order. Empty if the catalog has no rows.

    Raises:
        InvalidInput: If limit is below 1.
        ValueError: If the embedding is empty.
        ConfigurationError: If the table/column names are unsafe or the
            database is not configured.
        QueryError: If the catalog cannot be queried.
    """
    if limit < 1:
        raise InvalidInput(f"Result limit must be at least 1, got {limit}.")
    if not embedding:
        raise ValueError("Cannot query the catalog with an empty embedding")

    if CATALOG_BACKEND == "local":
        matches = _query_local_catalog(embedding, limit)
    else:
        matches = _query_postgres(embedding, limit)

    if not matches:
        logger.warning("No job listings found in catalog")

    # Stable sort: ties keep the order the store returned them in
    matches = sorted(matches, key=lambda m: m.similarity, reverse=True)
    return matches[:limit]


def _query_postgres(embedding: list[float], limit: int) -> list[RankedMatch]:
    statement = similarity_query(JOB_TABLE, JOB_EMBEDDING_COLUMN)
    params = {"embedding": to_vector_literal(embedding), "limit": limit}

    try:
        with get_connection() as conn:
            with conn.cursor(cursor_factory=RealDictCursor) as cursor:
                cursor.execute(statement, params)
                rows = cursor.fetchall()
    except psycopg2.Error as e:
        message = redact_secrets(str(e).strip())
        logger.error(
            f"Database query error (host={PGHOST or 'unknown'}, "
            f"database={PGDATABASE or 'unknown'}, table={JOB_TABLE}): {message}"
        )
        raise QueryError(
            f"Failed to query job listings from {JOB_TABLE}.{JOB_EMBEDDING_COLUMN}: {message}",
            table=JOB_TABLE,
            column=JOB_EMBEDDING_COLUMN,
        ) from e

    logger.info(f"Retrieved {len(rows)} listings from {JOB_TABLE}")
    # A row without an embedding has no score and cannot be ranked
    return [_row_to_match(row) for row in rows if row.get("similarity") is not None]


def _query_local_catalog(embedding: list[float], limit: int) -> list[RankedMatch]:
    entries = load_catalog(CATALOG_PATH)
    try:
        matches = rank_listings(embedding, entries, limit)
    except ValueError as e:
        raise QueryError(
            f"Failed to rank job listings from {CATALOG_PATH}: {e}",
            table=str(CATALOG_PATH),
            column="embedding",
        ) from e

    logger.info(f"Ranked {len(entries)} listings from {CATALOG_PATH}")
    return matches


def _row_to_match(row: dict) -> RankedMatch:
    listing = JobListing(
        id=row["id"],
        title=row.get("title"),
        company=row.get("company"),
        location=row.get("location"),
    )
    return RankedMatch(listing=listing, similarity=float(row["similarity"]))
