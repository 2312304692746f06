"""Local job catalog stored as a JSON file (local development only).

The file holds a JSON array of listings, each with a precomputed
embedding of the same dimensionality as the resume embeddings:

    [{"id": "job-1", "title": "...", "company": "...", "location": "...",
      "embedding": [0.01, ...]}]
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from resumatch.errors import QueryError
from resumatch.schemas.job import CatalogEntry

logger = logging.getLogger(__name__)


def load_catalog(path: Path) -> list[CatalogEntry]:
    """Load catalog entries from a JSON file.

    Args:
        path: Path to the catalog file.

    Returns:
        Entries in file order.

    Raises:
        QueryError: If the file is missing or not a valid catalog.
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise QueryError(
            f"Job catalog file not found: {path}", table=str(path), column="embedding"
        ) from e
    except (OSError, json.JSONDecodeError) as e:
        raise QueryError(
            f"Failed to read job catalog {path}: {e}", table=str(path), column="embedding"
        ) from e

    if not isinstance(data, list):
        raise QueryError(
            f"Job catalog {path} must contain a JSON array", table=str(path), column="embedding"
        )

    try:
        entries = [CatalogEntry(**item) for item in data]
    except (TypeError, ValidationError) as e:
        raise QueryError(
            f"Invalid job catalog entry in {path}: {e}", table=str(path), column="embedding"
        ) from e

    logger.debug(f"Loaded {len(entries)} listings from {path}")
    return entries
