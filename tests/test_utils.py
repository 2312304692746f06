"""Shared test utility functions."""

import json
from pathlib import Path
from unittest.mock import MagicMock

from resumatch.schemas.job import CatalogEntry, JobListing, RankedMatch


def make_test_listing(
    id: str | int,
    title: str = "Software Engineer",
    company: str | None = "Acme",
    location: str | None = "Remote",
) -> JobListing:
    """Create a dummy listing for testing."""
    return JobListing(id=id, title=title, company=company, location=location)


def make_test_match(id: str | int, similarity: float, title: str = "Software Engineer") -> RankedMatch:
    """Create a dummy ranked match for testing."""
    return RankedMatch(listing=make_test_listing(id, title=title), similarity=similarity)


def make_catalog_entry(
    id: str | int,
    embedding: list[float],
    title: str = "Software Engineer",
) -> CatalogEntry:
    """Create a dummy catalog entry for testing."""
    return CatalogEntry(id=id, title=title, company="Acme", location="Remote", embedding=embedding)


def write_catalog(path: Path, entries: list[CatalogEntry]) -> Path:
    """Write catalog entries to a local JSON catalog file."""
    path.write_text(json.dumps([entry.model_dump() for entry in entries]))
    return path


def make_response(status_code: int = 200, json_body=None, text: str = "") -> MagicMock:
    """Create a fake requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.reason = "Error" if not response.ok else "OK"
    response.text = text
    if json_body is None:
        response.json.side_effect = ValueError("No JSON")
    else:
        response.json.return_value = json_body
    return response
