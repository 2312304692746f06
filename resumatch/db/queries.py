"""SQL for the job catalog.

Table and column names come from configuration, so they cannot be bound
as query parameters. This module is the only place they are spliced
into SQL, and only after passing the identifier allow-list.
"""

import re

from psycopg2 import sql

from resumatch.errors import ConfigurationError

_IDENTIFIER_PATTERN = re.compile(r"[_a-zA-Z][_a-zA-Z0-9]*")

_SIMILARITY_SQL = """
    SELECT
      id,
      title,
      company,
      location,
      (1 - ({column} <=> %(embedding)s::vector))::float AS similarity
    FROM {table}
    WHERE {column} IS NOT NULL
    ORDER BY {column} <=> %(embedding)s::vector ASC
    LIMIT %(limit)s
"""


def is_safe_identifier(name: str) -> bool:
    return bool(name) and _IDENTIFIER_PATTERN.fullmatch(name) is not None


def safe_identifier(name: str) -> sql.Identifier:
    """Validate a configured SQL identifier.

    Only letters, digits and underscores are allowed, and the name may
    not start with a digit.

    Raises:
        ConfigurationError: If the name fails the allow-list.
    """
    if not is_safe_identifier(name):
        raise ConfigurationError(f"Unsafe SQL identifier: {name!r}")
    return sql.Identifier(name)


def similarity_query(table: str, column: str) -> sql.Composed:
    """Build the top-K cosine distance query for a table/column pair.

    The query expects two bound parameters: ``embedding`` (a pgvector
    text literal) and ``limit``.
    """
    return sql.SQL(_SIMILARITY_SQL).format(
        table=safe_identifier(table),
        column=safe_identifier(column),
    )


def to_vector_literal(embedding: list[float]) -> str:
    """Format an embedding as pgvector text input, e.g. ``[0.1,0.2]``."""
    return "[" + ",".join(repr(float(v)) for v in embedding) + "]"
