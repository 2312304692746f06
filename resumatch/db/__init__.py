"""Database connection module."""

from resumatch.db.connection import close_pool, get_connection, get_pool
from resumatch.db.queries import safe_identifier, similarity_query, to_vector_literal

__all__ = [
    "get_connection",
    "get_pool",
    "close_pool",
    "safe_identifier",
    "similarity_query",
    "to_vector_literal",
]
