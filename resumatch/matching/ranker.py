"""In-process cosine ranking for the local job catalog."""

import numpy as np
from sklearn.metrics.pairwise import cosine_similarity

from resumatch.schemas.job import CatalogEntry, RankedMatch


def compute_similarities_batch(
    query_embedding: np.ndarray,
    listing_embeddings: np.ndarray,
) -> np.ndarray:
    """Compute cosine similarity between the query and multiple listings.

    Scores are not clipped; dissimilar listings can score below zero.

    Args:
        query_embedding: Resume embedding vector (1D).
        listing_embeddings: Listing embedding matrix (n_listings, n_features).

    Returns:
        Array of similarity scores (n_listings,).
    """
    # Sklearn expects 2D arrays (samples, features)
    return cosine_similarity(
        query_embedding.reshape(1, -1),
        listing_embeddings,
    )[0]


def rank_listings(
    query_embedding: list[float],
    entries: list[CatalogEntry],
    limit: int,
) -> list[RankedMatch]:
    """Rank catalog entries by cosine similarity to the query.

    Args:
        query_embedding: Resume embedding vector.
        entries: Catalog entries with embeddings of the same dimension.
        limit: Maximum number of results to return.

    Returns:
        Up to ``limit`` RankedMatch objects, most similar first. Ties keep
        catalog order.

    Raises:
        ValueError: If an entry's dimension differs from the query's.
    """
    if not entries:
        return []

    query = np.asarray(query_embedding, dtype=float)
    for entry in entries:
        if len(entry.embedding) != query.shape[0]:
            raise ValueError(
                f"Listing {entry.id} has dimension {len(entry.embedding)}, "
                f"expected {query.shape[0]}"
            )

    matrix = np.vstack([np.asarray(entry.embedding, dtype=float) for entry in entries])
    scores = compute_similarities_batch(query, matrix)

    order = np.argsort(-scores, kind="stable")[:limit]
    return [
        RankedMatch(listing=entries[i].to_listing(), similarity=float(scores[i]))
        for i in order
    ]
