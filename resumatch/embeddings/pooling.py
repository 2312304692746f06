"""Decoding of embedding endpoint responses.

The endpoint answers with one of two shapes:

- a flat vector ``[0.1, 0.2, ...]`` of length D, or
- token-level output ``[[...D], [...D], ...]``, one vector per token.

The response is decoded into a tagged variant first, and only then
reduced to a single vector. Anything else is an upstream format error.
"""

import math
from dataclasses import dataclass
from typing import Any

import numpy as np

from resumatch.errors import UpstreamFormatError


@dataclass(frozen=True)
class FlatEmbedding:
    """A single already-pooled vector."""

    values: list[float]


@dataclass(frozen=True)
class TokenEmbeddings:
    """Per-token vectors, all of the same dimensionality."""

    tokens: list[list[float]]


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a valid component
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _decode_flat(payload: Any) -> FlatEmbedding | None:
    if not isinstance(payload, list) or not payload:
        return None
    if not all(_is_number(v) for v in payload):
        return None
    return FlatEmbedding(values=[float(v) for v in payload])


def _decode_tokens(payload: Any) -> TokenEmbeddings | None:
    if not isinstance(payload, list) or not payload:
        return None

    rows = [_decode_flat(row) for row in payload]
    if any(row is None for row in rows):
        return None

    dims = {len(row.values) for row in rows}
    if len(dims) != 1:
        return None
    return TokenEmbeddings(tokens=[row.values for row in rows])


def parse_embedding_response(payload: Any) -> FlatEmbedding | TokenEmbeddings:
    """Decode an endpoint payload into a tagged embedding variant.

    Args:
        payload: Decoded JSON body from the embedding endpoint.

    Returns:
        FlatEmbedding or TokenEmbeddings.

    Raises:
        UpstreamFormatError: If the payload is neither shape.
    """
    flat = _decode_flat(payload)
    if flat is not None:
        return flat

    tokens = _decode_tokens(payload)
    if tokens is not None:
        return tokens

    raise UpstreamFormatError(
        f"Unexpected embedding response shape: {_describe(payload)}"
    )


def mean_pool(tokens: list[list[float]]) -> list[float]:
    """Average token vectors component-wise (no attention-mask weighting).

    Raises:
        UpstreamFormatError: If there are no tokens (dimensionality 0).
    """
    if not tokens or not tokens[0]:
        raise UpstreamFormatError("Cannot pool an empty token sequence (dimensionality 0)")
    return np.asarray(tokens, dtype=float).mean(axis=0).tolist()


def to_vector(response: FlatEmbedding | TokenEmbeddings) -> list[float]:
    """Reduce a decoded response to a single embedding vector."""
    if isinstance(response, FlatEmbedding):
        return response.values
    return mean_pool(response.tokens)


def _describe(payload: Any) -> str:
    if isinstance(payload, list):
        if not payload:
            return "empty list"
        return f"list of {type(payload[0]).__name__} (length {len(payload)})"
    return type(payload).__name__
