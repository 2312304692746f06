import logging

from resumatch.config import EMBEDDING_DIMENSION
from resumatch.embeddings.hf_client import request_feature_extraction
from resumatch.embeddings.pooling import TokenEmbeddings, parse_embedding_response, to_vector
from resumatch.errors import InvalidInput, UpstreamFormatError

logger = logging.getLogger(__name__)


def embed_resume_text(text: str, expected_dimension: int | None = None) -> list[float]:
    """Generate a single embedding vector for resume text.

    Args:
        text: Non-empty resume text.
        expected_dimension: Required vector length. Falls back to the
            EMBEDDING_DIMENSION setting; no check when both are unset.

    Returns:
        Embedding vector as list of floats (dimension 384 for MiniLM).

    Raises:
        InvalidInput: If text is blank.
        ConfigurationError: If the embedding endpoint is not configured.
        UpstreamError: If the endpoint call fails.
        UpstreamFormatError: If the response cannot be decoded to a vector
            of the expected dimension.
    """
    if not text or not text.strip():
        raise InvalidInput("No resume text provided.")

    payload = request_feature_extraction(text)
    response = parse_embedding_response(payload)
    if isinstance(response, TokenEmbeddings):
        logger.debug(f"Mean pooling {len(response.tokens)} token vectors")

    vector = to_vector(response)

    dimension = expected_dimension if expected_dimension is not None else EMBEDDING_DIMENSION
    if dimension is not None and len(vector) != dimension:
        raise UpstreamFormatError(
            f"Embedding has dimension {len(vector)}, expected {dimension}"
        )

    return vector
