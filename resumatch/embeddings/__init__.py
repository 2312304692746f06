"""Embeddings via the hosted Hugging Face feature-extraction endpoint."""

from resumatch.embeddings.generator import embed_resume_text
from resumatch.embeddings.hf_client import (
    check_embeddings_configured,
    request_feature_extraction,
)
from resumatch.embeddings.pooling import (
    FlatEmbedding,
    TokenEmbeddings,
    mean_pool,
    parse_embedding_response,
)

__all__ = [
    "embed_resume_text",
    "check_embeddings_configured",
    "request_feature_extraction",
    "FlatEmbedding",
    "TokenEmbeddings",
    "mean_pool",
    "parse_embedding_response",
]
