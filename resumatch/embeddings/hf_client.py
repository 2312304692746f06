"""Client for the Hugging Face Inference feature-extraction endpoint.

The endpoint runs the sentence-transformers model remotely, so no model
weights are loaded in process. Depending on the model and pipeline, the
response is either one pooled vector or one vector per token; decoding
is handled in ``resumatch.embeddings.pooling``.
"""

import logging
from typing import Any

import requests

from resumatch.config import EMBEDDING_MODEL, HF_INFERENCE_URL, HF_TOKEN, REQUEST_TIMEOUT
from resumatch.errors import ConfigurationError, UpstreamError, UpstreamFormatError

logger = logging.getLogger(__name__)

SERVICE_NAME = "huggingface"


def check_embeddings_configured() -> None:
    """Check if the Hugging Face token is configured.

    Raises:
        ConfigurationError: If HF_TOKEN is not set.
    """
    if not HF_TOKEN:
        raise ConfigurationError(
            "HF_TOKEN is not set. Please add a Hugging Face token to use embeddings.",
            config_key="HF_TOKEN",
        )


def feature_extraction_url(model: str = EMBEDDING_MODEL) -> str:
    return f"{HF_INFERENCE_URL.rstrip('/')}/{model}/pipeline/feature-extraction"


def request_feature_extraction(text: str) -> Any:
    """Send text to the embedding endpoint and return the decoded JSON body.

    Args:
        text: Full resume text.

    Returns:
        The raw JSON payload (a flat vector or a list of token vectors).

    Raises:
        ConfigurationError: If HF_TOKEN is not set (checked before any request).
        UpstreamError: If the request fails or returns a non-success status.
        UpstreamFormatError: If the body is not JSON.
    """
    check_embeddings_configured()

    headers = {
        "Authorization": f"Bearer {HF_TOKEN}",
        "User-Agent": "ResuMatch/1.0",
    }

    try:
        response = requests.post(
            feature_extraction_url(),
            json={"inputs": text},
            headers=headers,
            timeout=REQUEST_TIMEOUT,
        )
    except requests.exceptions.RequestException as e:
        logger.error(f"Embedding request failed: {e}")
        raise UpstreamError(
            f"Embedding request failed: {e}", service=SERVICE_NAME
        ) from e

    if not response.ok:
        detail = _error_detail(response)
        logger.error(f"Embedding request returned {response.status_code}: {detail}")
        raise UpstreamError(
            f"Embedding request failed with status {response.status_code}: {detail}",
            service=SERVICE_NAME,
            status_code=response.status_code,
        )

    try:
        return response.json()
    except ValueError as e:
        raise UpstreamFormatError(
            "Embedding response was not valid JSON", service=SERVICE_NAME
        ) from e


def _error_detail(response: requests.Response) -> str:
    """Best-effort error message from a failed response."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or response.reason or "no details"
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])[:200]
    return str(body)[:200]
