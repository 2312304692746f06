"""Shared pytest fixtures for all tests."""

from unittest.mock import MagicMock, patch

import pytest

from tests.test_utils import write_catalog


@pytest.fixture(autouse=True)
def reset_pool():
    """Give every test a fresh, uninitialized catalog pool."""
    with patch("resumatch.db.connection._pool", None):
        yield


@pytest.fixture
def hf_token():
    """Configure a fake Hugging Face token for the embedding client."""
    with patch("resumatch.embeddings.hf_client.HF_TOKEN", "hf_test_token"):
        yield "hf_test_token"


@pytest.fixture
def local_catalog(tmp_path):
    """Switch retrieval to a local JSON catalog in a temp directory.

    Yields a function that writes catalog entries and returns the path.
    """
    catalog_path = tmp_path / "job_listings.json"

    with (
        patch("resumatch.matching.retriever.CATALOG_BACKEND", "local"),
        patch("resumatch.matching.retriever.CATALOG_PATH", catalog_path),
    ):
        yield lambda entries: write_catalog(catalog_path, entries)


@pytest.fixture
def mock_llm_chain():
    """Replace the prompt | llm | parser chain with a mock.

    Yields the mock chain; set ``invoke.return_value`` or
    ``invoke.side_effect`` on it.
    """
    with (
        patch("resumatch.utils.GROQ_API_KEY", "gsk_test"),
        patch("resumatch.suggestions.composer.get_llm"),
        patch("resumatch.suggestions.composer.ChatPromptTemplate") as mock_prompt_class,
    ):
        mock_prompt = MagicMock()
        mock_prompt_class.from_messages.return_value = mock_prompt

        mock_chain = MagicMock()
        mock_chain.invoke.return_value = "## Listing\n- suggestion"
        mock_prompt.__or__ = MagicMock(return_value=MagicMock())
        mock_prompt.__or__.return_value.__or__ = MagicMock(return_value=mock_chain)

        yield mock_chain
