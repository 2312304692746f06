"""Tests for resume embedding generation."""

from unittest.mock import patch

import pytest

from resumatch.embeddings.generator import embed_resume_text
from resumatch.errors import ConfigurationError, InvalidInput, UpstreamFormatError


class TestEmbedResumeText:
    @patch("resumatch.embeddings.generator.request_feature_extraction")
    def test_flat_vector_returned_unchanged(self, mock_request):
        mock_request.return_value = [0.1, 0.2, 0.3]

        assert embed_resume_text("Python developer") == [0.1, 0.2, 0.3]

    @patch("resumatch.embeddings.generator.request_feature_extraction")
    def test_token_vectors_are_mean_pooled(self, mock_request):
        mock_request.return_value = [[1, 2], [3, 4], [5, 6]]

        assert embed_resume_text("Python developer") == [3.0, 4.0]

    @patch("resumatch.embeddings.generator.request_feature_extraction")
    def test_sends_full_text(self, mock_request):
        mock_request.return_value = [0.1]
        text = "Senior engineer\n\nExperience: 7 years of Go"

        embed_resume_text(text)

        mock_request.assert_called_once_with(text)

    @patch("resumatch.embeddings.generator.request_feature_extraction")
    def test_deterministic_for_same_input(self, mock_request):
        mock_request.return_value = [[0.2, 0.4, 0.6], [0.4, 0.2, 0.0]]

        first = embed_resume_text("same text")
        second = embed_resume_text("same text")

        assert first == second
        assert len(first) == 3

    @patch("resumatch.embeddings.generator.request_feature_extraction")
    def test_embedding_dimension(self, mock_request):
        mock_request.return_value = [[0.01] * 384 for _ in range(12)]

        result = embed_resume_text("hello world", expected_dimension=384)

        # all-MiniLM-L6-v2 produces 384-dimensional embeddings
        assert len(result) == 384

    @patch("resumatch.embeddings.generator.request_feature_extraction")
    def test_dimension_mismatch_raises(self, mock_request):
        mock_request.return_value = [0.1, 0.2, 0.3]

        with pytest.raises(UpstreamFormatError, match="expected 384"):
            embed_resume_text("hello world", expected_dimension=384)

    @patch("resumatch.embeddings.generator.request_feature_extraction")
    def test_configured_dimension_is_enforced(self, mock_request):
        mock_request.return_value = [0.1, 0.2]

        with patch("resumatch.embeddings.generator.EMBEDDING_DIMENSION", 3):
            with pytest.raises(UpstreamFormatError):
                embed_resume_text("hello world")

    @patch("resumatch.embeddings.generator.request_feature_extraction")
    def test_malformed_response_raises(self, mock_request):
        mock_request.return_value = {"error": "unexpected"}

        with pytest.raises(UpstreamFormatError):
            embed_resume_text("hello world")

    @patch("resumatch.embeddings.generator.request_feature_extraction")
    def test_blank_text_makes_no_call(self, mock_request):
        with pytest.raises(InvalidInput):
            embed_resume_text("   ")

        mock_request.assert_not_called()

    @patch("resumatch.embeddings.hf_client.requests.post")
    def test_missing_token_checked_before_network(self, mock_post):
        with patch("resumatch.embeddings.hf_client.HF_TOKEN", None):
            with pytest.raises(ConfigurationError):
                embed_resume_text("hello world")

        mock_post.assert_not_called()
