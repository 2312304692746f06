"""Tests for pipeline error types."""

from unittest.mock import patch

import pytest

from resumatch.errors import (
    ConfigurationError,
    InvalidInput,
    PipelineCancelled,
    PipelineFailure,
    QueryError,
    UpstreamError,
    UpstreamFormatError,
    redact_secrets,
)


class TestErrorDetails:
    def test_to_dict(self):
        error = UpstreamError("Service unavailable", service="huggingface", status_code=503)

        assert error.to_dict() == {
            "error_type": "UpstreamError",
            "message": "Service unavailable",
            "details": {"service": "huggingface", "status_code": 503},
        }

    def test_configuration_error_names_key(self):
        error = ConfigurationError("HF_TOKEN is not set", config_key="HF_TOKEN")

        assert error.details == {"config_key": "HF_TOKEN"}

    def test_query_error_names_table_and_column(self):
        error = QueryError("failed", table="job_listings", column="embedding")

        assert error.table == "job_listings"
        assert error.column == "embedding"

    @pytest.mark.parametrize(
        "error, client",
        [
            (InvalidInput("empty"), True),
            (PipelineCancelled("cancelled"), True),
            (ConfigurationError("missing"), False),
            (UpstreamFormatError("bad shape"), False),
            (UpstreamError("down", service="groq"), False),
            (QueryError("failed", table="t", column="c"), False),
        ],
    )
    def test_client_classification(self, error, client):
        assert error.client_error is client


class TestPipelineFailure:
    def test_client_failure(self):
        failure = PipelineFailure("normalized", InvalidInput("No resume text or file provided."))

        assert failure.severity == "client"
        assert failure.status_code == 400
        assert failure.to_dict() == {
            "error": "No resume text or file provided.",
            "stage": "normalized",
            "severity": "client",
        }

    @pytest.mark.parametrize(
        "error, status_code",
        [
            (UpstreamError("down", service="huggingface"), 502),
            (UpstreamFormatError("bad shape"), 502),
            (QueryError("failed", table="t", column="c"), 500),
            (ConfigurationError("missing"), 500),
            (ValueError("boom"), 500),
        ],
    )
    def test_server_status_codes(self, error, status_code):
        failure = PipelineFailure("embedded", error)

        assert failure.severity == "server"
        assert failure.status_code == status_code

    def test_unexpected_error_message_is_generic(self):
        failure = PipelineFailure("retrieved", KeyError("password=hunter2"))

        assert failure.message == "Unexpected server error"
        assert "hunter2" not in str(failure)


class TestRedactSecrets:
    def test_redacts_configured_credentials(self):
        with (
            patch("resumatch.errors.HF_TOKEN", "hf_abc"),
            patch("resumatch.errors.GROQ_API_KEY", "gsk_xyz"),
            patch("resumatch.errors.PGPASSWORD", "pgpass"),
            patch("resumatch.errors.DATABASE_URL", None),
        ):
            text = redact_secrets("tokens hf_abc gsk_xyz pgpass")

        assert text == "tokens *** *** ***"

    def test_redacts_database_url_password(self):
        with (
            patch("resumatch.errors.HF_TOKEN", None),
            patch("resumatch.errors.GROQ_API_KEY", None),
            patch("resumatch.errors.PGPASSWORD", None),
            patch("resumatch.errors.DATABASE_URL", "postgresql://reader:urlpass@db/jobs"),
        ):
            text = redact_secrets("could not connect as reader with urlpass")

        assert "urlpass" not in text
        assert "reader" in text

    def test_short_secret_only_redacted_as_whole_token(self):
        with (
            patch("resumatch.errors.HF_TOKEN", None),
            patch("resumatch.errors.GROQ_API_KEY", None),
            patch("resumatch.errors.PGPASSWORD", "a"),
            patch("resumatch.errors.DATABASE_URL", None),
        ):
            text = redact_secrets('password authentication failed for user "reader" with a')

        assert text == 'password authentication failed for user "reader" with ***'

    def test_long_secret_redacted_inside_other_text(self):
        with (
            patch("resumatch.errors.HF_TOKEN", "hf_abcdefgh"),
            patch("resumatch.errors.GROQ_API_KEY", None),
            patch("resumatch.errors.PGPASSWORD", None),
            patch("resumatch.errors.DATABASE_URL", None),
        ):
            text = redact_secrets("Authorization: Bearerhf_abcdefgh")

        assert text == "Authorization: Bearer***"

    def test_unset_credentials_leave_text_alone(self):
        with (
            patch("resumatch.errors.HF_TOKEN", None),
            patch("resumatch.errors.GROQ_API_KEY", ""),
            patch("resumatch.errors.PGPASSWORD", None),
            patch("resumatch.errors.DATABASE_URL", None),
        ):
            assert redact_secrets("nothing secret here") == "nothing secret here"
