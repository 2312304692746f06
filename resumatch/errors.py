"""Exception types raised by the resume matching pipeline."""

import re
from typing import Any
from urllib.parse import urlsplit

from resumatch.config import DATABASE_URL, GROQ_API_KEY, HF_TOKEN, PGPASSWORD

SUBSTRING_REDACT_MIN_LENGTH = 8


class ResumeMatchError(Exception):
    """Base exception for all pipeline failures.

    Subclasses set ``client_error`` when the failure was caused by the
    caller's input rather than by the server or an upstream service.
    """

    client_error = False

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging/response."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class InvalidInput(ResumeMatchError):
    """Raised when the resume input is missing or empty."""

    client_error = True


class PipelineCancelled(ResumeMatchError):
    """Raised when the caller aborts a match before it completes."""

    client_error = True


class ConfigurationError(ResumeMatchError):
    """Raised when a required credential or setting is missing or invalid."""

    def __init__(self, message: str, config_key: str | None = None):
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, details=details)
        self.config_key = config_key


class UpstreamFormatError(ResumeMatchError):
    """Raised when an upstream service answers with an unrecognized shape."""

    def __init__(self, message: str, service: str = "embeddings"):
        super().__init__(message, details={"service": service})
        self.service = service


class UpstreamError(ResumeMatchError):
    """Raised when a call to an upstream service fails."""

    def __init__(self, message: str, service: str, status_code: int | None = None):
        details: dict[str, Any] = {"service": service}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, details=details)
        self.service = service
        self.status_code = status_code


class QueryError(ResumeMatchError):
    """Raised when the job catalog cannot be queried."""

    def __init__(self, message: str, table: str, column: str):
        super().__init__(message, details={"table": table, "column": column})
        self.table = table
        self.column = column


class PipelineFailure(Exception):
    """A pipeline error tagged with the stage it happened in.

    This is the single error representation surfaced to callers. The
    original exception is kept on ``error`` and as ``__cause__``.
    """

    def __init__(self, stage: str, error: Exception):
        self.stage = stage
        self.error = error
        self.is_client_error = isinstance(error, ResumeMatchError) and error.client_error

        if isinstance(error, ResumeMatchError):
            self.message = redact_secrets(error.message)
        else:
            self.message = "Unexpected server error"

        super().__init__(f"[{stage}] {self.message}")

    @property
    def severity(self) -> str:
        return "client" if self.is_client_error else "server"

    @property
    def status_code(self) -> int:
        if self.is_client_error:
            return 400
        if isinstance(self.error, (UpstreamError, UpstreamFormatError)):
            return 502
        return 500

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message, "stage": self.stage, "severity": self.severity}


def _known_secrets() -> list[str]:
    secrets = [HF_TOKEN, GROQ_API_KEY, PGPASSWORD]
    if DATABASE_URL:
        try:
            secrets.append(urlsplit(DATABASE_URL).password)
        except ValueError:
            pass  # Unparseable URL has no extractable password
    return [s for s in secrets if s]


def redact_secrets(text: str) -> str:
    """Replace configured credential values in ``text`` with ``***``.

    Secrets shorter than SUBSTRING_REDACT_MIN_LENGTH are only replaced
    where they stand as a whole token, so a one-letter password does not
    blank out every occurrence of that letter.
    """
    for secret in _known_secrets():
        if len(secret) >= SUBSTRING_REDACT_MIN_LENGTH:
            text = text.replace(secret, "***")
        else:
            text = re.sub(rf"(?<!\w){re.escape(secret)}(?!\w)", "***", text)
    return text
