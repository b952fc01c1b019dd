"""Application-level exception types for sparkmd."""

from __future__ import annotations

from typing import Any


class SparkError(Exception):
    """Base exception carrying a stable code for remediation UI."""

    code = "SPARK_ERROR"

    def __init__(self, message: str, code: str | None = None, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.context: dict[str, Any] = dict(context or {})


class InvalidLineError(SparkError):
    """Raised when a line number or range falls outside the document."""

    code = "INVALID_LINE_NUMBER"


class EmptyLineError(InvalidLineError):
    """Raised when the addressed command line is blank."""

    code = "EMPTY_LINE"


class DocumentNotFoundError(SparkError):
    """Raised when the target document cannot be read."""

    code = "FILE_NOT_FOUND"


class InlineChatNotFoundError(SparkError):
    """Raised when no opening marker exists for a chat id."""

    code = "INLINE_CHAT_NOT_FOUND"


class ResultWriteError(SparkError):
    """Raised when the document could not be written back."""

    code = "RESULT_WRITE_ERROR"


class ConfigurationError(SparkError):
    """Base exception for configuration and startup validation errors."""

    code = "CONFIG_ERROR"


class ApiKeyNotConfiguredError(ConfigurationError):
    """Raised when an API key is required but missing."""

    code = "API_KEY_NOT_SET"


class ProviderNetworkError(SparkError):
    """Raised when the AI provider cannot be reached."""

    code = "AI_NETWORK_ERROR"


class ProviderClientError(SparkError):
    """Raised when the AI provider rejects the request."""

    code = "AI_CLIENT_ERROR"


class ProviderServerError(SparkError):
    """Raised when the AI provider fails on its side."""

    code = "AI_SERVER_ERROR"
