"""
Error taxonomy for synthesized endpoints.

Every failure the catch-all handler can report is one ErrorKind. The kind
alone decides the HTTP status, the ``error`` code and the default message.
"""

from enum import Enum
from typing import NamedTuple, Optional

from pydantic import BaseModel


class ErrorSpec(NamedTuple):
    status_code: int
    code: Optional[str]
    message: str


class ErrorKind(str, Enum):
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    SERVER_MISCONFIGURED = "SERVER_MISCONFIGURED"
    RATE_LIMITED = "RATE_LIMITED"
    UNAUTHORIZED = "UNAUTHORIZED"
    UPSTREAM_EXHAUSTED = "UPSTREAM_EXHAUSTED"
    AI_RESPONSE_EMPTY = "AI_RESPONSE_EMPTY"
    AI_INVALID_JSON_RESPONSE = "AI_INVALID_JSON_RESPONSE"
    UNHANDLED = "UNHANDLED"

    @property
    def spec(self) -> ErrorSpec:
        return ERROR_SPECS[self]

    @property
    def status_code(self) -> int:
        return self.spec.status_code

    @property
    def code(self) -> Optional[str]:
        return self.spec.code

    @property
    def message(self) -> str:
        return self.spec.message

    @property
    def is_plain(self) -> bool:
        """Plain kinds answer with ``{"error": message}`` only."""
        return self.code is None

    @property
    def hides_details(self) -> bool:
        """Kinds whose details are internal error text."""
        return self.code == "API_ERROR"


# A code of None marks a plain-message error body
ERROR_SPECS = {
    ErrorKind.METHOD_NOT_ALLOWED: ErrorSpec(405, None, "Method not allowed"),
    ErrorKind.SERVER_MISCONFIGURED: ErrorSpec(500, None, "Server configuration error"),
    ErrorKind.RATE_LIMITED: ErrorSpec(
        429, "RATE_LIMITED", "API rate limit exceeded. Please try again later."
    ),
    ErrorKind.UNAUTHORIZED: ErrorSpec(500, "UNAUTHORIZED", "API authentication failed."),
    ErrorKind.UPSTREAM_EXHAUSTED: ErrorSpec(
        500, "API_ERROR", "An error occurred while processing your request."
    ),
    ErrorKind.AI_RESPONSE_EMPTY: ErrorSpec(
        500,
        "AI_RESPONSE_EMPTY",
        "The AI assistant returned empty or whitespace content.",
    ),
    ErrorKind.AI_INVALID_JSON_RESPONSE: ErrorSpec(
        500,
        "AI_INVALID_JSON_RESPONSE",
        "The AI assistant returned a response that was not valid JSON.",
    ),
    ErrorKind.UNHANDLED: ErrorSpec(
        500, "API_ERROR", "An error occurred while processing your request."
    ),
}


class PlainErrorResponse(BaseModel):
    """Error body for failures that happen before an endpoint is resolved"""
    error: str


class ErrorResponse(BaseModel):
    """Structured error body for a synthesized endpoint"""
    error: str
    message: str
    endpoint: str
    details: Optional[str] = None


class SynthesisError(Exception):
    """A request ended in one of the ErrorKind failure states."""

    def __init__(
        self,
        kind: ErrorKind,
        endpoint: Optional[str] = None,
        details: Optional[str] = None,
    ):
        super().__init__(details or kind.message)
        self.kind = kind
        self.endpoint = endpoint
        self.details = details
