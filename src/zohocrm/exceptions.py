from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict

if TYPE_CHECKING:
    from .response import ApiErrorResponse


class ClientError(RuntimeError):
    """Base class for every error raised by the Zoho CRM client."""


class GeneralError(ClientError):
    """Catch-all for OAuth, transport, encoding and token errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ApiError(ClientError):
    """Structured error envelope returned by a CRM endpoint."""

    def __init__(self, response: ApiErrorResponse):
        self.response = response
        super().__init__(response.message)

    @property
    def code(self) -> str:
        return self.response.code

    @property
    def message(self) -> str:
        return self.response.message

    @property
    def status(self) -> str:
        return self.response.status

    @property
    def details(self) -> Dict[str, Any]:
        return self.response.details


class UnexpectedResponseType(ClientError):
    """Body matched neither the error envelope nor the expected shape.

    The raw body is kept verbatim on ``raw`` so callers can log it.
    """

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(raw)


class EmptyResponse(ClientError):
    """The API answered with an empty body."""

    def __init__(self) -> None:
        super().__init__("Empty response")


class MissingCredentialsError(ClientError):
    """Raised when required client identity values are missing."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__("Missing required Zoho credentials: " + ", ".join(missing))
