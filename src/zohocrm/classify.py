"""Response classification shared by every CRM operation."""

from __future__ import annotations

import enum
import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from .exceptions import ApiError, EmptyResponse, UnexpectedResponseType
from .response import ApiErrorResponse

_logger = logging.getLogger(__name__)

T = TypeVar("T")

_PARSE_ERRORS = (KeyError, TypeError, ValueError)


class OutcomeKind(enum.Enum):
    SUCCESS = "success"
    API_ERROR = "api_error"
    UNEXPECTED = "unexpected"
    EMPTY = "empty"


@dataclass
class Outcome(Generic[T]):
    """Tagged result of classifying one response body."""

    kind: OutcomeKind
    value: Optional[T] = None
    error: Optional[ApiErrorResponse] = None
    raw: str = ""

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    def unwrap(self) -> T:
        """Return the parsed value or raise the exception matching ``kind``."""
        if self.kind is OutcomeKind.SUCCESS:
            return self.value  # type: ignore[return-value]
        if self.kind is OutcomeKind.API_ERROR and self.error is not None:
            raise ApiError(self.error)
        if self.kind is OutcomeKind.UNEXPECTED:
            raise UnexpectedResponseType(self.raw)
        raise EmptyResponse()


def _decode(raw: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError:
        return None


def classify_response(raw: str, parse: Callable[[Any], T]) -> Outcome[T]:
    """Classify ``raw`` in a fixed order.

    1. the CRM error envelope (``code``/``message``/``status``/``details``),
    2. the expected success shape via ``parse``,
    3. otherwise UNEXPECTED for a non-empty body, EMPTY for an empty one.

    The error envelope is checked first so that a lenient ``parse`` can never
    swallow it.
    """
    payload = _decode(raw)

    if payload is not None:
        try:
            error = ApiErrorResponse.from_dict(payload)
        except _PARSE_ERRORS:
            pass
        else:
            _logger.warning("Zoho API error %s: %s", error.code, error.message)
            return Outcome(OutcomeKind.API_ERROR, error=error, raw=raw)

        try:
            value = parse(payload)
        except _PARSE_ERRORS as e:
            _logger.debug("Response did not match expected shape: %s", e)
        else:
            return Outcome(OutcomeKind.SUCCESS, value=value, raw=raw)

    if raw:
        _logger.warning("Unexpected response body (%d chars)", len(raw))
        return Outcome(OutcomeKind.UNEXPECTED, raw=raw)

    _logger.warning("Empty response body")
    return Outcome(OutcomeKind.EMPTY)
