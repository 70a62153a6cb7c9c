"""Typed shapes of the payloads exchanged with Zoho CRM.

Every ``from_dict`` raises ``KeyError``, ``TypeError`` or ``ValueError`` when
the payload does not have the expected shape. The classifier relies on that to
tell one envelope from another.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar, Union

T = TypeVar("T")

RecordParser = Callable[[Dict[str, Any]], T]


def _require_dict(payload: Any, what: str) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise TypeError(f"{what} must be a JSON object, got {type(payload).__name__}")
    return payload


def _require_str(payload: Dict[str, Any], key: str) -> str:
    value = payload[key]
    if not isinstance(value, str):
        raise TypeError(f"{key!r} must be a string")
    return value


def _optional_str(payload: Dict[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    if value is not None and not isinstance(value, str):
        raise TypeError(f"{key!r} must be a string or null")
    return value


def _require_list(payload: Dict[str, Any], key: str) -> List[Any]:
    value = payload[key]
    if not isinstance(value, list):
        raise TypeError(f"{key!r} must be an array")
    return value


# ----------------------------------------------------------------------
# OAuth
# ----------------------------------------------------------------------
@dataclass
class AuthErrorResponse:
    """Error envelope used by the OAuth endpoint: ``{"error": "..."}``."""

    error: str

    @classmethod
    def from_dict(cls, data: Any) -> AuthErrorResponse:
        data = _require_dict(data, "auth error")
        return cls(error=_require_str(data, "error"))


@dataclass
class TokenRecord:
    """Token endpoint response. Only ``access_token`` and ``api_domain`` are used."""

    access_token: Optional[str] = None
    api_domain: Optional[str] = None
    token_type: Optional[str] = None
    expires_in: Optional[int] = None
    expires_in_sec: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any) -> TokenRecord:
        data = _require_dict(data, "token record")
        return cls(
            access_token=_optional_str(data, "access_token"),
            api_domain=_optional_str(data, "api_domain"),
            token_type=data.get("token_type"),
            expires_in=data.get("expires_in"),
            expires_in_sec=data.get("expires_in_sec"),
        )


# ----------------------------------------------------------------------
# CRM error envelope
# ----------------------------------------------------------------------
@dataclass
class ApiErrorResponse:
    """Top-level error returned by CRM endpoints."""

    code: str
    message: str
    status: str
    details: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> ApiErrorResponse:
        data = _require_dict(data, "api error")
        details = data["details"]
        if not isinstance(details, dict):
            raise TypeError("'details' must be an object")
        return cls(
            code=_require_str(data, "code"),
            message=_require_str(data, "message"),
            status=_require_str(data, "status"),
            details=details,
        )


# ----------------------------------------------------------------------
# Record reads
# ----------------------------------------------------------------------
def _parse_records(data: Dict[str, Any], parser: Optional[RecordParser]) -> List[Any]:
    records = _require_list(data, "data")
    if parser is None:
        return records
    return [parser(record) for record in records]


@dataclass
class ResponseInfo:
    """Pagination block attached to list responses."""

    more_records: bool
    per_page: int
    count: int
    page: int

    @classmethod
    def from_dict(cls, data: Any) -> ResponseInfo:
        data = _require_dict(data, "info")
        return cls(
            more_records=bool(data["more_records"]),
            per_page=int(data["per_page"]),
            count=int(data["count"]),
            page=int(data["page"]),
        )


@dataclass
class ApiGetResponse(Generic[T]):
    """Single record read; Zoho wraps the record in a one-element ``data`` array."""

    data: List[T]

    @property
    def record(self) -> Optional[T]:
        return self.data[0] if self.data else None

    @classmethod
    def from_dict(cls, data: Any, parser: Optional[RecordParser] = None) -> ApiGetResponse:
        data = _require_dict(data, "get response")
        return cls(data=_parse_records(data, parser))


@dataclass
class ApiGetManyResponse(Generic[T]):
    """One page of records plus optional pagination info."""

    data: List[T]
    info: Optional[ResponseInfo] = None

    @property
    def more_records(self) -> bool:
        return bool(self.info and self.info.more_records)

    @classmethod
    def from_dict(cls, data: Any, parser: Optional[RecordParser] = None) -> ApiGetManyResponse:
        data = _require_dict(data, "get-many response")
        info = data.get("info")
        return cls(
            data=_parse_records(data, parser),
            info=ResponseInfo.from_dict(info) if info is not None else None,
        )


# ----------------------------------------------------------------------
# Bulk writes
# ----------------------------------------------------------------------
@dataclass
class UserRef:
    id: str
    name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> UserRef:
        data = _require_dict(data, "user")
        return cls(id=_require_str(data, "id"), name=data.get("name"))


@dataclass
class SuccessDetails:
    """Audit data for a record that was created or updated."""

    id: str
    created_time: Optional[str] = None
    modified_time: Optional[str] = None
    created_by: Optional[UserRef] = None
    modified_by: Optional[UserRef] = None

    @classmethod
    def from_dict(cls, data: Any) -> SuccessDetails:
        data = _require_dict(data, "success details")
        created_by = data.get("Created_By")
        modified_by = data.get("Modified_By")
        return cls(
            id=_require_str(data, "id"),
            created_time=data.get("Created_Time"),
            modified_time=data.get("Modified_Time"),
            created_by=UserRef.from_dict(created_by) if created_by is not None else None,
            modified_by=UserRef.from_dict(modified_by) if modified_by is not None else None,
        )


@dataclass
class ErrorDetails:
    """Free-form details attached to a failed record, e.g. ``{"api_name": "Email"}``."""

    values: Dict[str, Any] = field(default_factory=dict)

    @property
    def api_name(self) -> Optional[str]:
        return self.values.get("api_name")

    @classmethod
    def from_dict(cls, data: Any) -> ErrorDetails:
        return cls(values=dict(_require_dict(data, "error details")))


ResponseDetails = Union[SuccessDetails, ErrorDetails]


def parse_details(status: Optional[str], data: Any) -> ResponseDetails:
    """Resolve the untagged ``details`` union of a bulk result entry.

    ``status`` decides when present. A ``"success"`` entry whose details do not
    carry a record id, or an entry without a status, falls back to trying the
    success shape first.
    """
    if status is not None and status != "success":
        return ErrorDetails.from_dict(data)
    try:
        return SuccessDetails.from_dict(data)
    except (KeyError, TypeError):
        return ErrorDetails.from_dict(data)


@dataclass
class BulkResultItem:
    """Outcome of one record in an insert/update call."""

    code: str
    message: str
    status: str
    details: ResponseDetails

    @property
    def is_success(self) -> bool:
        return isinstance(self.details, SuccessDetails)

    @classmethod
    def from_dict(cls, data: Any) -> BulkResultItem:
        data = _require_dict(data, "bulk result")
        status = _require_str(data, "status")
        return cls(
            code=_require_str(data, "code"),
            message=_require_str(data, "message"),
            status=status,
            details=parse_details(status, data["details"]),
        )


@dataclass
class BulkWriteResponse:
    """Insert/update response. Individual entries may have failed."""

    data: List[BulkResultItem]

    def successes(self) -> List[BulkResultItem]:
        return [item for item in self.data if item.is_success]

    def failures(self) -> List[BulkResultItem]:
        return [item for item in self.data if not item.is_success]

    @classmethod
    def from_dict(cls, data: Any) -> BulkWriteResponse:
        data = _require_dict(data, "bulk write response")
        return cls(data=[BulkResultItem.from_dict(item) for item in _require_list(data, "data")])
