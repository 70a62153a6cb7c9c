from __future__ import annotations

import dataclasses
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlencode


def parse_params(params: Mapping[str, Any]) -> str:
    """
    Encode a mapping into a query string for ``ZohoCRM.get_many``.

    ``None`` values are dropped; key order follows the mapping.
    """
    return urlencode({k: v for k, v in params.items() if v is not None})


def abbreviate_token(token: Optional[str]) -> Optional[str]:
    """Return ``first9..last4`` of a token so it can be shown or logged."""
    if token is None:
        return None
    return f"{token[:9]}..{token[-4:]}"


def serialize_record(record: Any) -> Any:
    """
    Turn a caller record into something ``json`` can encode:
    - objects with ``to_dict()`` are converted with it
    - dataclass instances via ``dataclasses.asdict``
    - anything else is passed through unchanged
    """
    to_dict = getattr(record, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        return dataclasses.asdict(record)
    return record


def wrap_records(records: Any) -> Dict[str, Any]:
    """Zoho expects written records under a top-level ``data`` array."""
    return {"data": [serialize_record(r) for r in records]}
