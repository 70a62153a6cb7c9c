from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from .exceptions import GeneralError

_logger = logging.getLogger(__name__)

# Query strings of the token request carry the client secret and refresh token.
_QUERY_RE = re.compile(r"\?[^\s'\")]*")


def redact_query(text: str) -> str:
    """Replace every URL query string in ``text`` with ``?<redacted>``."""
    return _QUERY_RE.sub("?<redacted>", text)


@dataclass
class RawResponse:
    status_code: int
    text: str


class HttpTransport:
    """Blocking HTTP sender on top of a shared ``requests.Session``.

    Status codes are returned, never raised: Zoho reports failures in the body
    and the caller classifies it. No retries are attempted.
    """

    def __init__(self, session: Optional[requests.Session] = None) -> None:
        self.session = session or requests.Session()

    def send(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> RawResponse:
        _logger.debug("%s %s", method, url)
        try:
            r = self.session.request(
                method,
                url,
                params=params,
                data=body.encode("utf-8") if body is not None else None,
                headers=headers or {},
                timeout=timeout,
            )
        except requests.RequestException as e:
            reason = redact_query(str(e))
            _logger.warning("%s %s failed (%s): %s", method, url, type(e).__name__, reason)
            # the original exception text still holds the unredacted URL
            raise GeneralError(reason) from None

        _logger.debug("HTTP %s from %s", r.status_code, url)
        return RawResponse(status_code=r.status_code, text=r.text)

    def close(self) -> None:
        self.session.close()
