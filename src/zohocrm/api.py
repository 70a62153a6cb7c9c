from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterable, Iterator, Optional, Union

from .classify import classify_response
from .config import ZohoConfig
from .exceptions import GeneralError
from .response import (
    ApiGetManyResponse,
    ApiGetResponse,
    BulkWriteResponse,
    RecordParser,
    TokenRecord,
)
from .session import ZohoSession
from .transport import HttpTransport
from .utils import parse_params, wrap_records

_logger = logging.getLogger(__name__)

CRM_API_PATH = "/crm/v2"

Params = Union[str, Mapping[str, Any], None]


# ----------------------------------------------------------------------
# Main API client
# ----------------------------------------------------------------------
class ZohoCRM:
    """Zoho CRM v2 client.

    Every call fetches an access token first if the session has none; the
    token is then reused for later calls. Errors are raised to the caller as
    ``ClientError`` subclasses and nothing is retried.

    Example::

        crm = ZohoCRM(ZohoConfig(client_id="...", client_secret="...", refresh_token="..."))
        account = crm.get("Accounts", "4000000012345").record
    """

    def __init__(
        self,
        cfg: Optional[ZohoConfig] = None,
        transport: Optional[HttpTransport] = None,
    ) -> None:
        self.session = ZohoSession(cfg or ZohoConfig.from_env(), transport)

    @property
    def transport(self) -> HttpTransport:
        return self.session.transport

    # --------------------------- Session passthrough ------------------

    @property
    def access_token(self) -> Optional[str]:
        return self.session.access_token

    @property
    def abbreviated_access_token(self) -> Optional[str]:
        return self.session.abbreviated_access_token

    @property
    def api_domain(self) -> Optional[str]:
        return self.session.api_domain

    @property
    def sandbox(self) -> bool:
        return self.session.sandbox

    @property
    def timeout(self) -> int:
        return self.session.timeout

    def refresh_token(self) -> TokenRecord:
        """Fetch a new access token and store it on the session."""
        return self.session.refresh_token()

    # --------------------------- Public methods -----------------------

    def get(
        self,
        module: str,
        record_id: str,
        parser: Optional[RecordParser] = None,
    ) -> ApiGetResponse:
        """Fetch a single record from ``module``."""
        return self._dispatch(
            "GET",
            f"{module}/{record_id}",
            lambda payload: ApiGetResponse.from_dict(payload, parser),
        )

    def get_many(
        self,
        module: str,
        params: Params = None,
        parser: Optional[RecordParser] = None,
    ) -> ApiGetManyResponse:
        """Fetch one page of records.

        ``params`` is either an encoded query string or a mapping such as
        ``{"page": 2, "per_page": 200, "cvid": "..."}``.
        """
        path = module
        query = parse_params(params) if isinstance(params, Mapping) else params
        if query:
            path = f"{path}?{query}"
        return self._dispatch(
            "GET",
            path,
            lambda payload: ApiGetManyResponse.from_dict(payload, parser),
        )

    def iter_records(
        self,
        module: str,
        params: Optional[Mapping[str, Any]] = None,
        parser: Optional[RecordParser] = None,
    ) -> Iterator[Any]:
        """Yield records across pages until ``info.more_records`` is false."""
        query: Dict[str, Any] = dict(params or {})
        page = int(query.get("page", 1))
        while True:
            query["page"] = page
            res = self.get_many(module, query, parser)
            yield from res.data
            if not res.more_records or not res.data:
                break
            page += 1

    def insert(self, module: str, records: Iterable[Any]) -> BulkWriteResponse:
        """Create records. Check each entry of the result for per-record errors."""
        return self._dispatch("POST", module, BulkWriteResponse.from_dict, records=records)

    def update_many(self, module: str, records: Iterable[Any]) -> BulkWriteResponse:
        """Update records (each must carry its ``id``). Entries may fail individually."""
        return self._dispatch("PUT", module, BulkWriteResponse.from_dict, records=records)

    # --------------------------- Internal helpers --------------------

    def _url(self, path: str) -> str:
        api_domain = self.session.api_domain
        if not api_domain:
            raise GeneralError("No API domain available")
        return f"{api_domain.rstrip('/')}{CRM_API_PATH}/{path}"

    def _dispatch(
        self,
        method: str,
        path: str,
        parse: Callable[[Any], Any],
        *,
        records: Optional[Iterable[Any]] = None,
    ) -> Any:
        body = None
        if records is not None:
            if isinstance(records, (Mapping, str, bytes)):
                raise GeneralError("records must be a list of records, not a single record")
            try:
                body = json.dumps(wrap_records(records))
            except (TypeError, ValueError) as e:
                raise GeneralError(f"Could not encode records: {e}") from e

        token = self.session.ensure_token()
        url = self._url(path)
        _logger.debug(
            "Zoho %s %s with token %s", method, path, self.session.abbreviated_access_token
        )

        headers = {"Authorization": f"Zoho-oauthtoken {token}"}
        if body is not None:
            headers["Content-Type"] = "application/json"

        res = self.transport.send(
            method,
            url,
            headers=headers,
            body=body,
            timeout=self.session.timeout,
        )
        return classify_response(res.text, parse).unwrap()
