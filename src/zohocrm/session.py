from __future__ import annotations

import json
import logging
from typing import Optional

from .config import SANDBOX_API_DOMAIN, ZohoConfig
from .exceptions import GeneralError, MissingCredentialsError
from .response import AuthErrorResponse, TokenRecord
from .transport import HttpTransport
from .utils import abbreviate_token

_logger = logging.getLogger(__name__)


class ZohoSession:
    """Client identity plus the mutable token state.

    ``access_token`` and ``api_domain`` are only ever written by
    :meth:`refresh_token`. A session is meant for one caller at a time; wrap it
    in a lock if several threads share it.
    """

    def __init__(self, cfg: ZohoConfig, transport: Optional[HttpTransport] = None) -> None:
        missing = cfg.missing_credentials()
        if missing:
            raise MissingCredentialsError(missing)
        if not isinstance(cfg.timeout, (int, float)) or cfg.timeout <= 0:
            raise GeneralError(
                f"timeout must be a positive number of seconds, got {cfg.timeout!r}"
            )

        self.cfg = cfg
        self.transport = transport or HttpTransport()
        self._access_token: Optional[str] = cfg.access_token
        self._api_domain: Optional[str] = cfg.api_domain

    # --------------------------- Accessors ----------------------------

    @property
    def client_id(self) -> str:
        return self.cfg.client_id  # type: ignore[return-value]

    @property
    def access_token(self) -> Optional[str]:
        return self._access_token

    @property
    def abbreviated_access_token(self) -> Optional[str]:
        return abbreviate_token(self._access_token)

    @property
    def api_domain(self) -> Optional[str]:
        """Domain CRM calls go to; the sandbox host wins when ``sandbox`` is set."""
        if self.sandbox:
            return SANDBOX_API_DOMAIN
        return self._api_domain

    @property
    def oauth_domain(self) -> Optional[str]:
        return self.cfg.oauth_domain

    @property
    def sandbox(self) -> bool:
        return self.cfg.sandbox

    @property
    def timeout(self) -> int:
        return self.cfg.timeout

    @property
    def has_token(self) -> bool:
        return self._access_token is not None

    # --------------------------- Token refresh ------------------------

    def refresh_token(self) -> TokenRecord:
        """Exchange the refresh token for a new access token.

        Always hits the accounts server, even when a token is already held.

        Raises:
            GeneralError: the OAuth server returned ``{"error": ...}``, the
                body was not a token record, the request failed, or no
                access token came back.
        """
        if not self.cfg.oauth_domain:
            raise GeneralError("No OAuth domain configured")

        url = f"{self.cfg.oauth_domain.rstrip('/')}/oauth/v2/token"
        params = {
            "grant_type": "refresh_token",
            "client_id": self.cfg.client_id,
            "client_secret": self.cfg.client_secret,
            "refresh_token": self.cfg.refresh_token,
        }

        _logger.info("Refreshing Zoho access token for client %s", self.client_id)
        raw = self.transport.send("POST", url, params=params).text

        try:
            payload = json.loads(raw)
        except ValueError as e:
            raise GeneralError(f"Invalid token response: {e}") from e

        # The accounts server has its own error envelope; check it first.
        try:
            auth_error = AuthErrorResponse.from_dict(payload)
        except (KeyError, TypeError):
            pass
        else:
            _logger.warning("Token refresh rejected: %s", auth_error.error)
            raise GeneralError(auth_error.error)

        try:
            record = TokenRecord.from_dict(payload)
        except (KeyError, TypeError, ValueError) as e:
            raise GeneralError(f"Invalid token response: {e}") from e

        self._access_token = record.access_token
        self._api_domain = record.api_domain

        if self._access_token is None:
            raise GeneralError("No token received")

        _logger.info(
            "Received access token %s (api_domain=%s)",
            self.abbreviated_access_token,
            self._api_domain,
        )
        return record

    def ensure_token(self) -> str:
        """Return the current token, refreshing first when there is none."""
        if self._access_token is not None:
            return self._access_token

        token = self.refresh_token().access_token
        if token is None:
            raise GeneralError("No token received")
        return token
