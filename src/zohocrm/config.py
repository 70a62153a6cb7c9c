from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import List, Optional

from .env_loader import load_env_files

_logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
DEFAULT_OAUTH_DOMAIN = "https://accounts.zoho.com"
DEFAULT_API_DOMAIN = "https://www.zohoapis.com"
SANDBOX_API_DOMAIN = "https://crmsandbox.zoho.com"

_TRUTHY = {"1", "true", "yes", "on"}


# ----------------------------------------------------------------------
# Configuration dataclass
# ----------------------------------------------------------------------
@dataclass
class ZohoConfig:
    """Settings for a Zoho CRM client.

    ``client_id``, ``client_secret`` and ``refresh_token`` identify the
    self-client and are required by ``ZohoSession``. Everything else is
    optional:

    - ``access_token``: a token persisted by the caller; when set, the first
      request skips the refresh call.
    - ``oauth_domain``: accounts server used for token refresh
      (default ``https://accounts.zoho.com``).
    - ``api_domain``: CRM server (default ``https://www.zohoapis.com``). The
      token response may replace it.
    - ``sandbox``: send CRM requests to ``https://crmsandbox.zoho.com``
      whatever ``api_domain`` says.
    - ``timeout``: per-request timeout in seconds for CRM calls (default 30).
    """

    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    refresh_token: Optional[str] = None

    access_token: Optional[str] = None
    oauth_domain: Optional[str] = DEFAULT_OAUTH_DOMAIN
    api_domain: Optional[str] = DEFAULT_API_DOMAIN
    sandbox: bool = False
    timeout: int = DEFAULT_TIMEOUT

    def missing_credentials(self) -> List[str]:
        """Names of the identity settings that are unset or empty."""
        return [
            k
            for k, v in {
                "ZOHO_CLIENT_ID": self.client_id,
                "ZOHO_CLIENT_SECRET": self.client_secret,
                "ZOHO_REFRESH_TOKEN": self.refresh_token,
            }.items()
            if not v
        ]

    @classmethod
    def from_env(cls) -> ZohoConfig:
        """Load configuration from environment variables (and .env)."""
        load_env_files(quiet=True)
        return cls(
            client_id=os.getenv("ZOHO_CLIENT_ID"),
            client_secret=os.getenv("ZOHO_CLIENT_SECRET"),
            refresh_token=os.getenv("ZOHO_REFRESH_TOKEN"),
            access_token=os.getenv("ZOHO_ACCESS_TOKEN") or None,
            oauth_domain=os.getenv("ZOHO_OAUTH_DOMAIN", DEFAULT_OAUTH_DOMAIN),
            api_domain=os.getenv("ZOHO_API_DOMAIN", DEFAULT_API_DOMAIN),
            sandbox=os.getenv("ZOHO_SANDBOX", "").strip().lower() in _TRUTHY,
            timeout=_timeout_from_env(os.getenv("ZOHO_TIMEOUT")),
        )


def _timeout_from_env(value: Optional[str]) -> int:
    if not value:
        return DEFAULT_TIMEOUT
    try:
        timeout = int(value)
    except ValueError:
        timeout = 0
    if timeout <= 0:
        _logger.warning("Ignoring invalid ZOHO_TIMEOUT=%r; using %ds", value, DEFAULT_TIMEOUT)
        return DEFAULT_TIMEOUT
    return timeout
