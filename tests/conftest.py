from unittest.mock import MagicMock

import pytest

from zohocrm.config import ZohoConfig

ACCESS_TOKEN = "1000.ad8f97a9sd7f9a7sdf7a89s7df87a9s8.a77fd8a97fa89sd7f89a7sdf97a89df3"


@pytest.fixture(autouse=True)
def clean_zoho_env(monkeypatch, tmp_path):
    """Keep real ZOHO_* variables and any local .env out of the tests."""
    for var in [
        "ZOHO_CLIENT_ID",
        "ZOHO_CLIENT_SECRET",
        "ZOHO_REFRESH_TOKEN",
        "ZOHO_ACCESS_TOKEN",
        "ZOHO_OAUTH_DOMAIN",
        "ZOHO_API_DOMAIN",
        "ZOHO_SANDBOX",
        "ZOHO_TIMEOUT",
    ]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def make_response():
    """Build a stand-in for requests.Response with the given body."""

    def _make(text="", status_code=200):
        resp = MagicMock()
        resp.status_code = status_code
        resp.text = text
        return resp

    return _make


@pytest.fixture
def cfg():
    """Config with identity set and no access token."""
    return ZohoConfig(
        client_id="id",
        client_secret="secret",
        refresh_token="refresh_token",
        oauth_domain="https://accounts.example.com",
        api_domain="https://api.example.com",
    )


@pytest.fixture
def token_cfg(cfg):
    """Config with a preset access token."""
    cfg.access_token = ACCESS_TOKEN
    return cfg
