"""Tests for zohocrm.transport.HttpTransport."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from zohocrm.exceptions import GeneralError
from zohocrm.transport import HttpTransport, RawResponse, redact_query


def test_send_returns_status_and_text():
    transport = HttpTransport()
    resp = MagicMock(status_code=401, text='{"code":"INVALID_TOKEN"}')

    with patch.object(transport.session, "request", return_value=resp) as mock_request:
        raw = transport.send(
            "PUT",
            "https://api.example.com/crm/v2/Leads",
            headers={"Authorization": "Zoho-oauthtoken t"},
            body='{"data": []}',
            timeout=5,
        )

    assert raw == RawResponse(status_code=401, text='{"code":"INVALID_TOKEN"}')
    args, kwargs = mock_request.call_args
    assert args == ("PUT", "https://api.example.com/crm/v2/Leads")
    assert kwargs["data"] == b'{"data": []}'
    assert kwargs["timeout"] == 5


def test_send_wraps_request_exceptions():
    transport = HttpTransport()

    with patch.object(
        transport.session, "request", side_effect=requests.ConnectionError("Network error")
    ):
        with pytest.raises(GeneralError, match="Network error") as exc_info:
            transport.send("GET", "https://api.example.com/crm/v2/Leads")

    assert exc_info.value.__cause__ is None
    assert exc_info.value.__suppress_context__


def test_send_redacts_query_strings(caplog):
    """Failure text from urllib3 embeds the request URL; its query is hidden."""
    transport = HttpTransport()
    reason = (
        "HTTPSConnectionPool(host='accounts.zoho.com', port=443): Max retries exceeded "
        "with url: /oauth/v2/token?grant_type=refresh_token&client_id=id"
        "&client_secret=TOPSECRET&refresh_token=RTOKEN (Caused by NewConnectionError)"
    )

    with patch.object(transport.session, "request", side_effect=requests.ConnectionError(reason)):
        with pytest.raises(GeneralError) as exc_info:
            transport.send(
                "POST",
                "https://accounts.zoho.com/oauth/v2/token",
                params={"client_secret": "TOPSECRET", "refresh_token": "RTOKEN"},
            )

    for text in (caplog.text, str(exc_info.value)):
        assert "TOPSECRET" not in text
        assert "RTOKEN" not in text
    assert "/oauth/v2/token?<redacted>" in str(exc_info.value)
    assert "ConnectionError" in caplog.text


def test_redact_query():
    assert redact_query("GET /crm/v2/Leads?page=2 failed") == "GET /crm/v2/Leads?<redacted> failed"
    assert redact_query("no url here") == "no url here"


def test_uses_given_session():
    session = requests.Session()

    assert HttpTransport(session).session is session
