"""Tests for zohocrm.classify.classify_response."""

import json

import pytest

from zohocrm.classify import OutcomeKind, classify_response
from zohocrm.exceptions import ApiError, EmptyResponse, UnexpectedResponseType
from zohocrm.response import ApiGetManyResponse, BulkWriteResponse

ERROR_BODY = json.dumps(
    {
        "code": "INVALID_URL_PATTERN",
        "details": {},
        "message": "Please check if the URL trying to access is a correct one",
        "status": "error",
    }
)


def accept_anything(payload):
    return payload


def test_success():
    body = json.dumps(
        {
            "data": [{"id": "1"}],
            "info": {"more_records": False, "per_page": 1, "count": 1, "page": 1},
        }
    )

    outcome = classify_response(body, ApiGetManyResponse.from_dict)

    assert outcome.kind is OutcomeKind.SUCCESS
    assert outcome.ok
    assert outcome.unwrap().data == [{"id": "1"}]


def test_error_envelope_wins_over_lenient_parser():
    """A parser that accepts anything must never see the error envelope."""
    outcome = classify_response(ERROR_BODY, accept_anything)

    assert outcome.kind is OutcomeKind.API_ERROR
    assert outcome.error.code == "INVALID_URL_PATTERN"
    with pytest.raises(ApiError) as exc_info:
        outcome.unwrap()
    assert exc_info.value.code == "INVALID_URL_PATTERN"
    assert exc_info.value.status == "error"
    assert exc_info.value.details == {}


def test_error_envelope_with_extra_fields():
    body = json.dumps(
        {
            "code": "MANDATORY_NOT_FOUND",
            "details": {"api_name": "Last_Name"},
            "message": "required field not found",
            "status": "error",
            "data": [],
        }
    )

    outcome = classify_response(body, accept_anything)

    assert outcome.kind is OutcomeKind.API_ERROR
    assert outcome.error.details == {"api_name": "Last_Name"}


def test_partial_error_envelope_is_not_an_api_error():
    """Missing ``details`` means the body is not the error envelope."""
    body = json.dumps({"code": "X", "message": "m", "status": "error"})

    outcome = classify_response(body, accept_anything)

    assert outcome.kind is OutcomeKind.SUCCESS


def test_unexpected_plain_text():
    outcome = classify_response("invalid_client", BulkWriteResponse.from_dict)

    assert outcome.kind is OutcomeKind.UNEXPECTED
    assert outcome.raw == "invalid_client"
    with pytest.raises(UnexpectedResponseType) as exc_info:
        outcome.unwrap()
    assert exc_info.value.raw == "invalid_client"
    assert str(exc_info.value) == "invalid_client"


def test_unexpected_json_keeps_raw_text():
    body = '{"something": "else"}'

    outcome = classify_response(body, BulkWriteResponse.from_dict)

    assert outcome.kind is OutcomeKind.UNEXPECTED
    assert outcome.raw == body


def test_empty_body():
    outcome = classify_response("", BulkWriteResponse.from_dict)

    assert outcome.kind is OutcomeKind.EMPTY
    with pytest.raises(EmptyResponse, match="Empty response"):
        outcome.unwrap()


def test_parser_errors_become_unexpected():
    body = json.dumps({"data": [{"name": "no id"}]})

    def needs_id(payload):
        return [record["id"] for record in payload["data"]]

    outcome = classify_response(body, needs_id)

    assert outcome.kind is OutcomeKind.UNEXPECTED
