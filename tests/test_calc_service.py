"""Tests for the calculator HTTP client."""

import logging
from unittest.mock import patch

import pytest
import requests

from calc_client.errors import DecodeError, RequestFailed, TransportError
from calc_client.models import ExpressionRecord
from calc_client.services import ServiceClient, create_client
from calc_client.settings import Settings
from tests.conftest import BASE_URL, make_response

logger = logging.getLogger(__name__)


@pytest.mark.parametrize("text", ["2+2", "", "   ", "(1+", "2 * (3 + 4)"])
def test_submit_posts_expression_as_is(client, session, text):
    """Any text, empty included, is posted once as {"expression": text}."""
    session.request.return_value = make_response(201, {"id": "abc123"})

    assert client.submit(text) == "abc123"

    session.request.assert_called_once_with(
        method="POST",
        url=f"{BASE_URL}/api/v1/calculate",
        json={"expression": text},
        timeout=None,
    )


def test_submit_keeps_numeric_identifier_opaque(client, session):
    session.request.return_value = make_response(201, {"id": 17, "extra": True})
    assert client.submit("1+1") == 17


def test_list_all_preserves_service_order(client, session):
    body = {
        "expressions": [
            {"id": "b", "expression": "3*3", "status": "processing"},
            {"id": "a", "expression": "2+2", "status": "completed", "result": 4},
        ]
    }
    session.request.return_value = make_response(200, body)

    records = client.list_all()

    assert [r.id for r in records] == ["b", "a"]
    assert records[0].result is None
    assert records[1].result == 4
    session.request.assert_called_once_with(
        method="GET", url=f"{BASE_URL}/api/v1/expressions", json=None, timeout=None
    )


def test_get_by_id_returns_record(client, session):
    body = {"expression": {"id": "9", "expression": "1/2", "status": "completed", "result": 0.5}}
    session.request.return_value = make_response(200, body)

    record = client.get_by_id("9")

    assert isinstance(record, ExpressionRecord)
    assert record.result == 0.5
    assert session.request.call_args.kwargs["url"] == f"{BASE_URL}/api/v1/expressions/9"


def test_get_by_id_escapes_identifier_in_path(client, session):
    body = {"expression": {"id": "a/b", "expression": "1", "status": "completed"}}
    session.request.return_value = make_response(200, body)

    client.get_by_id("a/b")

    assert session.request.call_args.kwargs["url"].endswith("/api/v1/expressions/a%2Fb")


@pytest.mark.parametrize("status", [199, 301, 404, 422, 500, 503])
def test_non_success_status_raises_request_failed(client, session, status):
    session.request.return_value = make_response(status, {"error": "nope"})

    with pytest.raises(RequestFailed) as exc_info:
        client.list_all()

    assert exc_info.value.status == status
    assert str(exc_info.value) == f"Error: {status}"


def test_transport_failure_keeps_transport_description(client, session):
    session.request.side_effect = requests.ConnectionError("connection refused")

    with pytest.raises(TransportError, match="connection refused"):
        client.submit("2+2")


def test_timeout_is_a_transport_error(client, session):
    session.request.side_effect = requests.Timeout("read timed out")

    with pytest.raises(TransportError):
        client.get_by_id("1")


def test_non_json_body_is_decode_error(client, session):
    session.request.return_value = make_response(200, raw=b"<html>oops</html>")

    with pytest.raises(DecodeError):
        client.list_all()


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"expressions": "not a list"},
        {"expressions": [{"id": 1, "status": "done"}]},
        {"expressions": [{"id": None, "expression": "1", "status": "done"}]},
    ],
)
def test_wrong_shape_is_decode_error(client, session, body):
    session.request.return_value = make_response(200, body)

    with pytest.raises(DecodeError):
        client.list_all()
    logger.info(f"Rejected body: {body}")


def test_create_client_uses_settings():
    settings = Settings(api_base_url="http://svc:9000/", request_timeout=2.5)

    client = create_client(settings)

    assert isinstance(client, ServiceClient)
    assert client.base_url == "http://svc:9000"
    assert client.timeout == 2.5
    client.close()


def test_submit_request_is_json_encoded():
    """The prepared request carries the JSON content type and exact body."""
    client = ServiceClient(base_url=BASE_URL)
    with patch.object(requests.Session, "send", return_value=make_response(201, {"id": "abc123"})) as send:
        assert client.submit("") == "abc123"
    client.close()

    prepared = send.call_args.args[0]
    assert prepared.method == "POST"
    assert prepared.url == f"{BASE_URL}/api/v1/calculate"
    assert prepared.headers["Content-Type"] == "application/json"
    assert prepared.body == b'{"expression": ""}'
