# -*- coding: utf-8 -*-
"""
Tests for the HTTP transport.

Tests cover:
- Envelope unwrapping
- Error envelope messages and status preservation
- Network failures and undecodable bodies
- Request headers
"""

import json
from unittest.mock import patch

import pytest
import requests

from services.api_client import ApiConfig, RentalApiClient, get_api_client, reset_api_client
from services.exceptions import ApiException, ErrorKind, NetworkException


def make_response(status_code, body=None, raw=None):
    response = requests.Response()
    response.status_code = status_code
    response.encoding = "utf-8"
    response.url = "http://api.test/api/agreements"
    if raw is not None:
        response._content = raw.encode("utf-8")
    elif body is not None:
        response._content = json.dumps(body).encode("utf-8")
    else:
        response._content = b""
    return response


@pytest.fixture
def client():
    client = RentalApiClient(ApiConfig(base_url="http://api.test/", timeout=5, verify_ssl=True))
    client.set_access_token("token-123")
    return client


class TestRequest:

    def test_unwraps_success_envelope(self, client):
        body = {"success": True, "data": {"_id": "agr-1"}}
        with patch("requests.request", return_value=make_response(200, body)) as mock_request:
            assert client.get("/api/agreements/agr-1") == {"_id": "agr-1"}

        kwargs = mock_request.call_args.kwargs
        assert kwargs["method"] == "GET"
        assert kwargs["url"] == "http://api.test/api/agreements/agr-1"
        assert kwargs["timeout"] == 5
        assert kwargs["verify"] is True
        assert kwargs["headers"]["Authorization"] == "Bearer token-123"

    def test_plain_body_returned_as_is(self, client):
        with patch("requests.request", return_value=make_response(200, [{"_id": "u1"}])):
            assert client.get("/api/units") == [{"_id": "u1"}]

    def test_empty_body(self, client):
        with patch("requests.request", return_value=make_response(204)):
            assert client.post("/api/agreements", json_data={"a": 1}) is None

    def test_post_sends_json(self, client):
        with patch("requests.request", return_value=make_response(201, {"success": True, "data": {}})) as mock_request:
            client.post("/api/agreements", json_data={"clauses": []})

        assert mock_request.call_args.kwargs["json"] == {"clauses": []}

    def test_no_token_no_authorization_header(self):
        client = RentalApiClient(ApiConfig(base_url="http://api.test", timeout=5, verify_ssl=True))
        with patch("requests.request", return_value=make_response(200, {})) as mock_request:
            client.get("/api/users")

        assert "Authorization" not in mock_request.call_args.kwargs["headers"]


class TestErrors:

    def test_not_found_keeps_status(self, client):
        body = {"success": False, "error": {"message": "Agreement not found"}}
        with patch("requests.request", return_value=make_response(404, body)):
            with pytest.raises(ApiException) as exc_info:
                client.get("/api/agreements/missing")

        error = exc_info.value
        assert error.status_code == 404
        assert error.is_not_found
        assert error.kind == ErrorKind.NOT_FOUND
        assert error.message == "Agreement not found"

    @pytest.mark.parametrize("status, kind", [
        (400, ErrorKind.VALIDATION),
        (422, ErrorKind.VALIDATION),
        (500, ErrorKind.SERVER),
        (403, ErrorKind.SERVER),
    ])
    def test_status_kinds(self, client, status, kind):
        with patch("requests.request", return_value=make_response(status, {"message": "nope"})):
            with pytest.raises(ApiException) as exc_info:
                client.get("/api/agreements")

        assert exc_info.value.kind == kind
        assert exc_info.value.message == "nope"

    def test_error_envelope_with_success_status(self, client):
        body = {"success": False, "error": {"message": "Rejected"}}
        with patch("requests.request", return_value=make_response(200, body)):
            with pytest.raises(ApiException) as exc_info:
                client.post("/api/agreements", json_data={})

        assert exc_info.value.message == "Rejected"
        assert exc_info.value.kind == ErrorKind.SERVER

    def test_connection_error(self, client):
        with patch("requests.request", side_effect=requests.exceptions.ConnectionError("refused")):
            with pytest.raises(NetworkException) as exc_info:
                client.get("/api/agreements")

        assert exc_info.value.kind == ErrorKind.NETWORK

    def test_timeout(self, client):
        with patch("requests.request", side_effect=requests.exceptions.Timeout("timed out")):
            with pytest.raises(NetworkException):
                client.get("/api/agreements")

    def test_invalid_json(self, client):
        with patch("requests.request", return_value=make_response(200, raw="<html>")):
            with pytest.raises(NetworkException):
                client.get("/api/agreements")

    def test_no_retry(self, client):
        with patch("requests.request", side_effect=requests.exceptions.ConnectionError()) as mock_request:
            with pytest.raises(NetworkException):
                client.get("/api/agreements")

        assert mock_request.call_count == 1


class TestSingleton:

    def test_get_and_reset(self):
        reset_api_client()
        first = get_api_client(ApiConfig(base_url="http://api.test"))
        assert get_api_client() is first

        reset_api_client()
        assert get_api_client(ApiConfig(base_url="http://api.test")) is not first
        reset_api_client()
