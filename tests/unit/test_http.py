"""Unit tests for napalm_f5os.client.http and napalm_f5os.client.errors."""

from __future__ import annotations

import json

import pytest
import requests
import responses as rsps_lib

from napalm_f5os.client.errors import (
    F5OSAPIError,
    F5OSAuthError,
    F5OSRequestError,
    RestconfErrorEntry,
    parse_restconf_errors,
)
from napalm_f5os.client.http import F5OSHTTP, normalise_base_url

URL = "https://192.0.2.10:8888/restconf/data/openconfig-interfaces:interfaces"


def _envelope(*messages: str) -> str:
    return json.dumps(
        {
            "ietf-restconf:errors": {
                "error": [
                    {
                        "error-type": "application",
                        "error-tag": "invalid-value",
                        "error-path": "/openconfig-interfaces:interfaces",
                        "error-message": m,
                    }
                    for m in messages
                ]
            }
        }
    )


def _http(**kwargs: object) -> F5OSHTTP:
    http = F5OSHTTP(**kwargs)  # type: ignore[arg-type]
    http.token = "tok-123"
    return http


# ---------------------------------------------------------------------------
# normalise_base_url
# ---------------------------------------------------------------------------

class TestNormaliseBaseUrl:
    def test_adds_https_scheme(self) -> None:
        assert normalise_base_url("192.0.2.10") == "https://192.0.2.10"

    def test_preserves_http_scheme(self) -> None:
        assert normalise_base_url("http://192.0.2.10") == "http://192.0.2.10"

    def test_preserves_https_scheme(self) -> None:
        assert normalise_base_url("https://f5os.example.com") == "https://f5os.example.com"

    def test_appends_port_when_missing(self) -> None:
        assert normalise_base_url("192.0.2.10", 8888) == "https://192.0.2.10:8888"

    def test_appends_port_to_scheme_prefixed_host(self) -> None:
        assert normalise_base_url("https://192.0.2.10", 443) == "https://192.0.2.10:443"

    def test_keeps_existing_port(self) -> None:
        assert normalise_base_url("192.0.2.10:443", 8888) == "https://192.0.2.10:443"

    def test_port_appended_exactly_once(self) -> None:
        url = normalise_base_url("https://192.0.2.10:8888/", 8888)
        assert url == "https://192.0.2.10:8888"
        assert url.count(":8888") == 1

    def test_zero_port_leaves_host_alone(self) -> None:
        assert normalise_base_url("192.0.2.10", 0) == "https://192.0.2.10"

    def test_strips_trailing_slash(self) -> None:
        assert normalise_base_url("192.0.2.10/") == "https://192.0.2.10"


# ---------------------------------------------------------------------------
# errors.py — envelope decoding
# ---------------------------------------------------------------------------

class TestParseRestconfErrors:
    def test_well_formed_envelope(self) -> None:
        errors = parse_restconf_errors(_envelope("first", "second"))
        assert [e.error_message for e in errors] == ["first", "second"]
        assert errors[0].error_tag == "invalid-value"
        assert errors[0].error_type == "application"

    def test_accepts_bytes(self) -> None:
        errors = parse_restconf_errors(_envelope("boom").encode())
        assert errors[0].error_message == "boom"

    def test_empty_body(self) -> None:
        assert parse_restconf_errors(b"") == []
        assert parse_restconf_errors(None) == []

    def test_non_json_body(self) -> None:
        assert parse_restconf_errors("<html>oops</html>") == []

    def test_missing_envelope_key(self) -> None:
        assert parse_restconf_errors(json.dumps({"something": "else"})) == []

    def test_empty_error_list(self) -> None:
        assert parse_restconf_errors(json.dumps({"ietf-restconf:errors": {"error": []}})) == []

    def test_absent_fields_default_to_empty(self) -> None:
        body = json.dumps({"ietf-restconf:errors": {"error": [{"error-tag": "x"}]}})
        assert parse_restconf_errors(body) == [RestconfErrorEntry(error_tag="x")]


def test_api_error_uses_first_message() -> None:
    err = F5OSAPIError.from_response(500, URL, _envelope("first", "second").encode())
    assert str(err) == "first"
    assert err.status_code == 500
    assert len(err.errors) == 2


def test_api_error_empty_envelope_falls_back_to_status() -> None:
    err = F5OSAPIError.from_response(400, URL, b"")
    assert str(err) == "HTTP 400"
    assert err.errors == []


def test_auth_error_message() -> None:
    err = F5OSAuthError(401, "Unauthorized", "access denied")
    assert "401 Unauthorized" in str(err)
    assert "access denied" in str(err)


def test_request_error_wraps_cause() -> None:
    cause = ConnectionError("refused")
    err = F5OSRequestError(url=URL, cause=cause)
    assert URL in str(err)
    assert err.cause is cause


# ---------------------------------------------------------------------------
# http.py — F5OSHTTP.execute status policy
# ---------------------------------------------------------------------------

@rsps_lib.activate
def test_execute_200_returns_raw_body() -> None:
    rsps_lib.add(rsps_lib.GET, URL, body='{"a": 1}', status=200)
    assert _http().execute("GET", URL) == b'{"a": 1}'


@rsps_lib.activate
def test_execute_201_returns_raw_body() -> None:
    rsps_lib.add(rsps_lib.POST, URL, body="created", status=201)
    assert _http().execute("POST", URL, b"{}") == b"created"


@rsps_lib.activate
def test_execute_404_returns_body_without_error() -> None:
    rsps_lib.add(rsps_lib.GET, URL, body=_envelope("uri keypath not found"), status=404)
    body = _http().execute("GET", URL)
    assert b"uri keypath not found" in body


@rsps_lib.activate
def test_execute_404_empty_body() -> None:
    rsps_lib.add(rsps_lib.GET, URL, body="", status=404)
    assert _http().execute("GET", URL) == b""


@rsps_lib.activate
def test_execute_500_raises_first_error_message() -> None:
    rsps_lib.add(rsps_lib.PATCH, URL, body=_envelope("boom", "later"), status=500)
    with pytest.raises(F5OSAPIError) as exc_info:
        _http().execute("PATCH", URL, b"{}")
    assert str(exc_info.value) == "boom"
    assert exc_info.value.status_code == 500


@rsps_lib.activate
def test_execute_400_empty_envelope_still_raises() -> None:
    rsps_lib.add(
        rsps_lib.PUT,
        URL,
        body=json.dumps({"ietf-restconf:errors": {"error": []}}),
        status=400,
    )
    with pytest.raises(F5OSAPIError, match="HTTP 400"):
        _http().execute("PUT", URL, b"{}")


@rsps_lib.activate
def test_execute_204_returns_empty_bytes() -> None:
    rsps_lib.add(rsps_lib.DELETE, URL, status=204)
    assert _http().execute("DELETE", URL) == b""


@rsps_lib.activate
def test_execute_connection_error_raises_request_error() -> None:
    rsps_lib.add(rsps_lib.GET, URL, body=requests.exceptions.ConnectionError("refused"))
    with pytest.raises(F5OSRequestError) as exc_info:
        _http().execute("GET", URL)
    assert exc_info.value.url == URL


@rsps_lib.activate
def test_execute_timeout_raises_request_error() -> None:
    rsps_lib.add(rsps_lib.GET, URL, body=requests.exceptions.ReadTimeout("slow"))
    with pytest.raises(F5OSRequestError):
        _http(timeout_s=0.1).execute("GET", URL)


# ---------------------------------------------------------------------------
# http.py — headers
# ---------------------------------------------------------------------------

@rsps_lib.activate
def test_token_and_content_type_headers_sent() -> None:
    rsps_lib.add(rsps_lib.GET, URL, body="{}", status=200)
    _http().execute("GET", URL)
    headers = rsps_lib.calls[0].request.headers
    assert headers["X-Auth-Token"] == "tok-123"
    assert headers["Content-Type"] == "application/yang-data+json"


@rsps_lib.activate
def test_no_token_header_before_login() -> None:
    rsps_lib.add(rsps_lib.GET, URL, body="{}", status=200)
    F5OSHTTP().execute("GET", URL)
    assert "X-Auth-Token" not in rsps_lib.calls[0].request.headers


@rsps_lib.activate
def test_user_agent_header_sent() -> None:
    rsps_lib.add(rsps_lib.GET, URL, body="{}", status=200)
    _http().execute("GET", URL)
    assert rsps_lib.calls[0].request.headers["User-Agent"].startswith("napalm-f5os/")


@rsps_lib.activate
def test_user_agent_tag_appended() -> None:
    rsps_lib.add(rsps_lib.GET, URL, body="{}", status=200)
    _http(user_agent="terraform-provider-f5os").execute("GET", URL)
    ua = rsps_lib.calls[0].request.headers["User-Agent"]
    assert ua.endswith(" terraform-provider-f5os")


@rsps_lib.activate
def test_shared_session_is_reused() -> None:
    rsps_lib.add(rsps_lib.GET, URL, body="{}", status=200)
    pool = requests.Session()
    http = F5OSHTTP(session=pool)
    http.execute("GET", URL)
    assert http._session is pool


# ---------------------------------------------------------------------------
# http.py — upload
# ---------------------------------------------------------------------------

@rsps_lib.activate
def test_upload_sends_upload_headers() -> None:
    rsps_lib.add(rsps_lib.POST, URL, body='{"status": "ok"}', status=200)
    resp = _http().upload(
        URL,
        b"--boundary\r\n...",
        {"File-Upload-Id": "upload-1", "Content-Type": "multipart/form-data; boundary=b"},
    )
    assert resp == b'{"status": "ok"}'
    headers = rsps_lib.calls[0].request.headers
    assert headers["File-Upload-Id"] == "upload-1"
    assert headers["Content-Type"] == "multipart/form-data; boundary=b"
    assert headers["X-Auth-Token"] == "tok-123"


@rsps_lib.activate
def test_upload_returns_body_on_error_status() -> None:
    rsps_lib.add(rsps_lib.POST, URL, body=_envelope("disk full"), status=500)
    resp = _http().upload(URL, b"data", {"File-Upload-Id": "u", "Content-Type": "x"})
    assert b"disk full" in resp
