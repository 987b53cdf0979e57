import json
from unittest.mock import patch

import httpx
import pytest

from skytap_publish_url.client import (
    SkytapClient,
    build_list_url,
    check_response_for_errors,
)
from skytap_publish_url.exceptions import ApiError, TransportError


class TestBuildListUrl:
    def test_default_host(self):
        assert build_list_url("123") == "https://cloud.skytap.com/configurations/123"

    def test_custom_host_trailing_slash(self):
        url = build_list_url("abc", base_url="https://skytap.example.com/")
        assert url == "https://skytap.example.com/configurations/abc"

    def test_identifier_is_not_validated(self):
        assert build_list_url("a b").endswith("/configurations/a b")


class TestCheckResponseForErrors:
    def test_ok_body(self):
        check_response_for_errors(json.dumps({"publish_sets": []}))

    def test_non_json_body_passes(self):
        check_response_for_errors("<html></html>")

    def test_error_key(self):
        with pytest.raises(ApiError, match="Configuration not found"):
            check_response_for_errors(json.dumps({"error": "Configuration not found"}))

    def test_errors_list(self):
        with pytest.raises(ApiError, match="bad one; bad two"):
            check_response_for_errors(json.dumps({"errors": ["bad one", "bad two"]}))

    def test_empty_errors_list_is_fine(self):
        check_response_for_errors(json.dumps({"errors": [], "publish_sets": []}))

    def test_http_status(self):
        with pytest.raises(ApiError) as exc_info:
            check_response_for_errors(json.dumps({"error": "denied"}), status_code=401)

        assert exc_info.value.status_code == 401
        assert "HTTP 401" in str(exc_info.value)
        assert "denied" in str(exc_info.value)


class TestSkytapClient:
    def test_get_sends_auth_headers(self, make_client):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["headers"] = request.headers
            return httpx.Response(200, json={"publish_sets": []})

        client = make_client(handler)
        body = client.get(client.list_url("123"), "dXNlcjprZXk=")

        assert json.loads(body) == {"publish_sets": []}
        assert seen["url"] == "https://cloud.skytap.com/configurations/123"
        assert seen["headers"]["Authorization"] == "Basic dXNlcjprZXk="
        assert seen["headers"]["Accept"] == "application/json"

    def test_http_error_status(self, make_client):
        client = make_client(lambda request: httpx.Response(404, json={"error": "nope"}))

        with pytest.raises(ApiError) as exc_info:
            client.get("https://cloud.skytap.com/configurations/1", "creds")

        assert exc_info.value.status_code == 404

    def test_api_error_in_ok_body(self, make_client):
        client = make_client(lambda request: httpx.Response(200, json={"error": "busy"}))

        with pytest.raises(ApiError, match="busy"):
            client.get("https://cloud.skytap.com/configurations/1", "creds")

    def test_transport_error(self, make_client):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)

        with pytest.raises(TransportError, match="connection refused"):
            client.get("https://cloud.skytap.com/configurations/1", "creds")

    def test_base_url_from_env(self, monkeypatch):
        monkeypatch.setenv("SKYTAP_BASE_URL", "https://skytap.internal")
        with SkytapClient() as client:
            assert client.list_url("7") == "https://skytap.internal/configurations/7"

    @patch("skytap_publish_url.client.httpx.Client")
    def test_owned_client_is_closed(self, mock_client_cls):
        with SkytapClient(timeout=5, verify=False):
            pass

        mock_client_cls.assert_called_once_with(timeout=5, verify=False)
        mock_client_cls.return_value.close.assert_called_once()

    def test_injected_client_is_not_closed(self):
        http_client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        with SkytapClient(http_client=http_client):
            pass

        assert not http_client.is_closed
        http_client.close()
