import pytest
import requests
from urllib3.exceptions import InsecureRequestWarning

from boxapi import BoxClient, ResourceType
from boxapi.auth.bearer import BearerAuth
from boxapi.auth.box import BoxAuth
from boxapi.exceptions import ApiError, RequestError, UnexpectedResponseError

BASE_URL = "https://api.box.test/api"
JSON_HEADERS = {"Content-Type": "application/json"}


def build_client(**kwargs):
    return BoxClient(
        base_url=BASE_URL,
        auth_strategy=kwargs.pop("auth_strategy", BoxAuth("key", "tok")),
        **kwargs,
    )


def test_execute_returns_json_payload(requests_mock):
    client = build_client()
    requests_mock.get(f"{BASE_URL}/2.0/folder/0", json={"type": "folder", "id": "0"})

    payload = client.execute(client.builder.get(ResourceType.FOLDER, "0"))

    assert payload == {"type": "folder", "id": "0"}


def test_auth_header_is_sent(requests_mock):
    client = build_client()
    matcher = requests_mock.get(f"{BASE_URL}/2.0/file/1", json={"type": "file", "id": "1"})

    client.files.get("1")

    assert matcher.last_request.headers["Authorization"] == "BoxAuth api_key=key&auth_token=tok"
    assert matcher.last_request.headers["Accept"] == "application/json"


def test_bearer_strategy_is_supported(requests_mock):
    client = build_client(auth_strategy=BearerAuth("abc123"))
    matcher = requests_mock.get(f"{BASE_URL}/2.0/file/1", json={"type": "file", "id": "1"})

    client.files.get("1")

    assert matcher.last_request.headers["Authorization"] == "Bearer abc123"


def test_default_headers_are_merged(requests_mock):
    client = build_client(default_headers={"X-Trace": "t1"})
    matcher = requests_mock.get(f"{BASE_URL}/2.0/folder/0", json={"type": "folder"})

    client.folders.get("0")

    assert matcher.last_request.headers["X-Trace"] == "t1"


def test_error_envelope_raises_api_error(requests_mock):
    client = build_client()
    requests_mock.get(
        f"{BASE_URL}/2.0/file/404",
        status_code=404,
        text='{"type":"error","status":404,"code":"not_found","message":"Not Found"}',
        headers=JSON_HEADERS,
    )

    with pytest.raises(ApiError) as excinfo:
        client.files.get("404")

    assert excinfo.value.status_code == 404
    assert excinfo.value.error.code == "not_found"
    assert "Not Found" in str(excinfo.value)


def test_error_collection_raises_first_entry(requests_mock):
    client = build_client()
    requests_mock.post(
        f"{BASE_URL}/2.0/folder/0",
        status_code=400,
        text=(
            '{"type":"error_collection","total_count":"1",'
            '"entries":[{"type":"error","code":"item_name_in_use","message":"in use"}]}'
        ),
        headers={"Content-Type": "application/json; charset=utf-8"},
    )

    with pytest.raises(ApiError) as excinfo:
        client.folders.create("0", "Reports")

    assert excinfo.value.error.code == "item_name_in_use"


def test_unstructured_http_error_raises_request_error(requests_mock):
    client = build_client()
    requests_mock.get(f"{BASE_URL}/2.0/folder/1", status_code=502, text="Bad gateway")

    with pytest.raises(RequestError) as excinfo:
        client.folders.get("1")

    assert not isinstance(excinfo.value, ApiError)
    assert excinfo.value.status_code == 502


def test_request_logging_includes_url(caplog, requests_mock):
    client = build_client()
    requests_mock.get(f"{BASE_URL}/2.0/folder/0/items", json={"entries": []})

    with caplog.at_level("INFO", logger="boxapi.client"):
        client.folders.items("0")

    assert f"Box request GET {BASE_URL}/2.0/folder/0/items" in caplog.text


def test_request_error_includes_root_cause():
    class ExplodingSession:
        def request(self, *args, **kwargs):  # pragma: no cover - helper
            raise requests.exceptions.SSLError("CERTIFICATE_VERIFY_FAILED")

        def close(self):  # pragma: no cover - helper
            pass

    client = build_client(session=ExplodingSession())

    with pytest.raises(RequestError) as excinfo:
        client.folders.get("0")

    assert "CERTIFICATE_VERIFY_FAILED" in str(excinfo.value)


def test_send_strips_charset_from_content_type(requests_mock):
    client = build_client()
    requests_mock.get(
        f"{BASE_URL}/2.0/folder/0",
        text='{"type":"folder"}',
        headers={"Content-Type": "application/json; charset=UTF-8"},
    )

    response = client.send(client.builder.get(ResourceType.FOLDER, "0"))

    assert response.content_type == "application/json"
    assert response.content == '{"type":"folder"}'


def test_encoded_id_reaches_the_wire(requests_mock):
    client = build_client()
    url = f"{BASE_URL}/2.0/file/a%2Fb"
    requests_mock.get(url, json={"type": "file"})

    client.files.get("a/b")

    assert requests_mock.last_request.url == url


def test_dot_segment_id_is_not_collapsed(requests_mock):
    client = build_client()
    url = f"{BASE_URL}/2.0/folder/.."
    requests_mock.get(url, json={"type": "folder"})

    client.folders.get("..")

    assert requests_mock.last_request.url == url
    assert requests_mock.last_request.path == "/api/2.0/folder/.."


def test_json_body_without_content_type_is_parsed(requests_mock):
    client = build_client()
    requests_mock.get(f"{BASE_URL}/2.0/folder/0", text='{"type":"folder","id":"0"}')

    payload = client.execute(client.builder.get(ResourceType.FOLDER, "0"))

    assert payload == {"type": "folder", "id": "0"}


def test_text_body_is_returned_as_text(requests_mock):
    client = build_client()
    requests_mock.get(
        f"{BASE_URL}/2.0/folder/0", text="maintenance", headers={"Content-Type": "text/plain"}
    )

    payload = client.execute(client.builder.get(ResourceType.FOLDER, "0"))

    assert payload == "maintenance"


def test_malformed_json_success_raises_unexpected_response(requests_mock):
    client = build_client()
    requests_mock.get(f"{BASE_URL}/2.0/folder/0", text="{not json", headers=JSON_HEADERS)

    with pytest.raises(UnexpectedResponseError) as excinfo:
        client.folders.get("0")

    assert excinfo.value.status_code == 200


def test_truncated_error_envelope_still_raises_api_error(requests_mock):
    client = build_client()
    requests_mock.get(
        f"{BASE_URL}/2.0/folder/0",
        status_code=500,
        text='{"type":"error","status":500',
        headers=JSON_HEADERS,
    )

    with pytest.raises(ApiError) as excinfo:
        client.folders.get("0")

    assert excinfo.value.status_code == 500
    assert excinfo.value.error is None


def test_disables_insecure_warning_when_verify_disabled(monkeypatch):
    captured: list[object] = []

    def fake_disable(warning):  # pragma: no cover - helper
        captured.append(warning)

    monkeypatch.setattr("boxapi.client.urllib3.disable_warnings", fake_disable)

    build_client(verify_ssl=False)

    assert captured and captured[0] is InsecureRequestWarning
