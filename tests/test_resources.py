import pytest

from boxapi import BoxClient, SharedLink
from boxapi.auth.box import BoxAuth
from boxapi.exceptions import AuthenticationError, UnexpectedResponseError
from boxapi.resources.tickets import parse_legacy_response

BASE_URL = "https://api.box.test/api"


def build_client(auth=None):
    return BoxClient(base_url=BASE_URL, auth_strategy=auth or BoxAuth("key", "tok"))


def test_folder_items_and_entries(requests_mock):
    client = build_client()
    requests_mock.get(
        f"{BASE_URL}/2.0/folder/0/items",
        json={"total_count": 1, "entries": [{"type": "file", "id": "1", "name": "a.txt"}]},
    )

    entries = client.folders.list_entries("0")

    assert entries == [{"type": "file", "id": "1", "name": "a.txt"}]


def test_create_folder_sends_compact_json(requests_mock):
    client = build_client()
    matcher = requests_mock.post(f"{BASE_URL}/2.0/folder/0", json={"type": "folder", "id": "9"})

    result = client.folders.create("0", "Reports")

    assert result["id"] == "9"
    assert matcher.last_request.body == b'{"name":"Reports"}'
    assert matcher.last_request.headers["Content-Type"] == "application/json"


def test_delete_folder_sends_recursive_flag(requests_mock):
    client = build_client()
    matcher = requests_mock.delete(f"{BASE_URL}/2.0/folder/5", status_code=204)

    result = client.folders.delete("5", recursive=True)

    assert result is None
    assert matcher.last_request.qs == {"recursive": ["true"]}


def test_update_folder_only_sends_given_fields(requests_mock):
    client = build_client()
    matcher = requests_mock.put(f"{BASE_URL}/2.0/folder/5", json={"type": "folder", "id": "5"})

    client.folders.update("5", description="Q3", shared_link=SharedLink(access="collaborators"))

    assert matcher.last_request.json() == {
        "description": "Q3",
        "shared_link": {"access": "collaborators"},
    }


def test_copy_file(requests_mock):
    client = build_client()
    matcher = requests_mock.post(f"{BASE_URL}/2.0/file/1/copy", json={"type": "file", "id": "2"})

    client.files.copy("1", "7", "copy.txt")

    assert matcher.last_request.json() == {"parent": {"id": "7"}, "name": "copy.txt"}


def test_upload_file_is_multipart(requests_mock):
    client = build_client()
    matcher = requests_mock.post(
        f"{BASE_URL}/2.0/file/data",
        json={"total_count": 1, "entries": [{"type": "file", "id": "11"}]},
    )

    client.files.upload("0", "notes.txt", b"hello world")

    request = matcher.last_request
    assert request.headers["Content-Type"].startswith("multipart/form-data")
    assert b'name="filename1"; filename="notes.txt"' in request.body
    assert b'name="folder_id"' in request.body
    assert b"hello world" in request.body


def test_write_file_uses_filename_field(requests_mock):
    client = build_client()
    matcher = requests_mock.post(f"{BASE_URL}/2.0/file/11/data", json={"type": "file", "id": "11"})

    client.files.write("11", "notes.txt", b"v2")

    assert b'name="filename"; filename="notes.txt"' in matcher.last_request.body


def test_read_file_returns_bytes(requests_mock):
    client = build_client()
    requests_mock.get(
        f"{BASE_URL}/2.0/file/11/data",
        content=b"\x89PNG",
        headers={"Content-Type": "application/octet-stream"},
    )

    assert client.files.read("11") == b"\x89PNG"


def test_delete_file_without_etag_sends_empty_if_match(requests_mock):
    client = build_client()
    matcher = requests_mock.delete(f"{BASE_URL}/2.0/file/11", status_code=204)

    client.files.delete("11")

    assert matcher.last_request.headers["If-Match"] == ""


def test_comments_round_trip(requests_mock):
    client = build_client()
    add = requests_mock.post(
        f"{BASE_URL}/2.0/file/11/comments", json={"type": "comment", "id": "c1"}
    )
    requests_mock.put(f"{BASE_URL}/2.0/comment/c1", json={"type": "comment", "id": "c1"})
    remove = requests_mock.delete(f"{BASE_URL}/2.0/comment/c1", status_code=204)

    client.files.add_comment("11", "first")
    client.comments.update("c1", "edited")
    client.comments.delete("c1")

    assert add.last_request.json() == {"message": "first"}
    assert requests_mock.request_history[1].json() == {"message": "edited"}
    assert remove.called


def test_get_ticket_parses_xml(requests_mock):
    client = build_client(BoxAuth("key"))
    matcher = requests_mock.get(
        f"{BASE_URL}/1.0/rest",
        text="<?xml version='1.0' encoding='UTF-8'?>"
        "<response><status>get_ticket_ok</status><ticket>tk1</ticket></response>",
        headers={"Content-Type": "text/xml"},
    )

    ticket = client.tickets.get_ticket("key")

    assert ticket == "tk1"
    assert matcher.last_request.qs == {"action": ["get_ticket"], "api_key": ["key"]}


def test_swap_ticket_installs_token(requests_mock):
    auth = BoxAuth("key")
    client = build_client(auth)
    requests_mock.get(
        f"{BASE_URL}/1.0/rest",
        text="<response><status>get_auth_token_ok</status>"
        "<auth_token>tok9</auth_token></response>",
    )
    folder = requests_mock.get(f"{BASE_URL}/2.0/folder/0", json={"type": "folder"})

    token = client.tickets.swap_ticket_for_token("key", "tk1")
    client.folders.get("0")

    assert token == "tok9"
    assert auth.auth_token == "tok9"
    assert folder.last_request.headers["Authorization"] == "BoxAuth api_key=key&auth_token=tok9"


def test_ticket_failure_status_raises(requests_mock):
    client = build_client(BoxAuth("key"))
    requests_mock.get(
        f"{BASE_URL}/1.0/rest",
        text="<response><status>application_restricted</status></response>",
    )

    with pytest.raises(AuthenticationError) as excinfo:
        client.tickets.get_ticket("key")

    assert "application_restricted" in str(excinfo.value)


def test_parse_legacy_response_rejects_garbage():
    with pytest.raises(UnexpectedResponseError):
        parse_legacy_response(b"not xml")
    with pytest.raises(UnexpectedResponseError):
        parse_legacy_response(b"")


def test_list_entries_of_empty_folder(requests_mock):
    client = build_client()
    requests_mock.get(f"{BASE_URL}/2.0/folder/0/items", json={"total_count": 0})

    assert client.folders.list_entries("0") == []
