from boxapi.auth import BearerAuth, BoxAuth


def test_box_auth_without_token_sends_api_key_only():
    headers: dict[str, str] = {}

    BoxAuth(api_key="key").apply(headers)

    assert headers["Authorization"] == "BoxAuth api_key=key"


def test_box_auth_includes_token_after_update():
    auth = BoxAuth(api_key="key")
    auth.update_token("tok")
    headers: dict[str, str] = {}

    auth.apply(headers)

    assert headers["Authorization"] == "BoxAuth api_key=key&auth_token=tok"


def test_bearer_auth_header():
    headers: dict[str, str] = {}

    BearerAuth(token="abc").apply(headers)

    assert headers["Authorization"] == "Bearer abc"
