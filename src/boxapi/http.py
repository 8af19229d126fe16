"""HTTP utilities that execute request values against the Box API."""

from __future__ import annotations

import json
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any

from requests import Response, Session

from .api_request import ApiRequest
from .config import JSON_MIME_TYPE
from .exceptions import UnexpectedResponseError


@dataclass(slots=True)
class ApiResponse:
    """Typed response wrapper consumed by the success evaluation."""

    status_code: int
    content_type: str | None
    content: str
    raw: bytes
    headers: Mapping[str, str]


def media_type(response: Response) -> str | None:
    """Return the response media type without parameters such as charset."""

    header = response.headers.get("Content-Type")
    if not header:
        return None
    return header.split(";", 1)[0].strip().lower()


def parse_json(response: ApiResponse) -> Any:
    """Parse JSON with helpful error context."""

    try:
        return json.loads(response.content)
    except ValueError as exc:
        raise UnexpectedResponseError(
            "Response did not contain valid JSON",
            status_code=response.status_code,
            details=response.content[:200],
        ) from exc


def decode_payload(response: ApiResponse, api_request: ApiRequest) -> Any:
    """Return the payload of ``response`` in the shape ``api_request`` expects.

    JSON requests are parsed unless the server labels the body with a
    non-JSON media type, in which case the text is returned as-is. Raw
    requests always get the undecoded bytes.
    """

    if not response.raw:
        return None
    if not api_request.is_json:
        return response.raw
    if response.content_type and "json" not in response.content_type:
        return response.content
    return parse_json(response)


def build_url(base_url: str, api_request: ApiRequest) -> str:
    # Plain concatenation keeps dot segments in identifiers untouched.
    return f"{base_url.rstrip('/')}/{api_request.path.lstrip('/')}"


def send(
    session: Session,
    api_request: ApiRequest,
    *,
    base_url: str,
    headers: MutableMapping[str, str] | None = None,
    timeout: float | tuple[float, float] | None = None,
    verify: bool | str = True,
) -> ApiResponse:
    """Execute ``api_request`` and wrap the outcome without judging it."""

    merged_headers: dict[str, str] = dict(headers or {})
    merged_headers.update(api_request.headers)

    data_payload: Any = None
    files: dict[str, tuple[str, bytes]] | None = None
    if api_request.files:
        files = {item.name: (item.filename, item.content) for item in api_request.files}
        data_payload = dict(api_request.form) or None
    elif api_request.form:
        data_payload = dict(api_request.form)
    else:
        body = api_request.serialize_body()
        if body is not None:
            data_payload = body.encode("utf-8")
            merged_headers["Content-Type"] = JSON_MIME_TYPE

    response = session.request(
        method=api_request.method.value,
        url=build_url(base_url, api_request),
        params=list(api_request.params) or None,
        headers=merged_headers,
        data=data_payload,
        files=files,
        timeout=timeout,
        verify=verify,
    )

    return ApiResponse(
        status_code=response.status_code,
        content_type=media_type(response),
        content=response.text,
        raw=response.content,
        headers=response.headers,
    )
