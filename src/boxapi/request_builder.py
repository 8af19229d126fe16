"""Translate Box API operations into request values and classify responses."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any, Protocol

from .api_request import ApiRequest, DataFormat, Method
from .config import API_VERSION, JSON_MIME_TYPE, LEGACY_REST_PATH
from .models import Error, ErrorCollection, ResourceType, SharedLink, wire_name
from .serialization import to_json

logger = logging.getLogger(__name__)

ERROR_MARKER = '"type":"error"'


class ResponseLike(Protocol):
    """The response attributes the success evaluation relies on."""

    content_type: str | None
    content: str | None


class RequestBuilder:
    """Build one :class:`ApiRequest` per API operation.

    Every method is a pure function of its arguments. No validation happens
    here: an empty identifier produces a malformed path that the server
    rejects.
    """

    def get(self, resource_type: ResourceType, id: str) -> ApiRequest:
        return self._json_request(resource_type, "{id}").with_segment("id", id)

    def get_items(self, id: str) -> ApiRequest:
        return self._json_request(ResourceType.FOLDER, "{id}/items").with_segment("id", id)

    def create_folder(self, parent_id: str, name: str) -> ApiRequest:
        request = self._json_request(ResourceType.FOLDER, "{parentId}", Method.POST)
        return request.with_segment("parentId", parent_id).with_body({"name": name})

    def create_file(self, parent_id: str, name: str, content: bytes) -> ApiRequest:
        request = self._json_request(ResourceType.FILE, "data", Method.POST)
        return request.with_file("filename1", content, name).with_form("folder_id", parent_id)

    def delete_folder(self, id: str, recursive: bool) -> ApiRequest:
        request = self._delete_request(ResourceType.FOLDER, id)
        return request.with_param("recursive", str(bool(recursive)).lower())

    def delete_file(self, id: str, etag: str | None) -> ApiRequest:
        request = self._delete_request(ResourceType.FILE, id)
        return request.with_header("If-Match", etag if etag is not None else "")

    def delete_comment(self, id: str) -> ApiRequest:
        return self._delete_request(ResourceType.COMMENT, id)

    def copy(
        self, resource_type: ResourceType, id: str, new_parent_id: str, name: str
    ) -> ApiRequest:
        request = self._json_request(resource_type, "{id}/copy", Method.POST)
        body = {"parent": {"id": new_parent_id}, "name": name}
        return request.with_segment("id", id).with_body(body)

    def update(
        self,
        resource_type: ResourceType,
        id: str,
        parent_id: str | None = None,
        name: str | None = None,
        description: str | None = None,
        shared_link: SharedLink | None = None,
        message: str | None = None,
    ) -> ApiRequest:
        """Build a partial update carrying only the fields that were supplied.

        Empty strings count as not supplied. Omitted fields are left out of the
        body entirely, so the server keeps their current values.
        """

        candidates: dict[str, Any] = {
            "parent": {"id": parent_id} if parent_id else None,
            "name": name or None,
            "description": description or None,
            "shared_link": shared_link,
            "message": message or None,
        }
        body = {key: value for key, value in candidates.items() if value is not None}
        request = self._json_request(resource_type, "{id}", Method.PUT)
        return request.with_segment("id", id).with_body(body)

    def read(self, id: str) -> ApiRequest:
        return self._raw_request(ResourceType.FILE, "{id}/data").with_segment("id", id)

    def write(self, id: str, name: str, content: bytes) -> ApiRequest:
        request = self._json_request(ResourceType.FILE, "{id}/data", Method.POST)
        return request.with_segment("id", id).with_file("filename", content, name)

    def add_comment(self, id: str, message: str) -> ApiRequest:
        request = self._json_request(ResourceType.FILE, "{id}/comments", Method.POST)
        return request.with_segment("id", id).with_body({"message": message})

    def get_comments(self, resource_type: ResourceType, id: str) -> ApiRequest:
        return self._json_request(resource_type, "{id}/comments").with_segment("id", id)

    def get_ticket(self, api_key: str) -> ApiRequest:
        request = ApiRequest(method=Method.GET, resource=LEGACY_REST_PATH)
        return request.with_param("action", "get_ticket").with_param("api_key", api_key)

    def swap_ticket_for_token(self, api_key: str, ticket: str) -> ApiRequest:
        request = ApiRequest(method=Method.GET, resource=LEGACY_REST_PATH)
        return (
            request.with_param("action", "get_auth_token")
            .with_param("api_key", api_key)
            .with_param("ticket", ticket)
        )

    # Response classification -------------------------------------------------
    def was_successful(self, response: ResponseLike | None) -> tuple[bool, Error | None]:
        """Classify ``response`` and extract the server-reported error, if any.

        Only JSON bodies containing the literal ``"type":"error"`` are treated
        as failures. A payload that merely quotes that text inside a field is
        misclassified too; callers relying on free-form text fields should be
        aware of it.
        """

        if response is None:
            return False, None
        content = response.content or ""
        if response.content_type != JSON_MIME_TYPE or ERROR_MARKER not in content:
            return True, None
        return False, self._decode_error(content)

    # Internal helpers -------------------------------------------------------
    def _decode_error(self, content: str) -> Error | None:
        try:
            payload = json.loads(content)
        except ValueError:
            logger.warning("Error response body is not valid JSON: %s", content[:200])
            return None
        if not isinstance(payload, Mapping):
            logger.warning("Error response body is not a JSON object: %s", content[:200])
            return None

        error = Error.from_payload(payload)
        if error.type is not None:
            return error

        logger.debug("Error envelope has no type tag; decoding as error collection")
        collection = ErrorCollection.from_payload(payload)
        if collection.total_count and collection.entries:
            return collection.entries[0]
        return error

    def _delete_request(self, resource_type: ResourceType, id: str) -> ApiRequest:
        request = self._json_request(resource_type, "{id}", Method.DELETE)
        return request.with_segment("id", id)

    def _raw_request(
        self,
        resource_type: ResourceType,
        resource: str | None,
        method: Method = Method.GET,
    ) -> ApiRequest:
        path = "{version}/{type}" + (f"/{resource}" if resource else "")
        return (
            ApiRequest(method=method, resource=path)
            .with_segment("version", API_VERSION)
            .with_segment("type", wire_name(resource_type))
        )

    def _json_request(
        self,
        resource_type: ResourceType,
        resource: str | None = None,
        method: Method = Method.GET,
    ) -> ApiRequest:
        request = self._raw_request(resource_type, resource, method)
        return replace(request, data_format=DataFormat.JSON, serializer=to_json)


__all__ = ["ERROR_MARKER", "RequestBuilder", "ResponseLike"]
