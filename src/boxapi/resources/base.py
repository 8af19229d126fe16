"""Common helpers for resource wrappers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..api_request import ApiRequest
from ..request_builder import RequestBuilder

if TYPE_CHECKING:  # pragma: no cover - import-time guard
    from ..client import BoxClient


class ResourceBase:
    """Provide shared helpers for resource modules."""

    def __init__(self, client: BoxClient) -> None:
        self._client = client

    @property
    def _builder(self) -> RequestBuilder:
        return self._client.builder

    def _execute(self, api_request: ApiRequest) -> Any:
        return self._client.execute(api_request)
