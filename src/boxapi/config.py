"""Configuration helpers for the Box client."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

API_VERSION = "2.0"
LEGACY_REST_PATH = "1.0/rest"
JSON_MIME_TYPE = "application/json"
DEFAULT_BASE_URL = "https://www.box.com/api"


@dataclass(slots=True)
class ClientConfig:
    """Typed configuration for `BoxClient`."""

    base_url: str = DEFAULT_BASE_URL
    verify_ssl: bool | str = True
    timeout: float = 30.0
    default_headers: Mapping[str, str] | None = None

    def resolved_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {"Accept": JSON_MIME_TYPE}
        if self.default_headers:
            headers.update(self.default_headers)
        return headers
