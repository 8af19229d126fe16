"""Box API key and auth token authentication."""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass

from .base import AuthStrategy


@dataclass(slots=True)
class BoxAuth(AuthStrategy):
    """Apply the ``BoxAuth`` authorization scheme.

    The auth token is optional so the same strategy can be used to request a
    ticket before any token has been issued.
    """

    api_key: str
    auth_token: str | None = None

    def apply(self, headers: MutableMapping[str, str]) -> None:
        value = f"BoxAuth api_key={self.api_key}"
        if self.auth_token:
            value += f"&auth_token={self.auth_token}"
        headers["Authorization"] = value

    def update_token(self, auth_token: str) -> None:
        self.auth_token = auth_token
