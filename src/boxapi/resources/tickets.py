"""Legacy ticket and auth-token exchange."""

from __future__ import annotations

import xml.etree.ElementTree as ElementTree

from ..api_request import ApiRequest
from ..auth.box import BoxAuth
from ..exceptions import AuthenticationError, UnexpectedResponseError
from .base import ResourceBase

TICKET_OK = "get_ticket_ok"
AUTH_TOKEN_OK = "get_auth_token_ok"


class TicketsResource(ResourceBase):
    """Obtain tickets and swap them for auth tokens via the 1.0 endpoint."""

    def get_ticket(self, api_key: str) -> str:
        fields = self._call(self._builder.get_ticket(api_key), expected_status=TICKET_OK)
        ticket = fields.get("ticket")
        if not ticket:
            raise UnexpectedResponseError("Ticket response did not include a ticket.")
        return ticket

    def swap_ticket_for_token(self, api_key: str, ticket: str) -> str:
        """Exchange an authorized ticket for an auth token.

        When the client authenticates with :class:`BoxAuth`, the new token is
        installed on it so subsequent calls are authorized.
        """
        fields = self._call(
            self._builder.swap_ticket_for_token(api_key, ticket),
            expected_status=AUTH_TOKEN_OK,
        )
        token = fields.get("auth_token")
        if not token:
            raise UnexpectedResponseError("Token response did not include an auth_token.")
        auth = self._client.auth
        if isinstance(auth, BoxAuth):
            auth.update_token(token)
        return token

    def _call(self, api_request: ApiRequest, *, expected_status: str) -> dict[str, str]:
        fields = parse_legacy_response(self._execute(api_request))
        status = fields.get("status")
        if status != expected_status:
            raise AuthenticationError(
                f"Box authentication call returned status {status or 'unknown'}",
                details=fields,
            )
        return fields


def parse_legacy_response(content: bytes | str | None) -> dict[str, str]:
    """Flatten a ``<response>`` XML document into its top-level text fields."""

    if not content:
        raise UnexpectedResponseError("Legacy endpoint returned an empty body.")
    try:
        root = ElementTree.fromstring(content)
    except ElementTree.ParseError as exc:
        raise UnexpectedResponseError("Legacy endpoint did not return valid XML") from exc
    return {child.tag: (child.text or "").strip() for child in root}
