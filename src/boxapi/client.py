"""High-level Box REST client."""

from __future__ import annotations

import logging
from collections.abc import Mapping, MutableMapping
from typing import Any

import requests
import urllib3
from urllib3.exceptions import InsecureRequestWarning

from .api_request import ApiRequest
from .auth.base import AuthStrategy
from .config import DEFAULT_BASE_URL, ClientConfig
from .exceptions import ApiError, RequestError
from .http import ApiResponse, build_url, decode_payload, send
from .request_builder import RequestBuilder
from .resources import CommentsResource, FilesResource, FoldersResource, TicketsResource

logger = logging.getLogger(__name__)


class BoxClient:
    """Execute Box API requests built by :class:`RequestBuilder`."""

    def __init__(
        self,
        *,
        auth_strategy: AuthStrategy,
        base_url: str = DEFAULT_BASE_URL,
        verify_ssl: bool | str = True,
        timeout: float = 30.0,
        default_headers: Mapping[str, str] | None = None,
        session: requests.Session | None = None,
        builder: RequestBuilder | None = None,
    ) -> None:
        self.config = ClientConfig(
            base_url=base_url.rstrip("/"),
            verify_ssl=verify_ssl,
            timeout=timeout,
            default_headers=default_headers,
        )
        self._suppress_insecure_warning_if_needed()
        self._session = session or requests.Session()
        self.auth = auth_strategy
        self.builder = builder or RequestBuilder()
        self.folders = FoldersResource(self)
        self.files = FilesResource(self)
        self.comments = CommentsResource(self)
        self.tickets = TicketsResource(self)

    # Context manager helpers -------------------------------------------------
    def __enter__(self) -> BoxClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # pragma: no cover - passthrough
        self.close()

    # Public API --------------------------------------------------------------
    def execute(self, api_request: ApiRequest) -> Any:
        """Send ``api_request`` and return its decoded payload.

        Raises:
            ApiError: The API answered with an error envelope.
            RequestError: Transport failure or an unstructured HTTP error.
            UnexpectedResponseError: A successful JSON response could not be parsed.
        """
        response = self.send(api_request)
        success, error = self.builder.was_successful(response)
        if not success:
            message = error.message if error and error.message else "Box API reported an error"
            raise ApiError(
                f"Box API error {response.status_code}: {message}",
                error=error,
                status_code=response.status_code,
                details=response.content,
            )
        if response.status_code >= 400:
            raise RequestError(
                f"Box API error {response.status_code}: {response.content[:200]}",
                status_code=response.status_code,
                details=response.content,
            )
        return decode_payload(response, api_request)

    def send(self, api_request: ApiRequest) -> ApiResponse:
        """Send ``api_request`` without classifying the response."""

        headers = self._prepare_headers()
        self._log_request(api_request)
        try:
            return send(
                self._session,
                api_request,
                base_url=self.config.base_url,
                headers=headers,
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
            )
        except requests.RequestException as exc:
            reason = str(exc).strip() or exc.__class__.__name__
            raise RequestError(
                f"Failed to communicate with Box API: {reason}", details=reason
            ) from exc

    def close(self) -> None:
        self._session.close()

    # Internal helpers -------------------------------------------------------
    def _prepare_headers(self) -> MutableMapping[str, str]:
        headers = self.config.resolved_headers()
        self.auth.apply(headers)
        return headers

    def _log_request(self, api_request: ApiRequest) -> None:
        logger.info(
            "Box request %s %s",
            api_request.method.value,
            build_url(self.config.base_url, api_request),
        )

    def _suppress_insecure_warning_if_needed(self) -> None:
        if isinstance(self.config.verify_ssl, bool) and not self.config.verify_ssl:
            urllib3.disable_warnings(InsecureRequestWarning)
