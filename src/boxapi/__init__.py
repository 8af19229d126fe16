"""High-level Box API client entrypoints."""
from .api_request import ApiRequest, DataFormat, Method
from .client import BoxClient
from .config import ClientConfig
from .exceptions import ApiError, BoxError
from .models import Error, ErrorCollection, ResourceType, SharedLink
from .request_builder import RequestBuilder

__all__ = [
    "ApiError",
    "ApiRequest",
    "BoxClient",
    "BoxError",
    "ClientConfig",
    "DataFormat",
    "Error",
    "ErrorCollection",
    "Method",
    "RequestBuilder",
    "ResourceType",
    "SharedLink",
]
