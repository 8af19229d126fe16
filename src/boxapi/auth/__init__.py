"""Authentication strategies for the Box API."""
from .base import AuthStrategy
from .bearer import BearerAuth
from .box import BoxAuth

__all__ = ["AuthStrategy", "BearerAuth", "BoxAuth"]
