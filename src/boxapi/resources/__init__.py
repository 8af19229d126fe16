"""Resource-specific convenience wrappers."""
from .comments import CommentsResource
from .files import FilesResource
from .folders import FoldersResource
from .tickets import TicketsResource

__all__ = [
    "FoldersResource",
    "FilesResource",
    "CommentsResource",
    "TicketsResource",
]
