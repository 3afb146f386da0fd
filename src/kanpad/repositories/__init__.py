"""Repository layer for data access."""

from .filesystem import FilesystemStore
from .protocol import StoreProtocol

__all__ = [
    "FilesystemStore",
    "StoreProtocol",
]
