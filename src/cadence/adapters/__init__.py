"""Adapters - I/O implementations of ports."""

from .file_store import FileTaskStore
from .rest_store import RestTaskStore

__all__ = [
    "FileTaskStore",
    "RestTaskStore",
]
