"""Binary file storage for uploaded documents."""

from .file_store import FileStore

__all__ = ["FileStore"]
