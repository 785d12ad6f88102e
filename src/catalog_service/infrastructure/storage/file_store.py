"""Local file-system storage for uploaded binaries."""

import logging
from pathlib import Path
from typing import Union
from uuid import uuid4

logger = logging.getLogger(__name__)


class FileStore:
    """Stores uploaded files under a directory with unique names."""

    def __init__(self, base_dir: Union[str, Path]):
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

    async def write(self, data: bytes, file_name: str) -> str:
        """Save bytes under a unique name, keeping the original extension.

        Returns:
            Path of the stored file
        """
        unique_name = f"{uuid4()}{Path(file_name).suffix.lower()}"
        file_path = self.base_dir / unique_name
        with file_path.open("wb") as buffer:
            buffer.write(data)
        logger.debug(f"Stored {file_name} ({len(data)} bytes) at {file_path}")
        return str(file_path)

    async def read(self, file_path: Union[str, Path]) -> bytes:
        """Read a stored file. Raises FileNotFoundError if it is gone."""
        with Path(file_path).open("rb") as f:
            return f.read()

    async def delete(self, file_path: Union[str, Path]) -> bool:
        """Delete a stored file. Raises OSError if it cannot be removed."""
        Path(file_path).unlink()
        logger.debug(f"Deleted stored file {file_path}")
        return True
