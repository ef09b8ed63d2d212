"""Boundary to the stored product photos"""

import asyncio
from pathlib import Path
from typing import Optional

from ..utils.logging import setup_catalog_logging as setup_logging

logger = setup_logging("photo_storage")


class LocalPhotoStorage:
    """Photos kept on the local filesystem, referenced by path."""

    def __init__(self, base_dir: Optional[str] = None):
        self.base_dir = Path(base_dir) if base_dir else None

    def _resolve(self, photo: str) -> Path:
        path = Path(photo)
        if self.base_dir is not None and not path.is_absolute():
            path = self.base_dir / path
        return path

    async def remove(self, photo: Optional[str]) -> bool:
        """Delete a stored photo; returns False when there was nothing to delete"""
        if not photo:
            return False

        path = self._resolve(photo)
        try:
            await asyncio.to_thread(path.unlink)
        except FileNotFoundError:
            logger.warning("Photo already removed", extra={"photo": str(path)})
            return False

        logger.info("Photo deleted", extra={"photo": str(path)})
        return True
