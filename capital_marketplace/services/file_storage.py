# capital_marketplace/services/file_storage.py
"""Local disk storage for data room files"""
import os
from pathlib import Path
from uuid import UUID

from capital_marketplace.core.logger import get_logger

logger = get_logger(__name__)


class LocalFileStorage:
    """Stores files under <root>/<company_id>/<file_id><ext>."""

    def __init__(self, root: str):
        self.root = Path(root)

    def ensure_root(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def save(self, company_id: UUID, file_id: UUID, file_name: str, content: bytes) -> str:
        """
        Save file content to disk.

        Returns:
            Local file path
        """
        company_dir = self.root / str(company_id)
        company_dir.mkdir(parents=True, exist_ok=True)

        extension = os.path.splitext(file_name)[1]
        local_path = company_dir / f"{file_id}{extension}"

        try:
            with open(local_path, "wb") as f:
                f.write(content)
        except OSError as e:
            logger.error(f"Failed to save file locally: {e}")
            raise

        logger.info(f"✓ File saved locally: {local_path}")
        return str(local_path)

    def read(self, path: str) -> bytes:
        with open(path, "rb") as f:
            return f.read()

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def delete(self, path: str) -> bool:
        """
        Delete file from disk.

        Returns:
            True if deleted, False otherwise
        """
        try:
            if os.path.exists(path):
                os.remove(path)
                logger.info(f"✓ Local file deleted: {path}")
                return True
            return False
        except OSError as e:
            logger.error(f"Failed to delete local file: {e}")
            return False
