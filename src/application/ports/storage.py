"""
Port: Storage Interface
Defines contract for receipt image storage implementations (S3, local, etc.)
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional


class IStorage(ABC):
    """Interface for file storage"""

    @abstractmethod
    def upload_bytes(
        self,
        data: bytes,
        remote_key: str,
        content_type: str = "application/octet-stream",
        metadata: Optional[Dict[str, str]] = None
    ) -> str:
        """
        Upload bytes to storage

        Args:
            data: File content
            remote_key: Remote storage key/path
            content_type: MIME type stored with the object
            metadata: Optional object metadata

        Returns:
            URL to access the file

        Raises:
            Exception: If the upload failed
        """
        pass
