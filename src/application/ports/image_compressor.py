"""
Port: Image Compressor Interface
Defines contract for shrinking receipt photos before upload
"""

from abc import ABC, abstractmethod


class IImageCompressor(ABC):
    """Interface for receipt image compression"""

    @abstractmethod
    def compress(self, image: bytes) -> bytes:
        """
        Downscale and re-encode an image as JPEG

        Args:
            image: Original image bytes

        Returns:
            JPEG bytes; the original bytes if the image cannot be decoded
        """
        pass
