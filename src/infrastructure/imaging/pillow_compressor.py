"""
Infrastructure Adapter: Pillow Image Compressor
Implements IImageCompressor; shrinks receipt photos before upload
"""

import io
import logging

from PIL import Image, UnidentifiedImageError

from application.ports.image_compressor import IImageCompressor

logger = logging.getLogger(__name__)


class PillowImageCompressor(IImageCompressor):
    """Downscale to a maximum width and re-encode as JPEG"""

    def __init__(self, max_width: int = 800, quality: int = 60):
        self.max_width = max_width
        self.quality = quality

    def compress(self, image: bytes) -> bytes:
        try:
            picture = Image.open(io.BytesIO(image))
            picture.load()
        except (UnidentifiedImageError, OSError) as e:
            logger.warning(f"[COMPRESS] Cannot decode image, keeping original: {e}")
            return image

        if picture.width > self.max_width:
            height = round(picture.height * self.max_width / picture.width)
            picture = picture.resize((self.max_width, max(height, 1)))

        output = io.BytesIO()
        picture.convert("RGB").save(output, format="JPEG", quality=self.quality)
        compressed = output.getvalue()

        logger.debug(f"[COMPRESS] {len(image)} -> {len(compressed)} bytes")
        return compressed
