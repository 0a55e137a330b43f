# =============================================================================
# core/services/image_service.py - Product Image Processing
# =============================================================================
# Decodes uploaded images and re-encodes them into a single web format:
# WEBP, fitted inside the configured bounding box (800x600 by default),
# never enlarged, at a fixed quality.
# =============================================================================

import io
import logging

from PIL import Image, ImageOps, UnidentifiedImageError

from app.config import settings
from app.exceptions import InvalidImageError

logger = logging.getLogger(__name__)

OUTPUT_FORMAT = "WEBP"
OUTPUT_CONTENT_TYPE = "image/webp"
OUTPUT_EXTENSION = "webp"


class ImageService:
    """
    Service for transcoding product images.

    All methods are static; the target box and quality come from settings
    unless overridden.
    """

    @staticmethod
    def process_image(
        data: bytes,
        filename: str | None = None,
        max_size: tuple[int, int] | None = None,
        quality: int | None = None,
    ) -> bytes:
        """
        Decode, shrink-to-fit and re-encode an image as WEBP.

        Args:
            data: Raw uploaded bytes
            filename: Original filename (for error messages only)
            max_size: (width, height) bounding box; defaults to settings
            quality: WEBP quality; defaults to settings

        Returns:
            Encoded WEBP bytes

        Raises:
            InvalidImageError: If the bytes are not a decodable image
        """
        max_size = max_size or settings.image_max_size
        quality = quality or settings.IMAGE_QUALITY

        if not data:
            raise InvalidImageError(filename, "file is empty")

        try:
            with Image.open(io.BytesIO(data)) as img:
                img.load()
                img = ImageOps.exif_transpose(img)

                # WEBP handles RGB and RGBA; everything else is converted
                if img.mode in ("RGBA", "LA", "PA") or (img.mode == "P" and "transparency" in img.info):
                    img = img.convert("RGBA")
                elif img.mode != "RGB":
                    img = img.convert("RGB")

                # thumbnail() only ever shrinks and keeps the aspect ratio
                img.thumbnail(max_size, Image.Resampling.LANCZOS)

                output_buffer = io.BytesIO()
                img.save(output_buffer, format=OUTPUT_FORMAT, quality=quality)

        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
            logger.warning(f"Could not decode image {filename or '<upload>'}: {e}")
            raise InvalidImageError(filename, str(e))

        processed = output_buffer.getvalue()
        logger.debug(
            f"Processed image {filename or '<upload>'}: {len(data)} -> {len(processed)} bytes"
        )
        return processed
