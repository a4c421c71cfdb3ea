"""
Snapshot export: converts sandbox screenshots (PNG) to other image formats
"""
import io
from PIL import Image
import logging

logger = logging.getLogger(__name__)


# Screenshots are already PNG
SOURCE_FORMAT = "png"


class ExportService:
    def __init__(self):
        self.converters = {
            "jpg": self._export_jpg,
            "jpeg": self._export_jpg,
            "webp": self._export_webp,
        }

    def is_supported(self, format: str) -> bool:
        format = format.lower()
        return format == SOURCE_FORMAT or format in self.converters

    async def convert_image(self, image_bytes: bytes, format: str, quality: int = 95) -> bytes:
        """Convert a PNG snapshot to the requested format"""
        format = format.lower()
        if not self.is_supported(format):
            raise ValueError(f"Unsupported format: {format}")
        if format == SOURCE_FORMAT:
            return image_bytes

        try:
            return await self.converters[format](image_bytes, quality)
        except Exception as e:
            logger.error(f"Error converting snapshot to {format}: {str(e)}")
            raise

    async def _export_jpg(self, image_bytes: bytes, quality: int = 95) -> bytes:
        with Image.open(io.BytesIO(image_bytes)) as img:
            # JPEG has no alpha channel, flatten onto white
            if img.mode in ('RGBA', 'LA'):
                background = Image.new('RGB', img.size, (255, 255, 255))
                background.paste(img, mask=img.split()[-1])
                img = background
            elif img.mode != 'RGB':
                img = img.convert('RGB')

            output = io.BytesIO()
            img.save(output, format='JPEG', quality=quality, optimize=True)
            return output.getvalue()

    async def _export_webp(self, image_bytes: bytes, quality: int = 95) -> bytes:
        with Image.open(io.BytesIO(image_bytes)) as img:
            output = io.BytesIO()
            img.save(output, format='WebP', quality=quality)
            return output.getvalue()

    def get_content_type(self, format: str) -> str:
        content_types = {
            "png": "image/png",
            "jpg": "image/jpeg",
            "jpeg": "image/jpeg",
            "webp": "image/webp",
        }
        return content_types.get(format.lower(), "application/octet-stream")

    def get_file_extension(self, format: str) -> str:
        extensions = {
            "png": ".png",
            "jpg": ".jpg",
            "jpeg": ".jpg",
            "webp": ".webp",
        }
        return extensions.get(format.lower(), ".png")
