import logging
import time
import uuid
from pathlib import PurePath
from typing import Optional

from verifica.core.models import ImageUpload
from verifica.services.storage.client import SupabaseClient, SupabaseError

logger = logging.getLogger(__name__)


def image_object_name(image: ImageUpload) -> str:
    """``verification_<epoch-millis>_<8 hex>.<ext>``; extension from the upload, png otherwise."""
    suffix = PurePath(image.filename or "").suffix.lower().lstrip(".")
    extension = suffix if suffix.isalnum() else "png"
    return f"verification_{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}.{extension}"


class ImageArchiver:
    """Best-effort upload of a submitted image; failures yield ``None``."""

    def __init__(self, client: SupabaseClient, bucket: str):
        self.client = client
        self.bucket = bucket

    async def run(self, image: ImageUpload) -> Optional[str]:
        name = image_object_name(image)
        try:
            await self.client.upload(self.bucket, name, image.data, content_type=image.content_type)
        except SupabaseError as e:
            logger.warning(f"Image upload failed, continuing without image: {e}")
            return None
        return self.client.get_public_url(self.bucket, name)
