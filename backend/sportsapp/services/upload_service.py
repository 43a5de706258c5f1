"""
Upload Service - stores user media (post photos/videos, profile pictures,
drill and tryout videos) on local disk under UPLOAD_DIR, served at /uploads.
"""

import random
import time
from pathlib import Path
from typing import Optional, Sequence

import aiofiles
import aiofiles.os
from fastapi import UploadFile

from sportsapp.core.config import settings
from sportsapp.core.exceptions import UploadError
from sportsapp.core.logging_config import logger


CHUNK_SIZE = 1024 * 1024  # 1MB
IMAGE_TYPES = ("image/",)
VIDEO_TYPES = ("video/",)
PUBLIC_PREFIX = "/uploads"

# Extension by checked content type; the client filename is ignored
EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
    "image/heic": ".heic",
    "video/mp4": ".mp4",
    "video/quicktime": ".mov",
    "video/webm": ".webm",
    "video/x-msvideo": ".avi",
    "video/x-matroska": ".mkv",
    "video/3gpp": ".3gp",
}


class UploadService:
    """Validates and streams uploaded files to disk"""

    def __init__(self, upload_dir: Optional[Path] = None, max_size: Optional[int] = None):
        self.upload_dir = Path(upload_dir or settings.UPLOAD_DIR)
        self.max_size = max_size or settings.MAX_UPLOAD_SIZE

    @staticmethod
    def build_filename(field: str, content_type: str) -> str:
        """<field>-<epoch_ms>-<random>.<ext>"""
        suffix = EXTENSIONS.get(content_type.split(";")[0].strip(), "")
        return f"{field}-{int(time.time() * 1000)}-{random.randint(0, 999_999_999)}{suffix}"

    def check_content_type(self, file: UploadFile, allowed: Optional[Sequence[str]] = None) -> str:
        content_type = (file.content_type or "").lower()
        allowed = tuple(allowed or settings.ALLOWED_MEDIA_TYPES)
        if not content_type.startswith(allowed):
            raise UploadError("Only image and video files are allowed")
        return content_type

    async def save(
        self,
        file: UploadFile,
        field: str,
        allowed: Optional[Sequence[str]] = None,
    ) -> str:
        """
        Persist an upload and return its public URL (/uploads/<name>).

        Raises:
            UploadError: wrong MIME type or file larger than MAX_UPLOAD_SIZE
        """
        content_type = self.check_content_type(file, allowed)

        self.upload_dir.mkdir(parents=True, exist_ok=True)
        filename = self.build_filename(field, content_type)
        path = self.upload_dir / filename

        written = 0
        async with aiofiles.open(path, "wb") as out:
            while chunk := await file.read(CHUNK_SIZE):
                written += len(chunk)
                if written > self.max_size:
                    break
                await out.write(chunk)

        if written > self.max_size:
            await aiofiles.os.remove(path)
            raise UploadError(f"File too large. Maximum size is {self.max_size // 1024 // 1024}MB")

        logger.info(
            f"Stored upload {filename} ({written} bytes)",
            extra={"event_type": "upload", "upload_field": field, "content_type": content_type},
        )
        return f"{PUBLIC_PREFIX}/{filename}"

    async def delete(self, public_url: Optional[str]) -> None:
        """Remove a previously stored upload; unknown paths are ignored"""
        if not public_url or not public_url.startswith(f"{PUBLIC_PREFIX}/"):
            return
        path = self.upload_dir / Path(public_url).name
        if await aiofiles.os.path.exists(path):
            await aiofiles.os.remove(path)
            logger.debug(f"Removed upload {path.name}")


upload_service = UploadService()


def get_upload_service() -> UploadService:
    return upload_service
