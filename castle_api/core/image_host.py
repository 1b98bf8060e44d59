"""
Cloudinary adapter used to store product images.

Credentials are passed on every call instead of through the global
``cloudinary.config`` so that each app instance owns its own client.
"""

from __future__ import annotations

from typing import BinaryIO

import cloudinary.exceptions
import cloudinary.uploader

from .config import Settings
from .errors import ServiceError
from .logger import get_logger

logger = get_logger(__name__)


class ImageUploadError(ServiceError):
    status_code = 500
    code = "upload_failed"


class CloudinaryImageHost:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def _options(self) -> dict:
        s = self.settings
        options = {
            "cloud_name": s.cloudinary_cloud_name,
            "api_key": s.cloudinary_api_key,
            "api_secret": s.cloudinary_api_secret,
            "resource_type": "image",
            "secure": True,
        }
        if s.cloudinary_folder:
            options["folder"] = s.cloudinary_folder
        return options

    def upload(self, file: BinaryIO, filename: str | None = None) -> str:
        """Upload ``file`` and return its permanent https URL."""
        try:
            result = cloudinary.uploader.upload(file, **self._options())
        except cloudinary.exceptions.Error as exc:
            raise ImageUploadError(f"Error al subir la imagen: {exc}") from exc
        url = (result or {}).get("secure_url")
        if not url:
            raise ImageUploadError("Cloudinary no devolvio secure_url")
        logger.info("IMAGE_UPLOADED", extra={"upload_name": filename, "public_id": result.get("public_id")})
        return url
