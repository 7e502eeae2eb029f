# storefront/client/uploads.py
"""
Image uploads through POST /api/upload (multipart, field `file`).
"""

import mimetypes
from pathlib import Path
from typing import Optional, Union

from storefront.client.http import ApiClient
from storefront.core.exceptions import ApiRequestError
from storefront.schemas.settings_schema import UploadedImage

ALLOWED_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/webp", "image/gif")
MAX_UPLOAD_BYTES = 5 * 1024 * 1024


class UploadGateway:
    """Upload endpoint of the REST API."""

    def __init__(self, api: ApiClient):
        self.api = api

    async def upload_image(self, filename: str, content: bytes, content_type: Optional[str] = None) -> UploadedImage:
        """
        Uploads one image and returns where the backend stored it.

        Raises:
            ValueError: not an image, or larger than 5 MB.
            ApiRequestError: the backend refused it or did not confirm it.
        """
        content_type = content_type or mimetypes.guess_type(filename)[0] or "application/octet-stream"
        if content_type not in ALLOWED_TYPES:
            raise ValueError("Please upload a valid image file (JPEG, PNG, WebP, or GIF)")
        if len(content) > MAX_UPLOAD_BYTES:
            raise ValueError("File size must be less than 5MB")

        data = await self.api.post(
            "/upload",
            files={"file": (filename, content, content_type)},
            auth_required=True,
            admin=True,
            default_error="Upload failed",
            context="upload",
        )
        if not (isinstance(data, dict) and data.get("success") and isinstance(data.get("data"), dict)):
            message = data.get("message") if isinstance(data, dict) else None
            raise ApiRequestError(message or "Upload failed", payload=data)
        return UploadedImage.model_validate(data["data"])

    async def upload_file(self, path: Union[str, Path]) -> UploadedImage:
        path = Path(path)
        return await self.upload_image(path.name, path.read_bytes())
