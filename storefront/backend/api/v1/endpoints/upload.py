# storefront/backend/api/v1/endpoints/upload.py
"""
Image upload endpoint. Files are kept in memory and given a fake CDN url.
"""

import logging
import os
import uuid

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from storefront.backend.api import deps
from storefront.schemas.settings_schema import UploadedImage
from storefront.schemas.user_schema import User

logger = logging.getLogger(__name__)

router = APIRouter()

CDN_BASE_URL = "https://cdn.seekon.local/uploads"


@router.post("")
async def upload_image(
    file: UploadFile = File(...),
    user: User = Depends(deps.get_current_user),
    services: deps.BackendServices = Depends(deps.get_services),
):
    if not (file.content_type or "").startswith("image/"):
        raise HTTPException(status_code=400, detail="Only image uploads are allowed")

    content = await file.read()
    if not content:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")

    public_id = f"seekon/{uuid.uuid4().hex}"
    extension = os.path.splitext(file.filename or "")[1].lower()
    image = UploadedImage(url=f"{CDN_BASE_URL}/{public_id}{extension}", public_id=public_id)
    services.uploads[public_id] = image

    logger.info(f"{user.email} uploaded {file.filename} ({len(content)} bytes) as {public_id}")
    return {"success": True, "data": image.to_wire()}
