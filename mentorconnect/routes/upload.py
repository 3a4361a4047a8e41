import logging
import os
import uuid

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from ..auth import get_current_user
from ..config import MAX_UPLOAD_SIZE, UPLOAD_DIR
from ..models import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/uploads", tags=["Upload"])

# Allowed image types for profile photos
ALLOWED_IMAGE_TYPES = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/webp": "webp",
    "image/gif": "gif",
}


@router.post("", status_code=201)
async def upload_image(
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
):
    """Store a profile photo on local disk and return its public URL"""
    logger.info(f"📤 Uploading image for user {current_user.id}")

    if file.content_type not in ALLOWED_IMAGE_TYPES:
        raise HTTPException(
            status_code=400,
            detail="Invalid file type. Only PNG, JPEG, WebP and GIF images are allowed.",
        )

    contents = await file.read()
    if not contents:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")

    if len(contents) > MAX_UPLOAD_SIZE:
        raise HTTPException(
            status_code=400,
            detail=(
                f"File size exceeds {MAX_UPLOAD_SIZE // (1024 * 1024)}MB limit. "
                f"Your file is {len(contents) / (1024 * 1024):.2f}MB."
            ),
        )

    # Client filenames are never used on disk
    filename = f"{uuid.uuid4()}.{ALLOWED_IMAGE_TYPES[file.content_type]}"

    try:
        os.makedirs(UPLOAD_DIR, exist_ok=True)
        with open(os.path.join(UPLOAD_DIR, filename), "wb") as f:
            f.write(contents)
    except OSError as e:
        logger.error(f"❌ Upload failed: {str(e)}")
        raise HTTPException(status_code=500, detail="Upload failed") from e

    return {"url": f"/uploads/{filename}"}
