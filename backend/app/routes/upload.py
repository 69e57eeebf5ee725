# app/routes/upload.py
from fastapi import APIRouter, Depends, File, UploadFile, status

from app.aws_client import ObjectStorage, get_object_storage
from app.middleware.rbac import require_session
from app.models.session import Session
from facilitiease.core.config import settings
from facilitiease.core.exceptions import InvalidUpload

upload_router = APIRouter(prefix="/uploads", tags=["Uploads"])


@upload_router.post("", status_code=status.HTTP_201_CREATED)
async def upload_image(
    file: UploadFile = File(...),
    session: Session = Depends(require_session),
    storage: ObjectStorage = Depends(get_object_storage),
):
    content_type = file.content_type or ""
    if not content_type.startswith("image/"):
        raise InvalidUpload("Only image files are allowed")

    # Read one byte past the limit to detect oversize files without loading more
    content = await file.read(settings.MAX_UPLOAD_BYTES + 1)
    if not content:
        raise InvalidUpload("No file provided")
    if len(content) > settings.MAX_UPLOAD_BYTES:
        raise InvalidUpload("File is too large")

    url = await storage.upload(content, content_type, file.filename)
    return {"url": url}
