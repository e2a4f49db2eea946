# patoshub/routers/upload_routes.py

import logging
import re
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile

from patoshub.auth import get_current_user
from patoshub.data import ALLOWED_IMAGE_TYPES, DEFAULT_UPLOAD_FOLDER, MAX_UPLOAD_BYTES, UPLOAD_FIELD
from patoshub.deps import get_storage
from patoshub.schemas import MessageResponse, UploadResponse
from patoshub.storage import ImageNotFound, ImageStorage, unique_filename

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/upload",
    tags=["upload"],
    dependencies=[Depends(get_current_user)],
)

_allowed = re.compile("|".join(ALLOWED_IMAGE_TYPES))


def is_allowed_image(filename: str, content_type: Optional[str]) -> bool:
    """Both the extension and the declared content type must name an allowed format."""
    ext = Path(filename or "").suffix.lower().lstrip(".")
    return ext in ALLOWED_IMAGE_TYPES and bool(_allowed.search(content_type or ""))


def _folder(kind: Optional[str]) -> str:
    # keep folder names to a safe charset
    cleaned = re.sub(r"[^A-Za-z0-9_-]", "", kind or "")
    return cleaned or DEFAULT_UPLOAD_FOLDER


@router.post("/image", response_model=UploadResponse)
def upload_image(
    request: Request,
    image: Optional[UploadFile] = File(None),
    kind: Optional[str] = Form(None, alias="type"),
    entity_id: Optional[str] = Form(None, alias="entityId"),
    storage: ImageStorage = Depends(get_storage),
):
    if image is None or not image.filename:
        raise HTTPException(status_code=400, detail="No image provided")

    if not is_allowed_image(image.filename, image.content_type):
        raise HTTPException(
            status_code=415,
            detail=f"Only images are allowed ({', '.join(ALLOWED_IMAGE_TYPES)})",
        )

    content = image.file.read(MAX_UPLOAD_BYTES + 1)
    if len(content) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="Image exceeds the 10 MB limit")

    filename = unique_filename(image.filename, prefix=UPLOAD_FIELD)
    try:
        url = storage.save(content, filename, image.content_type, _folder(kind), str(request.base_url))
    except Exception as exc:
        logger.exception("Error uploading %s to %s", filename, storage.name)
        raise HTTPException(status_code=500, detail=str(exc))
    logger.info("Uploaded %s to %s (type=%s, entityId=%s)", filename, storage.name, kind, entity_id)

    return {
        "url": url,
        "storage": storage.name,
        "message": "Image uploaded",
        "type": kind,
        "entityId": entity_id,
    }


@router.delete("/image", response_model=MessageResponse)
def delete_image(url: Optional[str] = None, storage: ImageStorage = Depends(get_storage)):
    if not url:
        raise HTTPException(status_code=400, detail="Image URL required")

    try:
        backend = storage.delete(url)
    except ImageNotFound:
        raise HTTPException(status_code=404, detail="Image not found")
    except Exception:
        logger.exception("Error deleting image %s", url)
        raise HTTPException(status_code=500, detail="Error deleting image")

    logger.info("Deleted %s from %s", url, backend)
    return {"message": "Image deleted"}
