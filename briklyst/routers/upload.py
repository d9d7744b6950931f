from __future__ import annotations

import logging
from pathlib import Path
from uuid import uuid4

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status
from pydantic import BaseModel

from briklyst.core.errors import UpstreamError
from briklyst.deps import get_current_user
from briklyst.models.user import User
from briklyst.services import r2_storage

router = APIRouter(prefix="/api", tags=["upload"])
logger = logging.getLogger(__name__)

UPLOADS_DIR = Path("uploads")
MAX_FILE_SIZE_BYTES = 5 * 1024 * 1024


class UploadResponse(BaseModel):
    url: str


def _resolve_base_url(request: Request) -> str:
    forwarded_proto = request.headers.get("x-forwarded-proto")
    forwarded_host = request.headers.get("x-forwarded-host")

    if forwarded_host:
        scheme = forwarded_proto or request.url.scheme
        return f"{scheme}://{forwarded_host}"

    return str(request.base_url).rstrip("/")


def _save_locally(content: bytes, filename: str) -> str:
    UPLOADS_DIR.mkdir(parents=True, exist_ok=True)
    stored_name = f"{uuid4().hex}{Path(filename).suffix.lower()}"
    (UPLOADS_DIR / stored_name).write_bytes(content)
    return f"/uploads/{stored_name}"


@router.post("/upload", response_model=UploadResponse)
def upload_image(
    request: Request,
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
):
    if not file.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid file")

    content_type = (file.content_type or "").lower()
    if not content_type.startswith("image/"):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Only image uploads are supported")

    content = file.file.read(MAX_FILE_SIZE_BYTES + 1)
    if len(content) > MAX_FILE_SIZE_BYTES:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="File exceeds 5MB")

    if r2_storage.is_configured():
        try:
            url = r2_storage.upload_bytes(
                content,
                user_id=current_user.id,
                filename=file.filename,
                content_type=content_type,
            )
        except (BotoCoreError, ClientError) as exc:
            logger.exception("R2 upload failed user_id=%s", current_user.id)
            raise UpstreamError("Upload failed") from exc
        return UploadResponse(url=url)

    return UploadResponse(url=f"{_resolve_base_url(request)}{_save_locally(content, file.filename)}")
