"""
Storage of guest photos and ID documents under the public uploads folder
"""
import logging
import os
import shutil
import uuid
from typing import Iterable, Optional

from fastapi import UploadFile

from svpg.config.settings import settings

logger = logging.getLogger(__name__)


async def save_upload(file: Optional[UploadFile], kind: str) -> Optional[str]:
    """Write an uploaded file to disk and return its public relative path, e.g. 'uploads/photo-<uuid>.jpg'"""
    if file is None or not file.filename:
        return None

    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    ext = os.path.splitext(file.filename)[1].lower()
    filename = f"{kind}-{uuid.uuid4().hex}{ext}"
    file_path = os.path.join(settings.UPLOAD_DIR, filename)

    with open(file_path, "wb") as buffer:
        shutil.copyfileobj(file.file, buffer)
    await file.close()

    return f"{settings.UPLOAD_URL_PREFIX.strip('/')}/{filename}"


def upload_path(relative_path: str) -> str:
    """Filesystem location of a stored 'uploads/<name>' path"""
    return os.path.join(settings.UPLOAD_DIR, os.path.basename(relative_path))


def discard_uploads(paths: Iterable[Optional[str]]) -> None:
    """Remove files saved for a record that was never written"""
    for path in paths:
        if not path:
            continue
        try:
            os.remove(upload_path(path))
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.warning("Could not remove orphaned upload %s: %s", path, exc)
