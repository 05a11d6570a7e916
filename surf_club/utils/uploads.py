"""
Image upload storage.

Files land in ``settings.UPLOAD_DIR`` and are referenced by the relative URL
``/uploads/<filename>``, which main.py serves as static files.
"""
import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from surf_club.config import settings
from surf_club.errors import ValidationError

logger = logging.getLogger(__name__)

URL_PREFIX = "/uploads/"


def upload_dir() -> Path:
    path = Path(settings.UPLOAD_DIR)
    path.mkdir(parents=True, exist_ok=True)
    return path


async def save_image(file: Optional[UploadFile], field: str = "image") -> Optional[str]:
    """
    Validate and store an uploaded image.

    Args:
        file: Uploaded file, or None when the field was omitted
        field: Form field name, used in validation messages

    Returns:
        Relative URL of the stored file, or None if nothing was uploaded
    """
    if file is None or not file.filename:
        return None

    # Validate file type
    file_ext = Path(file.filename).suffix.lower()
    if file_ext not in settings.ALLOWED_IMAGE_EXTENSIONS:
        raise ValidationError.single(
            field,
            f"Invalid file type. Allowed: {', '.join(settings.ALLOWED_IMAGE_EXTENSIONS)}",
        )

    # Read file and validate size
    max_size = settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024
    contents = await file.read()
    if len(contents) > max_size:
        raise ValidationError.single(
            field, f"File too large. Maximum size: {settings.MAX_UPLOAD_SIZE_MB}MB"
        )

    # Format: {timestamp}_{uuid8}{ext}
    timestamp = datetime.utcnow().strftime("%Y%m%d_%H%M%S")
    unique_id = str(uuid.uuid4())[:8]
    filename = f"{timestamp}_{unique_id}{file_ext}"

    with open(upload_dir() / filename, "wb") as f:
        f.write(contents)

    logger.info("Stored upload %s (%d bytes)", filename, len(contents))
    return f"{URL_PREFIX}{filename}"


def remove_upload(url: Optional[str]) -> None:
    """Delete a previously stored upload. Missing files are ignored."""
    if not url or not url.startswith(URL_PREFIX):
        return

    path = Path(settings.UPLOAD_DIR) / Path(url[len(URL_PREFIX):]).name
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Failed to remove upload %s: %s", path, e)
