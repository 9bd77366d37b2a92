# uploads.py
"""
Attachment checks and storage for resumes, proposals and pitch decks.
"""

import logging
import os
import re
import time
from pathlib import Path
from typing import Optional

from errors import PayloadTooLarge, UnsupportedAttachment

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 10 * 1024 * 1024

ALLOWED_EXTENSIONS = {".pdf", ".doc", ".docx"}
ALLOWED_CONTENT_TYPES = {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


def check_size(content: bytes, limit: int = MAX_UPLOAD_BYTES) -> None:
    if len(content) > limit:
        raise PayloadTooLarge()


def check_type(filename: str, content_type: Optional[str]) -> None:
    ext = os.path.splitext(filename or "")[1].lower()
    ctype = (content_type or "").split(";")[0].strip().lower()
    if ext not in ALLOWED_EXTENSIONS or ctype not in ALLOWED_CONTENT_TYPES:
        raise UnsupportedAttachment()


def storage_filename(field_name: str, original_name: str, millis: Optional[int] = None) -> str:
    """`<fieldName>-<epochMillis>-<originalName>` with whitespace runs as `_`."""
    if millis is None:
        millis = int(time.time() * 1000)
    # browsers on Windows may send a full path
    base = re.split(r"[\\/]", original_name)[-1]
    safe = re.sub(r"\s+", "_", base)
    return f"{field_name}-{millis}-{safe}"


def save_attachment(
    uploads_dir: str,
    field_name: str,
    original_name: str,
    content: bytes,
    millis: Optional[int] = None,
) -> str:
    """Write the attachment under `uploads_dir` and return its stored name."""
    os.makedirs(uploads_dir, exist_ok=True)
    filename = storage_filename(field_name, original_name, millis)
    path = Path(uploads_dir) / filename
    with open(path, "wb") as f:
        f.write(content)
    logger.info("Stored attachment %s (%d bytes)", filename, len(content))
    return filename
