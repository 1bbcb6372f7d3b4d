"""
Stages uploaded files under ``<working dir>/.claude-temp/<session id>/``.

Names are prefixed with the upload time in milliseconds so concurrent uploads
to one session do not collide. Cleanup of staged files happens elsewhere.
"""

import logging
import os
import re
import time
from typing import Optional

from fileserve.config import settings
from fileserve.errors import BadRequest, Internal, UploadTooLarge
from fileserve.services.locator import is_safe_project_name

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9.-]")


def sanitize_filename(filename: str) -> str:
    return _UNSAFE_FILENAME_CHARS.sub("_", filename) or "upload"


def is_safe_session_id(session_id: str) -> bool:
    return is_safe_project_name(session_id) and session_id not in (".", "..")


def stage_upload(
    filename: Optional[str],
    data: Optional[bytes],
    session_id: Optional[str],
    working_directory: Optional[str] = None,
) -> str:
    """
    Write ``data`` into the session's staging directory.

    Returns the written path relative to the working directory, forward-slash
    separated. ``data`` of None means no file was sent.
    """
    if data is None:
        raise BadRequest("No file provided")
    if not session_id:
        raise BadRequest("No session ID provided")
    if not is_safe_session_id(session_id):
        raise BadRequest("Invalid session ID")
    if len(data) > settings.UPLOAD_MAX_BYTES:
        raise UploadTooLarge(f"File too large. Maximum size is {settings.UPLOAD_MAX_BYTES} bytes")

    base_dir = working_directory or os.getcwd()
    session_dir = os.path.join(base_dir, settings.UPLOAD_TEMP_DIRNAME, session_id)
    stored_name = f"{int(time.time() * 1000)}_{sanitize_filename(filename or '')}"

    try:
        os.makedirs(session_dir, exist_ok=True)
        with open(os.path.join(session_dir, stored_name), "wb") as fh:
            fh.write(data)
    except OSError:
        logger.exception("Failed to stage upload for session %s in %s", session_id, base_dir)
        raise Internal("Failed to save uploaded file")

    logger.info("Staged %d bytes for session %s as %s", len(data), session_id, stored_name)
    return f"{settings.UPLOAD_TEMP_DIRNAME}/{session_id}/{stored_name}"
