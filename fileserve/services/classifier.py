"""
Decides how a file may be previewed from its MIME type and size alone.
"""

from enum import Enum
from typing import Optional

from fileserve.config import settings

MIME_TYPES = {
    # text
    "txt": "text/plain",
    "md": "text/markdown",
    "json": "application/json",
    "js": "application/javascript",
    "ts": "application/typescript",
    "jsx": "application/javascript",
    "tsx": "application/typescript",
    "html": "text/html",
    "css": "text/css",
    "xml": "application/xml",
    "yaml": "text/yaml",
    "yml": "text/yaml",
    "toml": "text/toml",
    "ini": "text/plain",
    "log": "text/plain",
    # images
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "bmp": "image/bmp",
    "svg": "image/svg+xml",
    "webp": "image/webp",
    "ico": "image/x-icon",
    # documents
    "pdf": "application/pdf",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    # archives
    "zip": "application/zip",
    "tar": "application/x-tar",
    "gz": "application/gzip",
    # media
    "mp3": "audio/mpeg",
    "mp4": "video/mp4",
    "avi": "video/x-msvideo",
    "mov": "video/quicktime",
}

DEFAULT_MIME_TYPE = "application/octet-stream"

TEXT_MIME_TYPES = {
    "application/json",
    "application/javascript",
    "application/typescript",
    "application/xml",
}


class ContentKind(str, Enum):
    UTF8 = "utf-8"
    BASE64 = "base64"
    REJECT_UNSUPPORTED = "reject_unsupported"
    REJECT_TOO_LARGE = "reject_too_large"


def get_extension(filename: str) -> str:
    """Lower-cased text after the last dot, or '' when there is none."""
    _, dot, ext = filename.rpartition(".")
    return ext.lower() if dot else ""


def get_mime_type(extension: str) -> str:
    return MIME_TYPES.get(extension.lower(), DEFAULT_MIME_TYPE)


def is_text_mime(mime_type: str) -> bool:
    return mime_type.startswith("text/") or mime_type in TEXT_MIME_TYPES


def is_image_mime(mime_type: str) -> bool:
    return mime_type.startswith("image/")


def classify(
    mime_type: str,
    size: int,
    max_preview: Optional[int] = None,
    max_base64: Optional[int] = None,
) -> ContentKind:
    """
    Pure function of (mime_type, size), evaluated in order:

    1. size at or over the hard ceiling -> REJECT_TOO_LARGE, whatever the type
    2. text-like type -> UTF8
    3. image, or any type up to and including the base64 ceiling -> BASE64
    4. otherwise -> REJECT_UNSUPPORTED
    """
    if max_preview is None:
        max_preview = settings.PREVIEW_MAX_BYTES
    if max_base64 is None:
        max_base64 = settings.BASE64_PREVIEW_MAX_BYTES

    if size >= max_preview:
        return ContentKind.REJECT_TOO_LARGE
    if is_text_mime(mime_type):
        return ContentKind.UTF8
    if is_image_mime(mime_type) or size <= max_base64:
        return ContentKind.BASE64
    return ContentKind.REJECT_UNSUPPORTED
