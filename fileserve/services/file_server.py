"""
List, ReadContent and Download over a confined project root.

Every operation checks the caller's path before touching the filesystem,
stats the target before reading any bytes, and turns filesystem failures into
FileAccessError subclasses. Blocking reads are left to the caller's thread.
"""

import asyncio
import base64
import logging
import os
import stat
import unicodedata
from datetime import datetime, timezone
from typing import Optional

from fileserve.config import settings
from fileserve.errors import (
    BadRequest,
    Internal,
    IsADirectory,
    NotADirectory,
    NotFound,
    TooLargeForPreview,
    UnsupportedTypeForPreview,
)
from fileserve.schemas import (
    DirectoryEntry,
    DownloadPayload,
    FileContentResponse,
    FileInfo,
    FilesListResponse,
)
from fileserve.services.classifier import ContentKind, classify, get_extension, get_mime_type
from fileserve.services.disposition import build_content_disposition
from fileserve.services.paths import check_relative_path, confine, safe_resolve

logger = logging.getLogger(__name__)


# ---------------------------------------------------------
# Listing
# ---------------------------------------------------------

async def list_files(root: str, relative_dir: str = "", concurrency: Optional[int] = None) -> FilesListResponse:
    """
    List one directory under ``root``.

    A missing directory is an empty listing, not an error. Entries are stat'ed
    concurrently (bounded by ``concurrency``) and sorted afterwards:
    directories first, then by name.
    """
    check_relative_path(relative_dir)
    target = safe_resolve(root, relative_dir) if relative_dir else root

    try:
        entries = await asyncio.to_thread(_read_dir, target)
    except OSError:
        logger.exception("Failed to read directory %s", target)
        raise Internal("Failed to list files")

    if entries is None:
        return FilesListResponse(files=[], current_path=relative_dir)

    semaphore = asyncio.Semaphore(concurrency or settings.LIST_STAT_CONCURRENCY)
    base_parts = _segments(relative_dir)

    async def describe(entry: DirectoryEntry) -> FileInfo:
        async with semaphore:
            return await asyncio.to_thread(_file_info, target, base_parts, entry)

    files = list(await asyncio.gather(*(describe(e) for e in entries)))
    files.sort(key=_sort_key)
    return FilesListResponse(files=files, current_path=relative_dir)


def _read_dir(target: str) -> Optional[list[DirectoryEntry]]:
    """None when ``target`` does not exist."""
    if not os.path.exists(target):
        return None
    if not os.path.isdir(target):
        raise NotADirectory("Path is not a directory")

    with os.scandir(target) as it:
        return [
            DirectoryEntry(name=e.name, is_file=e.is_file(), is_directory=e.is_dir())
            for e in it
        ]


def _segments(relative_path: str) -> list[str]:
    return [p for p in relative_path.split("/") if p not in ("", ".", "..")]


def _file_info(target: str, base_parts: list[str], entry: DirectoryEntry) -> FileInfo:
    full_path = os.path.join(target, entry.name)
    relative_path = "/".join(base_parts + [entry.name])
    kind = "directory" if entry.is_directory else "file"

    try:
        st = os.stat(full_path)
    except OSError as exc:
        logger.warning("Failed to stat %s: %s", full_path, exc)
        return FileInfo(name=entry.name, path=relative_path, type=kind)

    return FileInfo(
        name=entry.name,
        path=relative_path,
        type=kind,
        size=st.st_size if entry.is_file else None,
        modified_time=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
        extension=get_extension(entry.name) if entry.is_file else None,
    )


def _collation_key(name: str) -> str:
    """Accent- and case-insensitive form of ``name``: "Éclair" sorts with "eclair"."""
    decomposed = unicodedata.normalize("NFKD", name)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


def _sort_key(info: FileInfo) -> tuple:
    return (info.type != "directory", _collation_key(info.name), info.name.casefold(), info.name)


# ---------------------------------------------------------
# Preview and download
# ---------------------------------------------------------

def read_content(root: str, relative_path: str) -> FileContentResponse:
    """Inline preview of one file, gated by ``classify`` before any read."""
    full_path, st = _locate_file(root, relative_path, "Cannot read directory content")

    mime_type = get_mime_type(get_extension(_basename(relative_path)))
    kind = classify(mime_type, st.st_size)

    if kind is ContentKind.REJECT_TOO_LARGE:
        raise TooLargeForPreview("File too large to preview")
    if kind is ContentKind.REJECT_UNSUPPORTED:
        raise UnsupportedTypeForPreview("File type not supported for preview")

    data = _read_bytes(full_path)
    if kind is ContentKind.UTF8:
        content = data.decode("utf-8", errors="replace")
    else:
        content = base64.b64encode(data).decode("ascii")

    return FileContentResponse(content=content, type=mime_type, encoding=kind.value, size=st.st_size)


def download(root: str, relative_path: str) -> DownloadPayload:
    """Whole file, no size ceiling, with a ready Content-Disposition value."""
    full_path, _ = _locate_file(root, relative_path, "Cannot download directory")

    filename = _basename(relative_path) or "download"
    data = _read_bytes(full_path)

    return DownloadPayload(
        filename=filename,
        mime_type=get_mime_type(get_extension(filename)),
        content_disposition=build_content_disposition(filename),
        data=data,
    )


def _locate_file(root: str, relative_path: str, directory_message: str) -> tuple[str, os.stat_result]:
    if not relative_path:
        raise BadRequest("File path is required")

    full_path = confine(root, relative_path)
    try:
        st = os.stat(full_path)
    except (FileNotFoundError, NotADirectoryError):
        raise NotFound("File not found")
    except OSError:
        logger.exception("Failed to stat %s", full_path)
        raise Internal("Failed to read file")

    if stat.S_ISDIR(st.st_mode):
        raise IsADirectory(directory_message)
    return full_path, st


def _read_bytes(full_path: str) -> bytes:
    try:
        with open(full_path, "rb") as fh:
            return fh.read()
    except OSError:
        logger.exception("Failed to read %s", full_path)
        raise Internal("Failed to read file")


def _basename(relative_path: str) -> str:
    parts = _segments(relative_path)
    return parts[-1] if parts else ""
