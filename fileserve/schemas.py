"""
Pydantic models for the JSON wire shapes, plus the small request-scoped
records passed between services.

Python attributes are snake_case; the wire uses camelCase via aliases.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class FileInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    path: str
    type: Literal["file", "directory"]
    size: Optional[int] = None
    modified_time: Optional[datetime] = Field(default=None, alias="modifiedTime")
    extension: Optional[str] = None


class FilesListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    files: list[FileInfo]
    current_path: str = Field(alias="currentPath")


class FileContentResponse(BaseModel):
    """Inline preview. ``content`` is decoded text or base64, never both."""
    content: str
    type: str
    encoding: Literal["utf-8", "base64"]
    size: int


class UploadResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    file_path: Optional[str] = Field(default=None, alias="filePath")
    error: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str


@dataclass
class ProjectRoot:
    encoded_name: str
    absolute_path: str


@dataclass
class DirectoryEntry:
    name: str
    is_file: bool
    is_directory: bool


@dataclass
class DownloadPayload:
    filename: str
    mime_type: str
    content_disposition: str
    data: bytes
