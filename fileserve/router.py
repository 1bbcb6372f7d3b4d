"""
API endpoints for browsing project files and staging uploads.

GET  /api/projects/{encoded}/files?path=...        — directory listing
GET  /api/projects/{encoded}/files/{path}/download — raw file download
GET  /api/projects/{encoded}/files/{path}          — inline preview
POST /api/upload                                   — stage a file for a chat session

Errors are raised as FileAccessError subclasses and rendered by the handler in
main.py, except for /upload which keeps its {success, error} shape.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, Response
from starlette.datastructures import UploadFile

from fileserve.config import settings
from fileserve.errors import BadRequest, FileAccessError
from fileserve.registry import ClaudeConfigRegistry
from fileserve.schemas import ErrorResponse, FileContentResponse, FilesListResponse, UploadResponse
from fileserve.services import file_server, uploader
from fileserve.services.locator import ProjectLocator

logger = logging.getLogger(__name__)

router = APIRouter()

_ERRORS = {
    400: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


def get_locator() -> ProjectLocator:
    return ProjectLocator(ClaudeConfigRegistry(settings.CLAUDE_HOME, settings.REQUIRE_PROJECT_HISTORY))


@router.get(
    "/projects/{encoded_project_name}/files",
    response_model=FilesListResponse,
    response_model_exclude_none=True,
    responses=_ERRORS,
)
async def list_project_files(
    encoded_project_name: str,
    path: str = Query("", description="Directory relative to the project root; empty for the root"),
    locator: ProjectLocator = Depends(get_locator),
) -> FilesListResponse:
    """List one directory of a project. A missing directory lists as empty."""
    project = await run_in_threadpool(locator.resolve, encoded_project_name)
    return await file_server.list_files(project.absolute_path, path)


# Registered before the preview route: {path:path} would otherwise swallow "/download".
@router.get(
    "/projects/{encoded_project_name}/files/{path:path}/download",
    response_class=Response,
    responses=_ERRORS,
)
def download_project_file(
    encoded_project_name: str,
    path: str,
    locator: ProjectLocator = Depends(get_locator),
) -> Response:
    """Download a file in full, whatever its size or type."""
    project = locator.resolve(encoded_project_name)
    payload = file_server.download(project.absolute_path, path)
    logger.info("Download %s (%d bytes) from %s", payload.filename, len(payload.data), project.encoded_name)
    return Response(
        content=payload.data,
        headers={"Content-Type": payload.mime_type, "Content-Disposition": payload.content_disposition},
    )


@router.get(
    "/projects/{encoded_project_name}/files/{path:path}",
    response_model=FileContentResponse,
    responses={**_ERRORS, 413: {"model": ErrorResponse}, 415: {"model": ErrorResponse}},
)
def read_project_file(
    encoded_project_name: str,
    path: str,
    locator: ProjectLocator = Depends(get_locator),
) -> FileContentResponse:
    """
    Inline preview of a file.

    Text types come back as UTF-8; images, and anything else up to 1 MiB, as
    base64. Larger non-image binaries get 415, anything at 10 MiB or over 413.
    """
    project = locator.resolve(encoded_project_name)
    return file_server.read_content(project.absolute_path, path)


def _form_text(value) -> Optional[str]:
    return value if isinstance(value, str) else None


@router.post("/upload", response_model=UploadResponse, response_model_exclude_none=True)
async def upload_file(request: Request):
    """
    Stage an uploaded file under <workingDirectory>/.claude-temp/<sessionId>/.

    Multipart fields: ``file``, ``sessionId``, optional ``workingDirectory``.
    The form is read by hand so every failure, malformed fields included,
    keeps the {success, error} shape.
    """
    try:
        try:
            form = await request.form()
        except Exception as exc:
            logger.warning("Failed to parse upload form: %s", exc)
            raise BadRequest("Invalid upload form")

        try:
            file = form.get("file")
            session_id = _form_text(form.get("sessionId"))
            working_directory = _form_text(form.get("workingDirectory"))

            filename, data = None, None
            if isinstance(file, UploadFile):
                filename = file.filename
                try:
                    data = await file.read(settings.UPLOAD_MAX_BYTES + 1)
                except OSError:
                    logger.exception("Failed to read uploaded file for session %s", session_id)
                    raise BadRequest("Failed to read uploaded file.")

            file_path = await run_in_threadpool(
                uploader.stage_upload, filename, data, session_id, working_directory
            )
        finally:
            await form.close()
    except FileAccessError as exc:
        body = UploadResponse(success=False, error=exc.message)
        return JSONResponse(body.model_dump(by_alias=True, exclude_none=True), status_code=exc.status_code)

    return UploadResponse(success=True, file_path=file_path)
