"""
Error taxonomy for the file-access endpoints.

Services raise these; the handler registered in main.py turns any of them into
a ``{"error": message}`` JSON body with the class's status code.
"""


class FileAccessError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequest(FileAccessError):
    status_code = 400


class InvalidPath(FileAccessError):
    status_code = 403


class UnsafeProjectName(FileAccessError):
    status_code = 403


class NotFound(FileAccessError):
    status_code = 404


class IsADirectory(FileAccessError):
    status_code = 400


class NotADirectory(FileAccessError):
    status_code = 400


class TooLargeForPreview(FileAccessError):
    status_code = 413


class UploadTooLarge(FileAccessError):
    status_code = 413


class UnsupportedTypeForPreview(FileAccessError):
    status_code = 415


class Internal(FileAccessError):
    status_code = 500
