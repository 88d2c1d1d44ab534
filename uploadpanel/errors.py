from __future__ import annotations
from typing import Optional

# ============================================================================
# Errori applicativi: ognuno porta messaggio pubblico + status HTTP
# ============================================================================
class ApiError(Exception):
    status_code: int = 500
    message: str = "Internal Server Error"
    code: Optional[str] = None

    def __init__(self, message: Optional[str] = None, *, status_code: Optional[int] = None,
                 code: Optional[str] = None):
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        super().__init__(self.message)


class ValidationError(ApiError):
    status_code = 422
    message = "Invalid input"

class BadRequest(ApiError):
    status_code = 400
    message = "Bad request"

class Unauthorized(ApiError):
    # messaggio unico: mai esporre il motivo (firma, scadenza, formato)
    status_code = 401
    message = "Unauthorized"

class InvalidCredentials(ApiError):
    status_code = 401
    message = "Invalid credentials"

class Forbidden(ApiError):
    status_code = 403
    message = "Forbidden"

class NotFound(ApiError):
    status_code = 404
    message = "Not found"

class TooLarge(ApiError):
    status_code = 413
    message = "File too large"

class StorageError(ApiError):
    status_code = 500
    message = "Upload base directory not found"

class DirectoryCreateFailed(StorageError):
    message = "Failed to create directory"

class MoveFailed(StorageError):
    message = "Failed to save file"


def http_status_for(exc: ApiError) -> int:
    code = exc.status_code
    if not isinstance(code, int) or code < 400 or code >= 600:
        return 500
    return code
