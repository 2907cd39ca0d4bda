"""
Domain errors raised by the service layer.
The API layer turns each into an HTTP status via ``status_code``.
"""


class PlaybookError(Exception):
    status_code = 500
    default_message = "Unexpected error"

    def __init__(self, message=None):
        super().__init__(message or self.default_message)


class NotFoundError(PlaybookError):
    status_code = 404
    default_message = "Not found"


class ValidationError(PlaybookError, ValueError):
    status_code = 400
    default_message = "Invalid request"


class PermissionDeniedError(PlaybookError):
    status_code = 403
    default_message = "Forbidden"


class ConflictError(PlaybookError):
    status_code = 409
    default_message = "Conflict"
