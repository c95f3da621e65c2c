"""Error taxonomy shared by the services and the HTTP interface."""

from pydantic import BaseModel

from tasktrack.core.config import constants


class ErrorCode:
    """Error codes for specific error conditions."""

    ERR_UNAUTHENTICATED = "ERR_UNAUTHENTICATED"
    ERR_VALIDATION = "ERR_VALIDATION"
    ERR_NOT_FOUND = "ERR_NOT_FOUND"
    ERR_INTERNAL = "ERR_INTERNAL"


class TaskTrackError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = constants.HTTP_SERVER_ERROR
    code: str = ErrorCode.ERR_INTERNAL

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class Unauthenticated(TaskTrackError):  # noqa: N818
    """Credential missing, malformed, expired or not verifiable."""

    status_code = constants.HTTP_UNAUTHORIZED
    code = ErrorCode.ERR_UNAUTHENTICATED


class ValidationError(TaskTrackError):
    """Malformed or missing input, tagged with the offending field."""

    status_code = constants.HTTP_BAD_REQUEST
    code = ErrorCode.ERR_VALIDATION


class NotFound(TaskTrackError):  # noqa: N818
    """Record absent or owned by somebody else.

    The two causes share one message so callers cannot probe for records
    belonging to other users.
    """

    status_code = constants.HTTP_NOT_FOUND
    code = ErrorCode.ERR_NOT_FOUND


class InternalError(TaskTrackError):
    """Storage or unexpected failure."""

    status_code = constants.HTTP_SERVER_ERROR
    code = ErrorCode.ERR_INTERNAL


class ErrorResponse(BaseModel):
    """JSON body returned for every failed request."""

    success: bool = False
    message: str
    code: str
    field: str | None = None
    error: str | None = None

    @classmethod
    def from_error(cls, error: TaskTrackError, *, detail: str | None = None) -> "ErrorResponse":
        """Build the response body for a taxonomy error."""
        return cls(message=error.message, code=error.code, field=error.field, error=detail)
