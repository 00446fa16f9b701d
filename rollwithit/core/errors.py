"""Request-level errors, each carrying the HTTP status it is reported with."""

from starlette import status as status_codes


class RollWithItError(Exception):
    """Base error for a failed request. Terminal for that request only."""

    status_code: int = status_codes.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ClientInputError(RollWithItError):
    """Malformed or incomplete client input."""

    status_code = status_codes.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class PayloadTooLargeError(ClientInputError):
    status_code = status_codes.HTTP_413_CONTENT_TOO_LARGE
    default_message = "Upload too large"


class PathTraversalRejection(RollWithItError):
    """Requested path escapes its root. Raised before any filesystem access."""

    status_code = status_codes.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFoundError(RollWithItError):
    status_code = status_codes.HTTP_404_NOT_FOUND
    default_message = "Not found"


class IOFailure(RollWithItError):
    """Read, write or listing failure on the filesystem."""

    status_code = status_codes.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"
