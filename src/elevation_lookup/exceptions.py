"""Custom exception hierarchy for the application."""


class AppError(Exception):
    """Base exception for the application."""

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


class ElevationLookupError(AppError):
    """Base class for failures of a single elevation lookup.

    ``user_message`` is the text a host application shows to the user.
    """

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        user_message: str = "Could not read elevation",
    ) -> None:
        super().__init__(message, code=code)
        self.user_message = user_message


class NetworkError(ElevationLookupError):
    """The elevation endpoint could not be reached (connection, DNS, timeout)."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            f"Elevation request failed: {reason}",
            code="NETWORK_ERROR",
            user_message=f"Error getting data: {reason}",
        )
        self.reason = reason


class HttpStatusError(ElevationLookupError):
    """The elevation endpoint answered with a non-2xx status."""

    def __init__(self, status_code: int) -> None:
        super().__init__(
            f"Elevation endpoint returned HTTP {status_code}",
            code="HTTP_STATUS_ERROR",
            user_message=f"Error getting data: HTTP {status_code}",
        )
        self.status_code = status_code


class MalformedResponseError(ElevationLookupError):
    """The response body is not JSON or lacks the expected status/data shape."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="MALFORMED_RESPONSE")


class EmptyDataError(ElevationLookupError):
    """The endpoint answered successfully but the data array is empty."""

    def __init__(self) -> None:
        super().__init__(
            "Elevation response contained no data",
            code="EMPTY_DATA",
            user_message="No elevation available for this location",
        )
