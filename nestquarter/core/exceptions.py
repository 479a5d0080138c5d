"""Custom application exceptions."""

from fastapi import HTTPException, status


class AppException(HTTPException):
    """Base application exception."""

    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: str = "An unexpected error occurred",
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class NotFoundError(AppException):
    """Resource not found exception."""

    def __init__(self, resource: str = "Resource", identifier: str | None = None) -> None:
        detail = f"{resource} not found"
        if identifier:
            detail = f"{resource} with ID '{identifier}' not found"
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class AuthenticationError(AppException):
    """Authentication failed exception."""

    def __init__(self, detail: str = "Authentication failed") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class AuthorizationError(AppException):
    """Authorization denied exception."""

    def __init__(self, detail: str = "You don't have permission to access this resource") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class BadRequestError(AppException):
    """Business rule violation."""

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class PropertyNotAvailable(BadRequestError):
    """Property cannot currently be booked."""

    def __init__(self, detail: str = "Property is not available for booking") -> None:
        super().__init__(detail=detail)


class DatesNotAvailable(BadRequestError):
    """Requested dates overlap an existing booking."""

    def __init__(self, detail: str = "Property is not available for the selected dates") -> None:
        super().__init__(detail=detail)


class StayLengthError(BadRequestError):
    """Stay is shorter or longer than allowed."""


class InvalidBookingStatus(BadRequestError):
    """Invalid booking status for operation."""

    def __init__(self, action: str, current: str) -> None:
        self.action = action
        self.current = current
        super().__init__(detail=f"Cannot {action} a booking that is {current}")


class ConflictError(AppException):
    """Write rejected by a storage-level uniqueness guarantee."""

    def __init__(self, detail: str = "The resource was modified by a concurrent request") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)
