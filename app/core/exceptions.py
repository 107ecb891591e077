# app/core/exceptions.py
"""HTTP-aware error types raised by services and dependencies.

Each error carries its status code so call sites only pick the error kind:

    raise NotFoundError()
    raise PreconditionFailedError("Ticket must be 'Pending', got 'DC Approved'")
"""
from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """The referenced ticket does not exist."""

    def __init__(self, detail: str = "Ticket not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class PreconditionFailedError(HTTPException):
    """The requested action does not match the ticket's current status."""

    def __init__(self, detail: str = "Ticket is not in the required state") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ValidationFailedError(HTTPException):
    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class StoreFailureError(HTTPException):
    """The ticket store could not complete the operation."""

    def __init__(self, detail: str = "Ticket store error") -> None:
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


class UnauthorizedError(HTTPException):
    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenError(HTTPException):
    def __init__(self, detail: str = "Insufficient permissions") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
