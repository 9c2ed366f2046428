from typing import Optional

from fastapi import status


class ServiceError(Exception):
    """Base exception for service layer errors."""

    status_code_default = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code if status_code is not None else self.status_code_default


class InvalidAmount(ServiceError):
    """Payment amount not positive, or fee amount negative."""

    status_code_default = status.HTTP_400_BAD_REQUEST


class NotFound(ServiceError):
    status_code_default = status.HTTP_404_NOT_FOUND


class UnknownStudent(NotFound):
    """Student id does not reference an existing, active student."""


class NoFeeRecord(ServiceError):
    """Reconciliation attempted for a student without a fee assignment."""

    status_code_default = status.HTTP_409_CONFLICT


class AlreadyAssigned(ServiceError):
    status_code_default = status.HTTP_409_CONFLICT
