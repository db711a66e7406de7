"""
Service Exceptions
Error taxonomy shared by the intake and adherence services
"""

from typing import Optional


class IntakeError(Exception):
    """Base class for errors raised by the service layer"""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(IntakeError):
    """A required record field is missing or empty"""

    status_code = 422

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class NotFoundError(IntakeError):
    """Record does not exist or does not belong to the caller"""

    status_code = 404

    def __init__(self, record_id):
        super().__init__(f"Medication record {record_id} not found")
        self.record_id = record_id


class UploadError(IntakeError):
    """Blob store rejected or failed to store evidence"""

    status_code = 502


class AuthRequiredError(IntakeError):
    """No owner context is available for the request"""

    status_code = 401

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


__all__ = [
    "IntakeError",
    "ValidationError",
    "NotFoundError",
    "UploadError",
    "AuthRequiredError",
]
