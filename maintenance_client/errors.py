# maintenance_client/errors.py
from typing import List, Optional

FILL_ALL_FIELDS = "Please fill all fields"
SERVICE_UNAVAILABLE = "Failed to connect to prediction service. Please try again."


class MaintenanceClientError(Exception):
    """Base class; `user_message` is what the error banner shows."""

    user_message = "Something went wrong."


class MissingFieldsError(MaintenanceClientError):
    user_message = FILL_ALL_FIELDS

    def __init__(self, fields: List[str]):
        self.fields = list(fields)
        super().__init__(f"Missing required fields: {self.fields}")


class PredictionError(MaintenanceClientError):
    """
    Any failure of the prediction call. Subclasses keep the cause apart
    for logs; the user sees the same message for all of them.
    """

    user_message = SERVICE_UNAVAILABLE


class ConnectivityError(PredictionError):
    """Service unreachable: connection refused, DNS, timeout."""


class ServiceError(PredictionError):
    """Service answered, but not with a usable 2xx JSON body."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class SubmissionInFlight(MaintenanceClientError):
    user_message = "A prediction is already running."
