# maintenance_client/__init__.py
from .client import PredictionClient
from .errors import (
    ConnectivityError,
    MissingFieldsError,
    PredictionError,
    ServiceError,
    SubmissionInFlight,
)
from .presenter import DisplayModel, present
from .schemas import FormData, PredictionResponse, ValidInput, validate

__all__ = [
    "PredictionClient",
    "ConnectivityError",
    "MissingFieldsError",
    "PredictionError",
    "ServiceError",
    "SubmissionInFlight",
    "DisplayModel",
    "present",
    "FormData",
    "PredictionResponse",
    "ValidInput",
    "validate",
]
