"""Custom exception classes for the API."""

from typing import Any


class APIError(Exception):
    """Base exception for API errors."""

    def __init__(self, message: str, status_code: int = 400, details: Any = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class NotFoundError(APIError):
    """Resource not found."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            message=f"{resource} with id '{resource_id}' not found",
            status_code=404,
            details={"resource": resource, "id": resource_id},
        )


class ValidationError(APIError):
    """Validation error."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message=message, status_code=422, details=details)


class AuthenticationError(APIError):
    """Missing or unusable caller identity."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message=message, status_code=401)


class DatabaseError(APIError):
    """Database operation error."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message=message, status_code=500, details=details)


class EstimationError(Exception):
    """
    Failure of a single inference call.

    Never rendered to end users directly; the estimation service logs it
    and returns a uniform failed result instead.
    """

    kind = "unknown"

    def __init__(self, message: str, contract: str = "unknown", details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.contract = contract
        self.details = details or {}


class TransportFailure(EstimationError):
    """Endpoint unreachable, connection dropped or call timed out."""

    kind = "transport"


class EndpointFailure(EstimationError):
    """Endpoint reported an error, or the request for it could not be built."""

    kind = "endpoint"


class SchemaValidationFailure(EstimationError):
    """Endpoint output did not match the declared output schema."""

    kind = "schema"
