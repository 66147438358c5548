"""
Custom application exceptions.

Every error the estimator can produce is recoverable. Services raise these;
stateful components store `detail` / `kind` as user-facing state, and the
HTTP views let FastAPI render them with the matching status code.
"""

from typing import Optional

from fastapi import HTTPException, status


class AppException(HTTPException):
    """Base application exception."""

    kind = "app_error"

    def __init__(self, detail: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        super().__init__(status_code=status_code, detail=detail)


class BadRequestException(AppException):
    """Bad request exception."""

    kind = "bad_request"

    def __init__(self, detail: str = "Bad request"):
        super().__init__(detail=detail, status_code=status.HTTP_400_BAD_REQUEST)


class ConfigMissingException(AppException):
    """No fare service address configured; blocks every network operation."""

    kind = "config_missing"

    def __init__(self, detail: str = "FARE_API_URL is not configured."):
        super().__init__(detail=detail, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)


class MetadataLoadFailedException(AppException):
    """City/quarter list could not be loaded."""

    kind = "metadata_load_failed"

    def __init__(self, detail: str = "Failed to load meta data"):
        super().__init__(detail=detail, status_code=status.HTTP_502_BAD_GATEWAY)


class ValidationFailedException(BadRequestException):
    """A submission was rejected before any network call."""

    kind = "validation_failed"

    BOTH_ENDPOINTS_REQUIRED = "both_endpoints_required"
    SAME_ENDPOINT = "same_endpoint"
    DATE_REQUIRED = "date_required"
    DATE_NOT_FUTURE = "date_not_future"

    def __init__(self, reason: str, detail: str):
        super().__init__(detail=detail)
        self.reason = reason


class RequestFailedException(AppException):
    """Prediction endpoint failed or answered with an unexpected shape."""

    kind = "request_failed"

    def __init__(
        self,
        detail: str,
        upstream_status: Optional[int] = None,
        body: Optional[str] = None,
    ):
        super().__init__(detail=detail, status_code=status.HTTP_502_BAD_GATEWAY)
        self.upstream_status = upstream_status
        self.body = body
