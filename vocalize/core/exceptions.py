"""
Vocalize exception hierarchy.

All application-specific exceptions inherit from VocalizeError,
enabling centralized error handling in the API middleware layer.
"""

from datetime import UTC, datetime


class VocalizeError(Exception):
    """Base exception for all Vocalize errors."""

    def __init__(
        self,
        detail: str = "An unexpected error occurred",
        code: str = "VOCALIZE_ERROR",
        status_code: int = 500,
    ) -> None:
        self.detail = detail
        self.code = code
        self.status_code = status_code
        self.timestamp = datetime.now(UTC).isoformat()
        super().__init__(detail)


class ValidationError(VocalizeError):
    """Raised when caller input is missing or out of range.

    ``field`` names the offending input so clients can point at it.
    """

    def __init__(self, field: str, detail: str | None = None) -> None:
        self.field = field
        super().__init__(
            detail=detail or f"Invalid or missing value for {field}",
            code="VALIDATION_ERROR",
            status_code=400,
        )


class UpstreamFormatError(VocalizeError):
    """Raised when a collaborator response does not have the expected shape."""

    def __init__(self, detail: str = "Invalid response from AI") -> None:
        super().__init__(
            detail=detail,
            code="UPSTREAM_FORMAT_ERROR",
            status_code=500,
        )


class UpstreamTransportError(VocalizeError):
    """Raised when a collaborator cannot be reached or rejects the request."""

    def __init__(
        self,
        detail: str = "Upstream service unavailable",
        code: str = "UPSTREAM_TRANSPORT_ERROR",
    ) -> None:
        super().__init__(detail=detail, code=code, status_code=500)


class TranscriptionError(UpstreamTransportError):
    """Raised when STT processing fails."""

    def __init__(self, detail: str = "Transcription failed") -> None:
        super().__init__(detail=detail, code="TRANSCRIPTION_ERROR")


class CaptureError(VocalizeError):
    """Raised when an audio capture session cannot be opened or finished."""

    def __init__(self, detail: str = "Could not record audio") -> None:
        super().__init__(
            detail=detail,
            code="CAPTURE_ERROR",
            status_code=400,
        )
