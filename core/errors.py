"""Centralized error handling and response helpers."""

from typing import List, Optional, Dict, Any
from fastapi.responses import JSONResponse


class CertificateError(Exception):
    """Base error for certificate generation."""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for JSON serialization."""
        return {
            'error_type': self.error_code,
            'message': self.message,
            'details': self.details,
        }


class MissingRequiredFieldError(CertificateError):
    """
    Raised when a record reaches the exporter without its required fields.

    Records built through normal validation cannot trigger this; it guards
    records created with ``model_construct`` or similar shortcuts.
    """

    def __init__(self, missing_fields: List[str]):
        self.missing_fields = missing_fields

        if len(missing_fields) == 1:
            msg = f"Required field missing: {missing_fields[0]}"
        else:
            msg = f"Required fields missing: {', '.join(missing_fields)}"

        super().__init__(msg, details={'missing_fields': missing_fields})


class CertificateGenerationError(CertificateError):
    """Raised when drawing, exporting or delivering a certificate fails."""

    def __init__(self, message: str, filename: Optional[str] = None, cause: Optional[BaseException] = None):
        self.filename = filename
        self.cause = cause
        details: Dict[str, Any] = {}
        if filename:
            details['filename'] = filename
        if cause is not None:
            details['cause'] = f"{type(cause).__name__}: {cause}"
        super().__init__(message, details=details)


def validation_error_response(
    errors: List[str],
    code: int = 400,
    hints: Optional[List[str]] = None
) -> JSONResponse:
    """Create standardized validation error response."""

    if not hints:
        hints = []
        error_text = " ".join(errors).lower()

        if "missing" in error_text or "blank" in error_text:
            hints.append("recipientName, courseName, organizationName, completionDate and certificateNumber are required")
        if "coursehours" in error_text or "greater than or equal" in error_text:
            hints.append("courseHours must be a non-negative number")
        if "template" in error_text:
            hints.append("Placeholders use double braces, e.g. {{studentName}}")

    hints = hints[:3]

    return JSONResponse(
        status_code=code,
        content={
            "error": "Validation Error",
            "code": code,
            "messages": errors,
            "hints": hints,
        }
    )


def generation_error_response(error: CertificateError, code: int = 500) -> JSONResponse:
    """Create response for a failed certificate generation."""
    body = {
        "error": "Certificate Generation Failed",
        "code": code,
    }
    body.update(error.to_dict())
    return JSONResponse(status_code=code, content=body)
