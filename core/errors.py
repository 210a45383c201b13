"""
Custom error types for Markdown-to-Docs conversion.

Provides user-friendly error messages and structured error handling.
"""

from typing import Any

from googleapiclient.errors import HttpError

# =============================================================================
# Base Exception Hierarchy
# =============================================================================


class MarkdownDocsError(Exception):
    """Base exception for all gws-markdown-docs errors."""

    pass


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(MarkdownDocsError):
    """Raised when settings or converter inputs are invalid before any request is emitted."""

    pass


class ServiceConfigurationError(ConfigurationError):
    """Raised when a Google service cannot be built (e.g. missing token file)."""

    pass


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(MarkdownDocsError):
    """Raised when input validation fails."""

    pass


# =============================================================================
# API Errors
# =============================================================================


class APIError(MarkdownDocsError):
    """Raised for general Google API errors."""

    def __init__(self, message: str, status_code: int | None = None, details: Any | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class InvalidRequestError(APIError):
    """Raised when the service rejects a request as malformed, e.g. an invalid range (400)."""

    pass


class ResourceNotFoundError(APIError):
    """Raised when a requested resource doesn't exist (404)."""

    pass


class PermissionDeniedError(APIError):
    """Raised when the user lacks permission for an operation (403)."""

    pass


class RateLimitError(APIError):
    """Raised when API rate limits are exceeded (429)."""

    pass


class BatchSubmissionError(APIError):
    """
    Raised when a request batch is rejected and the remaining batches are abandoned.

    Batches before `batch_index` stay applied to the document; nothing is rolled back.
    """

    def __init__(
        self,
        document_id: str,
        batch_index: int,
        total_batches: int,
        cause: Exception,
    ):
        status_code = getattr(cause, "status_code", None)
        super().__init__(
            f"Batch {batch_index + 1}/{total_batches} failed for document {document_id}: {cause}. "
            f"{batch_index} batch(es) were applied; the remaining {total_batches - batch_index} were not sent.",
            status_code=status_code,
            details=cause,
        )
        self.document_id = document_id
        self.batch_index = batch_index
        self.total_batches = total_batches
        self.cause = cause

    @property
    def batches_applied(self) -> int:
        return self.batch_index


def handle_http_error(error: Exception, resource_id: str | None = None) -> APIError:
    """
    Convert Google API HTTP errors to the matching APIError subclass.
    """
    status = None
    if isinstance(error, HttpError):
        status = error.resp.status
    error_str = str(error)
    target = resource_id or "unknown"

    if status == 404:
        return ResourceNotFoundError(f"Resource not found: {target}", status_code=404, details=error)
    elif status == 403:
        return PermissionDeniedError(
            f"Permission denied. You may not have access to {target}.", status_code=403, details=error
        )
    elif status == 401:
        return APIError("Authentication expired. Please re-authenticate.", status_code=401, details=error)
    elif status == 429:
        return RateLimitError("Rate limit exceeded. Please wait and try again.", status_code=429, details=error)
    elif status == 400:
        return InvalidRequestError(f"Invalid request for {target}: {error_str}", status_code=400, details=error)
    else:
        return APIError(f"Google API error: {error_str}", status_code=status, details=error)


def format_error(operation: str, error: Exception) -> str:
    """Format an error for display to the user."""
    return f"{operation} failed: {error}"
