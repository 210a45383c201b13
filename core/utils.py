import functools
import logging
import re
import ssl

from googleapiclient.errors import HttpError

from core.errors import APIError, MarkdownDocsError, ValidationError, handle_http_error

logger = logging.getLogger(__name__)


def validate_document_id(document_id: str, param_name: str = "document_id") -> str:
    """Validate a Google Docs / Drive file ID."""
    if not document_id:
        raise ValidationError(f"{param_name} is required")

    document_id = document_id.strip()
    if not document_id:
        raise ValidationError(f"{param_name} cannot be empty")

    if not re.match(r"^[\w\-]+$", document_id):
        raise ValidationError(f"{param_name} contains invalid characters")

    return document_id


def validate_positive_int(value: int, param_name: str, max_value: int | None = None) -> int:
    """Validate a positive integer."""
    if not isinstance(value, int) or isinstance(value, bool) or value < 1:
        raise ValidationError(f"{param_name} must be a positive integer")

    if max_value is not None and value > max_value:
        raise ValidationError(f"{param_name} cannot exceed {max_value}")

    return value


def document_link(document_id: str) -> str:
    return f"https://docs.google.com/document/d/{document_id}/edit"


class TransientNetworkError(Exception):
    """Raised when a tool call fails on a transient SSL or network error."""

    pass


def handle_http_errors(tool_name: str, service_type: str | None = None):
    """
    A decorator to handle Google API HttpErrors and transient SSL errors in a standardized way.

    It wraps a tool function, catches HttpError, logs a detailed error message,
    and raises an APIError with a user-friendly message. Project errors
    (MarkdownDocsError and subclasses) are re-raised unchanged.

    An ssl.SSLError becomes a TransientNetworkError after a single attempt.
    Tools are never retried: a replayed batchUpdate would insert text twice.

    Args:
        tool_name (str): The name of the tool being decorated (e.g., 'insert_markdown').
        service_type (str): Optional. The Google service type (e.g., 'docs', 'drive').
    """

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except ssl.SSLError as e:
                logger.error(f"SSL error in {tool_name}: {e}")
                raise TransientNetworkError(
                    f"A transient SSL error occurred in '{tool_name}'. "
                    "This is likely a temporary network or certificate issue. Please try again shortly."
                ) from e
            except (MarkdownDocsError, TransientNetworkError):
                raise
            except HttpError as error:
                mapped = handle_http_error(error, kwargs.get("document_id"))
                message = f"API error in {tool_name} ({service_type or 'google'}): {mapped}"
                logger.error(message, exc_info=True)
                raise type(mapped)(message, status_code=mapped.status_code, details=error) from error
            except Exception as e:
                message = f"An unexpected error occurred in {tool_name}: {e}"
                logger.exception(message)
                raise APIError(message) from e

        return wrapper

    return decorator
