"""Core utilities for gws-markdown-docs."""

from core.config import ConverterSettings, get_settings, reload_settings
from core.container import Container, get_container, reset_container, set_container
from core.errors import (
    APIError,
    BatchSubmissionError,
    ConfigurationError,
    InvalidRequestError,
    MarkdownDocsError,
    PermissionDeniedError,
    RateLimitError,
    ResourceNotFoundError,
    ServiceConfigurationError,
    ValidationError,
    format_error,
    handle_http_error,
)
from core.utils import TransientNetworkError, document_link, handle_http_errors

__all__ = [
    "APIError",
    "BatchSubmissionError",
    "ConfigurationError",
    "Container",
    "ConverterSettings",
    "document_link",
    "format_error",
    "get_container",
    "get_settings",
    "handle_http_error",
    "handle_http_errors",
    "InvalidRequestError",
    "MarkdownDocsError",
    "PermissionDeniedError",
    "RateLimitError",
    "reload_settings",
    "reset_container",
    "ResourceNotFoundError",
    "ServiceConfigurationError",
    "set_container",
    "TransientNetworkError",
    "ValidationError",
]
