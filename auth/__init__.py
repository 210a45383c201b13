# Make the auth directory a Python package
# Public API exports from canonical locations

from auth.credentials import build_google_service, load_credentials
from auth.scopes import DOCS_SCOPES, DRIVE_SCOPES, SCOPES, get_scopes_for_services

__all__ = [
    "build_google_service",
    "get_scopes_for_services",
    "load_credentials",
    "DOCS_SCOPES",
    "DRIVE_SCOPES",
    "SCOPES",
]
