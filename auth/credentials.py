"""
Credential loading for Google API services.

Reads an already-authorized user token file (the JSON written by any
installed-app OAuth flow) and builds Docs/Drive clients from it. Acquiring or
refreshing the token is left to whatever produced the file.
"""

import logging
import os
from typing import Any

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build

from auth.scopes import SERVICE_CONFIGS, get_scopes_for_services
from core.config import get_settings
from core.errors import ServiceConfigurationError

logger = logging.getLogger(__name__)


def load_credentials(token_file: str | None = None, services: list[str] | None = None) -> Credentials:
    """
    Load user credentials from an authorized-user token file.

    Args:
        token_file: Path to the token JSON. Defaults to the configured MARKDOWN_DOCS_TOKEN_FILE.
        services: Services whose scopes the credentials must cover.

    Raises:
        ServiceConfigurationError: If the file is missing or unreadable.
    """
    path = token_file or get_settings().token_file
    if not os.path.exists(path):
        raise ServiceConfigurationError(
            f"Token file not found: {path}. Set MARKDOWN_DOCS_TOKEN_FILE to an authorized-user JSON file."
        )

    try:
        credentials = Credentials.from_authorized_user_file(path, scopes=get_scopes_for_services(services))
    except (ValueError, OSError) as e:
        raise ServiceConfigurationError(f"Cannot load credentials from {path}: {e}") from e

    logger.debug(f"Loaded credentials from {path}")
    return credentials


def build_google_service(service_type: str, credentials: Credentials | None = None) -> Any:
    """
    Build a googleapiclient service object for "docs" or "drive".
    """
    if service_type not in SERVICE_CONFIGS:
        raise ServiceConfigurationError(f"Unsupported service type: {service_type}")

    service_name, version, _ = SERVICE_CONFIGS[service_type]
    if credentials is None:
        credentials = load_credentials(services=[service_type])

    logger.info(f"Building {service_name} {version} service")
    return build(service_name, version, credentials=credentials, cache_discovery=False)
