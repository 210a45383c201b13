"""
Google Workspace OAuth Scopes

This module centralizes the OAuth scopes the Markdown-to-Docs workflow needs.
"""

import logging

logger = logging.getLogger(__name__)

# Google Drive scopes
DRIVE_SCOPE = "https://www.googleapis.com/auth/drive"

# Google Docs scopes
DOCS_WRITE_SCOPE = "https://www.googleapis.com/auth/documents"

# Service-specific scope groups
DOCS_SCOPES = [DOCS_WRITE_SCOPE]

DRIVE_SCOPES = [DRIVE_SCOPE]

# Service name -> (discovery name, API version, scopes)
SERVICE_CONFIGS = {
    "docs": ("docs", "v1", DOCS_SCOPES),
    "drive": ("drive", "v3", DRIVE_SCOPES),
}


def get_scopes_for_services(services: list[str] | None = None) -> list[str]:
    """
    Returns OAuth scopes for the specified services.

    Args:
        services: Service names ("docs", "drive"). Defaults to all of them.

    Returns:
        List of unique OAuth scopes, in declaration order.
    """
    if services is None:
        services = list(SERVICE_CONFIGS.keys())

    scopes: list[str] = []
    for service in services:
        if service in SERVICE_CONFIGS:
            scopes.extend(SERVICE_CONFIGS[service][2])

    logger.debug(f"Generated scopes for services {services}: {len(set(scopes))} unique scopes")
    return list(dict.fromkeys(scopes))


SCOPES = get_scopes_for_services()
