"""
Dependency Injection Container for gws-markdown-docs.

Provides a centralized container for the external collaborators the
conversion workflow talks to, enabling testability through mock injection.
"""

import logging
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class DocumentStoreProtocol(Protocol):
    """Protocol for document hosting implementations (Google Docs in production)."""

    async def get(self, document_id: str) -> Any:
        """Return a DocumentInfo describing the document's current content length."""
        ...

    async def apply_batch(self, document_id: str, batch: Any) -> dict:
        """Apply one RequestBatch atomically; raise APIError on rejection."""
        ...

    async def create_document(self, title: str) -> str:
        """Create an empty document and return its ID."""
        ...


@runtime_checkable
class FolderStoreProtocol(Protocol):
    """Protocol for folder/object storage implementations (Google Drive in production)."""

    async def create_folder(self, name: str, parent_id: str = "root") -> dict:
        ...

    async def list_children(self, folder_id: str = "root", page_size: int = 100) -> list[dict]:
        ...

    async def move(self, file_id: str, folder_id: str) -> dict:
        ...

    async def rename(self, file_id: str, new_name: str) -> dict:
        ...

    async def delete(self, file_id: str) -> None:
        ...

    async def check_permissions(self, file_id: str) -> list[dict]:
        ...

    async def share(self, file_id: str, recipient: Any) -> dict:
        ...


@dataclass
class Container:
    """
    Dependency injection container.

    Holds references to the document store and folder store implementations.
    If not provided, defaults to the Google-backed implementations built from
    the configured token file.
    """

    document_store: DocumentStoreProtocol | None = None
    folder_store: FolderStoreProtocol | None = None

    def __post_init__(self) -> None:
        """Initialize with defaults if not provided."""
        if self.document_store is None:
            from auth.credentials import build_google_service
            from gdocs.docs_store import GoogleDocsStore

            self.document_store = GoogleDocsStore(build_google_service("docs"))

        if self.folder_store is None:
            from auth.credentials import build_google_service
            from gdrive.folder_store import GoogleDriveFolderStore

            self.folder_store = GoogleDriveFolderStore(build_google_service("drive"))


# Global container instance
_container: Container | None = None


def get_container() -> Container:
    """
    Get the global container instance.

    Creates a new container with default implementations if none exists.

    Returns:
        The global Container instance.
    """
    global _container
    if _container is None:
        _container = Container()
        logger.debug("Initialized default dependency container")
    return _container


def set_container(container: Container) -> None:
    """
    Set the global container instance.

    Use this for testing to inject mock implementations.

    Args:
        container: The container to use as the global instance.
    """
    global _container
    _container = container
    logger.debug("Set custom dependency container")


def reset_container() -> None:
    """
    Reset the global container.

    Use this between tests to ensure a clean state.
    """
    global _container
    _container = None
    logger.debug("Reset dependency container")
