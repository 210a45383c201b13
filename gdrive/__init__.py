"""
Google Drive Integration

This module provides the Drive-backed folder store used to file documents.
"""

from .folder_store import GoogleDriveFolderStore, ShareRecipient

__all__ = [
    "GoogleDriveFolderStore",
    "ShareRecipient",
]
