"""
Google Drive Folder Store

Implements the folder/object-store collaborator used by the Markdown-to-Docs
workflow (folder creation, listing, moving, renaming, deleting, permission
checks and sharing) on top of a googleapiclient Drive v3 service object.
All calls support shared drives.
"""

import asyncio
import logging
from typing import Any, Literal

from googleapiclient.errors import HttpError
from pydantic import BaseModel, Field, model_validator

from core.errors import handle_http_error

logger = logging.getLogger(__name__)

FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"
FILE_FIELDS = "id, name, mimeType, parents, webViewLink, modifiedTime"
PERMISSION_FIELDS = "id, type, role, emailAddress, domain, expirationTime"


class ShareRecipient(BaseModel):
    """Model for a share recipient."""

    email: str | None = Field(None, description="Recipient email address. Required for 'user' or 'group' share_type.")
    domain: str | None = Field(None, description="Domain name. Required when share_type is 'domain'.")
    role: Literal["reader", "commenter", "writer"] = Field("reader", description="Permission role.")
    share_type: Literal["user", "group", "domain", "anyone"] = Field("user", description="Type of sharing.")
    send_notification: bool = Field(True, description="Send a notification email to user/group recipients.")

    @model_validator(mode="after")
    def _check_target(self) -> "ShareRecipient":
        if self.share_type in ("user", "group") and not self.email:
            raise ValueError(f"email is required for share_type '{self.share_type}'")
        if self.share_type == "domain" and not self.domain:
            raise ValueError("domain is required for share_type 'domain'")
        return self

    def to_permission_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"type": self.share_type, "role": self.role}
        if self.share_type in ("user", "group"):
            body["emailAddress"] = self.email
        elif self.share_type == "domain":
            body["domain"] = self.domain
        return body


class GoogleDriveFolderStore:
    """Folder store backed by the Google Drive API."""

    def __init__(self, service: Any) -> None:
        self.service = service

    async def _execute(self, request: Any, resource_id: str | None = None) -> Any:
        try:
            return await asyncio.to_thread(request.execute)
        except HttpError as e:
            raise handle_http_error(e, resource_id) from e

    async def create_folder(self, name: str, parent_id: str = "root") -> dict:
        body = {"name": name, "mimeType": FOLDER_MIME_TYPE, "parents": [parent_id]}
        folder = await self._execute(
            self.service.files().create(body=body, fields=FILE_FIELDS, supportsAllDrives=True), parent_id
        )
        logger.info(f"Created folder '{name}' (ID: {folder.get('id')}) in {parent_id}")
        return folder

    async def list_children(self, folder_id: str = "root", page_size: int = 100) -> list[dict]:
        """List non-trashed children of a folder, following pagination."""
        children: list[dict] = []
        page_token: str | None = None
        while True:
            params: dict[str, Any] = {
                "q": f"'{folder_id}' in parents and trashed=false",
                "pageSize": page_size,
                "fields": f"nextPageToken, files({FILE_FIELDS})",
                "supportsAllDrives": True,
                "includeItemsFromAllDrives": True,
            }
            if page_token:
                params["pageToken"] = page_token
            results = await self._execute(self.service.files().list(**params), folder_id)
            children.extend(results.get("files", []))
            page_token = results.get("nextPageToken")
            if not page_token:
                break

        logger.debug(f"Folder {folder_id} has {len(children)} child item(s)")
        return children

    async def move(self, file_id: str, folder_id: str) -> dict:
        """Move a file into `folder_id`, removing it from its current parents."""
        current = await self._execute(
            self.service.files().get(fileId=file_id, fields="parents", supportsAllDrives=True), file_id
        )
        previous_parents = ",".join(current.get("parents", []))
        moved = await self._execute(
            self.service.files().update(
                fileId=file_id,
                addParents=folder_id,
                removeParents=previous_parents,
                fields=FILE_FIELDS,
                supportsAllDrives=True,
            ),
            file_id,
        )
        logger.info(f"Moved {file_id} from [{previous_parents}] to {folder_id}")
        return moved

    async def rename(self, file_id: str, new_name: str) -> dict:
        renamed = await self._execute(
            self.service.files().update(
                fileId=file_id, body={"name": new_name}, fields=FILE_FIELDS, supportsAllDrives=True
            ),
            file_id,
        )
        logger.info(f"Renamed {file_id} to '{new_name}'")
        return renamed

    async def delete(self, file_id: str) -> None:
        await self._execute(self.service.files().delete(fileId=file_id, supportsAllDrives=True), file_id)
        logger.info(f"Deleted {file_id}")

    async def check_permissions(self, file_id: str) -> list[dict]:
        results = await self._execute(
            self.service.permissions().list(
                fileId=file_id, fields=f"permissions({PERMISSION_FIELDS})", supportsAllDrives=True
            ),
            file_id,
        )
        return results.get("permissions", [])

    async def share(self, file_id: str, recipient: ShareRecipient) -> dict:
        create_params: dict[str, Any] = {
            "fileId": file_id,
            "body": recipient.to_permission_body(),
            "supportsAllDrives": True,
            "fields": PERMISSION_FIELDS,
        }
        if recipient.share_type in ("user", "group"):
            create_params["sendNotificationEmail"] = recipient.send_notification

        permission = await self._execute(self.service.permissions().create(**create_params), file_id)
        logger.info(f"Shared {file_id} as {recipient.role} with {recipient.email or recipient.domain or 'anyone'}")
        return permission
