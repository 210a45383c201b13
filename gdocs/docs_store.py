"""
Google Docs Document Store

Implements the document-store collaborator (read length, apply one batch,
create a document) on top of a googleapiclient Docs v1 service object.
Blocking client calls run in a worker thread.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from googleapiclient.errors import HttpError

from core.errors import handle_http_error
from gdocs.batching import RequestBatch

logger = logging.getLogger(__name__)

EMPTY_BODY_END_INDEX = 2


@dataclass(frozen=True)
class DocumentInfo:
    """
    Current shape of a document body.

    Attributes:
        document_id: The Google Docs document ID.
        title: Document title.
        end_index: Body end index as reported by the API (exclusive, includes the final newline).
    """

    document_id: str
    title: str
    end_index: int

    @property
    def insertion_index(self) -> int:
        """Index where appended content goes: just before the body's final newline."""
        return max(1, self.end_index - 1)

    @property
    def has_content(self) -> bool:
        """False for an empty body, which holds only its final newline (end_index 2)."""
        return self.end_index > EMPTY_BODY_END_INDEX


def body_end_index(document: dict[str, Any]) -> int:
    content = document.get("body", {}).get("content", [])
    if not content:
        return 1
    return content[-1].get("endIndex", 1)


class GoogleDocsStore:
    """Document store backed by the Google Docs API."""

    def __init__(self, service: Any) -> None:
        self.service = service

    async def get(self, document_id: str) -> DocumentInfo:
        try:
            document = await asyncio.to_thread(
                self.service.documents().get(documentId=document_id, fields="title,body(content(endIndex))").execute
            )
        except HttpError as e:
            raise handle_http_error(e, document_id) from e

        info = DocumentInfo(
            document_id=document_id,
            title=document.get("title", ""),
            end_index=body_end_index(document),
        )
        logger.debug(f"Document {document_id}: end_index={info.end_index}")
        return info

    async def apply_batch(self, document_id: str, batch: RequestBatch) -> dict:
        try:
            result = await asyncio.to_thread(
                self.service.documents().batchUpdate(documentId=document_id, body=batch.to_api()).execute
            )
        except HttpError as e:
            raise handle_http_error(e, document_id) from e

        logger.debug(f"Applied batch {batch.index} ({len(batch)} requests) to {document_id}")
        return result

    async def create_document(self, title: str) -> str:
        try:
            document = await asyncio.to_thread(self.service.documents().create(body={"title": title}).execute)
        except HttpError as e:
            raise handle_http_error(e) from e

        document_id = document.get("documentId")
        logger.info(f"Created Google Doc '{title}' (ID: {document_id})")
        return document_id
