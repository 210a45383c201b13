"""
Markdown Document Manager

Drives the conversion workflow against the external collaborators: create or
inspect the target document, convert markdown starting at the document's
insertion index, submit the batches in order and, optionally, file the new
document into a Drive folder.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from core.container import DocumentStoreProtocol, FolderStoreProtocol
from gdocs.converter import MarkdownToDocsConverter
from gdocs.managers.batch_operation_manager import BatchOperationManager, BatchSubmissionReport
from gdocs.request_builder import ImageSpec

logger = logging.getLogger(__name__)


@dataclass
class MarkdownWriteResult:
    """What a markdown write did to a document."""

    document_id: str
    start_index: int
    end_index: int
    submission: BatchSubmissionReport
    folder_id: str | None = None

    @property
    def characters_inserted(self) -> int:
        return self.end_index - self.start_index


class MarkdownDocumentManager:
    """High-level manager for writing markdown into Google Docs."""

    def __init__(
        self,
        document_store: DocumentStoreProtocol,
        folder_store: FolderStoreProtocol | None = None,
        converter: MarkdownToDocsConverter | None = None,
    ):
        self.document_store = document_store
        self.folder_store = folder_store
        self.converter = converter or MarkdownToDocsConverter()
        self.batch_manager = BatchOperationManager(document_store)

    async def _write(
        self,
        document_id: str,
        markdown: str,
        images: Sequence[ImageSpec],
        batch_size: int | None,
    ) -> MarkdownWriteResult:
        info = await self.document_store.get(document_id)
        result, batches = self.converter.convert_to_batches(
            markdown,
            start_index=info.insertion_index,
            images=images,
            batch_size=batch_size,
            leading_newline=info.has_content,
        )
        submission = await self.batch_manager.submit(document_id, batches)
        return MarkdownWriteResult(
            document_id=document_id,
            start_index=result.start_index,
            end_index=result.end_index,
            submission=submission,
        )

    async def create_from_markdown(
        self,
        title: str,
        markdown: str,
        images: Sequence[ImageSpec] = (),
        folder_id: str | None = None,
        batch_size: int | None = None,
    ) -> MarkdownWriteResult:
        """
        Create a document and fill it with converted markdown.

        Args:
            title: Title of the new document
            markdown: Markdown body
            images: Images placed before the body
            folder_id: Drive folder to move the new document into
            batch_size: Requests per batch (defaults to settings)

        Returns:
            MarkdownWriteResult for the new document

        Raises:
            BatchSubmissionError: If a batch is rejected; the document exists with the batches applied so far.
        """
        document_id = await self.document_store.create_document(title)
        logger.info(f"[create_from_markdown] Created '{title}' as {document_id}")

        write_result = await self._write(document_id, markdown, images, batch_size)

        if folder_id:
            if self.folder_store is None:
                logger.warning(f"No folder store configured; leaving {document_id} in the default location")
            else:
                await self.folder_store.move(document_id, folder_id)
                write_result.folder_id = folder_id

        return write_result

    async def append_markdown(
        self,
        document_id: str,
        markdown: str,
        images: Sequence[ImageSpec] = (),
        batch_size: int | None = None,
    ) -> MarkdownWriteResult:
        """Append converted markdown at the end of an existing document."""
        logger.info(f"[append_markdown] Appending {len(markdown)} chars to {document_id}")
        return await self._write(document_id, markdown, images, batch_size)
