"""
Google Docs Markdown Writing Tools

This module provides MCP tools for writing Markdown into Google Docs.
"""

import logging
from typing import Any

from core.container import get_container
from core.errors import BatchSubmissionError
from core.server import server
from core.utils import document_link, handle_http_errors
from gdocs.managers import MarkdownDocumentManager, ValidationManager

logger = logging.getLogger(__name__)


def _manager() -> MarkdownDocumentManager:
    container = get_container()
    return MarkdownDocumentManager(container.document_store, container.folder_store)


def _partial_failure_message(error: BatchSubmissionError) -> str:
    return f"Error: {error} Link: {document_link(error.document_id)}"


@server.tool()
@handle_http_errors("create_doc_from_markdown", service_type="docs")
async def create_doc_from_markdown(
    title: str,
    markdown: str,
    images: list[dict[str, Any]] | None = None,
    folder_id: str | None = None,
    batch_size: int | None = None,
) -> str:
    """
    Creates a new Google Doc from Markdown.

    Supports headings (#-######), bullet/numbered/checkbox items, > quotes,
    fenced code blocks, | table rows |, horizontal rules, standalone
    ![alt](url) images and **bold** text.

    Args:
        title: Title of the new document
        markdown: Markdown content
        images: Optional images placed before the content: [{"uri": url, "width": pt, "height": pt}]
        folder_id: Optional Drive folder to move the new document into
        batch_size: Requests per batchUpdate call (defaults to MARKDOWN_DOCS_BATCH_SIZE)

    Returns:
        str: Confirmation message with document ID and link.
    """
    logger.info(f"[create_doc_from_markdown] Invoked. Title='{title}', markdown={len(markdown)} chars")

    validator = ValidationManager()

    for is_valid, error_msg in (
        validator.validate_title(title),
        validator.validate_markdown(markdown),
        validator.validate_batch_size(batch_size),
        validator.validate_document_id(folder_id, "folder_id") if folder_id else (True, ""),
    ):
        if not is_valid:
            return f"Error: {error_msg}"

    image_specs, error_msg = validator.parse_image_specs(images)
    if error_msg:
        return f"Error: {error_msg}"

    try:
        result = await _manager().create_from_markdown(
            title, markdown, images=image_specs, folder_id=folder_id, batch_size=batch_size
        )
    except BatchSubmissionError as e:
        return _partial_failure_message(e)

    link = document_link(result.document_id)
    folder_info = f" in folder {result.folder_id}" if result.folder_id else ""
    logger.info(f"Created Google Doc '{title}' (ID: {result.document_id}){folder_info}. Link: {link}")
    return (
        f"Created Google Doc '{title}' (ID: {result.document_id}){folder_info} with "
        f"{result.submission.requests_applied} request(s) in {result.submission.batches_applied} batch(es). "
        f"Link: {link}"
    )


@server.tool()
@handle_http_errors("insert_markdown", service_type="docs")
async def insert_markdown(
    document_id: str,
    markdown: str,
    images: list[dict[str, Any]] | None = None,
    batch_size: int | None = None,
) -> str:
    """
    Appends Markdown content to the end of an existing Google Doc.

    Args:
        document_id: ID of the document to update
        markdown: Markdown content
        images: Optional images placed before the content: [{"uri": url, "width": pt, "height": pt}]
        batch_size: Requests per batchUpdate call (defaults to MARKDOWN_DOCS_BATCH_SIZE)

    Returns:
        str: Confirmation message with inserted range and link.
    """
    logger.info(f"[insert_markdown] Doc={document_id}, markdown={len(markdown)} chars")

    validator = ValidationManager()

    for is_valid, error_msg in (
        validator.validate_document_id(document_id),
        validator.validate_markdown(markdown),
        validator.validate_batch_size(batch_size),
    ):
        if not is_valid:
            return f"Error: {error_msg}"

    image_specs, error_msg = validator.parse_image_specs(images)
    if error_msg:
        return f"Error: {error_msg}"

    try:
        result = await _manager().append_markdown(document_id, markdown, images=image_specs, batch_size=batch_size)
    except BatchSubmissionError as e:
        return _partial_failure_message(e)

    return (
        f"Inserted markdown at index {result.start_index}-{result.end_index} in document {document_id} "
        f"({result.submission.requests_applied} request(s), {result.submission.batches_applied} batch(es)). "
        f"Link: {document_link(document_id)}"
    )
