"""
Markdown to Google Docs Converter

This module provides the `MarkdownToDocsConverter` class that runs the whole
conversion pipeline: markdown text -> blocks -> filtered requests -> batches.

Example:
    >>> converter = MarkdownToDocsConverter()
    >>> result = converter.convert("# Hello World\\n\\nThis is **bold** text.")
    >>> batches = converter.to_batches(result)
    >>> # each batch is one documents().batchUpdate body, applied in order

See Also:
    - `gdocs/managers/batch_operation_manager.py` for sequential submission
    - `gdocs/writing.py` for tool integration (`create_doc_from_markdown`, `insert_markdown`)
"""

import logging
from collections.abc import Sequence

from core.config import ConverterSettings, get_settings
from gdocs.batching import RequestBatch, chunk_requests, validate_batch_size
from gdocs.markdown_parser import parse_markdown
from gdocs.request_builder import DOCUMENT_START_INDEX, ConversionResult, ImageSpec, build_requests

logger = logging.getLogger(__name__)


class MarkdownToDocsConverter:
    """
    Converts Markdown text into Google Docs API batchUpdate requests.

    The converter holds only its settings. All per-conversion state (cursor,
    emitted requests) lives inside each `convert` call, so one instance can
    serve concurrent conversions.

    Attributes:
        settings: Converter settings (batch size, code font, list style).
    """

    def __init__(self, settings: ConverterSettings | None = None) -> None:
        self.settings = settings or get_settings()

    def convert(
        self,
        markdown_text: str,
        start_index: int = DOCUMENT_START_INDEX,
        images: Sequence[ImageSpec] = (),
        leading_newline: bool = False,
    ) -> ConversionResult:
        """
        Convert Markdown text to filtered Google Docs requests.

        Args:
            markdown_text: The Markdown string to convert.
            start_index: The starting index in the document (1-based).
                         Defaults to 1 (start of an empty document body).
            images: Images inserted before the body content.
            leading_newline: Start with a paragraph break, for appending after existing text.

        Returns:
            ConversionResult with the requests and the final cursor.

        Raises:
            ConfigurationError: For invalid images or start index.
        """
        blocks = parse_markdown(markdown_text)
        result = build_requests(
            blocks, images=images, start_index=start_index, settings=self.settings, leading_newline=leading_newline
        )
        logger.info(
            f"Converted {len(markdown_text)} chars of markdown into {len(result.requests)} request(s), "
            f"document index {result.start_index} -> {result.end_index}"
        )
        return result

    def to_batches(self, result: ConversionResult, batch_size: int | None = None) -> list[RequestBatch]:
        """Split a conversion result into batches (default size from settings)."""
        return chunk_requests(result.requests, batch_size if batch_size is not None else self.settings.batch_size)

    def convert_to_batches(
        self,
        markdown_text: str,
        start_index: int = DOCUMENT_START_INDEX,
        images: Sequence[ImageSpec] = (),
        batch_size: int | None = None,
        leading_newline: bool = False,
    ) -> tuple[ConversionResult, list[RequestBatch]]:
        if batch_size is not None:
            validate_batch_size(batch_size)
        result = self.convert(markdown_text, start_index=start_index, images=images, leading_newline=leading_newline)
        return result, self.to_batches(result, batch_size)
