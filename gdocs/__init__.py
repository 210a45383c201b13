"""
Google Docs Markdown Package

This package converts Markdown into Google Docs API batchUpdate requests and
provides the MCP tools that write them into documents.
"""

from gdocs.batching import RequestBatch, chunk_requests
from gdocs.converter import MarkdownToDocsConverter
from gdocs.markdown_parser import parse_markdown
from gdocs.request_builder import ConversionResult, ImageSpec, build_requests, filter_empty_ranges
from gdocs.writing import create_doc_from_markdown, insert_markdown

__all__ = [
    "build_requests",
    "chunk_requests",
    "ConversionResult",
    "create_doc_from_markdown",
    "filter_empty_ranges",
    "ImageSpec",
    "insert_markdown",
    "MarkdownToDocsConverter",
    "parse_markdown",
    "RequestBatch",
]
