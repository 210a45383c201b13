"""
Google Docs Operation Managers

This package provides high-level manager classes for the Markdown-to-Docs
workflow, keeping business logic out of the tool modules.
"""

from .batch_operation_manager import BatchOperationManager, BatchSubmissionReport
from .markdown_document_manager import MarkdownDocumentManager, MarkdownWriteResult
from .validation_manager import ValidationManager

__all__ = [
    "BatchOperationManager",
    "BatchSubmissionReport",
    "MarkdownDocumentManager",
    "MarkdownWriteResult",
    "ValidationManager",
]
