"""
Batch Operation Manager

Submits request batches to a document store strictly in order, one call per
batch, and stops at the first failure.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from core.container import DocumentStoreProtocol
from core.errors import BatchSubmissionError
from gdocs.batching import RequestBatch

logger = logging.getLogger(__name__)


@dataclass
class BatchSubmissionReport:
    """Outcome of a fully applied batch sequence."""

    document_id: str
    batches_applied: int = 0
    requests_applied: int = 0
    replies: list[dict] = field(default_factory=list)


class BatchOperationManager:
    """
    High-level manager for sequential batchUpdate submission.

    Batch i+1 is sent only after batch i has returned, since its indices
    assume batch i is already in the document. Nothing is retried here and
    nothing is rolled back: on failure, earlier batches stay applied and a
    BatchSubmissionError tells the caller how far the document got.
    """

    def __init__(self, store: DocumentStoreProtocol):
        """
        Initialize the batch operation manager.

        Args:
            store: Document store the batches are applied to
        """
        self.store = store

    async def submit(self, document_id: str, batches: Sequence[RequestBatch]) -> BatchSubmissionReport:
        """
        Apply batches to a document in order.

        Args:
            document_id: ID of the document to update
            batches: Batches in the order they must be applied

        Returns:
            BatchSubmissionReport with counts and the API replies

        Raises:
            BatchSubmissionError: On the first rejected batch; later batches are not sent.
        """
        report = BatchSubmissionReport(document_id=document_id)
        total = len(batches)
        logger.info(f"Submitting {total} batch(es) to document {document_id}")

        for position, batch in enumerate(batches):
            try:
                result = await self.store.apply_batch(document_id, batch)
            except Exception as e:
                logger.error(
                    f"Batch {position + 1}/{total} failed for document {document_id} "
                    f"after {report.batches_applied} applied: {e}",
                    exc_info=True,
                )
                raise BatchSubmissionError(document_id, position, total, e) from e

            report.batches_applied += 1
            report.requests_applied += len(batch)
            report.replies.extend((result or {}).get("replies", []))
            logger.debug(f"Batch {position + 1}/{total} applied ({len(batch)} requests)")

        logger.info(
            f"Applied {report.batches_applied} batch(es), {report.requests_applied} request(s) to document {document_id}"
        )
        return report
