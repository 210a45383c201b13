"""
Request batching for Google Docs batchUpdate calls.

Splits a filtered request sequence into contiguous, order-preserving batches.
Batches must be applied strictly one after another: each batch's indices
assume every earlier batch has already been applied to the document.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from core.config import DEFAULT_BATCH_SIZE
from core.errors import ConfigurationError
from gdocs.mutations import MutationRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestBatch:
    """One atomic batchUpdate call's worth of requests."""

    requests: tuple[MutationRequest, ...]
    index: int = 0

    def __len__(self) -> int:
        return len(self.requests)

    def to_api(self) -> dict[str, Any]:
        """Render the batchUpdate request body."""
        return {"requests": [request.to_api() for request in self.requests]}


def validate_batch_size(batch_size: int) -> int:
    if not isinstance(batch_size, int) or isinstance(batch_size, bool) or batch_size < 1:
        raise ConfigurationError(f"batch_size must be a positive integer, got {batch_size!r}")
    return batch_size


def chunk_requests(requests: Sequence[MutationRequest], batch_size: int = DEFAULT_BATCH_SIZE) -> list[RequestBatch]:
    """
    Partition requests into batches of at most `batch_size`.

    Concatenating the batches in order gives back `requests` exactly. No batch
    is empty, so an empty request list yields no batches.

    Raises:
        ConfigurationError: If batch_size is not a positive integer.
    """
    validate_batch_size(batch_size)
    batches = [
        RequestBatch(requests=tuple(requests[offset : offset + batch_size]), index=number)
        for number, offset in enumerate(range(0, len(requests), batch_size))
    ]
    logger.debug(f"Split {len(requests)} request(s) into {len(batches)} batch(es) of up to {batch_size}")
    return batches
