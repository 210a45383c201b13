"""
Validation Manager

Validates tool inputs for the Markdown-to-Docs tools before any API call is
made. Each check returns an (is_valid, error_message) tuple so tools can
report problems as plain messages.
"""

import logging
from typing import Any

from core.errors import ValidationError
from core.utils import validate_document_id, validate_positive_int
from gdocs.request_builder import ImageSpec

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 255
MAX_MARKDOWN_LENGTH = 1_000_000
MAX_BATCH_SIZE = 500


class ValidationManager:
    """Centralized validation for document tool parameters."""

    def validate_document_id(self, document_id: str, param_name: str = "document_id") -> tuple[bool, str]:
        try:
            validate_document_id(document_id, param_name)
        except ValidationError as e:
            return False, str(e)
        return True, ""

    def validate_title(self, title: str) -> tuple[bool, str]:
        if not title or not title.strip():
            return False, "title cannot be empty"
        if len(title) > MAX_TITLE_LENGTH:
            return False, f"title cannot exceed {MAX_TITLE_LENGTH} characters"
        return True, ""

    def validate_markdown(self, markdown: str) -> tuple[bool, str]:
        if not isinstance(markdown, str):
            return False, "markdown must be a string"
        if len(markdown) > MAX_MARKDOWN_LENGTH:
            return False, f"markdown cannot exceed {MAX_MARKDOWN_LENGTH} characters"
        return True, ""

    def validate_batch_size(self, batch_size: int | None) -> tuple[bool, str]:
        if batch_size is None:
            return True, ""
        try:
            validate_positive_int(batch_size, "batch_size", max_value=MAX_BATCH_SIZE)
        except ValidationError as e:
            return False, str(e)
        return True, ""

    def parse_image_specs(self, images: list[dict[str, Any]] | None) -> tuple[list[ImageSpec], str]:
        """
        Convert tool-level image dicts ({"uri", "width", "height"}) into ImageSpecs.

        Returns:
            (specs, error_message); error_message is empty when all images are valid.
        """
        specs: list[ImageSpec] = []
        for position, image in enumerate(images or []):
            uri = (image.get("uri") or "").strip()
            if not uri.startswith(("http://", "https://")):
                return [], f"images[{position}].uri must be an http(s) URL"
            size = {}
            for key in ("width", "height"):
                value = image.get(key)
                if value is None:
                    size[key] = None
                    continue
                if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                    return [], f"images[{position}].{key} must be a non-negative integer (points)"
                size[key] = value or None
            specs.append(ImageSpec(uri=uri, width=size["width"], height=size["height"]))
        logger.debug(f"Validated {len(specs)} image spec(s)")
        return specs, ""
