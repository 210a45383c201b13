"""
Markdown Blocks to Google Docs Requests

This module walks the block list produced by `gdocs.markdown_parser` and emits
the `MutationRequest` sequence that writes those blocks into a document,
starting at a given insertion index.

The walk carries a single cursor: the next free index in the destination
document. Every insertion is emitted at the cursor's current value and the
cursor advances by exactly the inserted length (UTF-16 code units, as the Docs
API counts them) right after, so later requests assume all earlier insertions
were already applied. Style ranges stop short of the trailing newline of their
block so a style never bleeds into the next paragraph.

Empty or inverted style ranges are removed afterwards by
`filter_empty_ranges`, a separate pass that can be tested on its own.

Example:
    >>> result = build_requests(parse_markdown("# Title"))
    >>> len(result.requests)  # insertText + updateParagraphStyle
    2
    >>> result.end_index
    7
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from core.config import LIST_STYLE_NATIVE, ConverterSettings, get_settings
from core.errors import ConfigurationError
from gdocs.markdown_parser import (
    Block,
    Blockquote,
    BulletItem,
    Checkbox,
    CodeBlock,
    Heading,
    Image,
    NumberedItem,
    PlainParagraph,
    Rule,
    Span,
    TableRow,
    spans_text,
)
from gdocs.mutations import (
    BULLET_PRESET_CHECKBOX,
    BULLET_PRESET_ORDERED,
    BULLET_PRESET_UNORDERED,
    CreateParagraphBullets,
    InsertInlineImage,
    InsertText,
    MutationRequest,
    SetParagraphStyle,
    SetTextStyle,
    has_empty_range,
    utf16_length,
)

logger = logging.getLogger(__name__)

# Named style mappings for headings (level 1 -> HEADING_1, etc.)
HEADING_STYLE_MAP: dict[int, str] = {
    1: "HEADING_1",
    2: "HEADING_2",
    3: "HEADING_3",
    4: "HEADING_4",
    5: "HEADING_5",
    6: "HEADING_6",
}

# Google Docs has no native horizontal rule; a line of underscores stands in
RULE_TEXT = "_" * 40

CHECKBOX_PREFIX = "Status: "
TABLE_CELL_SEPARATOR = "\t"

BOLD_STYLE = {"bold": True}
ITALIC_STYLE = {"italic": True}

DOCUMENT_START_INDEX = 1

_BLOCK_TYPES = (Heading, BulletItem, NumberedItem, Checkbox, Blockquote, CodeBlock, TableRow, Rule, Image, PlainParagraph)


@dataclass(frozen=True)
class ImageSpec:
    """An image to place before the body content, sized in points."""

    uri: str
    width: int | None = None
    height: int | None = None


@dataclass(frozen=True)
class ConversionResult:
    """
    Filtered requests for one conversion plus the cursor they leave behind.

    Attributes:
        requests: Requests in emission order, empty ranges removed.
        start_index: Index the first insertion targets.
        end_index: Cursor after the last insertion, i.e. where the next insertion would go.
    """

    requests: tuple[MutationRequest, ...]
    start_index: int
    end_index: int

    def to_api(self) -> list[dict]:
        return [request.to_api() for request in self.requests]


def code_text_style(settings: ConverterSettings) -> dict:
    return {
        "weightedFontFamily": {"fontFamily": settings.code_font_family, "weight": 400},
        "fontSize": {"magnitude": settings.code_font_size_pt, "unit": "PT"},
    }


def filter_empty_ranges(requests: Iterable[MutationRequest]) -> list[MutationRequest]:
    """
    Drop style and bullet requests whose range is empty or inverted.

    The Docs API rejects a whole batch over one such request. Insertions are
    always kept. Applying the filter twice gives the same result as once.
    """
    kept: list[MutationRequest] = []
    dropped = 0
    for request in requests:
        if has_empty_range(request):
            dropped += 1
            logger.debug(f"Dropped empty-range request: {request}")
            continue
        kept.append(request)
    if dropped:
        logger.debug(f"Filtered {dropped} empty-range request(s)")
    return kept


def validate_inputs(blocks: Sequence[Block], images: Sequence[ImageSpec], start_index: int) -> None:
    """Fail fast on inputs the builder cannot turn into valid requests."""
    if not isinstance(start_index, int) or isinstance(start_index, bool) or start_index < DOCUMENT_START_INDEX:
        raise ConfigurationError(f"start_index must be an integer >= {DOCUMENT_START_INDEX}, got {start_index!r}")

    for image in images:
        if not image.uri:
            raise ConfigurationError("Image uri cannot be empty")
        for name, value in (("width", image.width), ("height", image.height)):
            if value is not None and value < 0:
                raise ConfigurationError(f"Image {name} cannot be negative, got {value}")

    for position, block in enumerate(blocks):
        if isinstance(block, Heading) and block.level not in HEADING_STYLE_MAP:
            raise ConfigurationError(
                f"Unsupported heading level {block.level} at block {position}; levels 1-6 map to HEADING_1-HEADING_6"
            )
        if not isinstance(block, _BLOCK_TYPES):
            raise ConfigurationError(f"Unsupported block type at position {position}: {type(block).__name__}")


class _RequestEmitter:
    """
    Accumulator for a single build call: the cursor and the requests emitted so far.

    One instance lives inside one `emit_requests` call and is never shared.
    """

    def __init__(self, start_index: int, settings: ConverterSettings) -> None:
        self.cursor = start_index
        self.requests: list[MutationRequest] = []
        self.settings = settings
        self.native_lists = settings.list_style == LIST_STYLE_NATIVE
        # Open run of consecutive list items: (preset, range start, range end)
        self._list_run: tuple[str, int, int] | None = None

    def insert(self, text: str) -> int:
        """Emit an insertText at the cursor and advance; returns the insertion index."""
        index = self.cursor
        self.requests.append(InsertText(index, text))
        self.cursor += utf16_length(text)
        logger.debug(f"insertText {text!r} @ {index}, cursor={self.cursor}")
        return index

    def insert_line(self, content: str) -> tuple[int, int]:
        """Insert content plus a newline; returns the content range excluding the newline."""
        start = self.insert(content + "\n")
        return start, start + utf16_length(content)

    def insert_spans(self, spans: Sequence[Span]) -> tuple[int, int]:
        """
        Insert a paragraph made of spans; returns the content range excluding the newline.

        Without bold spans this is a single insertText. Otherwise each span is
        inserted separately and each bold span is styled right after its insertion,
        with the style range trimmed of surrounding whitespace.
        """
        if not any(span.bold for span in spans):
            return self.insert_line(spans_text(tuple(spans)))

        start = self.cursor
        for span in spans:
            span_start = self.insert(span.content)
            if span.bold:
                leading = utf16_length(span.content) - utf16_length(span.content.lstrip())
                style_end = span_start + utf16_length(span.content.rstrip())
                self.requests.append(SetTextStyle(min(span_start + leading, style_end), style_end, dict(BOLD_STYLE)))
        end = self.cursor
        self.insert("\n")
        return start, end

    def insert_image(self, uri: str, width: int | None, height: int | None) -> None:
        index = self.cursor
        self.requests.append(InsertInlineImage(index, uri, width, height))
        self.cursor += 1
        logger.debug(f"insertInlineImage {uri!r} @ {index}, cursor={self.cursor}")
        self.insert("\n")

    def extend_list_run(self, preset: str, start: int, end: int) -> None:
        if self._list_run is not None and self._list_run[0] == preset:
            self._list_run = (preset, self._list_run[1], end)
            return
        self.close_list_run()
        self._list_run = (preset, start, end)

    def close_list_run(self) -> None:
        if self._list_run is None:
            return
        preset, start, end = self._list_run
        self.requests.append(CreateParagraphBullets(start, end, preset))
        logger.debug(f"createParagraphBullets {preset} [{start}, {end})")
        self._list_run = None

    def emit(self, block: Block) -> None:
        list_preset = _list_preset(block) if self.native_lists else None
        if list_preset is None:
            self.close_list_run()

        if isinstance(block, Heading):
            start, end = self.insert_spans(block.spans)
            self.requests.append(SetParagraphStyle(start, end, HEADING_STYLE_MAP[block.level]))
        elif isinstance(block, Checkbox):
            start, end = self.insert_spans(_prepend_plain(CHECKBOX_PREFIX, block.spans))
        elif isinstance(block, (BulletItem, NumberedItem)):
            start, end = self.insert_spans(block.spans)
        elif isinstance(block, Blockquote):
            start, end = self.insert_spans(block.spans)
            self.requests.append(SetTextStyle(start, end, dict(ITALIC_STYLE)))
        elif isinstance(block, CodeBlock):
            start, end = self.insert_line(block.text)
            self.requests.append(SetTextStyle(start, end, code_text_style(self.settings)))
        elif isinstance(block, TableRow):
            self.insert_line(TABLE_CELL_SEPARATOR.join(block.cells))
        elif isinstance(block, Rule):
            self.insert_line(RULE_TEXT)
        elif isinstance(block, Image):
            self.insert_image(block.uri, self.settings.image_width_pt, self.settings.image_height_pt)
        elif isinstance(block, PlainParagraph):
            self.insert_spans(block.spans)

        if list_preset is not None:
            self.extend_list_run(list_preset, start, end)


def _list_preset(block: Block) -> str | None:
    if isinstance(block, Checkbox):
        return BULLET_PRESET_CHECKBOX
    if isinstance(block, BulletItem):
        return BULLET_PRESET_UNORDERED
    if isinstance(block, NumberedItem):
        return BULLET_PRESET_ORDERED
    return None


def _prepend_plain(prefix: str, spans: Sequence[Span]) -> tuple[Span, ...]:
    if spans and not spans[0].bold:
        return (Span(prefix + spans[0].content, False), *spans[1:])
    return (Span(prefix, False), *spans)


def emit_requests(
    blocks: Sequence[Block],
    images: Sequence[ImageSpec] = (),
    start_index: int = DOCUMENT_START_INDEX,
    settings: ConverterSettings | None = None,
    leading_newline: bool = False,
) -> tuple[list[MutationRequest], int]:
    """
    Emit requests for the images and blocks without filtering.

    With `leading_newline`, a bare "\n" is inserted first so that content
    appended before an existing paragraph's newline starts a paragraph of its own.
    Nothing is inserted when there is nothing to write.

    Returns:
        (requests in emission order, final cursor)

    Raises:
        ConfigurationError: Before anything is emitted, for an unsupported
            heading level, invalid image, or start index below 1.
    """
    validate_inputs(blocks, images, start_index)
    emitter = _RequestEmitter(start_index, settings or get_settings())

    if leading_newline and (images or blocks):
        emitter.insert("\n")
    for image in images:
        emitter.insert_image(image.uri, image.width, image.height)
    for block in blocks:
        emitter.emit(block)
    emitter.close_list_run()

    return emitter.requests, emitter.cursor


def build_requests(
    blocks: Sequence[Block],
    images: Sequence[ImageSpec] = (),
    start_index: int = DOCUMENT_START_INDEX,
    settings: ConverterSettings | None = None,
    leading_newline: bool = False,
) -> ConversionResult:
    """
    Build the filtered request sequence for a block list.

    Args:
        blocks: Parsed blocks in source order.
        images: Images inserted before the body, each as its own paragraph.
        start_index: Insertion index of the first request (1 for an empty document).
        settings: Converter settings; defaults to the environment settings.
        leading_newline: Close the paragraph at start_index before writing any block.

    Returns:
        A ConversionResult. The same input always yields the same result.
    """
    requests, end_index = emit_requests(blocks, images, start_index, settings, leading_newline)
    filtered = filter_empty_ranges(requests)
    logger.debug(
        f"Built {len(filtered)} request(s) from {len(blocks)} block(s) and {len(images)} image(s), "
        f"index {start_index} -> {end_index}"
    )
    return ConversionResult(requests=tuple(filtered), start_index=start_index, end_index=end_index)
