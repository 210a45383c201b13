"""
Markdown Block Parser

This module turns plain markdown text into an ordered list of semantic blocks
(headings, list items, quotes, code, table rows, rules, images, paragraphs)
for `gdocs.request_builder` to turn into Google Docs `batchUpdate` requests.

Parsing is line-oriented: every non-blank line outside a fenced code region
becomes exactly one block, in source order. A line starting with three
backticks opens a fence wherever it appears, including inside raw HTML, and the
next such line closes it. Standalone image lines are recognised with
markdown-it-py's inline parser. Parsing never raises: any line that matches no
rule degrades to a `PlainParagraph`.

Example:
    >>> blocks = parse_markdown("# Title\\n\\nHello **world**\\n")
    >>> blocks[0]
    Heading(level=1, spans=(Span(content='Title', bold=False),))
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Union

from markdown_it import MarkdownIt

logger = logging.getLogger(__name__)

BOLD_DELIMITER = "**"

HEADING_PATTERN = re.compile(r"^(#{1,6}) (.*)$")
CHECKBOX_PATTERN = re.compile(r"^- \[([ xX])\]\s*(.*)$")
BULLET_PATTERN = re.compile(r"^[-*] (.*)$")
NUMBERED_PATTERN = re.compile(r"^\d+\. (.*)$")
BLOCKQUOTE_PATTERN = re.compile(r"^>(?:\s+(.*))?$")
RULE_PATTERN = re.compile(r"^([-*_])\1{2,}$")
TABLE_DELIMITER_CELL_PATTERN = re.compile(r"^:?-+:?$")
FENCE_MARKER = "```"
IMAGE_PREFIX = "!["

_inline_parser = MarkdownIt("commonmark")


@dataclass(frozen=True)
class Span:
    """A run of text with uniform inline styling."""

    content: str
    bold: bool = False


@dataclass(frozen=True)
class Heading:
    level: int
    spans: tuple[Span, ...] = ()


@dataclass(frozen=True)
class BulletItem:
    spans: tuple[Span, ...] = ()


@dataclass(frozen=True)
class NumberedItem:
    spans: tuple[Span, ...] = ()


@dataclass(frozen=True)
class Checkbox:
    checked: bool
    spans: tuple[Span, ...] = ()


@dataclass(frozen=True)
class Blockquote:
    spans: tuple[Span, ...] = ()


@dataclass(frozen=True)
class CodeBlock:
    text: str = ""


@dataclass(frozen=True)
class TableRow:
    cells: tuple[str, ...] = ()


@dataclass(frozen=True)
class Rule:
    pass


@dataclass(frozen=True)
class Image:
    """A standalone `![alt](uri)` line."""

    uri: str
    alt: str = ""


@dataclass(frozen=True)
class PlainParagraph:
    spans: tuple[Span, ...] = ()


Block = Union[
    Heading,
    BulletItem,
    NumberedItem,
    Checkbox,
    Blockquote,
    CodeBlock,
    TableRow,
    Rule,
    Image,
    PlainParagraph,
]


def spans_text(spans: tuple[Span, ...]) -> str:
    """Concatenate the visible text of a span sequence."""
    return "".join(span.content for span in spans)


def _append_span(spans: list[Span], content: str, bold: bool) -> None:
    if not content:
        return
    if not bold and spans and not spans[-1].bold:
        spans[-1] = Span(spans[-1].content + content, False)
        return
    spans.append(Span(content, bold))


def parse_inline(text: str) -> tuple[Span, ...]:
    """
    Split text into plain and bold spans on `**` delimiter pairs.

    Delimiters pair left to right and are stripped. An opener without a
    matching closer stays literal. Empty spans are dropped and adjacent
    plain spans merged.
    """
    spans: list[Span] = []
    pos = 0
    while True:
        open_at = text.find(BOLD_DELIMITER, pos)
        if open_at == -1:
            break
        close_at = text.find(BOLD_DELIMITER, open_at + len(BOLD_DELIMITER))
        if close_at == -1:
            break
        _append_span(spans, text[pos:open_at], False)
        _append_span(spans, text[open_at + len(BOLD_DELIMITER) : close_at], True)
        pos = close_at + len(BOLD_DELIMITER)
    _append_span(spans, text[pos:], False)
    return tuple(spans)


def _split_table_cells(line: str) -> tuple[str, ...]:
    cells = [cell.strip() for cell in line.split("|")]
    if cells and cells[0] == "":
        cells = cells[1:]
    if cells and cells[-1] == "":
        cells = cells[:-1]
    # Cells carry no styling; bold markers are dropped, not rendered.
    return tuple(spans_text(parse_inline(cell)) for cell in cells)


def _is_table_delimiter(cells: tuple[str, ...]) -> bool:
    return bool(cells) and all(TABLE_DELIMITER_CELL_PATTERN.match(cell) for cell in cells)


def _find_code_fences(lines: list[str]) -> dict[int, tuple[int, str]]:
    """
    Locate backtick-fenced code regions.

    Lines between an opening and closing fence are kept verbatim. An unclosed
    fence runs to the end of the input.

    Returns:
        Mapping of opening line number -> (end line number exclusive, code text).
    """
    fences: dict[int, tuple[int, str]] = {}
    markers = [line_no for line_no, line in enumerate(lines) if line.strip().startswith(FENCE_MARKER)]
    position = 0
    while position < len(markers):
        start = markers[position]
        if position + 1 < len(markers):
            body = lines[start + 1 : markers[position + 1]]
            end = markers[position + 1] + 1
        else:
            body = lines[start + 1 :]
            # The newline ending the input is not part of the code
            if body and body[-1] == "":
                body = body[:-1]
            end = len(lines)
        content = "\n".join(body)
        fences[start] = (end, content)
        logger.debug(f"Code fence: lines [{start}, {end}), {len(content)} chars")
        position += 2
    return fences


def _parse_image(line: str) -> Image | None:
    """Return an Image when the whole line is a single `![alt](uri)`."""
    if not line.startswith(IMAGE_PREFIX):
        return None
    tokens = _inline_parser.parseInline(line)
    children = tokens[0].children if tokens else None
    if not children or len(children) != 1 or children[0].type != "image":
        return None
    uri = children[0].attrGet("src")
    if not uri:
        return None
    return Image(uri=str(uri), alt=children[0].content)


def parse_line(line: str) -> Block | None:
    """
    Classify one line outside a code fence.

    Returns:
        The block for the line, or None for blank lines and table delimiter rows.
    """
    stripped = line.strip()
    if not stripped:
        return None

    match = HEADING_PATTERN.match(stripped)
    if match:
        return Heading(level=len(match.group(1)), spans=parse_inline(match.group(2).strip()))

    match = CHECKBOX_PATTERN.match(stripped)
    if match:
        return Checkbox(checked=match.group(1).lower() == "x", spans=parse_inline(match.group(2)))

    match = BULLET_PATTERN.match(stripped)
    if match:
        return BulletItem(spans=parse_inline(match.group(1)))

    match = NUMBERED_PATTERN.match(stripped)
    if match:
        return NumberedItem(spans=parse_inline(match.group(1)))

    match = BLOCKQUOTE_PATTERN.match(stripped)
    if match:
        return Blockquote(spans=parse_inline(match.group(1) or ""))

    if RULE_PATTERN.match(stripped):
        return Rule()

    if "|" in stripped:
        cells = _split_table_cells(stripped)
        if _is_table_delimiter(cells):
            return None
        return TableRow(cells=cells)

    image = _parse_image(stripped)
    if image is not None:
        return image

    return PlainParagraph(spans=parse_inline(stripped))


def parse_markdown(markdown_text: str) -> list[Block]:
    """
    Parse markdown text into an ordered list of blocks.

    Args:
        markdown_text: Raw markdown source.

    Returns:
        Blocks in source order. Blank lines produce no block.
    """
    text = markdown_text.replace("\r\n", "\n").replace("\r", "\n")
    lines = text.split("\n")
    fences = _find_code_fences(lines)

    blocks: list[Block] = []
    line_no = 0
    while line_no < len(lines):
        if line_no in fences:
            end, content = fences[line_no]
            blocks.append(CodeBlock(text=content))
            line_no = end
            continue

        block = parse_line(lines[line_no])
        if block is not None:
            blocks.append(block)
        line_no += 1

    logger.debug(f"Parsed {len(lines)} line(s) into {len(blocks)} block(s)")
    return blocks
