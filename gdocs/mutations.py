"""
Google Docs Mutation Requests

Immutable value records for the document edits the request builder emits.
Each record renders itself to the Google Docs API `batchUpdate` request shape
via `to_api()`; nothing else in the pipeline builds raw request dicts.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, ClassVar, Union

# Bullet list presets for the Google Docs API
BULLET_PRESET_UNORDERED = "BULLET_DISC_CIRCLE_SQUARE"
BULLET_PRESET_ORDERED = "NUMBERED_DECIMAL_ALPHA_ROMAN"
BULLET_PRESET_CHECKBOX = "BULLET_CHECKBOX"


def _range(start: int, end: int) -> dict[str, int]:
    return {"startIndex": start, "endIndex": end}


@dataclass(frozen=True)
class InsertText:
    """Insert `text` at `index`."""

    api_name: ClassVar[str] = "insertText"

    index: int
    text: str

    def to_api(self) -> dict[str, Any]:
        return {"insertText": {"location": {"index": self.index}, "text": self.text}}


@dataclass(frozen=True)
class InsertInlineImage:
    """Insert an image at `index`; the image occupies one index position."""

    api_name: ClassVar[str] = "insertInlineImage"

    index: int
    uri: str
    width: int | None = None
    height: int | None = None

    def to_api(self) -> dict[str, Any]:
        request: dict[str, Any] = {"location": {"index": self.index}, "uri": self.uri}
        object_size: dict[str, Any] = {}
        if self.width:
            object_size["width"] = {"magnitude": self.width, "unit": "PT"}
        if self.height:
            object_size["height"] = {"magnitude": self.height, "unit": "PT"}
        if object_size:
            request["objectSize"] = object_size
        return {"insertInlineImage": request}


@dataclass(frozen=True)
class SetParagraphStyle:
    """Apply a named paragraph style (e.g. HEADING_1) over `[start, end)`."""

    api_name: ClassVar[str] = "updateParagraphStyle"

    start: int
    end: int
    named_style: str

    def to_api(self) -> dict[str, Any]:
        return {
            "updateParagraphStyle": {
                "range": _range(self.start, self.end),
                "paragraphStyle": {"namedStyleType": self.named_style},
                "fields": "namedStyleType",
            }
        }


@dataclass(frozen=True)
class SetTextStyle:
    """Apply a text style over `[start, end)`; `fields` covers exactly the style's keys."""

    api_name: ClassVar[str] = "updateTextStyle"

    start: int
    end: int
    style: dict[str, Any] = field(default_factory=dict, hash=False)

    @property
    def fields(self) -> str:
        return ",".join(self.style.keys())

    def to_api(self) -> dict[str, Any]:
        return {
            "updateTextStyle": {
                "range": _range(self.start, self.end),
                "textStyle": copy.deepcopy(self.style),
                "fields": self.fields,
            }
        }


@dataclass(frozen=True)
class CreateParagraphBullets:
    """Turn the paragraphs overlapping `[start, end)` into a native list."""

    api_name: ClassVar[str] = "createParagraphBullets"

    start: int
    end: int
    preset: str = BULLET_PRESET_UNORDERED

    def to_api(self) -> dict[str, Any]:
        return {"createParagraphBullets": {"range": _range(self.start, self.end), "bulletPreset": self.preset}}


MutationRequest = Union[InsertText, InsertInlineImage, SetParagraphStyle, SetTextStyle, CreateParagraphBullets]

# Requests that target a range and are rejected by the API when the range is empty
RANGE_REQUEST_TYPES = (SetParagraphStyle, SetTextStyle, CreateParagraphBullets)


def utf16_length(text: str) -> int:
    """Length of text in UTF-16 code units, the unit Google Docs indexes count in."""
    return len(text.encode("utf-16-le")) // 2


def has_empty_range(request: MutationRequest) -> bool:
    """True for range requests whose `end <= start`; insertions never qualify."""
    return isinstance(request, RANGE_REQUEST_TYPES) and request.end <= request.start


def inserted_length(request: MutationRequest) -> int:
    """Number of index positions an insertion request adds to the document."""
    if isinstance(request, InsertText):
        return utf16_length(request.text)
    if isinstance(request, InsertInlineImage):
        return 1
    return 0


def requests_to_api(requests: list[MutationRequest] | tuple[MutationRequest, ...]) -> list[dict[str, Any]]:
    return [request.to_api() for request in requests]
