"""
Unit tests for the block-to-request builder.

Verifies cursor bookkeeping, per-block emission, empty-range filtering,
native list runs, images and fail-fast configuration errors.
"""

import pytest

from core.config import LIST_STYLE_NATIVE, ConverterSettings
from core.errors import ConfigurationError
from gdocs.markdown_parser import Heading, Span, parse_markdown
from gdocs.mutations import (
    BULLET_PRESET_ORDERED,
    BULLET_PRESET_UNORDERED,
    CreateParagraphBullets,
    InsertInlineImage,
    InsertText,
    SetParagraphStyle,
    SetTextStyle,
    inserted_length,
)
from gdocs.request_builder import (
    CHECKBOX_PREFIX,
    RULE_TEXT,
    ImageSpec,
    build_requests,
    code_text_style,
    emit_requests,
    filter_empty_ranges,
)

BOLD = {"bold": True}


def build(markdown, settings, **kwargs):
    return build_requests(parse_markdown(markdown), settings=settings, **kwargs)


class TestScenarios:
    def test_heading_then_bold_paragraph(self, settings):
        result = build("# Title\n\nHello **world**\n", settings)

        assert result.requests == (
            InsertText(1, "Title\n"),
            SetParagraphStyle(1, 6, "HEADING_1"),
            InsertText(7, "Hello "),
            InsertText(13, "world"),
            SetTextStyle(13, 18, BOLD),
            InsertText(18, "\n"),
        )
        assert result.start_index == 1
        assert result.end_index == 19

    def test_whitespace_only_bold_span_is_filtered(self, settings):
        blocks = parse_markdown("**  **")

        raw, end = emit_requests(blocks, settings=settings)
        result = build_requests(blocks, settings=settings)

        assert any(isinstance(request, SetTextStyle) for request in raw)
        assert result.requests == (InsertText(1, "  "), InsertText(3, "\n"))
        assert result.end_index == end == 4

    def test_table_row(self, settings):
        result = build("| A | B |", settings)
        assert result.requests == (InsertText(1, "A\tB\n"),)
        assert result.end_index == 5

    def test_plain_paragraph_is_single_insert(self, settings):
        result = build("Just text", settings)
        assert result.requests == (InsertText(1, "Just text\n"),)

    def test_empty_markdown_emits_nothing(self, settings):
        result = build("", settings)
        assert result.requests == ()
        assert result.end_index == 1


class TestBlockEmission:
    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
    def test_heading_style_excludes_newline(self, settings, level):
        result = build("#" * level + " Head", settings)
        assert result.requests == (InsertText(1, "Head\n"), SetParagraphStyle(1, 5, f"HEADING_{level}"))

    def test_heading_with_bold_span(self, settings):
        result = build("# A **B**", settings)
        assert result.requests == (
            InsertText(1, "A "),
            InsertText(3, "B"),
            SetTextStyle(3, 4, BOLD),
            InsertText(4, "\n"),
            SetParagraphStyle(1, 4, "HEADING_1"),
        )

    def test_bullet_and_numbered_items_are_plain_text_by_default(self, settings):
        result = build("- one\n1. two", settings)
        assert result.requests == (InsertText(1, "one\n"), InsertText(5, "two\n"))

    def test_checkbox_gets_status_prefix(self, settings):
        result = build("- [x] Ship it", settings)
        assert result.requests == (InsertText(1, f"{CHECKBOX_PREFIX}Ship it\n"),)

    def test_checkbox_starting_with_bold(self, settings):
        result = build("- [ ] **Urgent** fix", settings)
        assert result.requests == (
            InsertText(1, "Status: "),
            InsertText(9, "Urgent"),
            SetTextStyle(9, 15, BOLD),
            InsertText(15, " fix"),
            InsertText(19, "\n"),
        )

    def test_blockquote_is_italic(self, settings):
        result = build("> Quoted", settings)
        assert result.requests == (InsertText(1, "Quoted\n"), SetTextStyle(1, 7, {"italic": True}))

    def test_code_block_uses_code_font(self, settings):
        result = build("```\nx = 1\n```", settings)
        assert result.requests == (InsertText(1, "x = 1\n"), SetTextStyle(1, 6, code_text_style(settings)))

    def test_code_font_follows_settings(self):
        settings = ConverterSettings(code_font_family="Roboto Mono", code_font_size_pt=9)
        style = build("```\nx\n```", settings).requests[1].style
        assert style["weightedFontFamily"]["fontFamily"] == "Roboto Mono"
        assert style["fontSize"] == {"magnitude": 9, "unit": "PT"}

    def test_empty_code_block_style_is_filtered(self, settings):
        result = build("```\n```", settings)
        assert result.requests == (InsertText(1, "\n"),)

    def test_rule(self, settings):
        result = build("---", settings)
        assert result.requests == (InsertText(1, RULE_TEXT + "\n"),)

    def test_bold_range_is_trimmed(self, settings):
        result = build("a ** b ** c", settings)
        assert SetTextStyle(4, 5, BOLD) in result.requests

    def test_image_block_uses_default_size(self):
        settings = ConverterSettings(image_width_pt=200, image_height_pt=100)
        result = build("![Logo](https://example.com/logo.png)", settings)
        assert result.requests == (
            InsertInlineImage(1, "https://example.com/logo.png", 200, 100),
            InsertText(2, "\n"),
        )
        assert result.end_index == 3


class TestImages:
    def test_images_precede_body(self, settings):
        images = [ImageSpec("https://example.com/a.png", 100, 50), ImageSpec("https://example.com/b.png")]
        result = build("Text", settings, images=images)

        assert result.requests == (
            InsertInlineImage(1, "https://example.com/a.png", 100, 50),
            InsertText(2, "\n"),
            InsertInlineImage(3, "https://example.com/b.png"),
            InsertText(4, "\n"),
            InsertText(5, "Text\n"),
        )

    def test_empty_image_uri_raises(self, settings):
        with pytest.raises(ConfigurationError):
            build("Text", settings, images=[ImageSpec("")])

    def test_negative_image_size_raises(self, settings):
        with pytest.raises(ConfigurationError, match="width"):
            build("Text", settings, images=[ImageSpec("https://example.com/a.png", width=-1)])


class TestNativeLists:
    @pytest.fixture
    def native(self):
        return ConverterSettings(list_style=LIST_STYLE_NATIVE)

    def test_consecutive_items_share_one_bullet_request(self, native):
        result = build("- a\n- b\n1. c", native)
        assert result.requests == (
            InsertText(1, "a\n"),
            InsertText(3, "b\n"),
            InsertText(5, "c\n"),
            CreateParagraphBullets(1, 4, BULLET_PRESET_UNORDERED),
            CreateParagraphBullets(5, 6, BULLET_PRESET_ORDERED),
        )

    def test_paragraph_closes_list_run(self, native):
        result = build("- a\nText\n- b", native)
        assert result.requests == (
            InsertText(1, "a\n"),
            CreateParagraphBullets(1, 2, BULLET_PRESET_UNORDERED),
            InsertText(3, "Text\n"),
            InsertText(8, "b\n"),
            CreateParagraphBullets(8, 9, BULLET_PRESET_UNORDERED),
        )

    def test_checkbox_keeps_prefix(self, native):
        result = build("- [ ] task", native)
        assert result.requests[0] == InsertText(1, "Status: task\n")
        assert result.requests[1].preset == "BULLET_CHECKBOX"


class TestCursor:
    def test_custom_start_index(self, settings):
        result = build("Hello", settings, start_index=10)
        assert result.requests == (InsertText(10, "Hello\n"),)
        assert result.end_index == 16

    def test_leading_newline_closes_existing_paragraph(self, settings):
        result = build("## Next", settings, start_index=9, leading_newline=True)
        assert result.requests == (
            InsertText(9, "\n"),
            InsertText(10, "Next\n"),
            SetParagraphStyle(10, 14, "HEADING_2"),
        )
        assert result.end_index == 15

    def test_leading_newline_precedes_images(self, settings):
        images = [ImageSpec("https://example.com/a.png")]
        result = build("", settings, images=images, start_index=9, leading_newline=True)
        assert result.requests[0] == InsertText(9, "\n")
        assert result.requests[1] == InsertInlineImage(10, "https://example.com/a.png", None, None)

    def test_leading_newline_without_content_emits_nothing(self, settings):
        result = build("", settings, start_index=9, leading_newline=True)
        assert result.requests == ()
        assert result.end_index == 9

    def test_utf16_indices(self, settings):
        result = build("😀 **hi**", settings)
        assert result.requests == (
            InsertText(1, "😀 "),
            InsertText(4, "hi"),
            SetTextStyle(4, 6, BOLD),
            InsertText(6, "\n"),
        )

    def test_cursor_reconstructs_from_insertions(self, settings):
        markdown = (
            "# Heading **bold**\n- item\n1. step\n- [x] done\n> quote **q**\n"
            "```\ncode\n```\n| a | b |\n---\n![i](https://example.com/i.png)\nplain **b** text\n**  **\n"
        )
        requests, end_index = emit_requests(parse_markdown(markdown), start_index=5, settings=settings)

        cursor = 5
        for request in requests:
            if isinstance(request, (InsertText, InsertInlineImage)):
                assert request.index == cursor
                cursor += inserted_length(request)
        assert cursor == end_index

    def test_visible_text_order_is_preserved(self, settings):
        result = build("# One\nTwo **three**\n- four", settings)
        text = "".join(request.text for request in result.requests if isinstance(request, InsertText))
        assert text == "One\nTwo three\nfour\n"

    def test_build_is_deterministic(self, settings):
        markdown = "# A\n- b\n**c**"
        assert build(markdown, settings) == build(markdown, settings)


class TestFilterEmptyRanges:
    def test_drops_empty_and_inverted_ranges(self):
        requests = [
            InsertText(1, "x\n"),
            SetParagraphStyle(1, 1, "HEADING_1"),
            SetTextStyle(3, 2, BOLD),
            CreateParagraphBullets(4, 4),
            SetTextStyle(1, 2, BOLD),
        ]
        assert filter_empty_ranges(requests) == [InsertText(1, "x\n"), SetTextStyle(1, 2, BOLD)]

    def test_never_drops_insertions(self):
        requests = [InsertText(1, ""), InsertInlineImage(1, "https://example.com/a.png")]
        assert filter_empty_ranges(requests) == requests

    def test_idempotent(self, settings):
        requests, _ = emit_requests(parse_markdown("**  **\n```\n```\n# **  **"), settings=settings)
        once = filter_empty_ranges(requests)
        assert filter_empty_ranges(once) == once


class TestConfigurationErrors:
    def test_unknown_heading_level_raises_before_emission(self, settings):
        blocks = [Heading(1, (Span("ok"),)), Heading(7, (Span("bad"),))]
        with pytest.raises(ConfigurationError, match="heading level 7"):
            build_requests(blocks, settings=settings)

    @pytest.mark.parametrize("start_index", [0, -1, True])
    def test_invalid_start_index(self, settings, start_index):
        with pytest.raises(ConfigurationError, match="start_index"):
            build("Text", settings, start_index=start_index)

    def test_unsupported_block_type(self, settings):
        with pytest.raises(ConfigurationError, match="Unsupported block type"):
            build_requests(["not a block"], settings=settings)
