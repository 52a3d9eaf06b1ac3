import pytest
from pydantic import ValidationError

from feishu2html.models.block_type import BlockType
from feishu2html.models.blocks import (
    BLOCK_MODELS,
    BulletBlock,
    Heading3Block,
    TableBlock,
    TextBlock,
    UnknownBlock,
    parse_block,
)
from feishu2html.models.enums import (
    BlockColor,
    IframeCategory,
    IframeType,
    TextAlign,
    code_language,
)


def test_block_type_code_round_trip() -> None:
    for block_type in BlockType:
        assert BlockType.from_code(block_type.type_code) is block_type


def test_block_type_unknown_code() -> None:
    assert BlockType.from_code(53) is None
    assert BlockType.from_code(0) is None


def test_heading_level() -> None:
    assert BlockType.heading_level(BlockType.HEADING1) == 1
    assert BlockType.heading_level(BlockType.HEADING9) == 9
    assert BlockType.heading_level(BlockType.TEXT) is None


def test_every_block_type_has_model() -> None:
    assert set(BLOCK_MODELS) == set(BlockType)


def test_parse_block_text() -> None:
    block = parse_block(
        {
            "block_id": "t1",
            "block_type": 2,
            "parent_id": "p1",
            "text": {
                "elements": [{"text_run": {"content": "Hello"}}],
                "style": {"align": 2},
            },
        }
    )

    assert isinstance(block, TextBlock)
    assert block.block_type is BlockType.TEXT
    assert block.text.elements[0].text_run.content == "Hello"
    assert block.text.style.align == 2
    assert block.payload is block.text


def test_parse_block_heading_and_bullet() -> None:
    heading = parse_block({"block_id": "h", "block_type": 5, "heading3": {"elements": []}})
    bullet = parse_block({"block_id": "b", "block_type": 12, "bullet": {"elements": []}})

    assert isinstance(heading, Heading3Block)
    assert isinstance(bullet, BulletBlock)


def test_parse_block_table_property() -> None:
    block = parse_block(
        {
            "block_id": "tbl",
            "block_type": 31,
            "children": ["c1", "c2"],
            "table": {
                "cells": ["c1", "c2"],
                "property": {"row_size": 1, "column_size": 2, "column_width": [100, 200]},
            },
        }
    )

    assert isinstance(block, TableBlock)
    assert block.table.property.column_size == 2
    assert block.table.property.column_width == [100, 200]


def test_parse_block_unknown_code_falls_back() -> None:
    block = parse_block({"block_id": "x", "block_type": 777, "children": ["a"]})

    assert isinstance(block, UnknownBlock)
    assert block.block_type is BlockType.UNDEFINED
    assert block.children == ["a"]


def test_parse_block_non_int_type_falls_back() -> None:
    block = parse_block({"block_id": "x", "block_type": "text"})

    assert isinstance(block, UnknownBlock)


def test_parse_block_malformed_payload_degrades() -> None:
    block = parse_block(
        {
            "block_id": "bad",
            "block_type": 2,
            "parent_id": "p",
            "text": {"elements": "not-a-list"},
        }
    )

    assert isinstance(block, UnknownBlock)
    assert block.block_id == "bad"
    assert block.parent_id == "p"


def test_parse_block_without_id_raises() -> None:
    with pytest.raises(ValidationError):
        parse_block({"block_type": 2, "text": {"elements": []}})


def test_unknown_block_keeps_quote_payload() -> None:
    block = parse_block(
        {
            "block_id": "q",
            "block_type": 999,
            "quote": {"elements": [{"text_run": {"content": "引用"}}]},
        }
    )

    assert isinstance(block, UnknownBlock)
    assert block.quote.elements[0].text_run.content == "引用"


def test_enum_helpers() -> None:
    assert TextAlign.css_class(2) == "text-align-center"
    assert TextAlign.css_class(3) == "text-align-right"
    assert TextAlign.css_class(1) == ""
    assert TextAlign.css_class(None) == ""
    assert BlockColor.class_name(1) == "red"
    assert BlockColor.class_name(8) == "gray"
    assert BlockColor.class_name(42) is None
    assert code_language(None) == "plaintext"
    assert code_language(10_000) == "plaintext"


def test_iframe_type_lookup() -> None:
    assert IframeType.from_code(None) is IframeType.GENERIC
    assert IframeType.from_code(12345) is IframeType.UNDEFINED
    assert IframeType.from_code(1).category is IframeCategory.VIDEO
