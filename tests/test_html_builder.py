import re

import pytest

from feishu2html.converter.html_builder import HtmlBuilder, TemplateMode
from feishu2html.converter.render_context import (
    RENDERERS,
    RenderContext,
    RendererNotFoundError,
    render_node,
)
from feishu2html.converter.styles import FEISHU_CSS
from feishu2html.converter.tree_builder import build_tree
from feishu2html.models.blocks import BLOCK_MODELS, Block, parse_block
from feishu2html.models.node import BlockNode


def _run(content: str) -> dict:
    return {"elements": [{"text_run": {"content": content}}]}


def _forest(*payloads: dict) -> list[BlockNode]:
    blocks = [parse_block(payload) for payload in payloads]
    return build_tree({block.block_id: block for block in blocks})


def _fragment(*payloads: dict, **kwargs) -> str:
    builder = HtmlBuilder("doc", template_mode=TemplateMode.FRAGMENT, **kwargs)
    return builder.build(_forest(*payloads))


def test_every_block_model_has_renderer() -> None:
    for model in BLOCK_MODELS.values():
        assert model in RENDERERS


def test_render_node_without_renderer_raises() -> None:
    class StrayBlock(Block):
        pass

    node = BlockNode(data=StrayBlock(block_id="stray"))

    with pytest.raises(RendererNotFoundError):
        render_node([], node, RenderContext())


def test_nested_list_renders_each_block_once_in_order() -> None:
    html = _fragment(
        {"block_id": "page1", "block_type": 1, "children": ["text1", "bullet1"]},
        {"block_id": "text1", "block_type": 2, "parent_id": "page1", "text": _run("Hello")},
        {
            "block_id": "bullet1",
            "block_type": 12,
            "parent_id": "page1",
            "children": ["text2"],
            "bullet": _run("Item"),
        },
        {"block_id": "text2", "block_type": 2, "parent_id": "bullet1", "text": _run("Nested")},
    )

    assert html.count("Hello") == 1
    assert html.count("Item") == 1
    assert html.count("Nested") == 1
    assert html.index("Hello") < html.index("Item") < html.index("Nested")
    assert '<p class="text-block">Hello</p>' in html
    assert '<div class="bullet">•</div>' in html
    children_start = html.index('<div class="list-children">')
    assert children_start < html.index("Nested")


def test_table_splits_cells_by_column_size() -> None:
    cells = [f"c{i}" for i in range(1, 6)]
    html = _fragment(
        {"block_id": "page", "block_type": 1, "children": ["tbl"]},
        {
            "block_id": "tbl",
            "block_type": 31,
            "children": cells,
            "table": {"cells": cells, "property": {"row_size": 3, "column_size": 2}},
        },
        *(
            {"block_id": cell, "block_type": 32, "parent_id": "tbl", "table_cell": _run(cell)}
            for cell in cells
        ),
    )

    rows = re.findall(r"<tr>(.*?)</tr>", html, re.S)
    assert len(rows) == 3
    assert [row.count("<td>") for row in rows] == [2, 2, 1]
    assert "c5" in rows[2]


def test_table_merge_and_header_row() -> None:
    cells = ["a", "b", "c", "d"]
    html = _fragment(
        {"block_id": "page", "block_type": 1, "children": ["tbl"]},
        {
            "block_id": "tbl",
            "block_type": 31,
            "children": cells,
            "table": {
                "cells": cells,
                "property": {
                    "row_size": 2,
                    "column_size": 2,
                    "header_row": True,
                    "column_width": [100, 150],
                    "merge_info": [
                        {"row_span": 1, "col_span": 2},
                        {"row_span": 1, "col_span": 1},
                        {"row_span": 1, "col_span": 1},
                        {"row_span": 1, "col_span": 1},
                    ],
                },
            },
        },
        *(
            {"block_id": cell, "block_type": 32, "parent_id": "tbl", "table_cell": _run(cell)}
            for cell in cells
        ),
    )

    rendered = re.findall(r"<(t[hd])([^>]*)>\n(\w)\n</t[hd]>", html)
    assert rendered == [("th", ' colspan="2"', "a"), ("td", "", "c"), ("td", "", "d")]
    assert '<col style="width: 150px">' in html


def test_headings_above_six_use_h6() -> None:
    html = _fragment(
        {"block_id": "page", "block_type": 1, "children": ["h2", "h7", "h9"]},
        {"block_id": "h2", "block_type": 4, "heading2": _run("Two")},
        {"block_id": "h7", "block_type": 9, "heading7": _run("Seven")},
        {"block_id": "h9", "block_type": 11, "heading9": _run("Nine")},
    )

    assert '<h2 id="h2" class="heading heading-h2">Two</h2>' in html
    assert '<h6 id="h7" class="heading heading-h7" data-level="7">Seven</h6>' in html
    assert '<h6 id="h9" class="heading heading-h9" data-level="9">Nine</h6>' in html


def test_ordered_numbering_restarts_after_other_block() -> None:
    def ordered(block_id: str, sequence: str | None = None) -> dict:
        data = _run(block_id)
        if sequence is not None:
            data["style"] = {"sequence": sequence}
        return {"block_id": block_id, "block_type": 13, "parent_id": "page", "ordered": data}

    html = _fragment(
        {"block_id": "page", "block_type": 1, "children": ["o1", "o2", "t", "o3", "o4", "o5"]},
        ordered("o1"),
        ordered("o2", "auto"),
        {"block_id": "t", "block_type": 2, "parent_id": "page", "text": _run("break")},
        ordered("o3"),
        ordered("o4", "10"),
        ordered("o5"),
    )

    assert re.findall(r'<div class="order">(\d+)\.</div>', html) == ["1", "2", "1", "10", "11"]


def test_unsupported_placeholder_respects_flag() -> None:
    payloads = (
        {"block_id": "page", "block_type": 1, "children": ["sheet", "agenda"]},
        {"block_id": "sheet", "block_type": 30, "sheet": {"token": "s"}},
        {"block_id": "agenda", "block_type": 44, "children": ["inside"]},
        {"block_id": "inside", "block_type": 2, "parent_id": "agenda", "text": _run("议程内容")},
    )

    shown = _fragment(*payloads)
    hidden = _fragment(*payloads, show_unsupported_blocks=False)

    assert '<div class="unsupported-block">[Unsupported block type: Sheet]</div>' in shown
    assert "[Unsupported block type: Agenda]" in shown
    assert "unsupported-block" not in hidden
    assert "议程内容" in shown
    assert "议程内容" in hidden


def test_unknown_block_placeholder_and_quote() -> None:
    html = _fragment(
        {"block_id": "page", "block_type": 1, "children": ["u1", "u2"]},
        {"block_id": "u1", "block_type": 777},
        {"block_id": "u2", "block_type": 999, "quote": _run("引用文字")},
    )

    assert "[Unknown block type: UNDEFINED]" in html
    assert '<blockquote class="quote-block">引用文字</blockquote>' in html


def test_partially_supported_label() -> None:
    html = _fragment(
        {"block_id": "page", "block_type": 1, "children": ["bt"]},
        {"block_id": "bt", "block_type": 18, "bitable": {"token": "x"}},
    )

    assert "[Partially supported: Bitable block]" in html


def test_media_blocks_use_asset_paths() -> None:
    html = _fragment(
        {"block_id": "page", "block_type": 1, "children": ["img", "file", "board"]},
        {"block_id": "img", "block_type": 27, "image": {"token": "imgtok", "width": 300}},
        {"block_id": "file", "block_type": 23, "file": {"token": "ftok", "name": "报告 v1.pdf"}},
        {"block_id": "board", "block_type": 43, "board": {"token": "btok"}},
        image_cache={"btok": "data:image/png;base64,AAAA"},
    )

    assert '<img src="images/imgtok.png" alt="image" style="max-width: 300px">' in html
    assert 'href="files/ftok_报告 v1.pdf" download' in html
    assert 'src="data:image/png;base64,AAAA"' in html


def test_code_block_escapes_and_sets_language() -> None:
    html = _fragment(
        {"block_id": "page", "block_type": 1, "children": ["code"]},
        {
            "block_id": "code",
            "block_type": 14,
            "code": {"elements": [{"text_run": {"content": "a < b && c"}}], "style": {"language": 1}},
        },
    )

    assert '<code class="hljs language-plaintext">a &lt; b &amp;&amp; c</code>' in html


def test_grid_columns_follow_width_ratio() -> None:
    html = _fragment(
        {"block_id": "page", "block_type": 1, "children": ["grid"]},
        {"block_id": "grid", "block_type": 24, "children": ["g1", "g2"], "grid": {"column_size": 2}},
        {"block_id": "g1", "block_type": 25, "parent_id": "grid", "grid_column": {"width_ratio": 1}},
        {"block_id": "g2", "block_type": 25, "parent_id": "grid", "grid_column": {"width_ratio": 2}},
    )

    assert "grid-template-columns: 1fr 2fr" in html
    assert html.count('<div class="grid-column">') == 2


def test_fragment_template_is_content_only() -> None:
    html = _fragment({"block_id": "page", "block_type": 1})

    assert html.startswith('<div class="feishu-document">')
    assert "<html" not in html


def test_default_template_links_external_css() -> None:
    builder = HtmlBuilder("A & B", external_css=True, css_file_name="style.css")

    html = builder.build([])

    assert html.startswith("<!DOCTYPE html>")
    assert "<title>A &amp; B</title>" in html
    assert '<link rel="stylesheet" href="style.css">' in html
    assert "MathJax" in html
    assert "<style>" not in html


def test_default_template_inlines_css() -> None:
    html = HtmlBuilder("doc", custom_css="body { color: red; }").build([])

    assert "body { color: red; }" in html
    assert "MathJax-script" in html


def test_full_template_has_no_scripts() -> None:
    builder = HtmlBuilder("doc", template_mode=TemplateMode.FULL, external_css=True)

    html = builder.build([])

    assert "<style>" in html
    assert "<script" not in html
    assert builder.css == FEISHU_CSS


def test_view_block_renders_wrapped_attachment() -> None:
    html = _fragment(
        {"block_id": "page1", "block_type": 1, "children": ["view1"]},
        {
            "block_id": "view1",
            "block_type": 33,
            "parent_id": "page1",
            "children": ["file1"],
            "view": {"view_type": 1},
        },
        {
            "block_id": "file1",
            "block_type": 23,
            "parent_id": "view1",
            "file": {"token": "test_token_123", "name": "sample.txt"},
        },
    )

    assert "Unsupported block type: View" not in html
    assert '<div class="view-block">' in html
    assert 'href="files/test_token_123_sample.txt" download' in html
    assert "sample.txt</a>" in html


def test_okr_container_renders_children() -> None:
    html = _fragment(
        {"block_id": "page", "block_type": 1, "children": ["okr"]},
        {"block_id": "okr", "block_type": 36, "children": ["obj"]},
        {"block_id": "obj", "block_type": 37, "parent_id": "okr", "children": ["note"]},
        {"block_id": "note", "block_type": 2, "parent_id": "obj", "text": _run("目标说明")},
        show_unsupported_blocks=False,
    )

    assert "目标说明" in html
    assert "unsupported-block" not in html
