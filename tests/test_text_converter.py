from feishu2html.converter.text_converter import TextConverter, format_reminder
from feishu2html.models.text import TextElement


def _elements(*raw: dict) -> list[TextElement]:
    return [TextElement.model_validate(item) for item in raw]


def test_plain_text_run_is_escaped() -> None:
    html = TextConverter().convert(_elements({"text_run": {"content": "<b>&"}}))

    assert html == "&lt;b&gt;&amp;"


def test_style_nesting_order() -> None:
    elements = _elements(
        {
            "text_run": {
                "content": "x",
                "text_element_style": {
                    "bold": True,
                    "italic": True,
                    "inline_code": True,
                    "link": {"url": "https%3A%2F%2Fexample.com%2Fa"},
                },
            }
        }
    )

    html = TextConverter().convert(elements)

    assert html == (
        '<strong><em><code><a href="https://example.com/a" target="_blank" '
        'rel="noopener noreferrer">x</a></code></em></strong>'
    )


def test_colors_wrap_outermost() -> None:
    elements = _elements(
        {
            "text_run": {
                "content": "hi",
                "text_element_style": {"underline": True, "text_color": 1, "background_color": 4},
            }
        }
    )

    html = TextConverter().convert(elements)

    assert html == '<span class="text-red bg-blue"><u>hi</u></span>'


def test_mentions_and_inline_equation() -> None:
    elements = _elements(
        {"mention_user": {"user_id": "ou_1"}},
        {"mention_doc": {"token": "d", "url": "https://a.feishu.cn/docx/d", "title": "设计文档"}},
        {"equation": {"content": "E=mc^2\n"}},
    )

    html = TextConverter().convert(elements)

    assert '<span class="mention-user">@用户</span>' in html
    assert '<a class="mention-doc" href="https://a.feishu.cn/docx/d">设计文档</a>' in html
    assert "\\(E=mc^2\\)" in html


def test_undefined_element_renders_button() -> None:
    html = TextConverter().convert(_elements({"undefined": {"content": "点我"}}))

    assert "feishu-button" in html
    assert ">点我</button>" in html


def test_plain_text_ignores_styles() -> None:
    elements = _elements(
        {"text_run": {"content": "a", "text_element_style": {"bold": True}}},
        {"file": {"file_token": "f"}},
    )

    assert TextConverter().plain_text(elements) == "a[文件]"


def test_convert_handles_none() -> None:
    assert TextConverter().convert(None) == ""


def test_format_reminder_invalid_timestamp() -> None:
    assert format_reminder(None) == "提醒"
    assert format_reminder("soon") == "提醒"
    assert format_reminder("1700000000000").startswith("提醒(2023-11-")
