from __future__ import annotations

from datetime import datetime
from html import escape
from typing import Iterable
from urllib.parse import unquote

from feishu2html.models.enums import BlockColor
from feishu2html.models.text import TextElement, TextElementStyle


class TextConverter:
    """把行内 ``TextElement`` 列表转换成 HTML 片段或纯文本。"""

    def convert(self, elements: Iterable[TextElement] | None) -> str:
        return "".join(self.convert_element(element) for element in elements or [])

    def plain_text(self, elements: Iterable[TextElement] | None) -> str:
        return "".join(self._plain(element) for element in elements or [])

    def convert_element(self, element: TextElement) -> str:
        if element.text_run is not None:
            return self._styled(
                escape(element.text_run.content), element.text_run.text_element_style
            )
        if element.mention_user is not None:
            return '<span class="mention-user">@用户</span>'
        if element.mention_doc is not None:
            doc = element.mention_doc
            title = escape(doc.title or "文档")
            if not doc.url:
                return f'<span class="mention-doc">{title}</span>'
            href = escape(unquote(doc.url), quote=True)
            return f'<a class="mention-doc" href="{href}">{title}</a>'
        if element.equation is not None:
            content = element.equation.content.strip()
            if not content:
                return ""
            return self._styled(
                escape(f"\\({content}\\)"), element.equation.text_element_style, allow_link=False
            )
        if element.reminder is not None:
            text = escape(format_reminder(element.reminder.notify_time or element.reminder.expire_time))
            return f'<span class="reminder">{text}</span>'
        if element.file is not None:
            return '<span class="inline-file">[文件]</span>'
        if element.undefined is not None:
            label = escape(element.undefined.content or "Button")
            return (
                '<button type="button" class="ud__button ud__button--default '
                f'ud__button--size-md feishu-button">{label}</button>'
            )
        return ""

    @staticmethod
    def _plain(element: TextElement) -> str:
        if element.text_run is not None:
            return element.text_run.content
        if element.mention_user is not None:
            return "@用户"
        if element.mention_doc is not None:
            return element.mention_doc.title or "@文档"
        if element.equation is not None:
            return element.equation.content
        if element.reminder is not None:
            return format_reminder(element.reminder.notify_time or element.reminder.expire_time)
        if element.file is not None:
            return "[文件]"
        if element.undefined is not None:
            return element.undefined.content or "Button"
        return ""

    @staticmethod
    def _styled(
        text: str, style: TextElementStyle | None, *, allow_link: bool = True
    ) -> str:
        if style is None:
            return text
        if allow_link and style.link is not None and style.link.url:
            href = escape(unquote(style.link.url), quote=True)
            text = f'<a href="{href}" target="_blank" rel="noopener noreferrer">{text}</a>'
        if style.inline_code:
            text = f"<code>{text}</code>"
        if style.strikethrough:
            text = f"<del>{text}</del>"
        if style.underline:
            text = f"<u>{text}</u>"
        if style.italic:
            text = f"<em>{text}</em>"
        if style.bold:
            text = f"<strong>{text}</strong>"

        classes = []
        text_color = BlockColor.class_name(style.text_color)
        if text_color:
            classes.append(f"text-{text_color}")
        background = BlockColor.class_name(style.background_color)
        if background:
            classes.append(f"bg-{background}")
        if classes:
            text = f'<span class="{" ".join(classes)}">{text}</span>'
        return text


def format_reminder(timestamp: str | int | None) -> str:
    if timestamp is None:
        return "提醒"
    try:
        ts = int(timestamp)
    except (TypeError, ValueError):
        return "提醒"
    if ts > 1e12:
        ts = ts // 1000
    try:
        dt = datetime.fromtimestamp(ts)
    except (OSError, OverflowError, ValueError):
        return "提醒"
    return f"提醒({dt:%Y-%m-%d %H:%M})"


__all__ = ["TextConverter", "format_reminder"]
