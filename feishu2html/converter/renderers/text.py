from __future__ import annotations

from html import escape

from feishu2html.converter.render_context import RenderContext, render_children
from feishu2html.models.blocks import (
    CodeBlock,
    DividerBlock,
    EquationBlock,
    PageBlock,
    QuoteBlock,
    TextBlock,
    TodoBlock,
)
from feishu2html.models.enums import TextAlign, code_language
from feishu2html.models.node import BlockNode


def with_class(base: str, *extra: str) -> str:
    return " ".join(part for part in (base, *extra) if part)


def render_nested(out: list[str], node: BlockNode, context: RenderContext) -> None:
    """普通块下的子块（缩进内容）渲染在块之后的包裹层里。"""
    if not node.children:
        return
    out.append('<div class="block-children">')
    render_children(out, node, context)
    out.append("</div>")


class PageRenderer:
    def render(self, out: list[str], node: BlockNode[PageBlock], context: RenderContext) -> None:
        render_children(out, node, context)


class TextRenderer:
    def render(self, out: list[str], node: BlockNode[TextBlock], context: RenderContext) -> None:
        data = node.data.text
        if data is None:
            return
        align = TextAlign.css_class(data.style.align if data.style else None)
        content = context.text_converter.convert(data.elements)
        out.append(f'<p class="{with_class("text-block", align)}">{content}</p>')
        render_nested(out, node, context)


class QuoteRenderer:
    def render(self, out: list[str], node: BlockNode[QuoteBlock], context: RenderContext) -> None:
        data = node.data.quote
        if data is None:
            return
        content = context.text_converter.convert(data.elements)
        out.append(f'<blockquote class="quote-block">{content}')
        render_children(out, node, context)
        out.append("</blockquote>")


class CodeRenderer:
    def render(self, out: list[str], node: BlockNode[CodeBlock], context: RenderContext) -> None:
        data = node.data.code
        if data is None:
            return
        language_code = data.language
        if language_code is None and data.style is not None:
            language_code = data.style.language
        language = code_language(language_code)
        content = escape(context.text_converter.plain_text(data.elements))
        out.append(
            f'<div class="code-block"><pre><code class="hljs language-{language}">'
            f"{content}</code></pre></div>"
        )


class EquationRenderer:
    def render(self, out: list[str], node: BlockNode[EquationBlock], context: RenderContext) -> None:
        data = node.data.equation
        if data is None:
            return
        content = data.content or context.text_converter.plain_text(data.elements)
        content = content.strip()
        if not content:
            return
        out.append(f'<div class="equation">{escape(f"$${content}$$")}</div>')


class TodoRenderer:
    def render(self, out: list[str], node: BlockNode[TodoBlock], context: RenderContext) -> None:
        data = node.data.todo
        if data is None:
            return
        done = bool(data.style and data.style.done)
        checked = " checked" if done else ""
        state = " todo-done" if done else ""
        content = context.text_converter.convert(data.elements)
        out.append(
            f'<div class="todo-block{state}"><div class="todo-block_content">'
            f'<input type="checkbox" disabled{checked}><span>{content}</span></div>'
        )
        render_nested(out, node, context)
        out.append("</div>")


class DividerRenderer:
    def render(self, out: list[str], node: BlockNode[DividerBlock], context: RenderContext) -> None:
        out.append('<hr class="divider">')


__all__ = [
    "CodeRenderer",
    "DividerRenderer",
    "EquationRenderer",
    "PageRenderer",
    "QuoteRenderer",
    "TextRenderer",
    "TodoRenderer",
    "render_nested",
    "with_class",
]
