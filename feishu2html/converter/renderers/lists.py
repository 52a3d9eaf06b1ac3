from __future__ import annotations

from feishu2html.converter.render_context import RenderContext, render_children
from feishu2html.models.blocks import BulletBlock, OrderedBlock
from feishu2html.models.node import BlockNode
from feishu2html.models.text import TextBlockData


def explicit_sequence(block: OrderedBlock) -> int | None:
    """``style.sequence`` 为数字时返回显式编号；``auto`` 或缺省返回 ``None``。"""
    data = block.ordered
    if data is None or data.style is None:
        return None
    sequence = data.style.sequence
    if isinstance(sequence, int) and not isinstance(sequence, bool):
        return max(1, sequence)
    if isinstance(sequence, str):
        value = sequence.strip()
        if value.isdigit():
            return max(1, int(value))
    return None


def ordered_number(node: BlockNode[OrderedBlock], context: RenderContext) -> int:
    """编号只取决于节点在兄弟节点中的位置：从连续有序项的起点开始累加。"""
    siblings = context.siblings_of(node)
    index = next((i for i, sibling in enumerate(siblings) if sibling is node), None)
    if index is None:
        return explicit_sequence(node.data) or 1
    start = index
    while start > 0 and isinstance(siblings[start - 1].data, OrderedBlock):
        start -= 1
    number = 0
    for sibling in siblings[start : index + 1]:
        explicit = explicit_sequence(sibling.data)
        number = explicit if explicit is not None else number + 1
    return number


def _render_item(
    out: list[str],
    node: BlockNode,
    context: RenderContext,
    data: TextBlockData,
    kind: str,
    marker_class: str,
    marker: str,
) -> None:
    content = context.text_converter.convert(data.elements)
    out.append(
        f'<div class="list-wrapper {kind}"><div class="list">'
        f'<div class="{marker_class}">{marker}</div>'
        f'<div class="list-content"><p>{content}</p></div></div>'
    )
    if node.children:
        out.append('<div class="list-children">')
        render_children(out, node, context)
        out.append("</div>")
    out.append("</div>")


class BulletRenderer:
    def render(self, out: list[str], node: BlockNode[BulletBlock], context: RenderContext) -> None:
        data = node.data.bullet
        if data is None:
            return
        _render_item(out, node, context, data, "bullet-list", "bullet", "•")


class OrderedRenderer:
    def render(self, out: list[str], node: BlockNode[OrderedBlock], context: RenderContext) -> None:
        data = node.data.ordered
        if data is None:
            return
        number = ordered_number(node, context)
        _render_item(out, node, context, data, "ordered-list", "order", f"{number}.")


__all__ = ["BulletRenderer", "OrderedRenderer", "explicit_sequence", "ordered_number"]
