from __future__ import annotations

from html import escape
from urllib.parse import unquote

from feishu2html.converter.render_context import RenderContext
from feishu2html.models.blocks import IframeBlock
from feishu2html.models.enums import IframeCategory, IframeType
from feishu2html.models.node import BlockNode

_CATEGORY_ICONS = {
    IframeCategory.VIDEO: "🎬",
    IframeCategory.DESIGN: "🎨",
    IframeCategory.FEISHU: "📄",
}


class IframeRenderer:
    def render(self, out: list[str], node: BlockNode[IframeBlock], context: RenderContext) -> None:
        data = node.data.iframe
        if data is None:
            return
        component = data.component
        url = (component.url if component is not None else "") or data.url
        if not url:
            return
        iframe_type = IframeType.from_code(component.iframe_type if component else None)
        src = escape(unquote(url), quote=True)
        category = iframe_type.category
        if category is IframeCategory.GENERIC:
            out.append(
                f'<iframe class="embed-generic" src="{src}" frameborder="0" allowfullscreen></iframe>'
            )
            return

        name = escape(iframe_type.display_name, quote=True)
        fullscreen = " allowfullscreen" if category is IframeCategory.VIDEO else ""
        out.append(
            f'<div class="embed-container embed-{category.value}" data-type="{name}">'
            '<div class="embed-header">'
            f'<span class="embed-icon">{_CATEGORY_ICONS[category]}</span>'
            f'<span class="embed-title">{name}</span></div>'
            f'<div class="embed-content"><iframe src="{src}" frameborder="0"{fullscreen}></iframe></div>'
            "</div>"
        )


__all__ = ["IframeRenderer"]
