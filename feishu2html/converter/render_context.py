from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from feishu2html.converter.text_converter import TextConverter
from feishu2html.models.blocks import Block
from feishu2html.models.node import BlockNode
from feishu2html.services.path_sanitizer import sanitize_filename


class RendererNotFoundError(RuntimeError):
    pass


class Renderable(Protocol):
    def render(self, out: list[str], node: BlockNode, context: RenderContext) -> None:
        ...


# 由 feishu2html.converter.renderers 在导入时填充
RENDERERS: dict[type[Block], Renderable] = {}


def image_file_name(token: str) -> str:
    return f"{token}.png"


def attachment_file_name(token: str, name: str | None) -> str:
    if not name:
        return token
    return f"{token}_{sanitize_filename(name)}"


@dataclass
class RenderContext:
    """一次渲染过程共享的状态，每次 ``HtmlBuilder.build`` 新建。"""

    text_converter: TextConverter = field(default_factory=TextConverter)
    image_cache: dict[str, str] = field(default_factory=dict)
    show_unsupported_blocks: bool = True
    image_path: str = "images"
    file_path: str = "files"
    roots: list[BlockNode] = field(default_factory=list)

    def image_src(self, token: str) -> str:
        cached = self.image_cache.get(token)
        if cached:
            return cached
        return f"{self.image_path}/{image_file_name(token)}"

    def file_href(self, token: str, name: str | None) -> str:
        return f"{self.file_path}/{attachment_file_name(token, name)}"

    def siblings_of(self, node: BlockNode) -> list[BlockNode]:
        if node.parent is None:
            return self.roots or [node]
        return node.parent.children


def render_node(out: list[str], node: BlockNode, context: RenderContext) -> None:
    renderer = RENDERERS.get(type(node.data))
    if renderer is None:
        raise RendererNotFoundError(
            f"没有为 {type(node.data).__name__} (block_id={node.block_id}) 注册渲染器"
        )
    renderer.render(out, node, context)


def render_children(out: list[str], node: BlockNode, context: RenderContext) -> None:
    for child in node.children:
        render_node(out, child, context)


__all__ = [
    "RENDERERS",
    "Renderable",
    "RenderContext",
    "RendererNotFoundError",
    "attachment_file_name",
    "image_file_name",
    "render_children",
    "render_node",
]
