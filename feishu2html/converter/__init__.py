from .html_builder import HtmlBuilder, TemplateMode
from .render_context import RenderContext, RendererNotFoundError, render_children, render_node
from .styles import FEISHU_CSS
from .text_converter import TextConverter
from .tree_builder import build_tree

__all__ = [
    "FEISHU_CSS",
    "HtmlBuilder",
    "RenderContext",
    "RendererNotFoundError",
    "TemplateMode",
    "TextConverter",
    "build_tree",
    "render_children",
    "render_node",
]
