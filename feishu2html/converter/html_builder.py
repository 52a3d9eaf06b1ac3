from __future__ import annotations

from enum import Enum
from html import escape

from loguru import logger

from feishu2html.converter import renderers  # noqa: F401  注册全部渲染器
from feishu2html.converter.render_context import RenderContext, render_node
from feishu2html.converter.styles import FEISHU_CSS
from feishu2html.converter.text_converter import TextConverter
from feishu2html.models.node import BlockNode

MATHJAX_CONFIG = """<script>
window.MathJax = {
  tex: { inlineMath: [["\\\\(", "\\\\)"]], displayMath: [["$$", "$$"]] },
  options: { skipHtmlTags: ["script", "noscript", "style", "textarea", "pre", "code"] }
};
</script>"""
MATHJAX_SCRIPT = (
    '<script id="MathJax-script" async '
    'src="https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-mml-chtml.js"></script>'
)


class TemplateMode(str, Enum):
    DEFAULT = "default"  # 完整页面，内联或外链 CSS，引入 MathJax
    FULL = "full"  # 完整页面，内联 CSS，不引用任何外部资源
    FRAGMENT = "fragment"  # 只输出内容 div


class HtmlBuilder:
    def __init__(
        self,
        title: str,
        *,
        template_mode: TemplateMode = TemplateMode.DEFAULT,
        custom_css: str | None = None,
        external_css: bool = False,
        css_file_name: str = "feishu-style.css",
        show_unsupported_blocks: bool = True,
        image_path: str = "images",
        file_path: str = "files",
        image_cache: dict[str, str] | None = None,
    ) -> None:
        self.title = title
        self.template_mode = TemplateMode(template_mode)
        self.custom_css = custom_css
        self.external_css = external_css
        self.css_file_name = css_file_name
        self.show_unsupported_blocks = show_unsupported_blocks
        self.image_path = image_path
        self.file_path = file_path
        self.image_cache = dict(image_cache or {})

    @property
    def css(self) -> str:
        return self.custom_css if self.custom_css else FEISHU_CSS

    def new_context(self, forest: list[BlockNode]) -> RenderContext:
        return RenderContext(
            text_converter=TextConverter(),
            image_cache=self.image_cache,
            show_unsupported_blocks=self.show_unsupported_blocks,
            image_path=self.image_path,
            file_path=self.file_path,
            roots=list(forest),
        )

    def build(self, forest: list[BlockNode]) -> str:
        logger.debug(
            "生成 HTML: {} ({} 个顶层块, 模板={})",
            self.title,
            len(forest),
            self.template_mode.value,
        )
        context = self.new_context(forest)
        out: list[str] = ['<div class="feishu-document">']
        for node in forest:
            render_node(out, node, context)
        out.append("</div>")
        content = "\n".join(out)

        if self.template_mode is TemplateMode.FRAGMENT:
            return content
        if self.template_mode is TemplateMode.FULL:
            head = [f"<style>\n{self.css}</style>"]
        else:
            if self.external_css:
                head = [f'<link rel="stylesheet" href="{escape(self.css_file_name, quote=True)}">']
            else:
                head = [f"<style>\n{self.css}</style>"]
            head.extend([MATHJAX_CONFIG, MATHJAX_SCRIPT])
        return self._page(head, content)

    def _page(self, head: list[str], content: str) -> str:
        lines = [
            "<!DOCTYPE html>",
            '<html lang="zh-CN">',
            "<head>",
            '<meta charset="UTF-8">',
            '<meta name="viewport" content="width=device-width, initial-scale=1.0">',
            f"<title>{escape(self.title)}</title>",
            *head,
            "</head>",
            "<body>",
            content,
            "</body>",
            "</html>",
        ]
        return "\n".join(lines) + "\n"


__all__ = ["HtmlBuilder", "TemplateMode"]
