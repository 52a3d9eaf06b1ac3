"""块类型到渲染器的注册表。

新增块类型时需要同时在 ``BLOCK_MODELS`` 和这里登记，导入时会校验两边一致。
"""

from __future__ import annotations

from feishu2html.converter.render_context import RENDERERS, Renderable, RendererNotFoundError
from feishu2html.models import blocks as b
from feishu2html.models.blocks import BLOCK_MODELS, Block

from .container import (
    CalloutRenderer,
    GridColumnRenderer,
    GridRenderer,
    QuoteContainerRenderer,
    ViewRenderer,
)
from .heading import HeadingRenderer
from .iframe import IframeRenderer
from .lists import BulletRenderer, OrderedRenderer
from .media import BoardRenderer, DiagramRenderer, FileRenderer, ImageRenderer
from .table import TableCellRenderer, TableRenderer
from .text import (
    CodeRenderer,
    DividerRenderer,
    EquationRenderer,
    PageRenderer,
    QuoteRenderer,
    TextRenderer,
    TodoRenderer,
)
from .unsupported import PlaceholderRenderer, UnknownRenderer

_REGISTRY: dict[type[Block], Renderable] = {
    b.PageBlock: PageRenderer(),
    b.TextBlock: TextRenderer(),
    b.Heading1Block: HeadingRenderer(),
    b.Heading2Block: HeadingRenderer(),
    b.Heading3Block: HeadingRenderer(),
    b.Heading4Block: HeadingRenderer(),
    b.Heading5Block: HeadingRenderer(),
    b.Heading6Block: HeadingRenderer(),
    b.Heading7Block: HeadingRenderer(),
    b.Heading8Block: HeadingRenderer(),
    b.Heading9Block: HeadingRenderer(),
    b.BulletBlock: BulletRenderer(),
    b.OrderedBlock: OrderedRenderer(),
    b.CodeBlock: CodeRenderer(),
    b.QuoteBlock: QuoteRenderer(),
    b.EquationBlock: EquationRenderer(),
    b.TodoBlock: TodoRenderer(),
    b.BitableBlock: PlaceholderRenderer("Bitable", partial=True),
    b.CalloutBlock: CalloutRenderer(),
    b.ChatCardBlock: PlaceholderRenderer("ChatCard", partial=True),
    b.DiagramBlock: DiagramRenderer(),
    b.DividerBlock: DividerRenderer(),
    b.FileBlock: FileRenderer(),
    b.GridBlock: GridRenderer(),
    b.GridColumnBlock: GridColumnRenderer(),
    b.IframeBlock: IframeRenderer(),
    b.ImageBlock: ImageRenderer(),
    b.IsvBlock: PlaceholderRenderer("ISV"),
    b.MindnoteBlock: PlaceholderRenderer("Mindnote"),
    b.SheetBlock: PlaceholderRenderer("Sheet"),
    b.TableBlock: TableRenderer(),
    b.TableCellBlock: TableCellRenderer(),
    b.ViewBlock: ViewRenderer(),
    b.QuoteContainerBlock: QuoteContainerRenderer(),
    b.TaskBlock: PlaceholderRenderer("Task"),
    b.OkrBlock: PlaceholderRenderer("OKR", render_children=True),
    b.OkrObjectiveBlock: PlaceholderRenderer("OKR Objective", render_children=True),
    b.OkrKeyResultBlock: PlaceholderRenderer("OKR Key Result", render_children=True),
    b.OkrProgressBlock: PlaceholderRenderer("OKR Progress"),
    b.AddOnsBlock: PlaceholderRenderer("Add-ons"),
    b.JiraIssueBlock: PlaceholderRenderer("Jira Issue"),
    b.WikiCatalogBlock: PlaceholderRenderer("Wiki Catalog (Legacy)"),
    b.BoardBlock: BoardRenderer(),
    b.AgendaBlock: PlaceholderRenderer("Agenda", render_children=True),
    b.AgendaItemBlock: PlaceholderRenderer("Agenda Item", render_children=True),
    b.AgendaItemTitleBlock: PlaceholderRenderer("Agenda Item Title", render_children=True),
    b.AgendaItemContentBlock: PlaceholderRenderer("Agenda Item Content", render_children=True),
    b.LinkPreviewBlock: PlaceholderRenderer("Link Preview"),
    b.SourceSyncedBlock: PlaceholderRenderer("Source Synced", render_children=True),
    b.ReferenceSyncedBlock: PlaceholderRenderer("Reference Synced"),
    b.SubPageListBlock: PlaceholderRenderer("Sub Page List"),
    b.AiTemplateBlock: PlaceholderRenderer("AI Template"),
    b.UnknownBlock: UnknownRenderer(),
}


def verify_registry() -> None:
    """每个可解析出的块模型都必须有渲染器。"""
    missing = sorted(
        model.__name__ for model in set(BLOCK_MODELS.values()) if model not in RENDERERS
    )
    if missing:
        raise RendererNotFoundError(f"以下块类型没有注册渲染器: {', '.join(missing)}")


RENDERERS.update(_REGISTRY)
verify_registry()


__all__ = ["RENDERERS", "verify_registry"]
