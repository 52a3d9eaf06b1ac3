from __future__ import annotations

from typing import Any, ClassVar

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from feishu2html.models.block_type import BlockType
from feishu2html.models.text import TextBlockData, TextElement


class RawPayload(BaseModel):
    """暂不解析具体字段的 payload，原样保留。"""

    model_config = ConfigDict(extra="allow")


class CodeBlockData(TextBlockData):
    language: int | None = None


class EquationBlockData(BaseModel):
    content: str | None = None
    elements: list[TextElement] = Field(default_factory=list)


class BitableBlockData(BaseModel):
    token: str = ""
    view_type: int | str | None = None


class CalloutBlockData(BaseModel):
    background_color: int | None = None
    border_color: int | None = None
    text_color: int | None = None
    emoji_id: str | None = None
    elements: list[TextElement] | None = None


class ChatCardBlockData(BaseModel):
    chat_id: str = ""
    align: int | None = None


class DiagramBlockData(BaseModel):
    diagram_type: int | None = None
    content: str | None = None


class FileBlockData(BaseModel):
    token: str = ""
    name: str | None = None
    view_type: int | None = None


class GridBlockData(BaseModel):
    column_size: int = 1


class GridColumnBlockData(BaseModel):
    width_ratio: int = 1


class IframeComponent(BaseModel):
    iframe_type: int | None = None
    url: str = ""


class IframeBlockData(BaseModel):
    url: str | None = None
    component: IframeComponent | None = None


class ImageBlockData(BaseModel):
    token: str = ""
    width: int | None = None
    height: int | None = None
    align: int | None = None


class MergeInfo(BaseModel):
    row_span: int = 1
    col_span: int = 1


class TableProperty(BaseModel):
    row_size: int = 0
    column_size: int = 0
    column_width: list[int] | None = None
    merge_info: list[MergeInfo] | None = None
    header_row: bool | None = None
    header_column: bool | None = None


class TableBlockData(BaseModel):
    cells: list[str] | None = None
    property: TableProperty | None = None


class TableCellBlockData(BaseModel):
    elements: list[TextElement] | None = None


class BoardBlockData(BaseModel):
    token: str = ""
    width: int | None = None
    height: int | None = None
    align: int | None = None


class TokenBlockData(BaseModel):
    """Sheet / Mindnote 等只携带 token 的嵌入块。"""

    token: str = ""


class AddOnsBlockData(BaseModel):
    component_id: str | None = None
    component_type_id: str | None = None
    record: str | None = None


class LinkPreviewBlockData(BaseModel):
    url: str = ""
    url_type: str | None = None


class ReferenceSyncedBlockData(BaseModel):
    source_block_id: str | None = None
    source_document_id: str | None = None


class Block(BaseModel):
    block_id: str
    block_type: BlockType = BlockType.UNDEFINED
    parent_id: str | None = None
    children: list[str] | None = None
    comment_ids: list[str] | None = None

    payload_field: ClassVar[str | None] = None

    @field_validator("block_type", mode="before")
    @classmethod
    def _coerce_block_type(cls, value: Any) -> BlockType:
        if isinstance(value, BlockType):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return BlockType.from_code(value) or BlockType.UNDEFINED
        return BlockType.UNDEFINED

    @property
    def payload(self) -> Any:
        if self.payload_field is None:
            return None
        return getattr(self, self.payload_field, None)


class PageBlock(Block):
    payload_field: ClassVar[str | None] = "page"
    page: TextBlockData | None = None


class TextBlock(Block):
    payload_field: ClassVar[str | None] = "text"
    text: TextBlockData | None = None


class Heading1Block(Block):
    payload_field: ClassVar[str | None] = "heading1"
    heading1: TextBlockData | None = None


class Heading2Block(Block):
    payload_field: ClassVar[str | None] = "heading2"
    heading2: TextBlockData | None = None


class Heading3Block(Block):
    payload_field: ClassVar[str | None] = "heading3"
    heading3: TextBlockData | None = None


class Heading4Block(Block):
    payload_field: ClassVar[str | None] = "heading4"
    heading4: TextBlockData | None = None


class Heading5Block(Block):
    payload_field: ClassVar[str | None] = "heading5"
    heading5: TextBlockData | None = None


class Heading6Block(Block):
    payload_field: ClassVar[str | None] = "heading6"
    heading6: TextBlockData | None = None


class Heading7Block(Block):
    payload_field: ClassVar[str | None] = "heading7"
    heading7: TextBlockData | None = None


class Heading8Block(Block):
    payload_field: ClassVar[str | None] = "heading8"
    heading8: TextBlockData | None = None


class Heading9Block(Block):
    payload_field: ClassVar[str | None] = "heading9"
    heading9: TextBlockData | None = None


class BulletBlock(Block):
    payload_field: ClassVar[str | None] = "bullet"
    bullet: TextBlockData | None = None


class OrderedBlock(Block):
    payload_field: ClassVar[str | None] = "ordered"
    ordered: TextBlockData | None = None


class CodeBlock(Block):
    payload_field: ClassVar[str | None] = "code"
    code: CodeBlockData | None = None


class QuoteBlock(Block):
    payload_field: ClassVar[str | None] = "quote"
    quote: TextBlockData | None = None


class EquationBlock(Block):
    payload_field: ClassVar[str | None] = "equation"
    equation: EquationBlockData | None = None


class TodoBlock(Block):
    payload_field: ClassVar[str | None] = "todo"
    todo: TextBlockData | None = None


class BitableBlock(Block):
    payload_field: ClassVar[str | None] = "bitable"
    bitable: BitableBlockData | None = None


class CalloutBlock(Block):
    payload_field: ClassVar[str | None] = "callout"
    callout: CalloutBlockData | None = None


class ChatCardBlock(Block):
    payload_field: ClassVar[str | None] = "chat_card"
    chat_card: ChatCardBlockData | None = None


class DiagramBlock(Block):
    payload_field: ClassVar[str | None] = "diagram"
    diagram: DiagramBlockData | None = None


class DividerBlock(Block):
    payload_field: ClassVar[str | None] = "divider"
    divider: RawPayload | None = None


class FileBlock(Block):
    payload_field: ClassVar[str | None] = "file"
    file: FileBlockData | None = None


class GridBlock(Block):
    payload_field: ClassVar[str | None] = "grid"
    grid: GridBlockData | None = None


class GridColumnBlock(Block):
    payload_field: ClassVar[str | None] = "grid_column"
    grid_column: GridColumnBlockData | None = None


class IframeBlock(Block):
    payload_field: ClassVar[str | None] = "iframe"
    iframe: IframeBlockData | None = None


class ImageBlock(Block):
    payload_field: ClassVar[str | None] = "image"
    image: ImageBlockData | None = None


class IsvBlock(Block):
    payload_field: ClassVar[str | None] = "isv"
    isv: RawPayload | None = None


class MindnoteBlock(Block):
    payload_field: ClassVar[str | None] = "mindnote"
    mindnote: TokenBlockData | None = None


class SheetBlock(Block):
    payload_field: ClassVar[str | None] = "sheet"
    sheet: TokenBlockData | None = None


class TableBlock(Block):
    payload_field: ClassVar[str | None] = "table"
    table: TableBlockData | None = None


class TableCellBlock(Block):
    payload_field: ClassVar[str | None] = "table_cell"
    table_cell: TableCellBlockData | None = None


class ViewBlock(Block):
    payload_field: ClassVar[str | None] = "view"
    view: RawPayload | None = None


class QuoteContainerBlock(Block):
    payload_field: ClassVar[str | None] = "quote_container"
    quote_container: RawPayload | None = None


class TaskBlock(Block):
    payload_field: ClassVar[str | None] = "task"
    task: RawPayload | None = None


class OkrBlock(Block):
    payload_field: ClassVar[str | None] = "okr"
    okr: RawPayload | None = None


class OkrObjectiveBlock(Block):
    payload_field: ClassVar[str | None] = "okr_objective"
    okr_objective: RawPayload | None = None


class OkrKeyResultBlock(Block):
    payload_field: ClassVar[str | None] = "okr_key_result"
    okr_key_result: RawPayload | None = None


class OkrProgressBlock(Block):
    payload_field: ClassVar[str | None] = "okr_progress"
    okr_progress: RawPayload | None = None


class AddOnsBlock(Block):
    payload_field: ClassVar[str | None] = "add_ons"
    add_ons: AddOnsBlockData | None = None


class JiraIssueBlock(Block):
    payload_field: ClassVar[str | None] = "jira_issue"
    jira_issue: RawPayload | None = None


class WikiCatalogBlock(Block):
    payload_field: ClassVar[str | None] = "wiki_catalog"
    wiki_catalog: RawPayload | None = None


class BoardBlock(Block):
    payload_field: ClassVar[str | None] = "board"
    board: BoardBlockData | None = None


class AgendaBlock(Block):
    payload_field: ClassVar[str | None] = "agenda"
    agenda: RawPayload | None = None


class AgendaItemBlock(Block):
    payload_field: ClassVar[str | None] = "agenda_item"
    agenda_item: RawPayload | None = None


class AgendaItemTitleBlock(Block):
    payload_field: ClassVar[str | None] = "agenda_item_title"
    agenda_item_title: TableCellBlockData | None = None


class AgendaItemContentBlock(Block):
    payload_field: ClassVar[str | None] = "agenda_item_content"
    agenda_item_content: RawPayload | None = None


class LinkPreviewBlock(Block):
    payload_field: ClassVar[str | None] = "link_preview"
    link_preview: LinkPreviewBlockData | None = None


class SourceSyncedBlock(Block):
    payload_field: ClassVar[str | None] = "source_synced"
    source_synced: RawPayload | None = None


class ReferenceSyncedBlock(Block):
    payload_field: ClassVar[str | None] = "reference_synced"
    reference_synced: ReferenceSyncedBlockData | None = None


class SubPageListBlock(Block):
    payload_field: ClassVar[str | None] = "sub_page_list"
    sub_page_list: RawPayload | None = None


class AiTemplateBlock(Block):
    payload_field: ClassVar[str | None] = "ai_template"
    ai_template: RawPayload | None = None


class UnknownBlock(Block):
    """无法识别或解析失败的块；部分未知块实际携带引用样式的 ``quote``。"""

    quote: TextBlockData | None = None
    undefined: RawPayload | None = None


BLOCK_MODELS: dict[BlockType, type[Block]] = {
    BlockType.PAGE: PageBlock,
    BlockType.TEXT: TextBlock,
    BlockType.HEADING1: Heading1Block,
    BlockType.HEADING2: Heading2Block,
    BlockType.HEADING3: Heading3Block,
    BlockType.HEADING4: Heading4Block,
    BlockType.HEADING5: Heading5Block,
    BlockType.HEADING6: Heading6Block,
    BlockType.HEADING7: Heading7Block,
    BlockType.HEADING8: Heading8Block,
    BlockType.HEADING9: Heading9Block,
    BlockType.BULLET: BulletBlock,
    BlockType.ORDERED: OrderedBlock,
    BlockType.CODE: CodeBlock,
    BlockType.QUOTE: QuoteBlock,
    BlockType.EQUATION: EquationBlock,
    BlockType.TODO: TodoBlock,
    BlockType.BITABLE: BitableBlock,
    BlockType.CALLOUT: CalloutBlock,
    BlockType.CHAT_CARD: ChatCardBlock,
    BlockType.DIAGRAM: DiagramBlock,
    BlockType.DIVIDER: DividerBlock,
    BlockType.FILE: FileBlock,
    BlockType.GRID: GridBlock,
    BlockType.GRID_COLUMN: GridColumnBlock,
    BlockType.IFRAME: IframeBlock,
    BlockType.IMAGE: ImageBlock,
    BlockType.ISV: IsvBlock,
    BlockType.MINDNOTE: MindnoteBlock,
    BlockType.SHEET: SheetBlock,
    BlockType.TABLE: TableBlock,
    BlockType.TABLE_CELL: TableCellBlock,
    BlockType.VIEW: ViewBlock,
    BlockType.QUOTE_CONTAINER: QuoteContainerBlock,
    BlockType.TASK: TaskBlock,
    BlockType.OKR: OkrBlock,
    BlockType.OKR_OBJECTIVE: OkrObjectiveBlock,
    BlockType.OKR_KEY_RESULT: OkrKeyResultBlock,
    BlockType.OKR_PROGRESS: OkrProgressBlock,
    BlockType.ADD_ONS: AddOnsBlock,
    BlockType.JIRA_ISSUE: JiraIssueBlock,
    BlockType.WIKI_CATALOG: WikiCatalogBlock,
    BlockType.BOARD: BoardBlock,
    BlockType.AGENDA: AgendaBlock,
    BlockType.AGENDA_ITEM: AgendaItemBlock,
    BlockType.AGENDA_ITEM_TITLE: AgendaItemTitleBlock,
    BlockType.AGENDA_ITEM_CONTENT: AgendaItemContentBlock,
    BlockType.LINK_PREVIEW: LinkPreviewBlock,
    BlockType.SOURCE_SYNCED: SourceSyncedBlock,
    BlockType.REFERENCE_SYNCED: ReferenceSyncedBlock,
    BlockType.SUB_PAGE_LIST: SubPageListBlock,
    BlockType.AI_TEMPLATE: AiTemplateBlock,
    BlockType.UNDEFINED: UnknownBlock,
}

_BASE_FIELDS = ("block_id", "block_type", "parent_id", "children", "comment_ids")


def _block_type_of(payload: dict[str, Any]) -> BlockType | None:
    code = payload.get("block_type")
    if not isinstance(code, int) or isinstance(code, bool):
        return None
    return BlockType.from_code(code)


def parse_block(payload: dict[str, Any]) -> Block:
    """先读 ``block_type`` 选择模型，再用对应模型解析其余字段。"""
    block_type = _block_type_of(payload)
    model = BLOCK_MODELS.get(block_type) if block_type is not None else None
    if model is None:
        logger.debug(
            "未知 block_type={}，按 UnknownBlock 解析: {}",
            payload.get("block_type"),
            payload.get("block_id"),
        )
        model = UnknownBlock
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        if "block_id" not in payload:
            raise
        logger.warning(
            "块 {} ({}) 解析失败，降级为 UnknownBlock: {}",
            payload.get("block_id"),
            model.__name__,
            exc.error_count(),
        )
        base = {key: payload[key] for key in _BASE_FIELDS if key in payload}
        return UnknownBlock.model_validate(base)


__all__ = [
    "BLOCK_MODELS",
    "AddOnsBlock",
    "AgendaBlock",
    "AgendaItemBlock",
    "AgendaItemContentBlock",
    "AgendaItemTitleBlock",
    "AiTemplateBlock",
    "BitableBlock",
    "Block",
    "BoardBlock",
    "BulletBlock",
    "CalloutBlock",
    "ChatCardBlock",
    "CodeBlock",
    "DiagramBlock",
    "DividerBlock",
    "EquationBlock",
    "FileBlock",
    "GridBlock",
    "GridColumnBlock",
    "Heading1Block",
    "Heading2Block",
    "Heading3Block",
    "Heading4Block",
    "Heading5Block",
    "Heading6Block",
    "Heading7Block",
    "Heading8Block",
    "Heading9Block",
    "IframeBlock",
    "ImageBlock",
    "IsvBlock",
    "JiraIssueBlock",
    "LinkPreviewBlock",
    "MindnoteBlock",
    "OkrBlock",
    "OkrKeyResultBlock",
    "OkrObjectiveBlock",
    "OkrProgressBlock",
    "OrderedBlock",
    "PageBlock",
    "QuoteBlock",
    "QuoteContainerBlock",
    "ReferenceSyncedBlock",
    "SheetBlock",
    "SourceSyncedBlock",
    "SubPageListBlock",
    "TableBlock",
    "TableCellBlock",
    "TaskBlock",
    "TextBlock",
    "TodoBlock",
    "UnknownBlock",
    "ViewBlock",
    "WikiCatalogBlock",
    "parse_block",
]
