from .block_type import BlockType
from .blocks import BLOCK_MODELS, Block, UnknownBlock, parse_block
from .document import DocumentMeta, DocumentRawContent
from .node import BlockNode
from .text import TextBlockData, TextElement, TextElementStyle, TextRun, TextStyle

__all__ = [
    "BLOCK_MODELS",
    "Block",
    "BlockNode",
    "BlockType",
    "DocumentMeta",
    "DocumentRawContent",
    "TextBlockData",
    "TextElement",
    "TextElementStyle",
    "TextRun",
    "TextStyle",
    "UnknownBlock",
    "parse_block",
]
