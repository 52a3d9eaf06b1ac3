from __future__ import annotations

from enum import IntEnum


class BlockType(IntEnum):
    """docx block 类型，取值与接口返回的 ``block_type`` 一致。"""

    PAGE = 1
    TEXT = 2
    HEADING1 = 3
    HEADING2 = 4
    HEADING3 = 5
    HEADING4 = 6
    HEADING5 = 7
    HEADING6 = 8
    HEADING7 = 9
    HEADING8 = 10
    HEADING9 = 11
    BULLET = 12
    ORDERED = 13
    CODE = 14
    QUOTE = 15
    EQUATION = 16
    TODO = 17
    BITABLE = 18
    CALLOUT = 19
    CHAT_CARD = 20
    DIAGRAM = 21
    DIVIDER = 22
    FILE = 23
    GRID = 24
    GRID_COLUMN = 25
    IFRAME = 26
    IMAGE = 27
    ISV = 28
    MINDNOTE = 29
    SHEET = 30
    TABLE = 31
    TABLE_CELL = 32
    VIEW = 33
    QUOTE_CONTAINER = 34
    TASK = 35
    OKR = 36
    OKR_OBJECTIVE = 37
    OKR_KEY_RESULT = 38
    OKR_PROGRESS = 39
    ADD_ONS = 40
    JIRA_ISSUE = 41
    WIKI_CATALOG = 42  # 旧版 Wiki 子页面列表
    BOARD = 43
    AGENDA = 44
    AGENDA_ITEM = 45
    AGENDA_ITEM_TITLE = 46
    AGENDA_ITEM_CONTENT = 47
    LINK_PREVIEW = 48
    SOURCE_SYNCED = 49
    REFERENCE_SYNCED = 50
    SUB_PAGE_LIST = 51  # 新版 Wiki 子页面列表
    AI_TEMPLATE = 52
    UNDEFINED = 999

    @property
    def type_code(self) -> int:
        return int(self.value)

    @classmethod
    def from_code(cls, code: int) -> BlockType | None:
        """Exact lookup; ``None`` for codes the platform has not defined."""
        return _BY_CODE.get(code)

    @classmethod
    def heading_level(cls, block_type: BlockType | int) -> int | None:
        value = int(block_type)
        if cls.HEADING1 <= value <= cls.HEADING9:
            return value - cls.HEADING1 + 1
        return None


_BY_CODE: dict[int, BlockType] = {member.value: member for member in BlockType}


__all__ = ["BlockType"]
