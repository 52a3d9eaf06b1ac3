from __future__ import annotations

from pydantic import BaseModel, Field


class Link(BaseModel):
    url: str = ""


class TextElementStyle(BaseModel):
    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    underline: bool = False
    inline_code: bool = False
    background_color: int | None = None
    text_color: int | None = None
    link: Link | None = None


class TextRun(BaseModel):
    content: str = ""
    text_element_style: TextElementStyle | None = None


class MentionUser(BaseModel):
    user_id: str = ""
    text_element_style: TextElementStyle | None = None


class MentionDoc(BaseModel):
    token: str = ""
    obj_type: int | None = None
    url: str = ""
    title: str | None = None
    text_element_style: TextElementStyle | None = None


class InlineEquation(BaseModel):
    content: str = ""
    text_element_style: TextElementStyle | None = None


class Reminder(BaseModel):
    create_user_id: str | None = None
    is_notify: bool | None = None
    is_whole_day: bool | None = None
    expire_time: str | int | None = None
    notify_time: str | int | None = None
    text_element_style: TextElementStyle | None = None


class InlineFile(BaseModel):
    file_token: str = ""
    source_block_id: str | None = None
    text_element_style: TextElementStyle | None = None


class UndefinedElement(BaseModel):
    content: str | None = None


class TextElement(BaseModel):
    """行内元素，同一时刻只会携带下列字段中的一个。"""

    text_run: TextRun | None = None
    mention_user: MentionUser | None = None
    mention_doc: MentionDoc | None = None
    equation: InlineEquation | None = None
    reminder: Reminder | None = None
    file: InlineFile | None = None
    undefined: UndefinedElement | None = None


class TextStyle(BaseModel):
    align: int | None = None
    done: bool | None = None
    folded: bool | None = None
    language: int | None = None
    wrap: bool | None = None
    # 有序列表序号："auto" 表示延续上一项，数字字符串表示显式编号
    sequence: str | int | None = None


class TextBlockData(BaseModel):
    elements: list[TextElement] = Field(default_factory=list)
    style: TextStyle | None = None


__all__ = [
    "InlineEquation",
    "InlineFile",
    "Link",
    "MentionDoc",
    "MentionUser",
    "Reminder",
    "TextBlockData",
    "TextElement",
    "TextElementStyle",
    "TextRun",
    "TextStyle",
    "UndefinedElement",
]
