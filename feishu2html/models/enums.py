from __future__ import annotations

from enum import Enum, IntEnum


class TextAlign(IntEnum):
    LEFT = 1
    CENTER = 2
    RIGHT = 3

    @classmethod
    def css_class(cls, code: int | None) -> str:
        if code == cls.CENTER:
            return "text-align-center"
        if code == cls.RIGHT:
            return "text-align-right"
        return ""


class BlockColor(IntEnum):
    """背景色、边框色、文字颜色共用的色板。"""

    RED = 1
    YELLOW = 2
    GREEN = 3
    BLUE = 4
    INDIGO = 5
    PURPLE = 6
    PINK = 7
    GRAY = 8

    @classmethod
    def class_name(cls, code: int | None) -> str | None:
        if code is None:
            return None
        try:
            return cls(code).name.lower()
        except ValueError:
            return None


_EMOJI = {
    "smile": "😊",
    "laugh": "😄",
    "grin": "😁",
    "wink": "😉",
    "heart_eyes": "😍",
    "sweat_smile": "😅",
    "thinking_face": "🤔",
    "joy": "😂",
    "cry": "😢",
    "sunglasses": "😎",
    "heart": "❤️",
    "fire": "🔥",
    "star": "⭐",
    "sparkles": "✨",
    "zap": "⚡",
    "thumbsup": "👍",
    "thumbsdown": "👎",
    "ok_hand": "👌",
    "clap": "👏",
    "pray": "🙏",
    "muscle": "💪",
    "wave": "👋",
    "point_right": "👉",
    "white_check_mark": "✅",
    "heavy_check_mark": "✔️",
    "x": "❌",
    "question": "❓",
    "exclamation": "❗",
    "warning": "⚠️",
    "bulb": "💡",
    "memo": "📝",
    "book": "📖",
    "books": "📚",
    "pushpin": "📌",
    "paperclip": "📎",
    "triangular_flag_on_post": "🚩",
    "rocket": "🚀",
    "bell": "🔔",
    "loudspeaker": "📢",
    "mega": "📣",
    "information_source": "ℹ️",
    "link": "🔗",
    "gift": "🎁",
    "tada": "🎉",
}


def emoji_for(emoji_id: str | None) -> str | None:
    if not emoji_id:
        return None
    return _EMOJI.get(emoji_id)


class IframeCategory(str, Enum):
    VIDEO = "video"
    DESIGN = "design"
    FEISHU = "feishu"
    GENERIC = "generic"


class IframeType(IntEnum):
    BILIBILI = 1
    AIRTABLE = 3
    YOUKU = 5
    YOUTUBE = 6
    FIGMA = 7
    MODAO = 8
    CANVA = 9
    CODEPEN = 10
    FEISHU_DOCS = 11
    FEISHU_SHEET = 12
    FEISHU_BITABLE = 15
    FEISHU_BOARD = 17
    INVISION = 18
    LANHU = 21
    PROCESSON = 24
    MODIAN = 28
    AXURE = 31
    XIAOPENG = 36
    GENERIC = 99
    UNDEFINED = 999

    @classmethod
    def from_code(cls, code: int | None) -> IframeType:
        if code is None:
            return cls.GENERIC
        try:
            return cls(code)
        except ValueError:
            return cls.UNDEFINED

    @property
    def display_name(self) -> str:
        return _IFRAME_NAMES.get(self, "Unknown")

    @property
    def category(self) -> IframeCategory:
        if self in (IframeType.BILIBILI, IframeType.YOUKU, IframeType.YOUTUBE):
            return IframeCategory.VIDEO
        if self in (
            IframeType.FIGMA,
            IframeType.MODAO,
            IframeType.CANVA,
            IframeType.INVISION,
            IframeType.LANHU,
            IframeType.AXURE,
        ):
            return IframeCategory.DESIGN
        if self in (
            IframeType.FEISHU_DOCS,
            IframeType.FEISHU_SHEET,
            IframeType.FEISHU_BITABLE,
            IframeType.FEISHU_BOARD,
        ):
            return IframeCategory.FEISHU
        return IframeCategory.GENERIC


_IFRAME_NAMES = {
    IframeType.BILIBILI: "Bilibili",
    IframeType.AIRTABLE: "Airtable",
    IframeType.YOUKU: "Youku",
    IframeType.YOUTUBE: "YouTube",
    IframeType.FIGMA: "Figma",
    IframeType.MODAO: "Modao",
    IframeType.CANVA: "Canva",
    IframeType.CODEPEN: "CodePen",
    IframeType.FEISHU_DOCS: "Feishu Docs",
    IframeType.FEISHU_SHEET: "Feishu Sheet",
    IframeType.FEISHU_BITABLE: "Feishu Bitable",
    IframeType.FEISHU_BOARD: "Feishu Board",
    IframeType.INVISION: "InVision",
    IframeType.LANHU: "Lanhu",
    IframeType.PROCESSON: "ProcessOn",
    IframeType.MODIAN: "Modian",
    IframeType.AXURE: "Axure",
    IframeType.XIAOPENG: "XPeng",
    IframeType.GENERIC: "Generic Embed",
}


# 代码块语言编号 -> highlight.js 语言名
_CODE_LANGUAGES = {
    1: "plaintext",
    2: "abap",
    3: "ada",
    4: "apache",
    5: "apex",
    6: "x86asm",
    7: "bash",
    8: "csharp",
    9: "cpp",
    10: "c",
    11: "cobol",
    12: "css",
    13: "coffeescript",
    14: "d",
    15: "dart",
    16: "delphi",
    17: "django",
    18: "dockerfile",
    19: "erlang",
    20: "fortran",
    21: "foxpro",
    22: "go",
    23: "groovy",
    24: "html",
    25: "htmlbars",
    26: "http",
    27: "haskell",
    28: "json",
    29: "java",
    30: "javascript",
    31: "julia",
    32: "kotlin",
    33: "latex",
    34: "lisp",
    35: "logo",
    36: "lua",
    37: "matlab",
    38: "makefile",
    39: "markdown",
    40: "nginx",
    41: "objectivec",
    42: "openedge",
    43: "php",
    44: "perl",
    45: "postscript",
    46: "powershell",
    47: "prolog",
    48: "protobuf",
    49: "python",
    50: "r",
    51: "rpg",
    52: "ruby",
    53: "rust",
    54: "sas",
    55: "scss",
    56: "sql",
    57: "scala",
    58: "scheme",
    59: "scratch",
    60: "shell",
    61: "swift",
    62: "thrift",
    63: "typescript",
    64: "vbscript",
    65: "vbnet",
    66: "xml",
    67: "yaml",
    68: "cmake",
    69: "diff",
    70: "gherkin",
    71: "graphql",
    72: "glsl",
    73: "properties",
    74: "solidity",
    75: "toml",
}


def code_language(code: int | None) -> str:
    if code is None:
        return "plaintext"
    return _CODE_LANGUAGES.get(code, "plaintext")


__all__ = [
    "BlockColor",
    "IframeCategory",
    "IframeType",
    "TextAlign",
    "code_language",
    "emoji_for",
]
