"""Core type definitions for Google Docs Markdown conversion."""

from dataclasses import dataclass, field
from enum import Enum


class IncompatibleElementType(Enum):
    """Document features that cannot be represented in Markdown."""

    HEADER = "header"
    FOOTER = "footer"
    FOOTNOTE = "footnote"
    POSITIONED_OBJECT = "positioned_object"
    EQUATION = "equation"
    PERSON = "person"
    RICH_LINK = "rich_link"
    MERGED_TABLE_CELL = "merged_table_cell"
    TABLE_OF_CONTENTS = "table_of_contents"
    DRAWING = "drawing"


class MarkdownElementType(Enum):
    """Block-level Markdown element kinds produced by the parser."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    BULLET_LIST_ITEM = "bullet_list_item"
    NUMBERED_LIST_ITEM = "numbered_list_item"
    TABLE = "table"
    IMAGE = "image"
    CODE_BLOCK = "code_block"
    BLOCKQUOTE = "blockquote"
    HORIZONTAL_RULE = "horizontal_rule"


@dataclass(frozen=True)
class CompatibilityIssue:
    """A reason why a document cannot round-trip through Markdown."""

    type: IncompatibleElementType
    message: str
    location: str | None = None


@dataclass
class CompatibilityResult:
    """Outcome of a compatibility check."""

    issues: list[CompatibilityIssue] = field(default_factory=list)

    @property
    def compatible(self) -> bool:
        """True when no blocking issue was found."""
        return not self.issues

    @property
    def issue_types(self) -> list[IncompatibleElementType]:
        return [issue.type for issue in self.issues]


@dataclass(frozen=True)
class InlineFormat:
    """A formatted span of the plain text produced by inline parsing.

    ``start`` and ``end`` are offsets into the stripped text in UTF-16 code
    units, end exclusive.
    """

    start: int
    end: int
    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    code: bool = False
    link: str | None = None


@dataclass(frozen=True)
class InlineParseResult:
    """Plain text plus the format spans that apply to it."""

    text: str
    formats: list[InlineFormat] = field(default_factory=list)


@dataclass(frozen=True)
class TableInsertionInfo:
    """Cell text for a table inserted empty in the first pass."""

    rows: int
    columns: int
    cell_content: list[list[str]] = field(default_factory=list)


@dataclass(frozen=True)
class RenderResult:
    """Markdown produced from a document."""

    markdown: str
