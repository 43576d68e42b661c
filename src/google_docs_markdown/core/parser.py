"""Line-oriented Markdown parser.

``parse_markdown`` turns Markdown text into a flat list of block elements in
reading order; ``parse_inline_formatting`` strips inline markup from a line
and records where each format applies in the stripped text. Neither raises:
anything unrecognised is kept as literal text.
"""

import re
from dataclasses import dataclass, field
from typing import ClassVar

from loguru import logger

from .types import InlineFormat, InlineParseResult, MarkdownElementType

# ===== Block elements =====


@dataclass(frozen=True)
class Heading:
    type: ClassVar[MarkdownElementType] = MarkdownElementType.HEADING

    level: int
    content: str


@dataclass(frozen=True)
class Paragraph:
    type: ClassVar[MarkdownElementType] = MarkdownElementType.PARAGRAPH

    content: str


@dataclass(frozen=True)
class BulletListItem:
    type: ClassVar[MarkdownElementType] = MarkdownElementType.BULLET_LIST_ITEM

    content: str
    indent: int = 0


@dataclass(frozen=True)
class NumberedListItem:
    type: ClassVar[MarkdownElementType] = MarkdownElementType.NUMBERED_LIST_ITEM

    content: str
    indent: int = 0


@dataclass(frozen=True)
class Table:
    type: ClassVar[MarkdownElementType] = MarkdownElementType.TABLE

    table_rows: list[list[str]] = field(default_factory=list)

    @property
    def rows(self) -> int:
        return len(self.table_rows)

    @property
    def columns(self) -> int:
        return len(self.table_rows[0]) if self.table_rows else 0


@dataclass(frozen=True)
class Image:
    type: ClassVar[MarkdownElementType] = MarkdownElementType.IMAGE

    image_alt: str
    image_url: str


@dataclass(frozen=True)
class CodeBlock:
    type: ClassVar[MarkdownElementType] = MarkdownElementType.CODE_BLOCK

    content: str


@dataclass(frozen=True)
class Blockquote:
    type: ClassVar[MarkdownElementType] = MarkdownElementType.BLOCKQUOTE

    content: str


@dataclass(frozen=True)
class HorizontalRule:
    type: ClassVar[MarkdownElementType] = MarkdownElementType.HORIZONTAL_RULE


MarkdownElement = (
    Heading | Paragraph | BulletListItem | NumberedListItem | Table | Image | CodeBlock | Blockquote | HorizontalRule
)


_FENCE = re.compile(r"^```[\w+-]*\s*$")
_TABLE_SEPARATOR = re.compile(r"^\|?\s*:?-+:?\s*(\|\s*:?-+:?\s*)*\|?$")
_HEADING = re.compile(r"^(#{1,6})\s+(.+)$")
_HORIZONTAL_RULE = re.compile(r"^(-{3,}|\*{3,}|_{3,})$")
_IMAGE = re.compile(r"^!\[([^\]]*)\]\(([^)\s]+)\)$")
_BLOCKQUOTE = re.compile(r"^> ?(.*)$")
_BULLET = re.compile(r"^( *)[-*]\s+(.+)$")
_NUMBERED = re.compile(r"^( *)\d+\.\s+(.+)$")
_UNESCAPED_PIPE = re.compile(r"(?<!\\)\|")


def _is_table_row(line: str) -> bool:
    return line.strip().startswith("|")


def _split_table_row(line: str) -> list[str]:
    """Split a pipe-delimited row into trimmed cell texts."""
    stripped = line.strip()
    if stripped.startswith("|"):
        stripped = stripped[1:]
    if stripped.endswith("|") and not stripped.endswith("\\|"):
        stripped = stripped[:-1]
    return [cell.strip().replace("\\|", "|") for cell in _UNESCAPED_PIPE.split(stripped)]


def _starts_table(lines: list[str], i: int) -> bool:
    """A table is a pipe row immediately followed by a |---|---| separator."""
    return (
        i + 1 < len(lines)
        and _is_table_row(lines[i])
        and "|" in lines[i + 1]
        and _TABLE_SEPARATOR.match(lines[i + 1].strip()) is not None
    )


def _parse_table(lines: list[str], i: int) -> tuple[Table, int]:
    header = _split_table_row(lines[i])
    columns = len(header)
    rows = [header]

    i += 2  # header and separator
    while i < len(lines) and lines[i].strip() and _is_table_row(lines[i]):
        cells = _split_table_row(lines[i])
        # Keep the grid rectangular at the header's width
        rows.append((cells + [""] * columns)[:columns])
        i += 1

    return Table(table_rows=rows), i


def _parse_code_block(lines: list[str], i: int) -> tuple[CodeBlock, int]:
    code_lines: list[str] = []
    i += 1  # opening fence
    while i < len(lines) and lines[i].strip() != "```":
        code_lines.append(lines[i])
        i += 1

    if i >= len(lines):
        logger.warning("Unterminated code fence, treating the rest of the input as code")
    else:
        i += 1  # closing fence

    return CodeBlock(content="\n".join(code_lines)), i


def _parse_line(line: str) -> MarkdownElement | None:
    """Classify a single line; None for blank lines."""
    stripped = line.strip()
    if not stripped:
        return None

    heading = _HEADING.match(line)
    if heading:
        return Heading(level=len(heading.group(1)), content=heading.group(2).strip())

    if _HORIZONTAL_RULE.match(stripped):
        return HorizontalRule()

    image = _IMAGE.match(stripped)
    if image:
        return Image(image_alt=image.group(1), image_url=image.group(2))

    quote = _BLOCKQUOTE.match(line)
    if quote:
        return Blockquote(content=quote.group(1).strip())

    bullet = _BULLET.match(line)
    if bullet:
        return BulletListItem(content=bullet.group(2).strip(), indent=len(bullet.group(1)) // 2)

    numbered = _NUMBERED.match(line)
    if numbered:
        return NumberedListItem(content=numbered.group(2).strip(), indent=len(numbered.group(1)) // 2)

    return Paragraph(content=stripped)


def parse_markdown(markdown: str) -> list[MarkdownElement]:
    """Parse Markdown text into block elements in reading order.

    Args:
        markdown: Markdown source text.

    Returns:
        Ordered list of block elements. Blank lines produce nothing.
    """
    elements: list[MarkdownElement] = []
    lines = markdown.replace("\r\n", "\n").split("\n")
    i = 0

    while i < len(lines):
        line = lines[i]

        if _FENCE.match(line.strip()):
            code_block, i = _parse_code_block(lines, i)
            elements.append(code_block)
            continue

        if _starts_table(lines, i):
            table, i = _parse_table(lines, i)
            elements.append(table)
            continue

        element = _parse_line(line)
        if element is not None:
            elements.append(element)
        i += 1

    logger.debug(f"Parsed {len(lines)} markdown lines into {len(elements)} elements")
    return elements


# ===== Inline formatting =====


def utf16_len(text: str) -> int:
    """Length in UTF-16 code units, the unit of Google Docs indices."""
    return len(text.encode("utf-16-le")) // 2


# Tried in order at every position; the first match wins
_INLINE_PATTERNS: list[tuple[re.Pattern[str], dict[str, bool]]] = [
    (re.compile(r"\*\*\*(?![\s*])(.+?)(?<![\s*])\*\*\*"), {"bold": True, "italic": True}),
    (re.compile(r"\*\*(?![\s*])(.+?)(?<!\s)\*\*"), {"bold": True}),
    (re.compile(r"(?<!\w)__(?![\s_])(.+?)(?<![\s_])__(?!\w)"), {"bold": True}),
    (re.compile(r"~~(?![\s~])(.+?)(?<![\s~])~~"), {"strikethrough": True}),
    (re.compile(r"\*(?![\s*])(.+?)(?<![\s*])\*(?!\*)"), {"italic": True}),
    (re.compile(r"(?<!\w)_(?![\s_])(.+?)(?<![\s_])_(?!\w)"), {"italic": True}),
]
_CODE = re.compile(r"`([^`]+)`")
_LINK = re.compile(r"\[([^\]]+)\]\(([^)\s]+)\)")
_ESCAPABLE = set("\\`*_~[]()#|!")


@dataclass
class _InlineScan:
    """Accumulates stripped text and spans while scanning one run of markup."""

    parts: list[str] = field(default_factory=list)
    formats: list[InlineFormat] = field(default_factory=list)
    length: int = 0

    def add_text(self, text: str) -> None:
        self.parts.append(text)
        self.length += utf16_len(text)

    def add_span(self, inner: InlineParseResult, **flags) -> None:
        start = self.length
        self.formats.append(InlineFormat(start=start, end=start + utf16_len(inner.text), **flags))
        for nested in inner.formats:
            self.formats.append(
                InlineFormat(
                    start=start + nested.start,
                    end=start + nested.end,
                    bold=nested.bold,
                    italic=nested.italic,
                    strikethrough=nested.strikethrough,
                    code=nested.code,
                    link=nested.link,
                )
            )
        self.add_text(inner.text)


def parse_inline_formatting(text: str) -> InlineParseResult:
    """Strip inline Markdown and record formatted spans.

    Supports ``**bold**``, ``__bold__``, ``*italic*``, ``_italic_``,
    ``***bold italic***``, ``~~strikethrough~~``, ```code``` and
    ``[text](url)``. Spans may nest; code spans are literal. Offsets refer
    to the returned plain text, counted in UTF-16 code units like document
    indices, so several formats on one line compose.

    Examples:
        >>> result = parse_inline_formatting("Hello **world**!")
        >>> result.text
        'Hello world!'
        >>> (result.formats[0].start, result.formats[0].end)
        (6, 11)
    """
    scan = _InlineScan()
    pending: list[str] = []
    i = 0

    def flush() -> None:
        if pending:
            scan.add_text("".join(pending))
            pending.clear()

    while i < len(text):
        char = text[i]

        if char == "\\" and i + 1 < len(text) and text[i + 1] in _ESCAPABLE:
            pending.append(text[i + 1])
            i += 2
            continue

        if char == "`":
            code = _CODE.match(text, i)
            if code:
                flush()
                scan.add_span(InlineParseResult(text=code.group(1)), code=True)
                i = code.end()
                continue

        if char == "[":
            link = _LINK.match(text, i)
            if link:
                flush()
                scan.add_span(parse_inline_formatting(link.group(1)), link=link.group(2))
                i = link.end()
                continue

        if char in "*_~":
            for pattern, flags in _INLINE_PATTERNS:
                match = pattern.match(text, i)
                if match:
                    flush()
                    scan.add_span(parse_inline_formatting(match.group(1)), **flags)
                    i = match.end()
                    break
            else:
                pending.append(char)
                i += 1
            continue

        pending.append(char)
        i += 1

    flush()
    return InlineParseResult(text="".join(scan.parts), formats=scan.formats)
