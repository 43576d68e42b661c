"""Render a Google Docs document as Markdown.

The renderer assumes the document already passed the compatibility check.
Anything it cannot express is dropped silently rather than raising, so a
partially compatible document still renders what it can.
"""

import re
from collections.abc import Mapping
from typing import Any

from loguru import logger

from .config import RenderOptions
from .document import (
    HorizontalRuleElement,
    InlineObject,
    InlineObjectElement,
    Paragraph,
    ParagraphBlock,
    ParagraphItem,
    SectionBreakBlock,
    StructuralElement,
    StructuredDocument,
    Table,
    TableBlock,
    TableCell,
    TextRun,
    TextRunElement,
    as_document,
)
from .types import RenderResult

MONOSPACE_FONTS = {"Courier New", "Consolas"}
NUMBERED_GLYPH_HINTS = ("DECIMAL", "ALPHA", "ROMAN")

_HEADING_STYLE = re.compile(r"^HEADING_(\d+)$")
_EXCESS_NEWLINES = re.compile(r"\n{3,}")


def is_monospace(font_family: str | None) -> bool:
    """Return True for font families rendered as inline code."""
    if not font_family:
        return False
    return font_family in MONOSPACE_FONTS or "mono" in font_family.lower()


def is_numbered_list(paragraph: Paragraph) -> bool:
    """Guess whether a list paragraph is numbered.

    The real glyph type lives in the document's list definitions, which are
    not consulted here; only the bullet's text style is inspected, and
    anything unrecognised counts as a plain bullet.
    """
    if paragraph.bullet is None or paragraph.bullet.text_style is None:
        return False
    hint = str(paragraph.bullet.text_style)
    return any(marker in hint for marker in NUMBERED_GLYPH_HINTS)


def render_text_run(text_run: TextRun) -> str:
    """Render a text run with inline Markdown formatting.

    Whitespace-only runs are returned unchanged so spacing between sibling
    runs survives. Formatting wraps the trimmed text and the surrounding
    space or newline is restored afterwards.
    """
    text = text_run.content
    style = text_run.text_style

    ends_with_newline = text.endswith("\n")
    starts_with_space = text.startswith(" ")
    ends_with_space = text.endswith(" ") or ends_with_newline

    trimmed = text.strip()
    if not trimmed:
        return text

    if style.link_url:
        trimmed = f"[{trimmed}]({style.link_url})"

    if is_monospace(style.font_family):
        trimmed = f"`{trimmed}`"
    else:
        if style.bold:
            trimmed = f"**{trimmed}**"
        if style.italic:
            trimmed = f"*{trimmed}*"
        if style.strikethrough:
            trimmed = f"~~{trimmed}~~"

    result = trimmed
    if starts_with_space:
        result = " " + result
    if ends_with_newline:
        result += "\n"
    elif ends_with_space:
        result += " "
    return result


def render_table_cell(cell: TableCell) -> str:
    """Flatten a cell's text onto one line; empty cells become a single space."""
    parts: list[str] = []
    for element in cell.content:
        if not isinstance(element, ParagraphBlock):
            continue
        for item in element.paragraph.elements:
            if isinstance(item, TextRunElement) and item.text_run.content:
                parts.append(item.text_run.content.replace("\n", " "))
    text = "".join(parts).strip().replace("|", "\\|")
    return text or " "


def add_line_numbers(markdown: str) -> str:
    """Prefix each line with its right-aligned 1-based number and a tab."""
    lines = markdown.split("\n")
    width = len(str(len(lines)))
    return "\n".join(f"{number:>{width}}\t{line}" for number, line in enumerate(lines, start=1))


class _RenderRun:
    """State for one conversion: inline object lookup and list counters."""

    def __init__(self, document: StructuredDocument) -> None:
        self.inline_objects: dict[str, InlineObject] = document.inline_objects
        self.list_counters: dict[str, int] = {}

    def render_structural_element(self, element: StructuralElement, position: int) -> str:
        """Render one body element.

        Section breaks render as ``---`` except the implicit one that opens
        every body (position 0, no start index, end index 1). That one is
        deliberately dropped so Markdown written into a document and read
        back does not gain a leading rule.
        """
        if isinstance(element, ParagraphBlock):
            return self.render_paragraph(element.paragraph)
        if isinstance(element, TableBlock):
            return self.render_table(element.table)
        if isinstance(element, SectionBreakBlock):
            if position == 0 and element.start_index is None and element.end_index == 1:
                return ""
            return "\n---\n\n"
        return ""

    def render_paragraph(self, paragraph: Paragraph) -> str:
        text = "".join(self.render_paragraph_element(item) for item in paragraph.elements)
        stripped = text.strip()
        style_type = paragraph.named_style_type or ""

        heading = _HEADING_STYLE.match(style_type)
        if heading:
            level = min(max(int(heading.group(1)), 1), 6)
            return f"{'#' * level} {stripped}\n\n" if stripped else ""

        if style_type == "TITLE":
            return f"# {stripped}\n\n" if stripped else ""

        if style_type == "SUBTITLE":
            return f"## {stripped}\n\n" if stripped else ""

        if paragraph.bullet is not None:
            nesting_level = paragraph.bullet.nesting_level or 0
            indent = "  " * nesting_level

            if is_numbered_list(paragraph):
                counter_key = f"{paragraph.bullet.list_id or 'default'}-{nesting_level}"
                counter = self.list_counters.get(counter_key, 0) + 1
                self.list_counters[counter_key] = counter
                return f"{indent}{counter}. {stripped}\n" if stripped else ""

            return f"{indent}- {stripped}\n" if stripped else ""

        if stripped:
            return f"{stripped}\n\n"
        return "\n"

    def render_paragraph_element(self, item: ParagraphItem) -> str:
        if isinstance(item, TextRunElement):
            return render_text_run(item.text_run)
        if isinstance(item, InlineObjectElement):
            return self.render_inline_object(item.inline_object_element.inline_object_id or "")
        if isinstance(item, HorizontalRuleElement):
            return "\n---\n"
        # Page and column breaks
        return ""

    def render_inline_object(self, object_id: str) -> str:
        inline_object = self.inline_objects.get(object_id)
        if inline_object is None:
            logger.warning(f"Inline object {object_id!r} not found, skipping")
            return ""

        embedded = inline_object.embedded_object
        if embedded is None or embedded.image_properties is None:
            return ""

        image = embedded.image_properties
        uri = image.source_uri or image.content_uri
        if not uri:
            return ""

        alt = embedded.description or embedded.title or "image"
        return f"![{alt}]({uri})"

    def render_table(self, table: Table) -> str:
        rows = [[render_table_cell(cell) for cell in row.table_cells] for row in table.table_rows]
        if not rows:
            return ""

        columns = max(len(row) for row in rows)
        if columns == 0:
            return ""
        rows = [row + [" "] * (columns - len(row)) for row in rows]

        lines = ["| " + " | ".join(rows[0]) + " |", "|" + "|".join(["---"] * columns) + "|"]
        lines.extend("| " + " | ".join(row) + " |" for row in rows[1:])
        return "\n" + "\n".join(lines) + "\n\n"


class DocToMarkdown:
    """Converts a Google Docs document into Markdown text.

    Every call to ``convert`` works on fresh list counters, so numbering
    never leaks from one document into the next.
    """

    def convert(
        self,
        document: StructuredDocument | Mapping[str, Any],
        options: RenderOptions | None = None,
    ) -> RenderResult:
        """Convert a document to Markdown.

        Args:
            document: Validated document or the raw ``documents.get`` payload.
            options: Rendering options; defaults come from settings.

        Returns:
            RenderResult holding the Markdown string.
        """
        options = options or RenderOptions()
        doc = as_document(document)

        if not doc.content:
            return RenderResult(markdown="")

        run = _RenderRun(doc)
        markdown = "".join(
            run.render_structural_element(element, position) for position, element in enumerate(doc.content)
        )

        markdown = _EXCESS_NEWLINES.sub("\n\n", markdown).strip()

        if options.include_line_numbers:
            markdown = add_line_numbers(markdown)

        logger.debug(f"Rendered {len(doc.content)} elements to {len(markdown)} characters of markdown")
        return RenderResult(markdown=markdown)


def document_to_markdown(
    document: StructuredDocument | Mapping[str, Any], include_line_numbers: bool = False
) -> str:
    """Render a document and return just the Markdown string."""
    options = RenderOptions(include_line_numbers=include_line_numbers)
    return DocToMarkdown().convert(document, options).markdown
