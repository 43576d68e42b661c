"""Compile Markdown into Google Docs batch-update requests.

Text is appended element by element at a running cursor that starts at
index 1, the first writable position of a document body. Every request
carries absolute indices valid at the moment it is applied, so the request
list must be executed in order as one batch. Indices count UTF-16 code
units, so characters outside the Basic Multilingual Plane take two.

Tables are inserted empty. Their cell text is returned separately as
``TableInsertionInfo`` records, to be written by a second batch once the
document has been re-fetched (see ``tables.populate_table_cells``).
"""

from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from .config import CompileOptions
from .document import (
    Color,
    Dimension,
    Link,
    OptionalColor,
    ParagraphStyle,
    RgbColor,
    TextStyle,
    WeightedFontFamily,
)
from .parser import (
    Blockquote,
    BulletListItem,
    CodeBlock,
    Heading,
    HorizontalRule,
    Image,
    MarkdownElement,
    NumberedListItem,
    Paragraph,
    Table,
    parse_inline_formatting,
    parse_markdown,
    utf16_len,
)
from .requests import (
    CreateParagraphBulletsRequest,
    DeleteContentRangeRequest,
    EditOperation,
    EditRequest,
    InsertInlineImageRequest,
    InsertTableRequest,
    InsertTextRequest,
    Location,
    Range,
    Size,
    UpdateParagraphStyleRequest,
    UpdateTextStyleRequest,
    requests_to_api,
)
from .types import InlineFormat, InlineParseResult, TableInsertionInfo

BULLET_PRESET = "BULLET_DISC_CIRCLE_SQUARE"
NUMBERED_PRESET = "NUMBERED_DECIMAL_ALPHA_ROMAN"
CODE_FONT_FAMILY = "Courier New"
HORIZONTAL_RULE_CHAR = "─"
FIRST_BODY_INDEX = 1


@dataclass
class CompileResult:
    """Requests for the first batch plus the tables to fill in a second one."""

    requests: list[EditOperation] = field(default_factory=list)
    tables: list[TableInsertionInfo] = field(default_factory=list)

    def to_api(self) -> list[dict[str, Any]]:
        """First-batch requests in ``documents.batchUpdate`` JSON form."""
        return requests_to_api(self.requests)


def table_footprint(rows: int, columns: int) -> int:
    """Index positions taken by an empty table and the newline inserted before it.

    The table itself uses one index, each row one more, and each cell two
    (the cell start and its empty paragraph).
    """
    return 1 + 1 + rows * (1 + 2 * columns)


def _text_range(start: int, end: int) -> Range:
    return Range(start_index=start, end_index=end)


def _insert_text(index: int, text: str) -> InsertTextRequest:
    return InsertTextRequest(location=Location(index=index), text=text)


def _format_requests(fmt: InlineFormat, base_index: int) -> list[EditRequest]:
    """One updateTextStyle request per flag set on an inline span."""
    text_range = _text_range(base_index + fmt.start, base_index + fmt.end)
    styles: list[tuple[TextStyle, str]] = []

    if fmt.bold:
        styles.append((TextStyle(bold=True), "bold"))
    if fmt.italic:
        styles.append((TextStyle(italic=True), "italic"))
    if fmt.strikethrough:
        styles.append((TextStyle(strikethrough=True), "strikethrough"))
    if fmt.code:
        styles.append(
            (TextStyle(weighted_font_family=WeightedFontFamily(font_family=CODE_FONT_FAMILY)), "weightedFontFamily")
        )
    if fmt.link:
        styles.append((TextStyle(link=Link(url=fmt.link)), "link"))

    return [UpdateTextStyleRequest(range=text_range, text_style=style, fields=fields) for style, fields in styles]


def _formatted_paragraph(parsed: InlineParseResult, cursor: int) -> tuple[list[EditRequest], list[EditRequest], int]:
    """Insert a paragraph of stripped text; return (insert, text styles, new cursor)."""
    full_text = parsed.text + "\n"
    styles: list[EditRequest] = []
    for fmt in parsed.formats:
        styles.extend(_format_requests(fmt, cursor))
    return [_insert_text(cursor, full_text)], styles, cursor + utf16_len(full_text)


class MarkdownToDoc:
    """Converts Markdown into Google Docs batch-update requests.

    Conversion is a pure function of (markdown, options, end index): the
    cursor is threaded through the element loop and nothing is kept on the
    instance between calls.
    """

    def convert(
        self,
        markdown: str,
        options: CompileOptions | None = None,
        document_end_index: int = 1,
    ) -> CompileResult:
        """Convert Markdown to edit requests.

        Args:
            markdown: Markdown source text.
            options: Compilation options; ``full_replace`` deletes the
                existing body first.
            document_end_index: End index of the document's last body element.

        Returns:
            CompileResult with ordered requests and table records for the
            second pass, in the order the tables appear in the Markdown.
        """
        options = options or CompileOptions()
        result = CompileResult()

        # Keep the final newline every document retains
        if options.full_replace and document_end_index > 2:
            result.requests.append(
                DeleteContentRangeRequest(range=_text_range(FIRST_BODY_INDEX, document_end_index - 1))
            )

        cursor = FIRST_BODY_INDEX
        for element in parse_markdown(markdown):
            requests, cursor, table = self._compile_element(element, cursor, options)
            result.requests.extend(requests)
            if table is not None:
                result.tables.append(table)

        logger.debug(
            f"Compiled markdown into {len(result.requests)} requests and {len(result.tables)} tables "
            f"(final index {cursor})"
        )
        return result

    def _compile_element(
        self, element: MarkdownElement, cursor: int, options: CompileOptions
    ) -> tuple[list[EditRequest], int, TableInsertionInfo | None]:
        """Return the requests for one element, the advanced cursor and any table record."""
        if isinstance(element, Heading):
            inserts, styles, end = _formatted_paragraph(parse_inline_formatting(element.content), cursor)
            heading_style = UpdateParagraphStyleRequest(
                range=_text_range(cursor, end),
                paragraph_style=ParagraphStyle(named_style_type=f"HEADING_{element.level}"),
                fields="namedStyleType",
            )
            return [*inserts, heading_style, *styles], end, None

        if isinstance(element, Paragraph):
            inserts, styles, end = _formatted_paragraph(parse_inline_formatting(element.content), cursor)
            return [*inserts, *styles], end, None

        if isinstance(element, BulletListItem | NumberedListItem):
            inserts, styles, end = _formatted_paragraph(parse_inline_formatting(element.content), cursor)
            preset = NUMBERED_PRESET if isinstance(element, NumberedListItem) else BULLET_PRESET
            bullets = CreateParagraphBulletsRequest(range=_text_range(cursor, end), bullet_preset=preset)
            return [*inserts, bullets, *styles], end, None

        if isinstance(element, Image):
            image = InsertInlineImageRequest(
                location=Location(index=cursor),
                uri=element.image_url,
                object_size=Size(
                    height=Dimension(magnitude=options.image_height_pt, unit="PT"),
                    width=Dimension(magnitude=options.image_width_pt, unit="PT"),
                ),
            )
            # An inline image occupies a single index
            return [image], cursor + 1, None

        if isinstance(element, HorizontalRule):
            return self._horizontal_rule(cursor, options)

        if isinstance(element, CodeBlock | Blockquote):
            text = element.content + "\n"
            return [_insert_text(cursor, text)], cursor + utf16_len(text), None

        if isinstance(element, Table):
            return self._table(element, cursor)

        return [], cursor, None

    def _horizontal_rule(
        self, cursor: int, options: CompileOptions
    ) -> tuple[list[EditRequest], int, TableInsertionInfo | None]:
        """Docs has no rule primitive; draw a centred grey line of box-drawing dashes."""
        width = options.horizontal_rule_width
        text = HORIZONTAL_RULE_CHAR * width + "\n"
        end = cursor + utf16_len(text)
        gray = options.horizontal_rule_gray

        requests: list[EditRequest] = [
            _insert_text(cursor, text),
            UpdateParagraphStyleRequest(
                range=_text_range(cursor, end),
                paragraph_style=ParagraphStyle(alignment="CENTER"),
                fields="alignment",
            ),
            UpdateTextStyleRequest(
                range=_text_range(cursor, cursor + width),
                text_style=TextStyle(
                    foreground_color=OptionalColor(color=Color(rgb_color=RgbColor(red=gray, green=gray, blue=gray)))
                ),
                fields="foregroundColor",
            ),
        ]
        return requests, end, None

    def _table(self, table: Table, cursor: int) -> tuple[list[EditRequest], int, TableInsertionInfo | None]:
        if table.rows == 0 or table.columns == 0:
            return [], cursor, None

        insert = InsertTableRequest(location=Location(index=cursor), rows=table.rows, columns=table.columns)
        info = TableInsertionInfo(
            rows=table.rows,
            columns=table.columns,
            cell_content=[list(row) for row in table.table_rows],
        )
        return [insert], cursor + table_footprint(table.rows, table.columns), info


def markdown_to_requests(
    markdown: str, full_replace: bool = False, document_end_index: int = 1
) -> CompileResult:
    """Compile Markdown with default options."""
    return MarkdownToDoc().convert(markdown, CompileOptions(full_replace=full_replace), document_end_index)
