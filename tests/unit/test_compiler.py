"""Tests for compiling Markdown into batch-update requests."""

import pytest

from google_docs_markdown.core.compiler import (
    BULLET_PRESET,
    NUMBERED_PRESET,
    MarkdownToDoc,
    markdown_to_requests,
    table_footprint,
)
from google_docs_markdown.core.config import CompileOptions
from google_docs_markdown.core.requests import InsertTextRequest
from google_docs_markdown.core.types import TableInsertionInfo


@pytest.fixture
def compiler():
    """Create a compiler instance."""
    return MarkdownToDoc()


def compile_api(compiler, markdown, **options):
    return compiler.convert(markdown, CompileOptions(**options)).to_api()


def insert(index, text):
    return {"insertText": {"location": {"index": index}, "text": text}}


def text_style(start, end, style, fields):
    return {"updateTextStyle": {"range": {"startIndex": start, "endIndex": end}, "textStyle": style, "fields": fields}}


def utf16_len(text):
    return len(text.encode("utf-16-le")) // 2


@pytest.mark.unit
class TestTextElements:
    """Tests for paragraphs, headings and inline styles."""

    def test_empty_markdown(self, compiler):
        """Test that empty input produces no requests."""
        result = compiler.convert("")
        assert result.requests == []
        assert result.tables == []

    def test_paragraphs_advance_cursor(self, compiler):
        """Test that each insert starts where the previous one ended."""
        assert compile_api(compiler, "a\n\nbc") == [insert(1, "a\n"), insert(3, "bc\n")]

    def test_bold(self, compiler):
        """Test that markers are stripped and the span styled."""
        assert compile_api(compiler, "Hello **world**!") == [
            insert(1, "Hello world!\n"),
            text_style(7, 12, {"bold": True}, "bold"),
        ]

    @pytest.mark.parametrize(
        ("markdown", "style", "fields"),
        [
            ("*x*", {"italic": True}, "italic"),
            ("~~x~~", {"strikethrough": True}, "strikethrough"),
            ("`x`", {"weightedFontFamily": {"fontFamily": "Courier New"}}, "weightedFontFamily"),
            ("[x](https://example.com)", {"link": {"url": "https://example.com"}}, "link"),
        ],
    )
    def test_inline_styles(self, compiler, markdown, style, fields):
        """Test the text style emitted for each inline format."""
        assert compile_api(compiler, markdown) == [insert(1, "x\n"), text_style(1, 2, style, fields)]

    def test_one_request_per_flag(self, compiler):
        """Test that bold italic gives two style requests over the same range."""
        requests = compile_api(compiler, "***x***")
        assert requests[1:] == [
            text_style(1, 2, {"bold": True}, "bold"),
            text_style(1, 2, {"italic": True}, "italic"),
        ]

    def test_heading(self, compiler):
        """Test insert, named style, then inline styles."""
        assert compile_api(compiler, "## Title **x**") == [
            insert(1, "Title x\n"),
            {
                "updateParagraphStyle": {
                    "range": {"startIndex": 1, "endIndex": 9},
                    "paragraphStyle": {"namedStyleType": "HEADING_2"},
                    "fields": "namedStyleType",
                }
            },
            text_style(7, 8, {"bold": True}, "bold"),
        ]

    def test_styles_after_astral_character(self, compiler):
        """Test that an emoji shifts later indices by two UTF-16 units."""
        assert compile_api(compiler, "😀 **bold**\nnext") == [
            insert(1, "😀 bold\n"),
            text_style(4, 8, {"bold": True}, "bold"),
            insert(9, "next\n"),
        ]

    def test_code_block_is_plain_text(self, compiler):
        """Test that code block content is inserted verbatim without styling."""
        assert compile_api(compiler, "```\n**not bold**\nline 2\n```") == [insert(1, "**not bold**\nline 2\n")]

    def test_blockquote_is_plain_text(self, compiler):
        """Test that blockquotes lose the marker and are not styled."""
        assert compile_api(compiler, "> wise words") == [insert(1, "wise words\n")]


@pytest.mark.unit
class TestLists:
    """Tests for bullet and numbered list items."""

    def test_bullet(self, compiler):
        """Test that bullets get the disc preset over the inserted paragraph."""
        assert compile_api(compiler, "- item") == [
            insert(1, "item\n"),
            {
                "createParagraphBullets": {
                    "range": {"startIndex": 1, "endIndex": 6},
                    "bulletPreset": BULLET_PRESET,
                }
            },
        ]

    def test_numbered(self, compiler):
        """Test that numbered items get the decimal preset."""
        requests = compile_api(compiler, "1. first")
        assert requests[1]["createParagraphBullets"]["bulletPreset"] == NUMBERED_PRESET

    def test_list_item_formatting_after_bullets(self, compiler):
        """Test the insert, bullets, styles ordering for list items."""
        requests = compile_api(compiler, "- **b**")
        assert [next(iter(r)) for r in requests] == ["insertText", "createParagraphBullets", "updateTextStyle"]


@pytest.mark.unit
class TestImagesAndRules:
    """Tests for inline images and horizontal rules."""

    def test_image(self, compiler):
        """Test the fixed image size and the single index it takes."""
        assert compile_api(compiler, "![cat](https://example.com/cat.png)\nafter") == [
            {
                "insertInlineImage": {
                    "location": {"index": 1},
                    "uri": "https://example.com/cat.png",
                    "objectSize": {
                        "height": {"magnitude": 200, "unit": "PT"},
                        "width": {"magnitude": 300, "unit": "PT"},
                    },
                }
            },
            insert(2, "after\n"),
        ]

    def test_image_size_from_options(self, compiler):
        """Test that image size follows the options."""
        requests = compile_api(compiler, "![x](https://example.com/x.png)", image_width_pt=100, image_height_pt=50)
        size = requests[0]["insertInlineImage"]["objectSize"]
        assert size["width"]["magnitude"] == 100
        assert size["height"]["magnitude"] == 50

    def test_horizontal_rule(self, compiler):
        """Test the centred grey dash line standing in for a rule."""
        requests = compile_api(compiler, "---\nafter")
        assert requests[0] == insert(1, "â" * 50 + "\n")
        assert requests[1] == {
            "updateParagraphStyle": {
                "range": {"startIndex": 1, "endIndex": 52},
                "paragraphStyle": {"alignment": "CENTER"},
                "fields": "alignment",
            }
        }
        assert requests[2] == text_style(
            1, 51, {"foregroundColor": {"color": {"rgbColor": {"red": 0.6, "green": 0.6, "blue": 0.6}}}}, "foregroundColor"
        )
        assert requests[3] == insert(52, "after\n")

    def test_horizontal_rule_width_option(self, compiler):
        """Test that the rule width follows the options."""
        requests = compile_api(compiler, "***", horizontal_rule_width=10)
        assert requests[0] == insert(1, "â" * 10 + "\n")

    def test_invalid_options_rejected(self):
        """Test that option validation rejects a zero-width rule."""
        with pytest.raises(ValueError):
            CompileOptions(horizontal_rule_width=0)


@pytest.mark.unit
class TestTables:
    """Tests for first-pass table insertion."""

    @pytest.mark.parametrize(("rows", "columns", "expected"), [(1, 1, 5), (2, 2, 12), (3, 4, 29)])
    def test_table_footprint(self, rows, columns, expected):
        """Test the index span of an empty table plus its leading newline."""
        assert table_footprint(rows, columns) == expected

    def test_table_inserted_empty(self, compiler):
        """Test that the table is inserted without cell text and recorded."""
        result = compiler.convert("| A | B |\n|---|---|\n| 1 | 2 |")
        assert result.to_api() == [{"insertTable": {"location": {"index": 1}, "rows": 2, "columns": 2}}]
        assert result.tables == [TableInsertionInfo(rows=2, columns=2, cell_content=[["A", "B"], ["1", "2"]])]

    def test_cursor_after_table(self, compiler):
        """Test that content after a table starts past its footprint."""
        requests = compile_api(compiler, "| A | B |\n|---|---|\n| 1 | 2 |\n\nafter")
        assert requests[1] == insert(1 + table_footprint(2, 2), "after\n")

    def test_tables_recorded_in_order(self, compiler):
        """Test that table records follow their order in the Markdown."""
        result = compiler.convert("| first |\n|---|\n\ntext\n\n| second | x |\n|---|---|")
        assert [info.cell_content for info in result.tables] == [[["first"]], [["second", "x"]]]


@pytest.mark.unit
class TestFullReplace:
    """Tests for deleting existing content."""

    def test_delete_first(self, compiler):
        """Test that the delete keeps the final newline and comes first."""
        result = compiler.convert("new", CompileOptions(full_replace=True), document_end_index=40)
        assert result.to_api()[0] == {"deleteContentRange": {"range": {"startIndex": 1, "endIndex": 39}}}
        assert result.to_api()[1] == insert(1, "new\n")

    def test_no_delete_for_empty_document(self, compiler):
        """Test that an empty document (end index 2 or less) is not deleted from."""
        result = compiler.convert("new", CompileOptions(full_replace=True), document_end_index=2)
        assert result.to_api() == [insert(1, "new\n")]

    def test_no_delete_without_full_replace(self, compiler):
        """Test that content is kept unless full replace is requested."""
        result = compiler.convert("new", CompileOptions(full_replace=False), document_end_index=40)
        assert result.to_api() == [insert(1, "new\n")]

    @pytest.mark.parametrize(("end_index", "deletes"), [(1, []), (100, [(1, 99)])])
    def test_delete_guard(self, compiler, end_index, deletes):
        """Test the delete range for an empty and a populated document."""
        result = compiler.convert("text", CompileOptions(full_replace=True), document_end_index=end_index)
        ranges = [
            (r["deleteContentRange"]["range"]["startIndex"], r["deleteContentRange"]["range"]["endIndex"])
            for r in result.to_api()
            if "deleteContentRange" in r
        ]
        assert ranges == deletes

    def test_module_helper(self):
        """Test markdown_to_requests."""
        result = markdown_to_requests("x", full_replace=True, document_end_index=10)
        assert [next(iter(r)) for r in result.to_api()] == ["deleteContentRange", "insertText"]


@pytest.mark.unit
class TestCursorInvariant:
    """Tests for contiguous text placement across mixed content."""

    def test_inserts_are_contiguous(self, compiler):
        """Test that every text insert lands at the end of the previous insert."""
        markdown = (
            "# T 😀\n\npara *漢字* 🚀\n\n- a 😀\n1. b\n\n> q 漢\n\n"
            "```\ncode 😀\n```\n\n---\n\nend"
        )
        result = compiler.convert(markdown)
        expected = 1
        for request in result.requests:
            if isinstance(request, InsertTextRequest):
                assert request.location.index == expected
                expected += utf16_len(request.text)
        inserted = "".join(r.text for r in result.requests if isinstance(r, InsertTextRequest))
        assert expected == 1 + utf16_len(inserted) > 1 + len(inserted)

