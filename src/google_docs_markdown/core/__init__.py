"""Core module for Google Docs Markdown."""

from .checker import CompatibilityChecker, check_compatibility, format_issues
from .compiler import CompileResult, MarkdownToDoc, markdown_to_requests
from .config import CompileOptions, RenderOptions
from .converter import MarkdownDocsConverter, WritePlan
from .document import StructuredDocument
from .exceptions import IncompatibleDocumentError, InvalidDocumentError, MarkdownBridgeError
from .parser import parse_inline_formatting, parse_markdown
from .renderer import DocToMarkdown, document_to_markdown
from .tables import document_end_index, populate_table_cells
from .types import (
    CompatibilityIssue,
    CompatibilityResult,
    IncompatibleElementType,
    InlineFormat,
    InlineParseResult,
    MarkdownElementType,
    RenderResult,
    TableInsertionInfo,
)

__all__ = [
    "CompatibilityChecker",
    "check_compatibility",
    "format_issues",
    "DocToMarkdown",
    "document_to_markdown",
    "MarkdownToDoc",
    "CompileResult",
    "markdown_to_requests",
    "parse_markdown",
    "parse_inline_formatting",
    "populate_table_cells",
    "document_end_index",
    "MarkdownDocsConverter",
    "WritePlan",
    "RenderOptions",
    "CompileOptions",
    "StructuredDocument",
    "MarkdownBridgeError",
    "IncompatibleDocumentError",
    "InvalidDocumentError",
    "CompatibilityIssue",
    "CompatibilityResult",
    "IncompatibleElementType",
    "InlineFormat",
    "InlineParseResult",
    "MarkdownElementType",
    "RenderResult",
    "TableInsertionInfo",
]
