"""Google Docs Markdown - edit Google Docs documents as Markdown.

This package provides:
- CompatibilityChecker: Decides whether a document can round-trip through Markdown
- DocToMarkdown: Renders a document (``documents.get`` JSON) as Markdown
- MarkdownToDoc: Compiles Markdown into ``documents.batchUpdate`` requests
- populate_table_cells: Second pass that fills freshly inserted tables
- MarkdownDocsConverter: Facade running all of the above

Basic usage::

    from google_docs_markdown import MarkdownDocsConverter

    converter = MarkdownDocsConverter()
    markdown = converter.to_markdown(document_json)

    plan = converter.plan_write("# Title\\n\\nHello **world**", document_json)
    body = {"requests": plan.to_api()}
"""

import sys

from loguru import logger

from .core.checker import CompatibilityChecker, check_compatibility, format_issues
from .core.compiler import CompileResult, MarkdownToDoc, markdown_to_requests
from .core.config import CompileOptions, RenderOptions
from .core.converter import MarkdownDocsConverter, WritePlan
from .core.exceptions import IncompatibleDocumentError, InvalidDocumentError, MarkdownBridgeError
from .core.parser import parse_inline_formatting, parse_markdown
from .core.renderer import DocToMarkdown, document_to_markdown
from .core.tables import document_end_index, populate_table_cells
from .core.types import CompatibilityIssue, CompatibilityResult, IncompatibleElementType, TableInsertionInfo
from .settings import settings

__version__ = "0.1.0"

__all__ = [
    "MarkdownDocsConverter",
    "WritePlan",
    "CompatibilityChecker",
    "DocToMarkdown",
    "MarkdownToDoc",
    "CompileResult",
    "RenderOptions",
    "CompileOptions",
    "check_compatibility",
    "format_issues",
    "document_to_markdown",
    "markdown_to_requests",
    "parse_markdown",
    "parse_inline_formatting",
    "populate_table_cells",
    "document_end_index",
    "CompatibilityIssue",
    "CompatibilityResult",
    "IncompatibleElementType",
    "TableInsertionInfo",
    "MarkdownBridgeError",
    "IncompatibleDocumentError",
    "InvalidDocumentError",
    "configure_logging",
    "__version__",
]


def configure_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Replace loguru's default sink with the configured stderr sink.

    Args:
        level: Log level; defaults to ``settings.log_level``.
        fmt: ``"json"`` for structured output, anything else for pretty output;
            defaults to ``settings.log_format``.
    """
    level = level or settings.log_level
    fmt = fmt or settings.log_format

    logger.remove()
    if fmt == "json":
        logger.add(sys.stderr, format="{message}", serialize=True, level=level)
    else:
        logger.add(
            sys.stderr,
            format=(
                "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
                "<cyan>{name}</cyan> - <level>{message}</level>"
            ),
            level=level,
            colorize=True,
        )
