"""Decide whether a Google Docs document can round-trip through Markdown."""

from collections.abc import Mapping
from typing import Any

from loguru import logger

from .document import (
    EquationElement,
    FootnoteReferenceElement,
    InlineObject,
    Paragraph,
    ParagraphBlock,
    PersonElement,
    RichLinkElement,
    StructuralElement,
    StructuredDocument,
    Table,
    TableBlock,
    TableOfContentsBlock,
    as_document,
)
from .types import CompatibilityIssue, CompatibilityResult, IncompatibleElementType

COMPATIBLE_MESSAGE = "Document is compatible with markdown editing."
ISSUES_HEADER = "This document cannot be edited as markdown due to the following incompatible elements:"
ISSUES_FOOTER = "Read it with the structured document reader and use the standard editing tools instead."


class _CheckRun:
    """State for a single check: the issue list and a running element counter."""

    def __init__(self) -> None:
        self.issues: list[CompatibilityIssue] = []
        self.element_index = 0

    def add_issue(self, issue_type: IncompatibleElementType, message: str, location: str | None = None) -> None:
        # First occurrence of a type wins
        if any(issue.type == issue_type for issue in self.issues):
            return
        self.issues.append(CompatibilityIssue(type=issue_type, message=message, location=location))

    def check_document_level(self, document: StructuredDocument) -> None:
        if document.headers:
            self.add_issue(
                IncompatibleElementType.HEADER,
                "Document contains headers. Remove headers or use the standard editing tools.",
            )
        if document.footers:
            self.add_issue(
                IncompatibleElementType.FOOTER,
                "Document contains footers. Remove footers or use the standard editing tools.",
            )
        if document.footnotes:
            self.add_issue(
                IncompatibleElementType.FOOTNOTE,
                "Document contains footnotes. Remove footnotes or use the standard editing tools.",
            )
        if document.positioned_objects:
            self.add_issue(
                IncompatibleElementType.POSITIONED_OBJECT,
                "Document contains positioned objects (non-inline images or drawings). "
                "These cannot be represented in markdown. Move images inline or use the standard editing tools.",
            )

    def check_structural_elements(self, elements: list[StructuralElement]) -> None:
        for element in elements:
            self.element_index += 1

            if isinstance(element, ParagraphBlock):
                self.check_paragraph(element.paragraph)
            elif isinstance(element, TableBlock):
                self.check_table(element.table)
            elif isinstance(element, TableOfContentsBlock):
                self.add_issue(
                    IncompatibleElementType.TABLE_OF_CONTENTS,
                    "Document contains a table of contents. Remove it or use the standard editing tools.",
                    f"element {self.element_index}",
                )
            # Section breaks render as horizontal rules

    def check_paragraph(self, paragraph: Paragraph) -> None:
        location = f"paragraph {self.element_index}"
        for element in paragraph.elements:
            if isinstance(element, EquationElement):
                self.add_issue(
                    IncompatibleElementType.EQUATION,
                    "Document contains equations. Remove equations or use the standard editing tools.",
                    location,
                )
            elif isinstance(element, FootnoteReferenceElement):
                self.add_issue(
                    IncompatibleElementType.FOOTNOTE,
                    "Document contains footnote references. Remove footnotes or use the standard editing tools.",
                    location,
                )
            elif isinstance(element, PersonElement):
                self.add_issue(
                    IncompatibleElementType.PERSON,
                    "Document contains @mentions. Remove mentions or use the standard editing tools.",
                    location,
                )
            elif isinstance(element, RichLinkElement):
                self.add_issue(
                    IncompatibleElementType.RICH_LINK,
                    "Document contains smart chips/rich links. "
                    "Convert to regular links or use the standard editing tools.",
                    location,
                )

    def check_table(self, table: Table) -> None:
        table_location = f"table at element {self.element_index}"
        for row_idx, row in enumerate(table.table_rows):
            for cell_idx, cell in enumerate(row.table_cells):
                if cell.is_merged:
                    self.add_issue(
                        IncompatibleElementType.MERGED_TABLE_CELL,
                        f"Table has merged cells (row {row_idx + 1}, column {cell_idx + 1}). "
                        "Unmerge cells or use the standard editing tools.",
                        table_location,
                    )
                    # The first merge settles the table; later cells are not walked
                    return

                if cell.content:
                    saved_index = self.element_index
                    self.check_structural_elements(cell.content)
                    self.element_index = saved_index

    def check_inline_objects(self, inline_objects: dict[str, InlineObject]) -> None:
        for object_id, inline_object in inline_objects.items():
            embedded = inline_object.embedded_object
            if embedded is None:
                continue
            # Images are fine: they render as ![alt](url)
            if embedded.embedded_drawing_properties is not None:
                self.add_issue(
                    IncompatibleElementType.DRAWING,
                    f"Document contains an embedded drawing ({object_id}). "
                    "Remove drawings or use the standard editing tools.",
                )


class CompatibilityChecker:
    """Checks whether a Google Docs document can be represented as Markdown.

    The checker is stateless between calls; every ``check`` starts from an
    empty issue list.
    """

    def check(self, document: StructuredDocument | Mapping[str, Any]) -> CompatibilityResult:
        """Classify a document as Markdown-representable or not.

        Args:
            document: Validated document or the raw ``documents.get`` payload.

        Returns:
            CompatibilityResult with at most one issue per IncompatibleElementType.
        """
        doc = as_document(document)
        run = _CheckRun()

        run.check_document_level(doc)
        run.check_structural_elements(doc.content)
        run.check_inline_objects(doc.inline_objects)

        result = CompatibilityResult(issues=run.issues)
        logger.debug(
            f"Compatibility check: {run.element_index} top-level elements, "
            f"issues={[issue.type.value for issue in result.issues]}"
        )
        return result

    @staticmethod
    def format_issues(issues: list[CompatibilityIssue]) -> str:
        """Format issues as a human-readable explanation.

        Args:
            issues: Issues from a CompatibilityResult.

        Returns:
            A fixed sentence for no issues, otherwise a header, one bullet per
            issue and a footer pointing at the non-Markdown editing path.
        """
        if not issues:
            return COMPATIBLE_MESSAGE

        lines = [ISSUES_HEADER, ""]
        lines.extend(f"• {issue.message}" for issue in issues)
        lines.append("")
        lines.append(ISSUES_FOOTER)
        return "\n".join(lines)


def check_compatibility(document: StructuredDocument | Mapping[str, Any]) -> CompatibilityResult:
    """Shortcut for ``CompatibilityChecker().check(document)``."""
    return CompatibilityChecker().check(document)


def format_issues(issues: list[CompatibilityIssue]) -> str:
    """Shortcut for ``CompatibilityChecker.format_issues(issues)``."""
    return CompatibilityChecker.format_issues(issues)
