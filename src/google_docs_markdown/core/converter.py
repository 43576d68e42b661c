"""Facade tying the checker, renderer, compiler and table pass together."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from loguru import logger
from pydantic import ValidationError

from .checker import CompatibilityChecker
from .compiler import MarkdownToDoc
from .config import CompileOptions, RenderOptions
from .document import StructuredDocument, as_document
from .exceptions import IncompatibleDocumentError, InvalidDocumentError
from .renderer import DocToMarkdown
from .requests import EditOperation, InsertTextRequest, requests_to_api
from .tables import document_end_index, populate_table_cells
from .types import CompatibilityResult, TableInsertionInfo

DocumentLike = StructuredDocument | Mapping[str, Any]


@dataclass
class WritePlan:
    """Everything needed to write Markdown into a document.

    Apply ``requests`` as one batch. When ``needs_table_pass`` is set,
    re-fetch the document and pass it to ``MarkdownDocsConverter.populate_tables``
    to get the second batch.
    """

    requests: list[EditOperation] = field(default_factory=list)
    tables: list[TableInsertionInfo] = field(default_factory=list)
    end_index: int = 1

    @property
    def needs_table_pass(self) -> bool:
        return bool(self.tables)

    def to_api(self) -> list[dict[str, Any]]:
        return requests_to_api(self.requests)


class MarkdownDocsConverter:
    """Read and write Google Docs documents as Markdown.

    Nothing here talks to the network: callers fetch documents and apply the
    returned requests themselves.

    Basic usage::

        converter = MarkdownDocsConverter()
        markdown = converter.to_markdown(document_json)

        plan = converter.plan_write(edited_markdown, document_json)
        service.documents().batchUpdate(documentId=doc_id, body={"requests": plan.to_api()}).execute()
        if plan.needs_table_pass:
            updated = service.documents().get(documentId=doc_id).execute()
            second = converter.populate_tables(updated, plan)
    """

    def __init__(self):
        self.checker = CompatibilityChecker()
        self.renderer = DocToMarkdown()
        self.compiler = MarkdownToDoc()

    def _validate(self, document: DocumentLike) -> StructuredDocument:
        try:
            return as_document(document)
        except ValidationError as e:
            raise InvalidDocumentError(f"Invalid document structure: {e}") from e

    def _require_compatible(self, document: StructuredDocument) -> None:
        result = self.checker.check(document)
        if not result.compatible:
            logger.info(
                f"Document {document.document_id or '<unknown>'} is not markdown-compatible: "
                f"{[issue.type.value for issue in result.issues]}"
            )
            raise IncompatibleDocumentError(result.issues, self.checker.format_issues(result.issues))

    def check(self, document: DocumentLike) -> CompatibilityResult:
        """Check whether a document can be represented as Markdown."""
        return self.checker.check(self._validate(document))

    def to_markdown(self, document: DocumentLike, include_line_numbers: bool | None = None) -> str:
        """Render a compatible document as Markdown.

        Args:
            document: Validated document or the raw ``documents.get`` payload.
            include_line_numbers: Prefix lines with numbers; defaults to settings.

        Returns:
            The Markdown text.

        Raises:
            InvalidDocumentError: The payload does not look like a document.
            IncompatibleDocumentError: The document has features Markdown cannot hold.
        """
        doc = self._validate(document)
        self._require_compatible(doc)

        options = RenderOptions() if include_line_numbers is None else RenderOptions(
            include_line_numbers=include_line_numbers
        )
        markdown = self.renderer.convert(doc, options).markdown
        logger.info(f"Rendered document {doc.document_id or '<unknown>'} as {len(markdown)} characters of markdown")
        return markdown

    def plan_write(
        self,
        markdown: str,
        document: DocumentLike | None = None,
        *,
        full_replace: bool = True,
    ) -> WritePlan:
        """Compile Markdown into the first batch of edit requests.

        Args:
            markdown: Markdown text to write.
            document: The current document. When given it must be compatible,
                and its end index bounds the delete of a full replace.
            full_replace: Delete existing body content before inserting.

        Returns:
            WritePlan with the first batch and the tables awaiting cell text.

        Raises:
            InvalidDocumentError: The payload does not look like a document.
            IncompatibleDocumentError: The current document cannot be replaced safely.
        """
        end_index = 1
        if document is not None:
            doc = self._validate(document)
            self._require_compatible(doc)
            end_index = document_end_index(doc)

        result = self.compiler.convert(markdown, CompileOptions(full_replace=full_replace), end_index)
        plan = WritePlan(requests=result.requests, tables=result.tables, end_index=end_index)
        logger.info(
            f"Planned {len(plan.requests)} requests"
            + (f" and {len(plan.tables)} table(s) for a second pass" if plan.needs_table_pass else "")
        )
        return plan

    def populate_tables(
        self,
        updated_document: DocumentLike,
        plan_or_tables: WritePlan | Sequence[TableInsertionInfo],
    ) -> list[InsertTextRequest]:
        """Second batch: cell text for the tables inserted by a write plan."""
        tables = plan_or_tables.tables if isinstance(plan_or_tables, WritePlan) else plan_or_tables
        requests = populate_table_cells(self._validate(updated_document), tables)
        logger.info(f"Planned {len(requests)} table cell insert(s) for {len(tables)} table(s)")
        return requests
