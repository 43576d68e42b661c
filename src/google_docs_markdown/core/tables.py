"""Second pass of table insertion.

The first batch inserts tables empty because their cell indices only exist
once the table does. After that batch is applied and the document is
re-fetched, ``populate_table_cells`` matches each recorded table to the
document's tables by position and produces the ``insertText`` requests that
fill the cells.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from loguru import logger

from .document import StructuredDocument, TableBlock, as_document
from .requests import InsertTextRequest, Location
from .types import TableInsertionInfo


def document_end_index(document: StructuredDocument | Mapping[str, Any]) -> int:
    """End index of the last body element, or 1 for an empty document."""
    content = as_document(document).content
    if not content:
        return 1
    return content[-1].end_index or 1


def _cell_inserts(table: TableBlock, info: TableInsertionInfo) -> list[tuple[int, str]]:
    """(index, text) pairs for every non-blank cell of one table."""
    inserts: list[tuple[int, str]] = []
    doc_rows = table.table.table_rows

    for row_idx in range(min(info.rows, len(doc_rows))):
        doc_cells = doc_rows[row_idx].table_cells
        recorded = info.cell_content[row_idx] if row_idx < len(info.cell_content) else []

        for col_idx in range(min(info.columns, len(doc_cells))):
            text = recorded[col_idx] if col_idx < len(recorded) else ""
            if not text.strip():
                continue

            cell = doc_cells[col_idx]
            if not cell.content:
                continue
            start_index = cell.content[0].start_index
            if start_index is None:
                continue
            inserts.append((start_index, text))

    return inserts


def populate_table_cells(
    document: StructuredDocument | Mapping[str, Any],
    tables: Sequence[TableInsertionInfo],
) -> list[InsertTextRequest]:
    """Build the second batch that writes cell text into freshly inserted tables.

    Tables are matched by order: the n-th record belongs to the n-th table in
    the body. The returned requests are sorted by strictly descending index
    across all tables, so applying them in order never shifts a position
    that a later request relies on.

    Args:
        document: The document re-fetched after the first batch was applied.
        tables: Table records from the first pass, in insertion order.

    Returns:
        insertText requests, highest index first.
    """
    doc = as_document(document)
    doc_tables = [element for element in doc.content if isinstance(element, TableBlock)]
    logger.debug(f"Found {len(doc_tables)} table(s) in document for {len(tables)} recorded table(s)")

    inserts: list[tuple[int, str]] = []
    for table_idx, info in enumerate(tables):
        if table_idx >= len(doc_tables):
            logger.warning(f"Could not find table {table_idx + 1} in document, skipping its cells")
            continue
        inserts.extend(_cell_inserts(doc_tables[table_idx], info))

    inserts.sort(key=lambda insert: insert[0], reverse=True)
    return [InsertTextRequest(location=Location(index=index), text=text) for index, text in inserts]
