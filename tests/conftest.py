"""Pytest fixtures for Google Docs Markdown tests."""

from typing import Any

import pytest


class DocBuilder:
    """Builds ``documents.get``-shaped JSON for tests."""

    @staticmethod
    def text_run(content: str, **text_style: Any) -> dict[str, Any]:
        return {"textRun": {"content": content, "textStyle": text_style}}

    @staticmethod
    def paragraph(
        *elements: dict[str, Any],
        style: str | None = None,
        bullet: dict[str, Any] | None = None,
        start: int | None = None,
        end: int | None = None,
    ) -> dict[str, Any]:
        paragraph: dict[str, Any] = {"elements": list(elements)}
        if style:
            paragraph["paragraphStyle"] = {"namedStyleType": style}
        if bullet is not None:
            paragraph["bullet"] = bullet
        element: dict[str, Any] = {"paragraph": paragraph}
        if start is not None:
            element["startIndex"] = start
        if end is not None:
            element["endIndex"] = end
        return element

    @classmethod
    def text(cls, content: str, style: str | None = None, **kwargs: Any) -> dict[str, Any]:
        """Single-run paragraph; a trailing newline is added like the service does."""
        return cls.paragraph(cls.text_run(content + "\n"), style=style, **kwargs)

    @classmethod
    def table(cls, rows: list[list[str]], start: int | None = None) -> dict[str, Any]:
        """Table element; with ``start`` every cell carries real indices.

        Index layout: the table takes one index, each row one, and each cell
        two (cell start plus its paragraph).
        """
        columns = max((len(row) for row in rows), default=0)
        table_rows = []
        for r, row in enumerate(rows):
            cells = []
            for c, text in enumerate(row):
                cell_content: dict[str, Any] = cls.text(text) if text else cls.paragraph(cls.text_run("\n"))
                if start is not None:
                    cell_start = start + 1 + r * (1 + 2 * columns) + 1 + 2 * c
                    cell_content["startIndex"] = cell_start + 1
                    cell_content["endIndex"] = cell_start + 2
                cells.append({"content": [cell_content]})
            table_rows.append({"tableCells": cells})

        element: dict[str, Any] = {"table": {"rows": len(rows), "columns": columns, "tableRows": table_rows}}
        if start is not None:
            element["startIndex"] = start
            element["endIndex"] = start + 1 + len(rows) * (1 + 2 * columns)
        return element

    @staticmethod
    def section_break(start: int | None = None, end: int | None = None) -> dict[str, Any]:
        element: dict[str, Any] = {"sectionBreak": {"sectionStyle": {}}}
        if start is not None:
            element["startIndex"] = start
        if end is not None:
            element["endIndex"] = end
        return element

    @staticmethod
    def document(*content: dict[str, Any], **extra: Any) -> dict[str, Any]:
        doc: dict[str, Any] = {"documentId": "doc-1", "title": "Test", "body": {"content": list(content)}}
        doc.update(extra)
        return doc


@pytest.fixture
def docs() -> type[DocBuilder]:
    """Provide the document JSON builder."""
    return DocBuilder


@pytest.fixture
def simple_document(docs) -> dict[str, Any]:
    """A small compatible document: heading, formatted paragraph, bullets."""
    return docs.document(
        docs.section_break(end=1),
        docs.text("Project Notes", style="HEADING_1"),
        docs.paragraph(docs.text_run("Hello "), docs.text_run("world", bold=True), docs.text_run("\n")),
        docs.text("first", bullet={"listId": "list-1"}),
        docs.text("second", bullet={"listId": "list-1"}),
    )


@pytest.fixture
def image_document(docs) -> dict[str, Any]:
    """A document with one inline image."""
    return docs.document(
        docs.paragraph({"inlineObjectElement": {"inlineObjectId": "kix.img1"}}, docs.text_run("\n")),
        inlineObjects={
            "kix.img1": {
                "objectId": "kix.img1",
                "inlineObjectProperties": {
                    "embeddedObject": {
                        "description": "Architecture diagram",
                        "imageProperties": {"contentUri": "https://lh3.example.com/img1"},
                    }
                },
            }
        },
    )
