"""Edit operations produced by the Markdown compiler.

Each model mirrors one Google Docs ``batchUpdate`` request. Locations and
ranges are absolute offsets into the document *at the moment the request is
applied*; they are not stable identifiers.
"""

from collections.abc import Iterable
from typing import Any, ClassVar

from .document import Dimension, DocsModel, ParagraphStyle, TextStyle


class Location(DocsModel):
    index: int


class Range(DocsModel):
    start_index: int
    end_index: int


class Size(DocsModel):
    height: Dimension
    width: Dimension


class EditRequest(DocsModel):
    """Base class for all edit operations."""

    kind: ClassVar[str]

    def to_api(self) -> dict[str, Any]:
        """Serialize to the JSON shape expected by ``documents.batchUpdate``."""
        return {self.kind: self.model_dump(by_alias=True, exclude_none=True)}


class InsertTextRequest(EditRequest):
    kind: ClassVar[str] = "insertText"

    location: Location
    text: str


class UpdateParagraphStyleRequest(EditRequest):
    kind: ClassVar[str] = "updateParagraphStyle"

    range: Range
    paragraph_style: ParagraphStyle
    fields: str


class UpdateTextStyleRequest(EditRequest):
    kind: ClassVar[str] = "updateTextStyle"

    range: Range
    text_style: TextStyle
    fields: str


class CreateParagraphBulletsRequest(EditRequest):
    kind: ClassVar[str] = "createParagraphBullets"

    range: Range
    bullet_preset: str


class InsertInlineImageRequest(EditRequest):
    kind: ClassVar[str] = "insertInlineImage"

    location: Location
    uri: str
    object_size: Size | None = None


class InsertTableRequest(EditRequest):
    kind: ClassVar[str] = "insertTable"

    location: Location
    rows: int
    columns: int


class DeleteContentRangeRequest(EditRequest):
    kind: ClassVar[str] = "deleteContentRange"

    range: Range


EditOperation = (
    InsertTextRequest
    | UpdateParagraphStyleRequest
    | UpdateTextStyleRequest
    | CreateParagraphBulletsRequest
    | InsertInlineImageRequest
    | InsertTableRequest
    | DeleteContentRangeRequest
)


def requests_to_api(requests: Iterable[EditRequest]) -> list[dict[str, Any]]:
    """Serialize a sequence of edit operations for a single batch update."""
    return [request.to_api() for request in requests]
