"""Models of the Google Docs document structure.

The document service returns camelCase JSON where the *presence* of a key
decides what an element is (``{"paragraph": ...}`` vs ``{"table": ...}``).
These models turn that convention into explicit variants: pydantic picks the
variant with a callable discriminator, so downstream code can dispatch on
the class instead of probing optional fields.

Basic usage::

    document = StructuredDocument.model_validate(api_response)
    for element in document.body.content:
        if isinstance(element, ParagraphBlock):
            ...
"""

from collections.abc import Mapping
from typing import Annotated, Any, ClassVar, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, field_validator
from pydantic.alias_generators import to_camel


class DocsModel(BaseModel):
    """Base model: snake_case attributes, camelCase wire names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


def _variant_tag(value: Any, tags: tuple[str, ...], fallback: str) -> str:
    """Return the tag of the first variant key present on ``value``."""
    if isinstance(value, BaseModel):
        return getattr(value, "tag", fallback)
    if isinstance(value, Mapping):
        for tag in tags:
            if tag in value or _SNAKE_NAMES[tag] in value:
                return tag
    return fallback


_SNAKE_NAMES: dict[str, str] = {
    "paragraph": "paragraph",
    "table": "table",
    "sectionBreak": "section_break",
    "tableOfContents": "table_of_contents",
    "textRun": "text_run",
    "inlineObjectElement": "inline_object_element",
    "horizontalRule": "horizontal_rule",
    "equation": "equation",
    "footnoteReference": "footnote_reference",
    "person": "person",
    "richLink": "rich_link",
}


# ===== Styles =====


class Link(DocsModel):
    url: str | None = None


class WeightedFontFamily(DocsModel):
    font_family: str | None = None
    weight: int | None = None


class RgbColor(DocsModel):
    red: float | None = None
    green: float | None = None
    blue: float | None = None


class Color(DocsModel):
    rgb_color: RgbColor | None = None


class OptionalColor(DocsModel):
    color: Color | None = None


class Dimension(DocsModel):
    magnitude: float | None = None
    unit: str | None = None


class TextStyle(DocsModel):
    """Character formatting, shared by the read models and the edit requests."""

    bold: bool | None = None
    italic: bool | None = None
    strikethrough: bool | None = None
    link: Link | None = None
    weighted_font_family: WeightedFontFamily | None = None
    foreground_color: OptionalColor | None = None

    @property
    def font_family(self) -> str | None:
        return self.weighted_font_family.font_family if self.weighted_font_family else None

    @property
    def link_url(self) -> str | None:
        return self.link.url if self.link else None


class ParagraphStyle(DocsModel):
    """Paragraph formatting, shared by the read models and the edit requests."""

    named_style_type: str | None = None
    alignment: str | None = None


class Bullet(DocsModel):
    """List membership of a paragraph.

    ``text_style`` is kept as the raw value so the numbered-list heuristic can
    inspect whatever the service sent.
    """

    list_id: str | None = None
    nesting_level: int | None = None
    text_style: Any = None


# ===== Paragraph elements =====


class PositionedElement(DocsModel):
    start_index: int | None = None
    end_index: int | None = None


class TextRun(DocsModel):
    content: str = ""
    text_style: TextStyle = Field(default_factory=TextStyle)

    @field_validator("text_style", mode="before")
    @classmethod
    def default_style(cls, v):
        """Treat an explicit null style as an empty one."""
        return {} if v is None else v


class InlineObjectReference(DocsModel):
    inline_object_id: str | None = None


class TextRunElement(PositionedElement):
    tag: ClassVar[str] = "textRun"
    text_run: TextRun


class InlineObjectElement(PositionedElement):
    tag: ClassVar[str] = "inlineObjectElement"
    inline_object_element: InlineObjectReference


class HorizontalRuleElement(PositionedElement):
    tag: ClassVar[str] = "horizontalRule"
    horizontal_rule: dict[str, Any] = Field(default_factory=dict)


class EquationElement(PositionedElement):
    tag: ClassVar[str] = "equation"
    equation: dict[str, Any] = Field(default_factory=dict)


class FootnoteReferenceElement(PositionedElement):
    tag: ClassVar[str] = "footnoteReference"
    footnote_reference: dict[str, Any] = Field(default_factory=dict)


class PersonElement(PositionedElement):
    tag: ClassVar[str] = "person"
    person: dict[str, Any] = Field(default_factory=dict)


class RichLinkElement(PositionedElement):
    tag: ClassVar[str] = "richLink"
    rich_link: dict[str, Any] = Field(default_factory=dict)


class OtherElement(PositionedElement):
    """Page breaks, column breaks, auto text and anything newer."""

    tag: ClassVar[str] = "other"


_PARAGRAPH_ELEMENT_TAGS = (
    "textRun",
    "inlineObjectElement",
    "horizontalRule",
    "equation",
    "footnoteReference",
    "person",
    "richLink",
)


def _paragraph_element_tag(value: Any) -> str:
    return _variant_tag(value, _PARAGRAPH_ELEMENT_TAGS, "other")


ParagraphItem = Annotated[
    Union[
        Annotated[TextRunElement, Tag("textRun")],
        Annotated[InlineObjectElement, Tag("inlineObjectElement")],
        Annotated[HorizontalRuleElement, Tag("horizontalRule")],
        Annotated[EquationElement, Tag("equation")],
        Annotated[FootnoteReferenceElement, Tag("footnoteReference")],
        Annotated[PersonElement, Tag("person")],
        Annotated[RichLinkElement, Tag("richLink")],
        Annotated[OtherElement, Tag("other")],
    ],
    Discriminator(_paragraph_element_tag),
]


class Paragraph(DocsModel):
    elements: list[ParagraphItem] = Field(default_factory=list)
    paragraph_style: ParagraphStyle | None = None
    bullet: Bullet | None = None

    @property
    def named_style_type(self) -> str | None:
        return self.paragraph_style.named_style_type if self.paragraph_style else None


# ===== Structural elements =====


class TableCellStyle(DocsModel):
    row_span: int | None = None
    column_span: int | None = None


class TableCell(PositionedElement):
    content: list["StructuralElement"] = Field(default_factory=list)
    table_cell_style: TableCellStyle | None = None

    @property
    def is_merged(self) -> bool:
        """True when the cell spans more than one row or column."""
        if self.table_cell_style is None:
            return False
        row_span = self.table_cell_style.row_span or 1
        column_span = self.table_cell_style.column_span or 1
        return row_span > 1 or column_span > 1


class TableRow(PositionedElement):
    table_cells: list[TableCell] = Field(default_factory=list)


class Table(DocsModel):
    rows: int | None = None
    columns: int | None = None
    table_rows: list[TableRow] = Field(default_factory=list)


class TableOfContents(DocsModel):
    content: list["StructuralElement"] = Field(default_factory=list)


class ParagraphBlock(PositionedElement):
    tag: ClassVar[str] = "paragraph"
    paragraph: Paragraph


class TableBlock(PositionedElement):
    tag: ClassVar[str] = "table"
    table: Table


class SectionBreakBlock(PositionedElement):
    tag: ClassVar[str] = "sectionBreak"
    section_break: dict[str, Any] = Field(default_factory=dict)


class TableOfContentsBlock(PositionedElement):
    tag: ClassVar[str] = "tableOfContents"
    table_of_contents: TableOfContents


class UnknownBlock(PositionedElement):
    tag: ClassVar[str] = "unknown"


_STRUCTURAL_TAGS = ("paragraph", "table", "sectionBreak", "tableOfContents")


def _structural_tag(value: Any) -> str:
    return _variant_tag(value, _STRUCTURAL_TAGS, "unknown")


StructuralElement = Annotated[
    Union[
        Annotated[ParagraphBlock, Tag("paragraph")],
        Annotated[TableBlock, Tag("table")],
        Annotated[SectionBreakBlock, Tag("sectionBreak")],
        Annotated[TableOfContentsBlock, Tag("tableOfContents")],
        Annotated[UnknownBlock, Tag("unknown")],
    ],
    Discriminator(_structural_tag),
]


# ===== Inline objects =====


class ImageProperties(DocsModel):
    source_uri: str | None = None
    content_uri: str | None = None


class EmbeddedObject(DocsModel):
    title: str | None = None
    description: str | None = None
    image_properties: ImageProperties | None = None
    embedded_drawing_properties: dict[str, Any] | None = None


class InlineObjectProperties(DocsModel):
    embedded_object: EmbeddedObject | None = None


class InlineObject(DocsModel):
    object_id: str | None = None
    inline_object_properties: InlineObjectProperties | None = None

    @property
    def embedded_object(self) -> EmbeddedObject | None:
        return self.inline_object_properties.embedded_object if self.inline_object_properties else None


# ===== Document =====


class Body(DocsModel):
    content: list[StructuralElement] = Field(default_factory=list)


class StructuredDocument(DocsModel):
    """A Google Docs document as returned by ``documents.get``."""

    document_id: str | None = None
    title: str | None = None
    body: Body | None = None
    inline_objects: dict[str, InlineObject] = Field(default_factory=dict)
    positioned_objects: dict[str, Any] = Field(default_factory=dict)
    headers: dict[str, Any] = Field(default_factory=dict)
    footers: dict[str, Any] = Field(default_factory=dict)
    footnotes: dict[str, Any] = Field(default_factory=dict)

    @field_validator("inline_objects", "positioned_objects", "headers", "footers", "footnotes", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        """Side tables may be sent as null."""
        return {} if v is None else v

    @property
    def content(self) -> list[StructuralElement]:
        return self.body.content if self.body else []


for _model in (TableCell, TableRow, Table, TableOfContents, TableBlock, TableOfContentsBlock, Body, StructuredDocument):
    _model.model_rebuild()


def as_document(document: "StructuredDocument | Mapping[str, Any]") -> StructuredDocument:
    """Accept either a validated document or the raw API mapping."""
    if isinstance(document, StructuredDocument):
        return document
    return StructuredDocument.model_validate(document)
