"""Per-call option models for the Markdown converters."""

from pydantic import BaseModel, Field

from ..settings import settings


class RenderOptions(BaseModel):
    """Options for rendering a document as Markdown."""

    include_line_numbers: bool = Field(
        default_factory=lambda: settings.include_line_numbers,
        description="Prefix every output line with a right-aligned line number and a tab",
    )


class CompileOptions(BaseModel):
    """Options for compiling Markdown into edit operations."""

    full_replace: bool = Field(
        default=False,
        description="Delete the existing document content before inserting",
    )
    image_width_pt: float = Field(default_factory=lambda: settings.image_width_pt, gt=0)
    image_height_pt: float = Field(default_factory=lambda: settings.image_height_pt, gt=0)
    horizontal_rule_width: int = Field(default_factory=lambda: settings.horizontal_rule_width, ge=1)
    horizontal_rule_gray: float = Field(default_factory=lambda: settings.horizontal_rule_gray, ge=0, le=1)
