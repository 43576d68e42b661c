"""Exceptions raised by the conversion facade.

The converters themselves never raise on content; these cover the places
where a caller asked for something that cannot be done.
"""

from .types import CompatibilityIssue


class MarkdownBridgeError(Exception):
    """Base exception for Google Docs Markdown conversion."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class IncompatibleDocumentError(MarkdownBridgeError):
    """Raised when a document cannot be represented as Markdown."""

    def __init__(self, issues: list[CompatibilityIssue], message: str):
        self.issues = issues
        super().__init__(message)


class InvalidDocumentError(MarkdownBridgeError):
    """Raised when a raw document payload does not match the expected structure."""
