"""
Custom exceptions for pdfpagedom.

Every failure raised while building, resolving or projecting a page is a
subclass of :class:`PageDomError`, so callers loading a whole document can
decide per page whether to skip or abort.
"""

from __future__ import annotations


class PageDomError(Exception):
    """Base exception for all pdfpagedom errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown page model error occurred."


class SchemaViolation(PageDomError):
    """Raised when a dictionary does not declare the expected record kind."""

    @property
    def default_message(self) -> str:
        return "Page dictionary Type is missing or is not /Page."


class TypeMismatch(PageDomError):
    """Raised when a key holds a value of an unexpected shape."""

    def __init__(self, key: str, message: str = "") -> None:
        self.key = key
        super().__init__(message)

    @property
    def default_message(self) -> str:
        return f"Unexpected value type for {self.key}."


class InvalidAncestor(PageDomError):
    """Raised when a parent-chain node cannot be turned into a dictionary."""

    @property
    def default_message(self) -> str:
        return "Invalid parent object in page tree."


class CyclicAncestry(PageDomError):
    """Raised when the parent chain revisits a node."""

    @property
    def default_message(self) -> str:
        return "Parent chain of page contains a cycle."


class AttributeNotInherited(PageDomError):
    """Raised when an inheritable attribute is absent through the whole chain."""

    def __init__(self, key: str, message: str = "") -> None:
        self.key = key
        super().__init__(message)

    @property
    def default_message(self) -> str:
        return f"{self.key} not defined on page or any ancestor."


class MalformedAnnotation(PageDomError):
    """Raised when an annotation entry is neither a dictionary nor a boxed record."""

    @property
    def default_message(self) -> str:
        return "Annotation not in an indirect object or dictionary."


class EncodingFailure(PageDomError):
    """Raised when a stream encoder rejects its input."""

    @property
    def default_message(self) -> str:
        return "Stream encoder failed to encode data."


class ObjectResolutionError(PageDomError):
    """Raised when an indirect reference cannot be followed."""

    @property
    def default_message(self) -> str:
        return "Unable to resolve indirect object."


class DateParseError(PageDomError, ValueError):
    """Raised when a PDF date string cannot be parsed."""

    @property
    def default_message(self) -> str:
        return "Invalid PDF date string."


class InvalidDocumentError(PageDomError):
    """Raised when a PDF file cannot be opened for page loading."""

    @property
    def default_message(self) -> str:
        return "Invalid or corrupted PDF file."


__all__ = [
    "PageDomError",
    "SchemaViolation",
    "TypeMismatch",
    "InvalidAncestor",
    "CyclicAncestry",
    "AttributeNotInherited",
    "MalformedAnnotation",
    "EncodingFailure",
    "ObjectResolutionError",
    "DateParseError",
    "InvalidDocumentError",
]
