"""Shared constants for the page object model."""

from __future__ import annotations

__all__ = [
    "PAGE_TYPE",
    "BOX_KEYS",
    "INHERITABLE_KEYS",
    "OPAQUE_KEYS",
    "RESOURCE_CATEGORIES",
    "WATERMARK_IMAGE_NAME",
    "WATERMARK_GSTATE_NAME",
    "CONTENT_SEPARATOR",
    "PDF_DATE_PREFIX",
]

PAGE_TYPE = "/Page"

BOX_KEYS = ("/MediaBox", "/CropBox", "/BleedBox", "/TrimBox", "/ArtBox")

# Keys a page may take from an ancestor /Pages node (ISO 32000-1, 7.7.3.4).
INHERITABLE_KEYS = ("/Resources", "/MediaBox", "/CropBox", "/Rotate")

# Carried through untouched: read as-is, written back as-is.
OPAQUE_KEYS = (
    "/BoxColorInfo",
    "/Group",
    "/Thumb",
    "/B",
    "/Dur",
    "/Trans",
    "/AA",
    "/Metadata",
    "/PieceInfo",
    "/StructParents",
    "/ID",
    "/PZ",
    "/SeparationInfo",
    "/Tabs",
    "/TemplateInstantiated",
    "/PresSteps",
    "/UserUnit",
    "/VP",
)

RESOURCE_CATEGORIES = (
    "/ExtGState",
    "/ColorSpace",
    "/Pattern",
    "/Shading",
    "/XObject",
    "/Font",
    "/ProcSet",
    "/Properties",
)

WATERMARK_IMAGE_NAME = "/Imw0"
WATERMARK_GSTATE_NAME = "/GS0"

CONTENT_SEPARATOR = " "
PDF_DATE_PREFIX = "D:"
