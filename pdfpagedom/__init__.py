"""
pdfpagedom - page-level object model for PDF documents.

Loads ``/Page`` dictionaries into typed :class:`Page` objects, resolves
attributes inherited through the page tree, manages content streams,
resources and annotations, and writes everything back into the object graph.

Quick Start:
    >>> from pdfpagedom import load_pages
    >>> pages = load_pages("input.pdf")
    >>> pages[0].get_media_box()
    RectangleObject([0, 0, 612, 792])

Main Classes:
    - Page: one page of a document
    - Annotation: generic annotation with an optional subtype context
    - PageResources: the resource table of a page
    - ImageXObject: image resource, e.g. for watermarks

Exceptions:
    - PageDomError: base exception, see :mod:`pdfpagedom.exceptions`

For CLI usage, use the 'pdfpagedom' command after installation.
"""

# Core classes
from pdfpagedom.model.page import Page
from pdfpagedom.model.annotations import Annotation
from pdfpagedom.model.resources import PageResources
from pdfpagedom.model.images import ImageXObject
from pdfpagedom.model.watermark import WatermarkImageOptions, WatermarkPlacement
from pdfpagedom.core.graph import Container, ObjectResolver
from pdfpagedom.core.encoders import FlateEncoder, RawEncoder
from pdfpagedom.core.dates import PdfDate

# Exceptions
from pdfpagedom.exceptions import (
    PageDomError,
    SchemaViolation,
    TypeMismatch,
    InvalidAncestor,
    CyclicAncestry,
    AttributeNotInherited,
    MalformedAnnotation,
    EncodingFailure,
    ObjectResolutionError,
    DateParseError,
    InvalidDocumentError,
)

# Loading
from pdfpagedom.loader import iter_pages, load_pages, open_reader

__version__ = "1.0.0"
__license__ = "MIT"

__all__ = [
    # Main classes
    "Page",
    "Annotation",
    "PageResources",
    "ImageXObject",
    "WatermarkImageOptions",
    "WatermarkPlacement",
    "Container",
    "ObjectResolver",
    "FlateEncoder",
    "RawEncoder",
    "PdfDate",
    # Exceptions
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
    # Loading
    "iter_pages",
    "load_pages",
    "open_reader",
    # Version info
    "__version__",
]
