"""Object graph access, dates and stream encoders used by the page model."""

from .dates import PdfDate, format_pdf_date, parse_pdf_date
from .encoders import FlateEncoder, RawEncoder, StreamEncoder, encode_stream, make_stream
from .graph import DEFAULT_RESOLVER, Container, ObjectResolver, is_null, make_rectangle, raw_entry

__all__ = [
    "Container",
    "ObjectResolver",
    "DEFAULT_RESOLVER",
    "is_null",
    "raw_entry",
    "make_rectangle",
    "PdfDate",
    "parse_pdf_date",
    "format_pdf_date",
    "StreamEncoder",
    "RawEncoder",
    "FlateEncoder",
    "make_stream",
    "encode_stream",
]
