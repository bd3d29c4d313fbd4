"""Load :class:`~pdfpagedom.model.page.Page` objects from PDF files."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from .core.graph import ObjectResolver
from .exceptions import InvalidDocumentError
from .model.page import Page
from .utils import get_logger, resolve_path

__all__ = ["open_reader", "iter_pages", "load_pages"]

LOGGER = get_logger("pdfpagedom.loader")


def open_reader(path: str | Path) -> PdfReader:
    """Open ``path`` with pypdf, raising :class:`InvalidDocumentError` on failure."""

    pdf_path = resolve_path(path)
    if not pdf_path.exists():
        raise FileNotFoundError(f"PDF file not found: {pdf_path}")
    try:
        reader = PdfReader(str(pdf_path))
        if reader.is_encrypted:
            raise InvalidDocumentError(f"Encrypted PDF files are not supported: {pdf_path}")
        # Touch the page tree so structural errors surface here.
        len(reader.pages)
    except PdfReadError as exc:
        raise InvalidDocumentError(f"Unable to read PDF {pdf_path}: {exc}") from exc
    LOGGER.debug("Opened %s", pdf_path)
    return reader


def iter_pages(reader: PdfReader, resolver: ObjectResolver | None = None) -> Iterator[Page]:
    """Yield a :class:`Page` for every page of ``reader``, in document order."""

    for index, page_object in enumerate(reader.pages):
        LOGGER.debug("Loading page %d", index + 1)
        yield Page.from_dict(page_object, resolver=resolver)


def load_pages(path: str | Path) -> list[Page]:
    return list(iter_pages(open_reader(path)))
