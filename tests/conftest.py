from __future__ import annotations

from pathlib import Path
from typing import Any, Callable
import sys

import pytest
from pypdf import PdfWriter
from pypdf.generic import (
    ArrayObject,
    DecodedStreamObject,
    DictionaryObject,
    IndirectObject,
    NameObject,
    NumberObject,
)

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


def _apply(dictionary: DictionaryObject, entries: dict[str, Any]) -> DictionaryObject:
    for key, value in entries.items():
        dictionary[NameObject(f"/{key}")] = value
    return dictionary


@pytest.fixture()
def writer() -> PdfWriter:
    return PdfWriter()


@pytest.fixture()
def make_pages_node(writer: PdfWriter) -> Callable[..., IndirectObject]:
    """Add an intermediate ``/Pages`` node to the writer and return its reference."""

    def _create(parent: Any = None, **entries: Any) -> IndirectObject:
        node = DictionaryObject(
            {
                NameObject("/Type"): NameObject("/Pages"),
                NameObject("/Kids"): ArrayObject(),
                NameObject("/Count"): NumberObject(0),
            }
        )
        if parent is not None:
            node[NameObject("/Parent")] = parent
        return writer._add_object(_apply(node, entries))

    return _create


@pytest.fixture()
def make_page_dict() -> Callable[..., DictionaryObject]:
    """Build a direct ``/Page`` dictionary."""

    def _create(parent: Any = None, **entries: Any) -> DictionaryObject:
        page = DictionaryObject({NameObject("/Type"): NameObject("/Page")})
        if parent is not None:
            page[NameObject("/Parent")] = parent
        return _apply(page, entries)

    return _create


@pytest.fixture()
def make_stream() -> Callable[[bytes], DecodedStreamObject]:
    def _create(data: bytes) -> DecodedStreamObject:
        stream = DecodedStreamObject()
        stream.set_data(data)
        stream[NameObject("/Length")] = NumberObject(len(data))
        return stream

    return _create


@pytest.fixture()
def sample_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "sample.pdf"
    writer = PdfWriter()
    page = writer.add_blank_page(width=612, height=792)
    stream = DecodedStreamObject()
    stream.set_data(b"q\n1 0 0 1 0 0 cm\nQ")
    page[NameObject("/Contents")] = writer._add_object(stream)
    writer.add_blank_page(width=200, height=400)
    writer.add_metadata({"/Producer": "pdfpagedom-tests", "/Title": "Sample"})
    with pdf_path.open("wb") as handle:
        writer.write(handle)
    return pdf_path


@pytest.fixture()
def sample_png(tmp_path: Path) -> Path:
    from PIL import Image

    image_path = tmp_path / "logo.png"
    Image.new("RGB", (30, 15), color=(200, 30, 30)).save(image_path)
    return image_path
