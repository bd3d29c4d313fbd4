"""Image XObjects registered as page resources."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from PIL import Image
from pypdf.generic import DictionaryObject, NameObject, NumberObject, StreamObject

from ..core.encoders import FlateEncoder, StreamEncoder, make_stream
from ..core.graph import DEFAULT_RESOLVER, ObjectResolver, raw_entry
from ..exceptions import TypeMismatch

__all__ = ["ImageXObject"]

_PIL_COLORSPACES = {
    "L": "/DeviceGray",
    "RGB": "/DeviceRGB",
    "CMYK": "/DeviceCMYK",
}


def _check_size(width: Any, height: Any) -> None:
    for key, value in (("/Width", width), ("/Height", height)):
        if value <= 0:
            raise TypeMismatch(key, f"Image {key[1:]} is not positive ({value})")


@dataclass(eq=False)
class ImageXObject:
    """An image XObject: intrinsic size, sample format and encoded samples."""

    width: int
    height: int
    data: bytes = b""
    color_space: str = "/DeviceRGB"
    bits_per_component: int = 8
    filter: str | None = None
    source: Any = None
    _stream: StreamObject | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        _check_size(self.width, self.height)

    @classmethod
    def from_pdf_object(cls, obj: Any, resolver: ObjectResolver = DEFAULT_RESOLVER) -> "ImageXObject":
        """Wrap an existing image stream; it is written back unchanged."""

        stream = resolver.resolve(obj)
        if not isinstance(stream, StreamObject):
            raise TypeMismatch("/XObject", f"Image XObject is not a stream ({type(stream).__name__})")
        subtype = resolver.resolve(raw_entry(stream, "/Subtype"))
        if subtype != "/Image":
            raise TypeMismatch("/Subtype", f"XObject subtype is {subtype}, expected /Image")

        width = resolver.resolve(raw_entry(stream, "/Width"))
        height = resolver.resolve(raw_entry(stream, "/Height"))
        for key, value in (("/Width", width), ("/Height", height)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeMismatch(key, f"Image {key[1:]} is not an integer")

        color_space = resolver.resolve(raw_entry(stream, "/ColorSpace"))
        bits = resolver.resolve(raw_entry(stream, "/BitsPerComponent"))
        filter_name = resolver.resolve(raw_entry(stream, "/Filter"))
        return cls(
            width=int(width),
            height=int(height),
            color_space=str(color_space) if isinstance(color_space, NameObject) else "/DeviceRGB",
            bits_per_component=int(bits) if isinstance(bits, int) else 8,
            filter=str(filter_name) if isinstance(filter_name, NameObject) else None,
            source=obj,
        )

    @classmethod
    def from_pil(cls, image: Image.Image, encoder: StreamEncoder | None = None) -> "ImageXObject":
        """Build a Flate-compressed (by default) image from a Pillow image."""

        if image.mode not in _PIL_COLORSPACES:
            image = image.convert("RGB")
        encoder = encoder if encoder is not None else FlateEncoder()
        metadata = encoder.make_stream_metadata()
        filter_name = metadata.get("/Filter")
        return cls(
            width=image.width,
            height=image.height,
            data=encoder.encode(image.tobytes()),
            color_space=_PIL_COLORSPACES[image.mode],
            bits_per_component=8,
            filter=str(filter_name) if filter_name is not None else None,
        )

    def to_pdf_object(self) -> Any:
        if self.source is not None:
            return self.source
        if self._stream is None:
            metadata = DictionaryObject(
                {
                    NameObject("/Type"): NameObject("/XObject"),
                    NameObject("/Subtype"): NameObject("/Image"),
                    NameObject("/Width"): NumberObject(self.width),
                    NameObject("/Height"): NumberObject(self.height),
                    NameObject("/ColorSpace"): NameObject(self.color_space),
                    NameObject("/BitsPerComponent"): NumberObject(self.bits_per_component),
                }
            )
            if self.filter:
                metadata[NameObject("/Filter")] = NameObject(self.filter)
            self._stream = make_stream(self.data, metadata)
        return self._stream
