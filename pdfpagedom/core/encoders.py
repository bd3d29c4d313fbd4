"""Pluggable stream encoders used when (re)building content streams."""

from __future__ import annotations

import zlib
from typing import Protocol

from pypdf.filters import FlateDecode
from pypdf.generic import (
    DecodedStreamObject,
    DictionaryObject,
    EncodedStreamObject,
    NameObject,
    NumberObject,
    StreamObject,
)

from ..exceptions import EncodingFailure

__all__ = ["StreamEncoder", "RawEncoder", "FlateEncoder", "make_stream", "encode_stream"]


class StreamEncoder(Protocol):
    """Turns raw bytes into stream data plus the dictionary describing it."""

    def make_stream_metadata(self) -> DictionaryObject:
        """Return the stream dictionary entries for this encoding."""

    def encode(self, data: bytes) -> bytes:
        """Return ``data`` encoded; raise :class:`EncodingFailure` on error."""


class RawEncoder:
    """Identity encoding: the stream carries the bytes unchanged."""

    def make_stream_metadata(self) -> DictionaryObject:
        return DictionaryObject()

    def encode(self, data: bytes) -> bytes:
        if not isinstance(data, (bytes, bytearray)):
            raise EncodingFailure(f"Raw encoder expects bytes, got {type(data).__name__}")
        return bytes(data)


class FlateEncoder:
    """zlib/deflate compression (``/FlateDecode``)."""

    def make_stream_metadata(self) -> DictionaryObject:
        return DictionaryObject({NameObject("/Filter"): NameObject("/FlateDecode")})

    def encode(self, data: bytes) -> bytes:
        try:
            return FlateDecode.encode(bytes(data))
        except (TypeError, zlib.error) as exc:
            raise EncodingFailure(f"Flate encoding failed: {exc}") from exc


def make_stream(data: bytes, metadata: DictionaryObject | None = None) -> StreamObject:
    """Wrap already-encoded ``data`` in a stream object described by ``metadata``."""

    metadata = metadata if metadata is not None else DictionaryObject()
    if "/Filter" in metadata:
        stream: StreamObject = EncodedStreamObject()
        stream._data = data
    else:
        stream = DecodedStreamObject()
        stream.set_data(data)
    stream.update(metadata)
    stream[NameObject("/Length")] = NumberObject(len(data))
    return stream


def encode_stream(data: bytes, encoder: StreamEncoder | None = None) -> StreamObject:
    """Encode ``data`` with ``encoder`` (raw if omitted) into a new stream."""

    encoder = encoder if encoder is not None else RawEncoder()
    metadata = encoder.make_stream_metadata()
    encoded = encoder.encode(data)
    return make_stream(encoded, metadata)
