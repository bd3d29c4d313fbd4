"""Page content streams: one stream or an array of streams.

A page's ``/Contents`` is either a single stream or an array of streams that
together form one instruction sequence.  The helpers here keep whichever
shape is in use instead of always normalising to an array, since some
consumers are sensitive to the difference.
"""

from __future__ import annotations

from typing import Any, Sequence

from pypdf.generic import ArrayObject, DecodedStreamObject, NameObject, NumberObject

from ..constants import CONTENT_SEPARATOR
from ..core.encoders import StreamEncoder, encode_stream
from ..core.graph import DEFAULT_RESOLVER, ObjectResolver, is_null
from ..exceptions import EncodingFailure
from ..utils import as_bytes, as_text, get_logger

__all__ = [
    "make_content_stream",
    "append_content_stream",
    "build_content_streams",
    "read_content_streams",
    "join_content_streams",
]

LOGGER = get_logger("pdfpagedom.contents")


def _encode_text(text: str | bytes) -> bytes:
    try:
        return as_bytes(text)
    except UnicodeEncodeError as exc:
        raise EncodingFailure(f"Content stream text is not single-byte: {exc}") from exc


def make_content_stream(text: str | bytes) -> DecodedStreamObject:
    """Wrap ``text`` as an unfiltered stream with its byte length."""

    data = _encode_text(text)
    stream = DecodedStreamObject()
    stream.set_data(data)
    stream[NameObject("/Length")] = NumberObject(len(data))
    return stream


def append_content_stream(contents: Any, stream: Any, resolver: ObjectResolver = DEFAULT_RESOLVER) -> Any:
    """Return the new ``/Contents`` value with ``stream`` added at the end."""

    if is_null(contents):
        return stream

    resolved = resolver.resolve(contents)
    if isinstance(resolved, ArrayObject):
        if resolved is contents:
            contents.append(stream)
            return contents
        # Referenced array: the page takes a direct array of its own.
        return ArrayObject([*resolved, stream])

    LOGGER.debug("Promoting single content stream to an array")
    return ArrayObject([contents, stream])


def build_content_streams(
    texts: Sequence[str | bytes], encoder: StreamEncoder | None = None
) -> Any:
    """Encode each text into its own stream; ``None`` for an empty list."""

    if not texts:
        return None
    streams = [encode_stream(_encode_text(text), encoder) for text in texts]
    if len(streams) == 1:
        return streams[0]
    return ArrayObject(streams)


def read_content_streams(contents: Any, resolver: ObjectResolver = DEFAULT_RESOLVER) -> list[str]:
    """Decode ``/Contents`` into its segments, in order."""

    if is_null(contents):
        return []
    resolved = resolver.resolve(contents)
    if is_null(resolved):
        return []
    if isinstance(resolved, ArrayObject):
        return [as_text(resolver.decode(item)) for item in resolved]
    return [as_text(resolver.decode(resolved))]


def join_content_streams(segments: Sequence[str]) -> str:
    return CONTENT_SEPARATOR.join(segments)
