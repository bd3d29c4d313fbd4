"""Object graph access on top of :mod:`pypdf.generic`.

The page model never parses PDF syntax itself.  It reads and writes pypdf's
generic objects and follows indirect references through the reader or writer
that owns them.  This module collects the small set of helpers needed for
that: a resolver for references and stream data, the :class:`Container`
used for addressable ("boxed") records, and rectangle construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from pypdf.errors import PyPdfError
from pypdf.generic import (
    ArrayObject,
    ByteStringObject,
    DictionaryObject,
    IndirectObject,
    NullObject,
    RectangleObject,
    StreamObject,
    TextStringObject,
)

from ..exceptions import ObjectResolutionError, TypeMismatch

__all__ = [
    "Container",
    "ObjectResolver",
    "DEFAULT_RESOLVER",
    "is_null",
    "raw_entry",
    "make_rectangle",
]


@dataclass(eq=False)
class Container:
    """Addressable wrapper around a direct PDF value.

    ``reference`` is the indirect reference that addresses ``value`` in an
    object store, or ``None`` while the record only lives in memory.
    """

    value: Any
    reference: IndirectObject | None = None

    @property
    def is_bound(self) -> bool:
        return self.reference is not None

    def bind(self, store: Any) -> IndirectObject:
        """Allocate the record in ``store`` once and return its reference."""

        if self.reference is None:
            self.reference = store._add_object(self.value)
        return self.reference

    def to_pdf_object(self) -> Any:
        """Return the object other records should embed to point here."""

        if self.reference is not None:
            return self.reference
        return self.value


def is_null(obj: Any) -> bool:
    return obj is None or isinstance(obj, NullObject)


def raw_entry(dictionary: Any, key: str) -> Any:
    """Return ``dictionary[key]`` without following indirect references."""

    if key not in dictionary:
        return None
    if isinstance(dictionary, DictionaryObject):
        return dictionary.raw_get(key)
    return dictionary[key]


class ObjectResolver:
    """Follows indirect references and decodes streams on demand."""

    def resolve(self, obj: Any) -> Any:
        """Return the direct object behind ``obj``."""

        if isinstance(obj, Container):
            return obj.value
        if isinstance(obj, IndirectObject):
            try:
                resolved = obj.get_object()
            except (PyPdfError, IndexError, KeyError, ValueError, OSError) as exc:
                raise ObjectResolutionError(
                    f"Unable to resolve object {obj.idnum} {obj.generation} R: {exc}"
                ) from exc
            return resolved
        return obj

    def resolve_all(self, items: Iterable[Any]) -> list[Any]:
        return [self.resolve(item) for item in items]

    def decode(self, obj: Any) -> bytes:
        """Return the decoded bytes of a stream or literal string."""

        resolved = self.resolve(obj)
        if isinstance(resolved, ByteStringObject):
            return bytes(resolved)
        if isinstance(resolved, TextStringObject):
            return resolved.original_bytes
        if isinstance(resolved, StreamObject):
            try:
                data = resolved.get_data()
            except (PyPdfError, ValueError) as exc:
                raise ObjectResolutionError(f"Unable to decode stream: {exc}") from exc
            if isinstance(data, str):
                return data.encode("latin-1")
            return bytes(data)
        raise TypeMismatch(
            "/Contents", f"Invalid content stream object holder ({type(resolved).__name__})"
        )


DEFAULT_RESOLVER = ObjectResolver()


def make_rectangle(
    obj: Any, key: str, resolver: ObjectResolver = DEFAULT_RESOLVER
) -> RectangleObject:
    """Build a rectangle from a 4-element numeric array."""

    array = resolver.resolve(obj)
    if not isinstance(array, (ArrayObject, list, tuple)):
        raise TypeMismatch(key, f"Page {key[1:]} not an array")
    values = resolver.resolve_all(array)
    if len(values) != 4:
        raise TypeMismatch(key, f"{key[1:]} must have 4 elements, got {len(values)}")
    for value in values:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeMismatch(key, f"{key[1:]} contains a non-numeric value")
    return RectangleObject(values)
