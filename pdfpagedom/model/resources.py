"""Typed view of a page resource dictionary (ISO 32000-1, 7.8.3)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

from pypdf.generic import ArrayObject, DictionaryObject, IndirectObject, NameObject

from ..constants import RESOURCE_CATEGORIES
from ..core.graph import DEFAULT_RESOLVER, ObjectResolver, is_null
from ..exceptions import TypeMismatch
from ..utils import get_logger

__all__ = ["Colorspace", "ResourceColorspaces", "PageResources"]

LOGGER = get_logger("pdfpagedom.resources")


def _copy_dictionary(source: DictionaryObject) -> DictionaryObject:
    copy = DictionaryObject()
    for key in source:
        copy[NameObject(key)] = source.raw_get(key)
    return copy


@dataclass(eq=False)
class Colorspace:
    """A named colour space: its family plus the object it was read from."""

    family: str
    obj: Any

    @classmethod
    def from_pdf_object(
        cls, obj: Any, resolver: ObjectResolver = DEFAULT_RESOLVER
    ) -> "Colorspace":
        resolved = resolver.resolve(obj)
        if isinstance(resolved, NameObject):
            return cls(family=str(resolved), obj=obj)
        if isinstance(resolved, ArrayObject) and resolved:
            family = resolver.resolve(resolved[0])
            if isinstance(family, NameObject):
                return cls(family=str(family), obj=obj)
        raise TypeMismatch("/ColorSpace", f"Invalid colorspace object ({type(resolved).__name__})")

    def to_pdf_object(self) -> Any:
        return self.obj


class ResourceColorspaces:
    """Ordered ``/ColorSpace`` resource table.

    ``names`` keeps the declaration order; ``colorspaces`` maps each name to
    its :class:`Colorspace`.  Both must be kept in step.
    """

    def __init__(self, reference: IndirectObject | None = None) -> None:
        self.names: list[str] = []
        self.colorspaces: dict[str, Colorspace] = {}
        self.reference = reference

    @classmethod
    def from_pdf_object(
        cls, obj: Any, resolver: ObjectResolver = DEFAULT_RESOLVER
    ) -> "ResourceColorspaces":
        reference = obj if isinstance(obj, IndirectObject) else None
        dictionary = resolver.resolve(obj)
        if not isinstance(dictionary, DictionaryObject):
            raise TypeMismatch("/ColorSpace", "CS attribute type error")

        table = cls(reference=reference)
        for name in dictionary:
            table.set(str(name), Colorspace.from_pdf_object(dictionary.raw_get(name), resolver))
        return table

    def set(self, name: str, colorspace: Colorspace) -> None:
        if name not in self.colorspaces:
            self.names.append(name)
        self.colorspaces[name] = colorspace

    def __contains__(self, name: object) -> bool:
        return name in self.colorspaces

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.names)

    def to_pdf_object(self) -> Any:
        dictionary = DictionaryObject()
        for name in self.names:
            dictionary[NameObject(name)] = self.colorspaces[name].to_pdf_object()

        if self.reference is not None:
            target = self.reference.get_object()
            target.clear()
            target.update(dictionary)
            return self.reference
        return dictionary


class PageResources:
    """Resource categories of a page, in declaration order.

    Category values are kept as read (direct dictionaries or indirect
    references) except ``/ColorSpace``, which is parsed into a
    :class:`ResourceColorspaces` table.
    """

    def __init__(self, reference: IndirectObject | None = None) -> None:
        self._entries: dict[str, Any] = {}
        self.reference = reference

    @classmethod
    def from_pdf_object(
        cls, obj: Any, resolver: ObjectResolver = DEFAULT_RESOLVER
    ) -> "PageResources":
        reference = obj if isinstance(obj, IndirectObject) else None
        dictionary = resolver.resolve(obj)
        if not isinstance(dictionary, DictionaryObject):
            raise TypeMismatch("/Resources", f"Invalid resource dictionary ({type(dictionary).__name__})")

        resources = cls(reference=reference)
        for key in dictionary:
            value = dictionary.raw_get(key)
            if is_null(value):
                continue
            if key == "/ColorSpace":
                value = ResourceColorspaces.from_pdf_object(value, resolver)
            resources._entries[str(key)] = value
        return resources

    # -- Category access -----------------------------------------------------

    def categories(self) -> list[str]:
        return list(self._entries)

    def get(self, category: str) -> Any:
        return self._entries.get(category)

    def set(self, category: str, value: Any) -> None:
        if value is None:
            self._entries.pop(category, None)
            return
        self._entries[category] = value

    @property
    def xobject(self) -> Any:
        return self._entries.get("/XObject")

    @property
    def font(self) -> Any:
        return self._entries.get("/Font")

    @property
    def ext_gstate(self) -> Any:
        return self._entries.get("/ExtGState")

    @property
    def colorspaces(self) -> ResourceColorspaces | None:
        return self._entries.get("/ColorSpace")

    def category_dictionary(
        self, category: str, resolver: ObjectResolver = DEFAULT_RESOLVER
    ) -> DictionaryObject | None:
        """Return the name dictionary for ``category`` if it is one."""

        value = self._entries.get(category)
        if value is None:
            return None
        resolved = resolver.resolve(value)
        if isinstance(resolved, DictionaryObject):
            return resolved
        return None

    def _writable_category(self, category: str, resolver: ObjectResolver) -> DictionaryObject:
        value = self._entries.get(category)
        if value is None:
            dictionary = DictionaryObject()
            self._entries[category] = dictionary
            return dictionary

        resolved = resolver.resolve(value)
        if not isinstance(resolved, DictionaryObject):
            raise TypeMismatch(category, f"Invalid {category[1:]} resource dictionary type")
        if value is resolved:
            return resolved
        # Shared through a reference: take a private copy.
        dictionary = _copy_dictionary(resolved)
        self._entries[category] = dictionary
        LOGGER.debug("Copied shared %s resource dictionary before update", category)
        return dictionary

    # -- Registry ------------------------------------------------------------

    def add(
        self,
        category: str,
        name: str,
        resource: Any,
        resolver: ObjectResolver = DEFAULT_RESOLVER,
    ) -> None:
        """Bind ``name`` to ``resource`` in ``category``; last write wins."""

        if category not in RESOURCE_CATEGORIES:
            LOGGER.debug("Adding resource to non-standard category %s", category)
        if self.reference is not None:
            # Shared /Resources dictionary: its categories belong to every user of it.
            LOGGER.debug("Detaching shared resource dictionary %s", self.reference)
            self._entries = self.copy(resolver)._entries
            self.reference = None
        dictionary = self._writable_category(category, resolver)
        dictionary[NameObject(name)] = resource

    def has(self, category: str, name: str, resolver: ObjectResolver = DEFAULT_RESOLVER) -> bool:
        dictionary = self.category_dictionary(category, resolver)
        if dictionary is None:
            return False
        return name in dictionary

    def copy(self, resolver: ObjectResolver = DEFAULT_RESOLVER) -> "PageResources":
        """Return a detached copy whose category dictionaries can be mutated."""

        duplicate = PageResources()
        for category, value in self._entries.items():
            if isinstance(value, ResourceColorspaces):
                colorspaces = ResourceColorspaces()
                for name in value.names:
                    colorspaces.set(name, value.colorspaces[name])
                duplicate._entries[category] = colorspaces
                continue
            resolved = resolver.resolve(value)
            if isinstance(resolved, DictionaryObject):
                duplicate._entries[category] = _copy_dictionary(resolved)
            elif isinstance(resolved, ArrayObject):
                duplicate._entries[category] = ArrayObject(resolved)
            else:
                duplicate._entries[category] = value
        return duplicate

    # -- Projection ----------------------------------------------------------

    def to_pdf_object(self) -> Any:
        dictionary = DictionaryObject()
        for category, value in self._entries.items():
            if isinstance(value, ResourceColorspaces):
                value = value.to_pdf_object()
            dictionary[NameObject(category)] = value

        if self.reference is not None:
            target = self.reference.get_object()
            target.clear()
            target.update(dictionary)
            return self.reference
        return dictionary
