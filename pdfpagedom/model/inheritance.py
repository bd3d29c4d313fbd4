"""Inheritable page attributes resolved through the page tree."""

from __future__ import annotations

from typing import Any

from pypdf.generic import DictionaryObject

from ..core.graph import DEFAULT_RESOLVER, ObjectResolver, is_null, raw_entry
from ..exceptions import AttributeNotInherited, CyclicAncestry, InvalidAncestor, ObjectResolutionError
from ..utils import get_logger

__all__ = ["find_inherited"]

LOGGER = get_logger("pdfpagedom.inheritance")


def find_inherited(parent: Any, key: str, resolver: ObjectResolver = DEFAULT_RESOLVER) -> Any:
    """Return the raw value of ``key`` from the nearest ancestor defining it.

    The walk starts at ``parent`` and follows ``/Parent`` links upwards.
    Ancestors are only read.  Raises :class:`AttributeNotInherited` when the
    root is passed without finding ``key``.
    """

    visited: set[int] = set()
    node = parent
    depth = 0
    while not is_null(node):
        try:
            dictionary = resolver.resolve(node)
        except ObjectResolutionError as exc:
            raise InvalidAncestor(f"Unable to resolve parent object: {exc}") from exc
        if not isinstance(dictionary, DictionaryObject):
            raise InvalidAncestor(
                f"Invalid parent objects dictionary ({type(dictionary).__name__})"
            )

        identity = id(dictionary)
        if identity in visited:
            raise CyclicAncestry(f"Parent chain loops back after {depth} levels while looking up {key}")
        visited.add(identity)

        if key in dictionary:
            LOGGER.debug("Resolved %s from ancestor at depth %d", key, depth)
            return raw_entry(dictionary, key)

        node = raw_entry(dictionary, "/Parent")
        depth += 1

    raise AttributeNotInherited(key)
