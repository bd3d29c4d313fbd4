"""Page-level object model (ISO 32000-1, 7.7.3.3).

:class:`Page` materialises one ``/Page`` dictionary of the object graph into
typed attributes, resolves attributes inherited from the page tree, manages
the content streams and resources of the page and projects everything back
into the dictionary it was read from before the document is written.

Attributes that are rarely manipulated (``/Group``, ``/Thumb``,
``/StructParents`` and friends) are not typed.  They are kept as the original
PDF objects in :attr:`Page.opaque` and written back unchanged.
"""

from __future__ import annotations

from typing import Any, Sequence

from pypdf.generic import (
    ArrayObject,
    ByteStringObject,
    DictionaryObject,
    NameObject,
    NumberObject,
    RectangleObject,
    StreamObject,
    TextStringObject,
)

from ..constants import (
    BOX_KEYS,
    INHERITABLE_KEYS,
    OPAQUE_KEYS,
    PAGE_TYPE,
    WATERMARK_GSTATE_NAME,
    WATERMARK_IMAGE_NAME,
)
from ..core.dates import PdfDate
from ..core.encoders import StreamEncoder
from ..core.graph import DEFAULT_RESOLVER, Container, ObjectResolver, is_null, make_rectangle, raw_entry
from ..exceptions import AttributeNotInherited, DateParseError, SchemaViolation, TypeMismatch
from ..utils import get_logger
from .annotations import Annotation, load_annotations
from .contents import (
    append_content_stream,
    build_content_streams,
    join_content_streams,
    make_content_stream,
    read_content_streams,
)
from .images import ImageXObject
from .inheritance import find_inherited
from .resources import PageResources
from .watermark import (
    WatermarkImageOptions,
    WatermarkPlacement,
    compute_placement,
    make_watermark_gstate,
    watermark_operators,
)

__all__ = ["Page"]

LOGGER = get_logger("pdfpagedom.page")

_BOX_ATTRIBUTES = {
    "/MediaBox": "media_box",
    "/CropBox": "crop_box",
    "/BleedBox": "bleed_box",
    "/TrimBox": "trim_box",
    "/ArtBox": "art_box",
}


def _resource_name(name: str) -> str:
    return name if name.startswith("/") else f"/{name}"


def _set_or_clear(dictionary: DictionaryObject, key: str, value: Any) -> None:
    if is_null(value):
        dictionary.pop(key, None)
    else:
        dictionary[NameObject(key)] = value


class Page:
    """A single page of a PDF document.

    Create an empty page with ``Page()`` or load one with
    :meth:`Page.from_dict`.  Either way the page owns one backing
    :class:`~pdfpagedom.core.graph.Container` for its whole lifetime, so
    references other objects hold to the page stay valid across edits.
    """

    def __init__(self, *, resolver: ObjectResolver | None = None) -> None:
        self.resolver = resolver if resolver is not None else DEFAULT_RESOLVER

        # Reference to the enclosing /Pages node.  Used for lookups only.
        self.parent: Any = None
        self.last_modified: PdfDate | None = None
        self.resources: PageResources | None = None
        self.media_box: RectangleObject | None = None
        self.crop_box: RectangleObject | None = None
        self.bleed_box: RectangleObject | None = None
        self.trim_box: RectangleObject | None = None
        self.art_box: RectangleObject | None = None
        self.rotate: int | None = None
        self.contents: Any = None
        self.annotations: list[Annotation] | None = None
        self.opaque: dict[str, Any] = {}

        self._page_dict = DictionaryObject()
        self._container = Container(self._page_dict)

    def __repr__(self) -> str:
        annotations = len(self.annotations) if self.annotations is not None else 0
        return f"Page(media_box={self.media_box!r}, rotate={self.rotate!r}, annotations={annotations})"

    # -- Loading ---------------------------------------------------------------

    @classmethod
    def from_dict(cls, page_dict: DictionaryObject, *, resolver: ObjectResolver | None = None) -> "Page":
        """Build a page from a ``/Page`` dictionary of a loaded document.

        The dictionary itself becomes the page's backing record and is
        updated in place by :meth:`to_pdf_object`.
        """

        page = cls(resolver=resolver)
        resolver = page.resolver
        page._page_dict = page_dict
        page._container = Container(page_dict, reference=getattr(page_dict, "indirect_reference", None))

        page_type = resolver.resolve(raw_entry(page_dict, "/Type"))
        if not isinstance(page_type, NameObject):
            raise SchemaViolation("Missing/Invalid Page dictionary Type")
        if page_type != PAGE_TYPE:
            raise SchemaViolation(f"Page dictionary Type != Page ({page_type})")

        if "/Parent" in page_dict:
            page.parent = raw_entry(page_dict, "/Parent")

        if "/LastModified" in page_dict:
            page.last_modified = page._parse_date(raw_entry(page_dict, "/LastModified"))

        if "/Resources" in page_dict:
            page.resources = PageResources.from_pdf_object(raw_entry(page_dict, "/Resources"), resolver)

        for key, attribute in _BOX_ATTRIBUTES.items():
            if key in page_dict:
                setattr(page, attribute, make_rectangle(raw_entry(page_dict, key), key, resolver))

        if "/Contents" in page_dict:
            page.contents = raw_entry(page_dict, "/Contents")

        if "/Rotate" in page_dict:
            page.rotate = page._parse_rotate(raw_entry(page_dict, "/Rotate"))

        for key in OPAQUE_KEYS:
            if key in page_dict:
                page.opaque[key] = raw_entry(page_dict, key)

        annotations = load_annotations(page_dict, resolver)
        # None keeps a page without /Annots from gaining an empty array.
        page.annotations = annotations if "/Annots" in page_dict else None
        LOGGER.debug(
            "Loaded page %s with %d annotation(s)",
            page._container.reference,
            len(annotations),
        )
        return page

    def _parse_date(self, obj: Any) -> PdfDate:
        value = self.resolver.resolve(obj)
        if isinstance(value, ByteStringObject):
            value = bytes(value).decode("latin-1")
        if not isinstance(value, (str, TextStringObject)):
            raise TypeMismatch("/LastModified", "Page dictionary LastModified != string")
        try:
            return PdfDate.parse(str(value))
        except DateParseError as exc:
            raise TypeMismatch("/LastModified", str(exc)) from exc

    def _parse_rotate(self, obj: Any) -> int:
        value = self.resolver.resolve(obj)
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeMismatch("/Rotate", "Invalid Page Rotate object")
        return int(value)

    # -- Opaque attributes -------------------------------------------------------

    def get_opaque(self, key: str) -> Any:
        return self.opaque.get(key)

    def set_opaque(self, key: str, value: Any) -> None:
        if key not in OPAQUE_KEYS:
            raise KeyError(f"{key} is not a pass-through page attribute")
        if value is None:
            self.opaque.pop(key, None)
        else:
            self.opaque[key] = value

    # -- Inheritance -----------------------------------------------------------

    def _own_value(self, key: str) -> Any:
        if key == "/Resources":
            return self.resources
        if key == "/Rotate":
            return self.rotate
        return getattr(self, _BOX_ATTRIBUTES[key])

    def _parse_inherited(self, key: str, obj: Any) -> Any:
        if key == "/Resources":
            return PageResources.from_pdf_object(obj, self.resolver)
        if key == "/Rotate":
            return self._parse_rotate(obj)
        return make_rectangle(obj, key, self.resolver)

    def get_inherited(self, key: str) -> Any:
        """Return ``key`` from the page or its nearest ancestor.

        Raises :class:`AttributeNotInherited` when neither defines it.
        """

        if key not in INHERITABLE_KEYS:
            raise KeyError(f"{key} is not an inheritable page attribute")
        own = self._own_value(key)
        if own is not None:
            return own
        return self._parse_inherited(key, find_inherited(self.parent, key, self.resolver))

    def get_media_box(self) -> RectangleObject:
        """Return the effective media box; it must be defined somewhere."""

        return self.get_inherited("/MediaBox")

    def get_resources(self) -> PageResources | None:
        """Return the effective resources, or ``None`` if none are defined."""

        try:
            return self.get_inherited("/Resources")
        except AttributeNotInherited:
            return None

    # -- Resources -------------------------------------------------------------

    def _ensure_resources(self) -> PageResources:
        if self.resources is None:
            inherited = self.get_resources()
            if inherited is not None:
                # Ancestors are never written to; the page takes a copy.
                self.resources = inherited.copy(self.resolver)
            else:
                self.resources = PageResources()
        return self.resources

    def add_image_resource(self, name: str, image: ImageXObject) -> None:
        """Register ``image`` as an XObject named ``name``."""

        self._ensure_resources().add("/XObject", _resource_name(name), image.to_pdf_object(), self.resolver)

    def has_image_resource(self, name: str) -> bool:
        try:
            resources = self.get_resources()
        except TypeMismatch:
            return False
        if resources is None:
            return False
        return resources.has("/XObject", _resource_name(name), self.resolver)

    def add_font(self, name: str, font: DictionaryObject) -> None:
        self._ensure_resources().add("/Font", _resource_name(name), font, self.resolver)

    def add_ext_gstate(self, name: str, gstate: DictionaryObject) -> None:
        self._ensure_resources().add("/ExtGState", _resource_name(name), gstate, self.resolver)

    def add_watermark_image(
        self, image: ImageXObject, options: WatermarkImageOptions | None = None
    ) -> WatermarkPlacement:
        """Draw ``image`` over the page content and return where it went."""

        options = options if options is not None else WatermarkImageOptions()
        placement = compute_placement(self.get_media_box(), image.width, image.height, options)
        LOGGER.debug("Watermark placement: %s", placement)

        self.add_image_resource(WATERMARK_IMAGE_NAME, image)
        self.add_ext_gstate(WATERMARK_GSTATE_NAME, make_watermark_gstate(options.alpha))
        self.add_content_stream_by_string(
            watermark_operators(placement, WATERMARK_IMAGE_NAME, WATERMARK_GSTATE_NAME)
        )
        return placement

    # -- Annotations -----------------------------------------------------------

    def add_annotation(self, annotation: Annotation) -> None:
        if self.annotations is None:
            self.annotations = []
        self.annotations.append(annotation)

    # -- Content streams -------------------------------------------------------

    def add_content_stream_by_string(self, content: str | bytes) -> None:
        """Append ``content`` as a new, unfiltered content stream segment."""

        stream = make_content_stream(content)
        self.contents = append_content_stream(self.contents, stream, self.resolver)

    def set_content_streams(
        self, content_streams: Sequence[str | bytes], encoder: StreamEncoder | None = None
    ) -> None:
        """Replace all content with one stream per entry of ``content_streams``.

        Each entry is encoded with ``encoder`` (raw bytes if omitted).  An
        empty sequence removes the page content.
        """

        self.contents = build_content_streams(content_streams, encoder)

    def get_content_streams(self) -> list[str]:
        return read_content_streams(self.contents, self.resolver)

    def get_all_content_streams(self) -> str:
        """Return all content segments joined into one instruction string."""

        return join_content_streams(self.get_content_streams())

    # -- Projection ------------------------------------------------------------

    def get_container(self) -> Container:
        return self._container

    container = property(get_container)

    def get_page_dict(self) -> DictionaryObject:
        """Rewrite the backing dictionary from the current attributes."""

        page_dict = self._page_dict
        page_dict[NameObject("/Type")] = NameObject(PAGE_TYPE)
        _set_or_clear(page_dict, "/Parent", self.parent)

        _set_or_clear(
            page_dict,
            "/LastModified",
            self.last_modified.to_pdf_object() if self.last_modified is not None else None,
        )
        _set_or_clear(
            page_dict,
            "/Resources",
            self.resources.to_pdf_object() if self.resources is not None else None,
        )
        for key in BOX_KEYS:
            _set_or_clear(page_dict, key, getattr(self, _BOX_ATTRIBUTES[key]))
        _set_or_clear(page_dict, "/Contents", self.contents)
        _set_or_clear(page_dict, "/Rotate", NumberObject(self.rotate) if self.rotate is not None else None)

        for key in OPAQUE_KEYS:
            _set_or_clear(page_dict, key, self.opaque.get(key))

        if self.annotations is not None:
            annots = ArrayObject()
            for annotation in self.annotations:
                context = annotation.get_context()
                if context is not None:
                    annots.append(context.to_pdf_object())
                else:
                    annots.append(annotation.to_pdf_object())
            page_dict[NameObject("/Annots")] = annots
        else:
            page_dict.pop("/Annots", None)

        return page_dict

    def to_pdf_object(self) -> Container:
        """Refresh the backing dictionary and return the page's container."""

        self.get_page_dict()
        return self._container

    def bind(self, store: Any) -> Any:
        """Allocate the page and its new streams in ``store`` (a ``PdfWriter``).

        Streams must be indirect objects in a written file, so content
        segments and image XObjects created in memory are added to the store
        before the page itself.
        """

        if isinstance(self.contents, StreamObject):
            self.contents = store._add_object(self.contents)
        elif isinstance(self.contents, ArrayObject):
            for index, item in enumerate(self.contents):
                if isinstance(item, StreamObject):
                    self.contents[index] = store._add_object(item)

        if self.resources is not None:
            xobjects = self.resources.get("/XObject")
            if isinstance(xobjects, DictionaryObject):
                for name in list(xobjects):
                    value = xobjects.raw_get(name)
                    if isinstance(value, StreamObject):
                        xobjects[NameObject(name)] = store._add_object(value)

        self.get_page_dict()
        return self._container.bind(store)
