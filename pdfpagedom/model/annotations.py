"""Page annotations: generic records, subtype contexts and the /Annots loader."""

from __future__ import annotations

from typing import Any, ClassVar

from pypdf.generic import (
    ArrayObject,
    BooleanObject,
    ByteStringObject,
    DictionaryObject,
    FloatObject,
    IndirectObject,
    NameObject,
    NumberObject,
    RectangleObject,
    TextStringObject,
    create_string_object,
)

from ..core.graph import DEFAULT_RESOLVER, Container, ObjectResolver, is_null, make_rectangle, raw_entry
from ..exceptions import MalformedAnnotation, TypeMismatch
from ..utils import get_logger

__all__ = [
    "Annotation",
    "AnnotationContext",
    "LinkAnnotation",
    "TextAnnotation",
    "WidgetAnnotation",
    "MarkupAnnotation",
    "load_annotations",
    "normalize_annotation_entry",
]

LOGGER = get_logger("pdfpagedom.annotations")


def _text(value: Any, key: str) -> str | None:
    if value is None:
        return None
    if isinstance(value, ByteStringObject):
        # PDFDocEncoding or a UTF-16 BOM may still apply.
        value = create_string_object(bytes(value))
        if isinstance(value, ByteStringObject):
            return bytes(value).decode("latin-1")
    if not isinstance(value, str):
        raise TypeMismatch(key, f"Annotation {key} is not a text string")
    return str(value)


class Annotation:
    """An entry of a page's ``/Annots`` array.

    The annotation always lives in a :class:`Container`; inline dictionaries
    found in the wild get a synthetic, unbound one.  Keys the model does not
    know about stay in the dictionary and are written back untouched.
    """

    def __init__(self, container: Container | None = None) -> None:
        if container is None:
            container = Container(DictionaryObject())
        self.container = container
        self.subtype: str | None = None
        self.rect: RectangleObject | None = None
        self.contents: str | None = None
        self.name: str | None = None
        self.flags: int | None = None
        self._context: AnnotationContext | None = None
        # key -> (loaded text, original string object)
        self._loaded_text: dict[str, tuple[str, Any]] = {}

    @property
    def dictionary(self) -> DictionaryObject:
        return self.container.value

    @classmethod
    def from_container(
        cls, container: Container, resolver: ObjectResolver = DEFAULT_RESOLVER
    ) -> "Annotation":
        dictionary = container.value
        if not isinstance(dictionary, DictionaryObject):
            raise MalformedAnnotation(
                f"Annotation container holds {type(dictionary).__name__}, expected a dictionary"
            )

        annotation = cls(container)
        subtype = resolver.resolve(raw_entry(dictionary, "/Subtype"))
        if subtype is not None:
            if not isinstance(subtype, NameObject):
                raise TypeMismatch("/Subtype", "Annotation Subtype is not a name")
            annotation.subtype = str(subtype)
        if "/Rect" in dictionary:
            annotation.rect = make_rectangle(raw_entry(dictionary, "/Rect"), "/Rect", resolver)
        annotation.contents = annotation.load_text(dictionary, "/Contents", resolver)
        annotation.name = annotation.load_text(dictionary, "/NM", resolver)
        flags = resolver.resolve(raw_entry(dictionary, "/F"))
        if flags is not None:
            if isinstance(flags, bool) or not isinstance(flags, int):
                raise TypeMismatch("/F", "Annotation flags are not an integer")
            annotation.flags = int(flags)

        context_class = ANNOTATION_CONTEXTS.get(annotation.subtype or "")
        if context_class is not None:
            annotation._context = context_class.from_annotation(annotation, resolver)
        return annotation

    def load_text(self, dictionary: DictionaryObject, key: str, resolver: ObjectResolver) -> str | None:
        """Decode the text string under ``key`` and remember the object it came from."""

        raw = raw_entry(dictionary, key)
        value = _text(resolver.resolve(raw), key)
        if value is not None:
            self._loaded_text[key] = (value, raw)
        return value

    def text_object(self, key: str, value: str | None) -> Any:
        """Return the object to write for ``key``; unchanged text keeps its original bytes."""

        if value is None:
            return None
        loaded = self._loaded_text.get(key)
        if loaded is not None and loaded[0] == value:
            return loaded[1]
        return TextStringObject(value)

    def get_context(self) -> "AnnotationContext | None":
        """Return the subtype-specific view, or ``None`` for generic annotations."""

        return self._context

    def set_context(self, context: "AnnotationContext | None") -> None:
        self._context = context
        if context is not None and context.subtype:
            self.subtype = context.subtype

    def to_pdf_object(self) -> Any:
        """Write the common annotation keys and return what /Annots should hold."""

        dictionary = self.dictionary
        dictionary[NameObject("/Type")] = NameObject("/Annot")
        _set_or_clear(dictionary, "/Subtype", NameObject(self.subtype) if self.subtype else None)
        _set_or_clear(dictionary, "/Rect", self.rect)
        _set_or_clear(dictionary, "/Contents", self.text_object("/Contents", self.contents))
        _set_or_clear(dictionary, "/NM", self.text_object("/NM", self.name))
        _set_or_clear(dictionary, "/F", NumberObject(self.flags) if self.flags is not None else None)
        return self.container.to_pdf_object()


def _set_or_clear(dictionary: DictionaryObject, key: str, value: Any) -> None:
    if value is None:
        dictionary.pop(key, None)
    else:
        dictionary[NameObject(key)] = value


class AnnotationContext:
    """Subtype-specific projection of an :class:`Annotation`."""

    subtype: ClassVar[str] = ""

    def __init__(self, annotation: Annotation) -> None:
        self.annotation = annotation

    @classmethod
    def from_annotation(
        cls, annotation: Annotation, resolver: ObjectResolver = DEFAULT_RESOLVER
    ) -> "AnnotationContext":
        context = cls(annotation)
        context._load(annotation.dictionary, resolver)
        return context

    def _load(self, dictionary: DictionaryObject, resolver: ObjectResolver) -> None:
        pass

    def _write(self, dictionary: DictionaryObject) -> None:
        pass

    def to_pdf_object(self) -> Any:
        obj = self.annotation.to_pdf_object()
        self._write(self.annotation.dictionary)
        return obj


class LinkAnnotation(AnnotationContext):
    subtype = "/Link"

    def __init__(self, annotation: Annotation) -> None:
        super().__init__(annotation)
        self.destination: Any = None
        self.action: Any = None
        self.highlight: str | None = None

    def _load(self, dictionary: DictionaryObject, resolver: ObjectResolver) -> None:
        self.destination = raw_entry(dictionary, "/Dest")
        self.action = raw_entry(dictionary, "/A")
        highlight = resolver.resolve(raw_entry(dictionary, "/H"))
        self.highlight = str(highlight) if isinstance(highlight, NameObject) else None

    def _write(self, dictionary: DictionaryObject) -> None:
        _set_or_clear(dictionary, "/Dest", self.destination)
        _set_or_clear(dictionary, "/A", self.action)
        _set_or_clear(dictionary, "/H", NameObject(self.highlight) if self.highlight else None)


class TextAnnotation(AnnotationContext):
    """Sticky note (``/Text``)."""

    subtype = "/Text"

    def __init__(self, annotation: Annotation) -> None:
        super().__init__(annotation)
        self.open: bool | None = None
        self.icon: str | None = None

    def _load(self, dictionary: DictionaryObject, resolver: ObjectResolver) -> None:
        is_open = resolver.resolve(raw_entry(dictionary, "/Open"))
        if is_open is not None:
            if not isinstance(is_open, BooleanObject):
                raise TypeMismatch("/Open", "Text annotation Open is not a boolean")
            self.open = bool(is_open.value)
        icon = resolver.resolve(raw_entry(dictionary, "/Name"))
        self.icon = str(icon) if isinstance(icon, NameObject) else None

    def _write(self, dictionary: DictionaryObject) -> None:
        _set_or_clear(dictionary, "/Open", BooleanObject(self.open) if self.open is not None else None)
        _set_or_clear(dictionary, "/Name", NameObject(self.icon) if self.icon else None)


class WidgetAnnotation(AnnotationContext):
    """Form field widget; the field itself is owned by the AcroForm tree."""

    subtype = "/Widget"

    def __init__(self, annotation: Annotation) -> None:
        super().__init__(annotation)
        self.highlight: str | None = None
        self.appearance_characteristics: Any = None
        self.action: Any = None
        self.parent: Any = None

    def _load(self, dictionary: DictionaryObject, resolver: ObjectResolver) -> None:
        highlight = resolver.resolve(raw_entry(dictionary, "/H"))
        self.highlight = str(highlight) if isinstance(highlight, NameObject) else None
        self.appearance_characteristics = raw_entry(dictionary, "/MK")
        self.action = raw_entry(dictionary, "/A")
        self.parent = raw_entry(dictionary, "/Parent")

    def _write(self, dictionary: DictionaryObject) -> None:
        _set_or_clear(dictionary, "/H", NameObject(self.highlight) if self.highlight else None)
        _set_or_clear(dictionary, "/MK", self.appearance_characteristics)
        _set_or_clear(dictionary, "/A", self.action)
        _set_or_clear(dictionary, "/Parent", self.parent)


class MarkupAnnotation(AnnotationContext):
    """Markup annotations sharing the keys of ISO 32000-1 Table 170."""

    subtype = ""

    def __init__(self, annotation: Annotation) -> None:
        super().__init__(annotation)
        self.title: str | None = None
        self.subject: str | None = None
        self.opacity: float | None = None
        self.in_reply_to: Any = None

    def _load(self, dictionary: DictionaryObject, resolver: ObjectResolver) -> None:
        self.title = self.annotation.load_text(dictionary, "/T", resolver)
        self.subject = self.annotation.load_text(dictionary, "/Subj", resolver)
        opacity = resolver.resolve(raw_entry(dictionary, "/CA"))
        if opacity is not None:
            if isinstance(opacity, bool) or not isinstance(opacity, (int, float)):
                raise TypeMismatch("/CA", "Markup annotation CA is not a number")
            self.opacity = float(opacity)
        self.in_reply_to = raw_entry(dictionary, "/IRT")

    def _write(self, dictionary: DictionaryObject) -> None:
        _set_or_clear(dictionary, "/T", self.annotation.text_object("/T", self.title))
        _set_or_clear(dictionary, "/Subj", self.annotation.text_object("/Subj", self.subject))
        _set_or_clear(dictionary, "/CA", FloatObject(self.opacity) if self.opacity is not None else None)
        _set_or_clear(dictionary, "/IRT", self.in_reply_to)


_MARKUP_SUBTYPES = (
    "/FreeText",
    "/Line",
    "/Square",
    "/Circle",
    "/Polygon",
    "/PolyLine",
    "/Highlight",
    "/Underline",
    "/Squiggly",
    "/StrikeOut",
    "/Stamp",
    "/Caret",
    "/Ink",
    "/FileAttachment",
    "/Sound",
    "/Redact",
)

ANNOTATION_CONTEXTS: dict[str, type[AnnotationContext]] = {
    LinkAnnotation.subtype: LinkAnnotation,
    TextAnnotation.subtype: TextAnnotation,
    WidgetAnnotation.subtype: WidgetAnnotation,
}
ANNOTATION_CONTEXTS.update({subtype: MarkupAnnotation for subtype in _MARKUP_SUBTYPES})


# -- Loader --------------------------------------------------------------------


def normalize_annotation_entry(entry: Any, resolver: ObjectResolver = DEFAULT_RESOLVER) -> Container | None:
    """Return ``entry`` as a :class:`Container`, or ``None`` for null placeholders."""

    if isinstance(entry, Container):
        return entry
    if isinstance(entry, IndirectObject):
        resolved = resolver.resolve(entry)
        if is_null(resolved):
            LOGGER.debug("Skipping null annotation %s", entry)
            return None
        if isinstance(resolved, DictionaryObject):
            return Container(resolved, reference=entry)
        raise MalformedAnnotation(
            f"Annotation reference points to {type(resolved).__name__}, expected a dictionary"
        )
    if is_null(entry):
        LOGGER.debug("Skipping null annotation entry")
        return None
    if isinstance(entry, DictionaryObject):
        # Inline annotation dictionary: box it so it can be handled like the rest.
        LOGGER.debug("Wrapping inline annotation dictionary in a container")
        return Container(entry)
    raise MalformedAnnotation(f"Annotation not in an indirect object ({type(entry).__name__})")


def load_annotations(
    page_dict: DictionaryObject, resolver: ObjectResolver = DEFAULT_RESOLVER
) -> list[Annotation]:
    """Load ``/Annots`` in array order; empty when the page declares none."""

    if "/Annots" not in page_dict:
        return []

    annots = resolver.resolve(raw_entry(page_dict, "/Annots"))
    if not isinstance(annots, ArrayObject):
        raise TypeMismatch("/Annots", "Annots not an array")

    annotations: list[Annotation] = []
    for entry in annots:
        container = normalize_annotation_entry(entry, resolver)
        if container is None:
            continue
        annotations.append(Annotation.from_container(container, resolver))
    LOGGER.debug("Loaded %d of %d annotation entries", len(annotations), len(annots))
    return annotations
