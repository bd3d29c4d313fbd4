"""Page, annotation and resource models."""

from .annotations import (
    Annotation,
    AnnotationContext,
    LinkAnnotation,
    MarkupAnnotation,
    TextAnnotation,
    WidgetAnnotation,
    load_annotations,
)
from .images import ImageXObject
from .inheritance import find_inherited
from .page import Page
from .resources import Colorspace, PageResources, ResourceColorspaces
from .watermark import WatermarkImageOptions, WatermarkPlacement

__all__ = [
    "Page",
    "Annotation",
    "AnnotationContext",
    "LinkAnnotation",
    "TextAnnotation",
    "WidgetAnnotation",
    "MarkupAnnotation",
    "load_annotations",
    "ImageXObject",
    "find_inherited",
    "Colorspace",
    "PageResources",
    "ResourceColorspaces",
    "WatermarkImageOptions",
    "WatermarkPlacement",
]
