"""Watermark placement and drawing operators."""

from __future__ import annotations

from dataclasses import dataclass

from pypdf.generic import DictionaryObject, FloatObject, NameObject, RectangleObject

from ..exceptions import TypeMismatch

__all__ = [
    "WatermarkImageOptions",
    "WatermarkPlacement",
    "compute_placement",
    "make_watermark_gstate",
    "watermark_operators",
]


@dataclass
class WatermarkImageOptions:
    alpha: float = 1.0
    fit_to_width: bool = False
    preserve_aspect_ratio: bool = False


@dataclass(frozen=True)
class WatermarkPlacement:
    width: float
    height: float
    offset_x: float
    offset_y: float


def compute_placement(
    page_box: RectangleObject,
    image_width: float,
    image_height: float,
    options: WatermarkImageOptions,
) -> WatermarkPlacement:
    """Size and position the watermark inside ``page_box``.

    By default the image keeps its intrinsic width, is centred horizontally
    and stretched over the full page height.  ``fit_to_width`` stretches it
    across the page; ``preserve_aspect_ratio`` derives the height from the
    width and centres it vertically.
    """

    if image_width <= 0 or image_height <= 0:
        raise TypeMismatch("/Width" if image_width <= 0 else "/Height", "Watermark image has no area")

    page_width = float(page_box.right) - float(page_box.left)
    page_height = float(page_box.top) - float(page_box.bottom)

    width = float(image_width)
    offset_x = (page_width - width) / 2
    if options.fit_to_width:
        width = page_width
        offset_x = 0.0

    height = page_height
    offset_y = 0.0
    if options.preserve_aspect_ratio:
        height = width * float(image_height) / float(image_width)
        offset_y = (page_height - height) / 2

    return WatermarkPlacement(width=width, height=height, offset_x=offset_x, offset_y=offset_y)


def make_watermark_gstate(alpha: float) -> DictionaryObject:
    return DictionaryObject(
        {
            NameObject("/BM"): NameObject("/Normal"),
            NameObject("/CA"): FloatObject(alpha),
            NameObject("/ca"): FloatObject(alpha),
        }
    )


def watermark_operators(placement: WatermarkPlacement, image_name: str, gstate_name: str) -> str:
    """Return the content fragment drawing ``image_name`` at ``placement``."""

    return (
        "q\n"
        f"{gstate_name} gs\n"
        f"{placement.width:.0f} 0 0 {placement.height:.0f} "
        f"{placement.offset_x:.4f} {placement.offset_y:.4f} cm\n"
        f"{image_name} Do\n"
        "Q"
    )
