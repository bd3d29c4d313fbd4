from __future__ import annotations

import pytest
from PIL import Image
from pypdf.generic import DictionaryObject, NameObject, NumberObject, RectangleObject

from pdfpagedom import ImageXObject, Page, WatermarkImageOptions
from pdfpagedom.core.encoders import RawEncoder
from pdfpagedom.exceptions import AttributeNotInherited, TypeMismatch
from pdfpagedom.model.watermark import (
    WatermarkPlacement,
    compute_placement,
    make_watermark_gstate,
    watermark_operators,
)

LETTER = RectangleObject([0, 0, 612, 792])


def _image(width: int = 300, height: int = 150) -> ImageXObject:
    return ImageXObject(width=width, height=height, data=b"\x00" * width * height * 3)


def _letter_page() -> Page:
    page = Page()
    page.media_box = RectangleObject([0, 0, 612, 792])
    return page


def test_default_placement_centres_horizontally_and_fills_height():
    placement = compute_placement(LETTER, 300, 150, WatermarkImageOptions())

    assert placement == WatermarkPlacement(width=300, height=792, offset_x=156, offset_y=0)


def test_fit_to_width_spans_the_page():
    placement = compute_placement(LETTER, 300, 150, WatermarkImageOptions(fit_to_width=True))

    assert placement.width == 612
    assert placement.offset_x == 0
    assert placement.height == 792


def test_preserve_aspect_ratio_centres_vertically():
    placement = compute_placement(
        LETTER, 300, 150, WatermarkImageOptions(preserve_aspect_ratio=True)
    )

    assert placement.width == 300
    assert placement.height == 150
    assert placement.offset_x == 156
    assert placement.offset_y == 321


def test_fit_to_width_with_aspect_ratio():
    placement = compute_placement(
        LETTER, 300, 150, WatermarkImageOptions(fit_to_width=True, preserve_aspect_ratio=True)
    )

    assert placement.width == 612
    assert placement.height == 306
    assert placement.offset_y == 243


def test_placement_is_relative_to_the_box_size():
    box = RectangleObject([100, 100, 300, 500])

    placement = compute_placement(box, 100, 50, WatermarkImageOptions())

    assert placement.offset_x == 50
    assert placement.height == 400


def test_operator_text():
    placement = WatermarkPlacement(width=300, height=792, offset_x=156, offset_y=0)

    text = watermark_operators(placement, "/Imw0", "/GS0")

    assert text == "q\n/GS0 gs\n300 0 0 792 156.0000 0.0000 cm\n/Imw0 Do\nQ"


def test_gstate_carries_alpha_for_stroke_and_fill():
    gstate = make_watermark_gstate(0.25)

    assert gstate["/BM"] == "/Normal"
    assert gstate["/CA"] == pytest.approx(0.25)
    assert gstate["/ca"] == pytest.approx(0.25)


def test_watermark_registers_resources_and_appends_content():
    page = _letter_page()
    page.set_content_streams(["BT ET"])

    placement = page.add_watermark_image(_image(), WatermarkImageOptions(alpha=0.5))

    assert placement.offset_x == 156
    segments = page.get_content_streams()
    assert segments[0] == "BT ET"
    assert segments[-1] == "q\n/GS0 gs\n300 0 0 792 156.0000 0.0000 cm\n/Imw0 Do\nQ"
    assert page.has_image_resource("Imw0")
    gstate = page.resources.ext_gstate["/GS0"]
    assert gstate["/CA"] == pytest.approx(0.5)


def test_watermark_on_page_without_content_creates_single_segment():
    page = _letter_page()

    page.add_watermark_image(_image())

    assert len(page.get_content_streams()) == 1
    assert page.resources.xobject["/Imw0"]["/Width"] == 300


def test_watermark_uses_inherited_media_box(make_pages_node, make_page_dict):
    root = make_pages_node(MediaBox=RectangleObject([0, 0, 612, 792]))
    page = Page.from_dict(make_page_dict(parent=root))

    placement = page.add_watermark_image(_image())

    assert placement.height == 792


def test_watermark_requires_a_media_box():
    page = Page()

    with pytest.raises(AttributeNotInherited):
        page.add_watermark_image(_image())
    assert page.contents is None


def test_watermark_fails_on_malformed_xobject_category(make_page_dict):
    page = Page.from_dict(
        make_page_dict(
            MediaBox=RectangleObject([0, 0, 612, 792]),
            Resources=DictionaryObject({NameObject("/XObject"): NameObject("/Oops")}),
        )
    )

    with pytest.raises(TypeMismatch):
        page.add_watermark_image(_image())


def test_image_from_pillow_is_flate_encoded():
    image = ImageXObject.from_pil(Image.new("RGBA", (4, 2), color=(10, 20, 30, 255)))

    stream = image.to_pdf_object()

    assert image.width == 4
    assert image.height == 2
    assert image.color_space == "/DeviceRGB"
    assert stream["/Filter"] == "/FlateDecode"
    assert stream.get_data() == bytes([10, 20, 30]) * 8
    assert image.to_pdf_object() is stream


def test_image_from_pillow_with_raw_encoder():
    image = ImageXObject.from_pil(Image.new("L", (3, 1), color=7), RawEncoder())

    stream = image.to_pdf_object()

    assert image.color_space == "/DeviceGray"
    assert "/Filter" not in stream
    assert stream.get_data() == b"\x07\x07\x07"


def test_existing_image_stream_is_reused():
    stream = _image(2, 1).to_pdf_object()

    image = ImageXObject.from_pdf_object(stream)

    assert image.width == 2
    assert image.to_pdf_object() is stream


@pytest.mark.parametrize("width, height, key", [(0, 10, "/Width"), (10, 0, "/Height"), (-3, 10, "/Width")])
def test_image_without_area_is_rejected(width, height, key):
    with pytest.raises(TypeMismatch) as excinfo:
        ImageXObject(width=width, height=height)

    assert excinfo.value.key == key


def test_image_stream_with_zero_width_is_rejected():
    stream = _image(2, 1).to_pdf_object()
    stream[NameObject("/Width")] = NumberObject(0)

    with pytest.raises(TypeMismatch) as excinfo:
        ImageXObject.from_pdf_object(stream)

    assert excinfo.value.key == "/Width"


def test_aspect_ratio_placement_rejects_zero_width_image():
    options = WatermarkImageOptions(preserve_aspect_ratio=True)

    with pytest.raises(TypeMismatch):
        compute_placement(LETTER, 0, 150, options)


def test_non_image_xobject_is_rejected():
    with pytest.raises(TypeMismatch):
        ImageXObject.from_pdf_object(DictionaryObject())
