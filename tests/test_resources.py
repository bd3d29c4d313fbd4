from __future__ import annotations

import pytest
from pypdf.generic import (
    ArrayObject,
    DictionaryObject,
    IndirectObject,
    NameObject,
    NumberObject,
)

from pdfpagedom import ImageXObject, Page, PageResources
from pdfpagedom.exceptions import TypeMismatch
from pdfpagedom.model.resources import ResourceColorspaces


def _font(base: str) -> DictionaryObject:
    return DictionaryObject(
        {
            NameObject("/Type"): NameObject("/Font"),
            NameObject("/Subtype"): NameObject("/Type1"),
            NameObject("/BaseFont"): NameObject(base),
        }
    )


def _image() -> ImageXObject:
    return ImageXObject(width=2, height=1, data=b"\x00\x00\x00\xff\xff\xff")


def test_registering_on_a_page_without_resources_creates_them():
    page = Page()

    page.add_font("F1", _font("/Helvetica"))

    assert page.resources is not None
    fonts = page.resources.font
    assert list(fonts) == ["/F1"]
    projected = page.to_pdf_object().value["/Resources"]
    assert projected["/Font"]["/F1"]["/BaseFont"] == "/Helvetica"


def test_last_registration_wins():
    page = Page()
    page.add_font("/F1", _font("/Helvetica"))
    page.add_font("/F1", _font("/Courier"))

    assert page.resources.font["/F1"]["/BaseFont"] == "/Courier"


def test_image_registry_lookup():
    page = Page()
    assert page.has_image_resource("Im1") is False

    page.add_image_resource("Im1", _image())

    assert page.has_image_resource("Im1") is True
    assert page.has_image_resource("/Im1") is True
    assert page.has_image_resource("Im2") is False
    stream = page.resources.xobject["/Im1"]
    assert stream["/Subtype"] == "/Image"
    assert stream["/Width"] == 2
    assert stream.get_data() == b"\x00\x00\x00\xff\xff\xff"


def test_image_lookup_without_xobject_category(make_page_dict):
    page = Page.from_dict(
        make_page_dict(Resources=DictionaryObject({NameObject("/Font"): DictionaryObject()}))
    )

    assert page.has_image_resource("Im1") is False


def test_image_lookup_with_malformed_category(make_page_dict):
    page = Page.from_dict(
        make_page_dict(Resources=DictionaryObject({NameObject("/XObject"): NumberObject(1)}))
    )

    assert page.has_image_resource("Im1") is False


def test_image_lookup_with_malformed_inherited_resources(make_pages_node, make_page_dict):
    root = make_pages_node(Resources=NumberObject(7))
    page = Page.from_dict(make_page_dict(parent=root))

    assert page.has_image_resource("Im1") is False


def test_inherited_resources_are_copied_not_mutated(make_pages_node, make_page_dict):
    parent_fonts = DictionaryObject({NameObject("/F0"): _font("/Times-Roman")})
    root = make_pages_node(Resources=DictionaryObject({NameObject("/Font"): parent_fonts}))
    page = Page.from_dict(make_page_dict(parent=root))

    page.add_font("F1", _font("/Helvetica"))

    assert sorted(page.resources.font) == ["/F0", "/F1"]
    assert list(parent_fonts) == ["/F0"]
    assert list(root.get_object()["/Resources"]["/Font"]) == ["/F0"]
    assert "/Resources" in page.to_pdf_object().value


def test_shared_category_dictionary_is_copied_before_update(writer, make_page_dict):
    shared = writer._add_object(DictionaryObject({NameObject("/GS1"): DictionaryObject()}))
    page = Page.from_dict(
        make_page_dict(Resources=DictionaryObject({NameObject("/ExtGState"): shared}))
    )

    page.add_ext_gstate("GS2", DictionaryObject())

    assert list(shared.get_object()) == ["/GS1"]
    assert sorted(page.resources.ext_gstate) == ["/GS1", "/GS2"]


def test_shared_resources_dictionary_is_not_rewritten(writer, make_page_dict):
    shared = writer._add_object(DictionaryObject({NameObject("/Font"): DictionaryObject()}))
    page = Page.from_dict(make_page_dict(Resources=shared))

    page.add_font("F1", _font("/Helvetica"))
    projected = page.to_pdf_object().value

    assert list(shared.get_object()["/Font"]) == []
    assert not isinstance(projected.raw_get("/Resources"), IndirectObject)
    assert list(projected["/Resources"]["/Font"]) == ["/F1"]


def test_unmodified_shared_resources_keep_their_reference(writer, make_page_dict):
    shared = writer._add_object(DictionaryObject({NameObject("/Font"): DictionaryObject()}))
    page = Page.from_dict(make_page_dict(Resources=shared))

    projected = page.to_pdf_object().value

    assert projected.raw_get("/Resources") == shared


def test_non_dictionary_category_is_type_mismatch(make_page_dict):
    page = Page.from_dict(
        make_page_dict(Resources=DictionaryObject({NameObject("/Font"): ArrayObject()}))
    )

    with pytest.raises(TypeMismatch) as excinfo:
        page.add_font("F1", _font("/Helvetica"))

    assert excinfo.value.key == "/Font"


def test_category_order_and_unknown_categories_are_kept():
    source = DictionaryObject()
    source[NameObject("/ProcSet")] = ArrayObject([NameObject("/PDF")])
    source[NameObject("/XObject")] = DictionaryObject()
    source[NameObject("/Custom")] = DictionaryObject({NameObject("/A"): NumberObject(1)})

    resources = PageResources.from_pdf_object(source)

    assert resources.categories() == ["/ProcSet", "/XObject", "/Custom"]
    assert list(resources.to_pdf_object()) == ["/ProcSet", "/XObject", "/Custom"]
    assert resources.get("/Custom")["/A"] == 1
    assert resources.get("/ProcSet") == ["/PDF"]


def test_colorspaces_keep_declaration_order():
    icc = ArrayObject([NameObject("/ICCBased"), DictionaryObject()])
    table = DictionaryObject()
    table[NameObject("/CS2")] = NameObject("/DeviceCMYK")
    table[NameObject("/CS1")] = icc
    resources = PageResources.from_pdf_object(
        DictionaryObject({NameObject("/ColorSpace"): table})
    )

    colorspaces = resources.colorspaces

    assert isinstance(colorspaces, ResourceColorspaces)
    assert list(colorspaces) == ["/CS2", "/CS1"]
    assert colorspaces.colorspaces["/CS1"].family == "/ICCBased"
    assert colorspaces.colorspaces["/CS2"].family == "/DeviceCMYK"
    projected = resources.to_pdf_object()["/ColorSpace"]
    assert list(projected) == ["/CS2", "/CS1"]
    assert projected.raw_get("/CS1") is icc


def test_boxed_colorspace_table_keeps_its_reference(writer):
    table_ref = writer._add_object(
        DictionaryObject({NameObject("/CS0"): NameObject("/DeviceGray")})
    )
    resources = PageResources.from_pdf_object(
        DictionaryObject({NameObject("/ColorSpace"): table_ref})
    )

    projected = resources.to_pdf_object()

    assert projected.raw_get("/ColorSpace") == table_ref
    assert list(table_ref.get_object()) == ["/CS0"]


def test_invalid_colorspace_is_type_mismatch():
    with pytest.raises(TypeMismatch):
        PageResources.from_pdf_object(
            DictionaryObject(
                {NameObject("/ColorSpace"): DictionaryObject({NameObject("/CS0"): NumberObject(3)})}
            )
        )
