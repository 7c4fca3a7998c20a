"""
Tests for the export transform.
"""

import pytest

from slideforge.config import ConversionSettings
from slideforge.export import (
    ExportTransform,
    ImageInstruction,
    ShapeInstruction,
    TextInstruction,
    export_slides,
    needs_crop,
)
from slideforge.models import ImageElement, ShapeElement, Slide, TextElement, fallback_slide
from slideforge.raster import raster_size

from conftest import make_raster


def make_slide(elements, raster=None, background="#FFFFFF"):
    return Slide(
        index=0,
        background_color=background,
        elements=elements,
        original_raster=raster if raster is not None else make_raster(1000, 500),
    )


class TestNeedsCrop:
    @pytest.mark.parametrize(
        "w,h,expected",
        [
            (94.9, 50, True),
            (95, 100, False),
            (100, 94.99, True),
            (100, 100, False),
            (95, 95, False),
            (0, 0, True),
        ],
    )
    def test_threshold(self, w, h, expected):
        assert needs_crop(ImageElement(x=0, y=0, w=w, h=h), 95) is expected


class TestExportTransform:
    def test_shape_defaults(self):
        result = export_slides([make_slide([ShapeElement(x=10, y=20, w=50, h=40)])])

        shape = result[0].instructions[0]
        assert isinstance(shape, ShapeInstruction)
        assert shape.fill_color == "#CCCCCC"
        assert shape.shape_kind == "rect"
        assert (shape.left, shape.top, shape.width, shape.height) == pytest.approx(
            (1.0, 1.125, 5.0, 2.25)
        )

    def test_text_defaults(self):
        result = export_slides([make_slide([TextElement(x=0, y=0, w=100, h=10, content="Hi")])])

        text = result[0].instructions[0]
        assert isinstance(text, TextInstruction)
        assert text.content == "Hi"
        assert text.font_size == 14
        assert text.color == "#000000"
        assert text.bold is False
        assert text.align == "left"
        assert text.wrap is True
        assert text.font_face == "Noto Sans KR"

    def test_text_properties_pass_through(self):
        element = TextElement(
            x=0, y=0, w=50, h=10, content="Bold", color="#FF0000", font_size=40, bold=True, align="center"
        )
        text = export_slides([make_slide([element])])[0].instructions[0]

        assert (text.color, text.font_size, text.bold, text.align) == ("#FF0000", 40, True, "center")

    def test_empty_text_is_emitted(self):
        result = export_slides([make_slide([TextElement(x=0, y=0, w=10, h=10)])])
        assert result[0].instructions[0].content == ""

    def test_small_image_is_cropped(self):
        raster = make_raster(1000, 500)
        result = export_slides([make_slide([ImageElement(x=10, y=10, w=94.9, h=50)], raster)])

        image = result[0].instructions[0]
        assert isinstance(image, ImageInstruction)
        assert image.cropped is True
        assert raster_size(image.image) == (949, 250)

    def test_large_image_uses_full_raster(self):
        raster = make_raster(1000, 500)
        result = export_slides([make_slide([ImageElement(x=0, y=0, w=95, h=100)], raster)])

        image = result[0].instructions[0]
        assert image.cropped is False
        assert image.image == raster
        assert image.width == pytest.approx(9.5)

    def test_crop_threshold_is_configurable(self):
        settings = ConversionSettings(crop_threshold=50)
        result = export_slides([make_slide([ImageElement(x=0, y=0, w=60, h=60)])], settings)
        assert result[0].instructions[0].cropped is False

    def test_canvas_size_is_configurable(self):
        settings = ConversionSettings(canvas_width_inches=13.333, canvas_height_inches=7.5)
        result = export_slides([make_slide([ShapeElement(x=50, y=50, w=50, h=50)])], settings)

        shape = result[0].instructions[0]
        assert shape.left == pytest.approx(6.6665)
        assert shape.top == pytest.approx(3.75)

    def test_paint_order_is_preserved(self):
        elements = [
            ShapeElement(x=0, y=0, w=100, h=100),
            ImageElement(x=10, y=10, w=20, h=20),
            TextElement(x=0, y=0, w=10, h=10, content="on top"),
            ShapeElement(x=5, y=5, w=5, h=5),
        ]
        result = export_slides([make_slide(elements)])

        assert [i.kind for i in result[0].instructions] == ["shape", "image", "text", "shape"]

    def test_failed_crop_skips_only_that_image(self):
        elements = [
            ShapeElement(x=0, y=0, w=100, h=10),
            ImageElement(x=10, y=10, w=20, h=20),
            TextElement(x=0, y=0, w=10, h=10, content="kept"),
        ]
        result = export_slides([make_slide(elements, raster=b"not a jpeg")])

        assert [i.kind for i in result[0].instructions] == ["shape", "text"]

    def test_fallback_slide_exports_full_page(self):
        raster = make_raster(1000, 500)
        result = export_slides([fallback_slide(0, raster)])

        image = result[0].instructions[0]
        assert image.cropped is False
        assert image.image == raster
        assert (image.left, image.top, image.width, image.height) == pytest.approx(
            (0, 0, 10, 5.625)
        )

    def test_background_and_slide_order(self):
        slides = [
            Slide(index=0, background_color="#000000", original_raster=b""),
            Slide(index=1, background_color="", original_raster=b""),
        ]
        result = ExportTransform().export(slides)

        assert [s.index for s in result] == [0, 1]
        assert result[0].background_color == "#000000"
        assert result[1].background_color == "#FFFFFF"
        assert result[0].instructions == []

    def test_unknown_element_type(self):
        slide = make_slide([])
        with pytest.raises(TypeError):
            ExportTransform().export_element(object(), slide)


@pytest.mark.parametrize("box", [(0, 0, 100, 100), (12.5, 33.3, 40.1, 7.7), (99.9, 0.1, 0.1, 99.9)])
def test_geometry_round_trips_through_instructions(box):
    x, y, w, h = box
    settings = ConversionSettings()
    shape = export_slides([make_slide([ShapeElement(x=x, y=y, w=w, h=h)])], settings)[0].instructions[0]

    width, height = settings.canvas_size
    assert shape.left / width * 100 == pytest.approx(x)
    assert shape.top / height * 100 == pytest.approx(y)
    assert shape.width / width * 100 == pytest.approx(w)
    assert shape.height / height * 100 == pytest.approx(h)
