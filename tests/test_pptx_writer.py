"""
Tests for the python-pptx deck writer.
"""

import pytest
from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.shapes import MSO_SHAPE, MSO_SHAPE_TYPE
from pptx.enum.text import PP_PARAGRAPH_ALIGNMENT
from pptx.util import Inches, Pt

from slideforge.errors import ExportWriteError
from slideforge.export import (
    ImageInstruction,
    ShapeInstruction,
    SlideInstructions,
    TextInstruction,
)
from slideforge.renderers import PptxDeckWriter

from conftest import make_raster


@pytest.fixture
def deck():
    return [
        SlideInstructions(
            index=0,
            background_color="#1E2A38",
            instructions=[
                ShapeInstruction(left=0, top=0, width=10, height=1, fill_color="#FF6600"),
                ShapeInstruction(left=1, top=2, width=2, height=2, shape_kind="ellipse"),
                ImageInstruction(left=6, top=2, width=3, height=2, image=make_raster(300, 200), cropped=True),
                TextInstruction(
                    left=0.5,
                    top=0.2,
                    width=9,
                    height=0.6,
                    content="Quarterly Review",
                    font_size=40,
                    color="#FFFFFF",
                    bold=True,
                    align="center",
                    font_face="Noto Sans KR",
                ),
            ],
        ),
        SlideInstructions(index=1, instructions=[]),
    ]


def test_write_creates_presentation(deck, output_dir):
    path = PptxDeckWriter().write(deck, output_dir / "deck.pptx")
    assert path.exists()

    prs = Presentation(str(path))
    assert prs.slide_width == Inches(10)
    assert prs.slide_height == Inches(5.625)
    assert len(prs.slides) == 2


def test_shapes_are_drawn_in_order(deck):
    prs = PptxDeckWriter().build(deck)
    shapes = list(prs.slides[0].shapes)

    assert [s.shape_type for s in shapes] == [
        MSO_SHAPE_TYPE.AUTO_SHAPE,
        MSO_SHAPE_TYPE.AUTO_SHAPE,
        MSO_SHAPE_TYPE.PICTURE,
        MSO_SHAPE_TYPE.TEXT_BOX,
    ]
    assert len(prs.slides[1].shapes) == 0


def test_background_and_shape_fill(deck):
    prs = PptxDeckWriter().build(deck)
    slide = prs.slides[0]
    banner, oval = slide.shapes[0], slide.shapes[1]

    assert slide.background.fill.fore_color.rgb == RGBColor(0x1E, 0x2A, 0x38)
    assert banner.auto_shape_type == MSO_SHAPE.RECTANGLE
    assert banner.fill.fore_color.rgb == RGBColor(0xFF, 0x66, 0x00)
    assert oval.auto_shape_type == MSO_SHAPE.OVAL
    assert oval.fill.fore_color.rgb == RGBColor(0xCC, 0xCC, 0xCC)
    assert banner.left == Inches(0)
    assert banner.width == Inches(10)


def test_text_box(deck):
    prs = PptxDeckWriter().build(deck)
    textbox = prs.slides[0].shapes[3]
    paragraph = textbox.text_frame.paragraphs[0]
    font = paragraph.runs[0].font

    assert textbox.text_frame.text == "Quarterly Review"
    assert textbox.text_frame.word_wrap is True
    assert paragraph.alignment == PP_PARAGRAPH_ALIGNMENT.CENTER
    assert font.size == Pt(40)
    assert font.bold is True
    assert font.color.rgb == RGBColor(0xFF, 0xFF, 0xFF)
    assert font.name == "Noto Sans KR"


def test_empty_text_box_is_still_drawn():
    slides = [
        SlideInstructions(
            index=0, instructions=[TextInstruction(left=0, top=0, width=1, height=1, content="")]
        )
    ]
    prs = PptxDeckWriter().build(slides)
    assert prs.slides[0].shapes[0].text_frame.text == ""


def test_zero_height_line_gets_minimum_thickness():
    slides = [
        SlideInstructions(
            index=0,
            instructions=[ShapeInstruction(left=1, top=1, width=5, height=0, shape_kind="line")],
        )
    ]
    prs = PptxDeckWriter().build(slides)
    assert prs.slides[0].shapes[0].height > 0


def test_custom_canvas():
    prs = PptxDeckWriter(13.333, 7.5).build([])
    assert prs.slide_width == Inches(13.333)
    assert prs.slide_height == Inches(7.5)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("#FF0000", RGBColor(0xFF, 0, 0)),
        ("00ff00", RGBColor(0, 0xFF, 0)),
        ("#abc", RGBColor(0xAA, 0xBB, 0xCC)),
        ("", None),
        (None, None),
        ("#GGGGGG", None),
        ("red", None),
    ],
)
def test_parse_hex_color(value, expected):
    assert PptxDeckWriter._parse_hex_color(value) == expected


def test_unwritable_path_raises_export_write_error(deck, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory")

    with pytest.raises(ExportWriteError):
        PptxDeckWriter().write(deck, blocker / "deck.pptx")


def test_rejected_instruction_raises_export_write_error(output_dir):
    slides = [
        SlideInstructions(
            index=0,
            instructions=[TextInstruction(left=0, top=0, width=5, height=1, content="x", font_size=0.5)],
        )
    ]

    with pytest.raises(ExportWriteError):
        PptxDeckWriter().write(slides, output_dir / "deck.pptx")
    assert not (output_dir / "deck.pptx").exists()
