"""
Tests for the command-line interface and environment configuration.
"""

import sys

import pytest
from pydantic import ValidationError
from pptx import Presentation

from slideforge.cli import main
from slideforge.config import ConversionSettings
from slideforge.models import Slide, TextElement, fallback_slide
from slideforge.session import DeckSession

from conftest import make_raster


@pytest.fixture
def clean_env(monkeypatch):
    for name in [
        "SLIDEFORGE_RENDER_SCALE",
        "SLIDEFORGE_JPEG_QUALITY",
        "SLIDEFORGE_CROP_THRESHOLD",
        "SLIDEFORGE_ORACLE",
        "SLIDEFORGE_MODEL",
    ]:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:
    def test_defaults(self, clean_env):
        settings = ConversionSettings.from_env()

        assert settings.render_scale == 2.0
        assert settings.jpeg_quality == 0.8
        assert settings.crop_threshold == 95.0
        assert settings.canvas_size == (10.0, 5.625)
        assert settings.oracle == "gemini"
        assert settings.model is None
        assert settings.temperature == 0.0

    def test_environment(self, clean_env):
        clean_env.setenv("SLIDEFORGE_RENDER_SCALE", "1.5")
        clean_env.setenv("SLIDEFORGE_ORACLE", "claude")

        settings = ConversionSettings.from_env()
        assert settings.render_scale == 1.5
        assert settings.oracle == "claude"

    def test_overrides_win_and_none_is_ignored(self, clean_env):
        clean_env.setenv("SLIDEFORGE_CROP_THRESHOLD", "80")

        settings = ConversionSettings.from_env(crop_threshold=None, render_scale=3.0)
        assert settings.crop_threshold == 80
        assert settings.render_scale == 3.0

        assert ConversionSettings.from_env(crop_threshold=50).crop_threshold == 50

    def test_invalid_values(self, clean_env):
        clean_env.setenv("SLIDEFORGE_ORACLE", "tesseract")
        with pytest.raises(ValidationError):
            ConversionSettings.from_env()

        with pytest.raises(ValidationError):
            ConversionSettings(crop_threshold=120)


class TestCli:
    def test_missing_input(self, monkeypatch, tmp_path, capsys):
        monkeypatch.setattr(sys, "argv", ["slideforge", str(tmp_path / "missing.pdf")])
        assert main() == 1
        assert "not found" in capsys.readouterr().err

    def test_no_input_prints_help(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["slideforge"])
        assert main() == 1
        assert "usage" in capsys.readouterr().out

    def test_export_from_session(self, clean_env, tmp_path):
        session = DeckSession(source_name="deck.pdf")
        session.add_slide(fallback_slide(0, make_raster(320, 180)))
        session_path = session.save(tmp_path, "deck")

        clean_env.setattr(sys, "argv", ["slideforge", "--from-session", str(session_path)])
        assert main() == 0

        prs = Presentation(str(tmp_path / "deck.pptx"))
        assert len(prs.slides) == 1

    def test_export_from_session_to_output_dir(self, clean_env, tmp_path):
        session = DeckSession()
        session.add_slide(
            Slide(
                index=0,
                elements=[TextElement(x=0, y=0, w=50, h=10, content="Hi")],
                original_raster=make_raster(),
            )
        )
        session_path = session.save(tmp_path, "talk")
        out_dir = tmp_path / "exported"

        clean_env.setattr(
            sys, "argv", ["slideforge", "--from-session", str(session_path), "-o", str(out_dir)]
        )
        assert main() == 0
        assert (out_dir / "talk.pptx").exists()

    def test_broken_session_reports_error(self, clean_env, tmp_path, capsys):
        session_path = tmp_path / "broken.session.json"
        session_path.write_text('{"slides": [{"index": 0, "raster_ref": "images/missing.jpg"}]}')

        clean_env.setattr(sys, "argv", ["slideforge", "--from-session", str(session_path)])
        assert main() == 1
        assert "Error" in capsys.readouterr().err
