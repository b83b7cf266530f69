"""Shared pytest fixtures for stylesync tests."""

from pathlib import Path

import pytest

from stylesync.core.ir import ColorStyle, TextStyle


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def templates_dir(fixtures_dir: Path) -> Path:
    """Return path to code template fixtures."""
    return fixtures_dir / "templates"


@pytest.fixture
def brand_color() -> ColorStyle:
    """The brand color used across tests."""
    return ColorStyle(name="Brand", identifier="C1", red=0.2, green=0.4, blue=0.6)


@pytest.fixture
def black() -> ColorStyle:
    return ColorStyle(name="Black", identifier="C0", red=0.0, green=0.0, blue=0.0)


@pytest.fixture
def body_text(black: ColorStyle) -> TextStyle:
    return TextStyle(
        name="Body",
        identifier="T1",
        font_name="Inter",
        point_size=16,
        kerning=0.5,
        line_height=20,
        color_style=black,
    )
