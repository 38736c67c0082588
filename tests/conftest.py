"""Pytest configuration and shared fixtures for svg2tvgt tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest

from svg2tvgt.config import Config
from svg2tvgt.scene import (
    AspectRatio,
    ClosePath,
    Group,
    LineTo,
    MoveTo,
    PathSegment,
    Rect,
    Tree,
)

# Paths
PROJECT_ROOT = Path(__file__).parent.parent

# Expected output for the red_rect_svg fixture
RED_RECT_TVGT = """(tvg 1
  (100 100 1/1 u8888 default)
  (
    (1.000 0.000 0.000 1.000)
  )
  (
    (
      fill_path
      (flat 0)
      (
        (10 10)
        (
          (line - 90 10)
          (line - 90 90)
          (line - 10 90)
          (close -)
        )
      )
    )
  )
)
"""


def rect_data(x: float, y: float, w: float, h: float) -> list[PathSegment]:
    """Closed rectangle outline as path segments."""
    return [
        MoveTo(x, y),
        LineTo(x + w, y),
        LineTo(x + w, y + h),
        LineTo(x, y + h),
        ClosePath(),
    ]


def make_tree(*children, size: tuple[float, float] = (100.0, 100.0), defs=None) -> Tree:
    """Build a scene tree whose view box matches its size."""
    return Tree(
        size=size,
        view_box=Rect(0.0, 0.0, size[0], size[1]),
        aspect=AspectRatio(),
        root=Group(children=list(children)),
        defs=dict(defs or {}),
    )


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Generator[None, None, None]:
    """Keep user config files and env overrides out of every test."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    for name in ("SVG2TVGT_CONFIG", "SVG2TVGT_DPI", "SVG2TVGT_LOG_LEVEL", "SVG2TVGT_LANGUAGES"):
        monkeypatch.delenv(name, raising=False)

    yield

    # The CLI installs its own handler; restore propagation for caplog.
    logger = logging.getLogger("svg2tvgt")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def config() -> Config:
    """Return a default configuration."""
    return Config()


@pytest.fixture
def red_rect_svg() -> str:
    """Return an SVG with a single red filled rectangle."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="100" height="100" viewBox="0 0 100 100">
  <rect x="10" y="10" width="80" height="80" fill="red"/>
</svg>"""


@pytest.fixture
def gradient_svg() -> str:
    """Return an SVG with a bounding-box linear gradient fill and a stroke."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="200" height="100" viewBox="0 0 200 100">
  <defs>
    <linearGradient id="grad">
      <stop offset="0" stop-color="red"/>
      <stop offset="0.5" stop-color="lime"/>
      <stop offset="1" stop-color="blue"/>
    </linearGradient>
  </defs>
  <rect x="10" y="20" width="100" height="50" fill="url(#grad)" stroke="black" stroke-width="2"/>
</svg>"""


@pytest.fixture
def zero_area_gradient_svg() -> str:
    """Return an SVG with a horizontal line stroked with a bounding-box gradient."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="100" height="100">
  <defs>
    <linearGradient id="grad">
      <stop offset="0" stop-color="red"/>
      <stop offset="1" stop-color="blue"/>
    </linearGradient>
  </defs>
  <line x1="0" y1="10" x2="100" y2="10" stroke="url(#grad)"/>
</svg>"""


@pytest.fixture
def malformed_svg_content() -> str:
    """Return malformed SVG for error testing."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg">
  <rect x="10" y="50">
</svg>"""


@pytest.fixture
def red_rect_file(tmp_path: Path, red_rect_svg: str) -> Path:
    """Write the red rectangle SVG to a temporary file."""
    svg_path = tmp_path / "red_rect.svg"
    svg_path.write_text(red_rect_svg, encoding="utf-8")
    return svg_path
