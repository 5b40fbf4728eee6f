"""Shared fixtures for glyph corpus tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

from gridfont.config import CorpusConfig, GridfontSettings

# 8x16 raster of a vertical bar with a foot, baseline at row 13
BAR_ROWS = [
    "........",
    "........",
    "........",
    "...XX...",
    "...XX...",
    "...XX...",
    "...XX...",
    "...XX...",
    "...XX...",
    "...XX...",
    "...XX...",
    "...XX...",
    ".XXXXXX.",
    "........",
    "........",
    "........",
]

BLANK_ROWS = ["........"] * 16


def glyph_text(
    label: str,
    codepoint: int | None = None,
    rows: list[str] | None = None,
    weight: str | None = None,
    components: list[str] | None = None,
) -> str:
    """Render `.glyph` source text."""
    if components is not None and codepoint is None:
        header = [f"# {label} (ligature)"]
    elif codepoint is not None:
        header = [f"# {label} (U+{codepoint:04X})"]
    else:
        header = [f"# {label}"]
    if weight is not None:
        header.append(f"# weight: {weight}")
    if components is not None:
        header.append(f"# components: {' '.join(components)}")
    body = rows if rows is not None else BAR_ROWS
    return "\n".join(header + [""] + body) + "\n"


def ascii_label(cp: int) -> str:
    """Filesystem-safe label for a printable ASCII codepoint."""
    char = chr(cp)
    if cp == 0x20:
        return "space"
    return char if char.isalnum() else f"c{cp:02X}"


@pytest.fixture
def write_glyph(tmp_path: Path) -> Callable[..., Path]:
    """Write one `.glyph` file below tmp_path and return its path."""

    def _write(filename: str, text: str, directory: str = "glyphs") -> Path:
        target = tmp_path / directory
        target.mkdir(parents=True, exist_ok=True)
        path = target / filename
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_ascii_corpus(write_glyph: Callable[..., Path]) -> Callable[..., list[Path]]:
    """Write a complete regular-weight corpus for a codepoint range."""

    def _write(start: int = 0x20, end: int = 0x7E, directory: str = "glyphs") -> list[Path]:
        paths = []
        for cp in range(start, end + 1):
            label = ascii_label(cp)
            rows = BLANK_ROWS if cp == 0x20 else BAR_ROWS
            paths.append(
                write_glyph(
                    f"U+{cp:04X}_{label}.glyph",
                    glyph_text(label, cp, rows),
                    directory,
                )
            )
        return paths

    return _write


@pytest.fixture
def settings(tmp_path: Path) -> GridfontSettings:
    """Default settings rooted at tmp_path, reading `glyphs/`."""
    return GridfontSettings(
        project_root=tmp_path,
        corpus=CorpusConfig(glyph_dirs=[Path("glyphs")]),
    )


@pytest.fixture
def small_settings(tmp_path: Path) -> GridfontSettings:
    """Settings that only require A-C, for compact corpora."""
    return GridfontSettings(
        project_root=tmp_path,
        corpus=CorpusConfig(glyph_dirs=[Path("glyphs")], required_start=0x41, required_end=0x43),
    )
