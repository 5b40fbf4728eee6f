"""End-to-end tests that compile a glyph corpus and verify the written fonts."""

from pathlib import Path

import pytest
from fontTools.ttLib import TTFont

from gridfont.config import CorpusConfig, GridfontSettings, ProcessingConfig
from gridfont.core.compiler import FontCompiler, compile_glyph
from gridfont.domain import Outline, Weight
from gridfont.exceptions import ValidationFailedError
from gridfont.io import read_corpus
from gridfont.io.converter import glyph_to_contours

from conftest import BAR_ROWS, glyph_text


def _contour_count(font: TTFont, name: str) -> int:
    return len(glyph_to_contours(font.getGlyphSet(), name))


class TestCompileGlyph:
    """Tests for the worker entry point."""

    def test_success(self, tmp_path, settings, write_glyph):
        path = write_glyph("U+0041_A.glyph", glyph_text("A", 0x41))
        glyph = read_corpus([path.parent]).glyphs[0]

        result = compile_glyph(glyph.to_dict(), settings.model_dump())

        assert "error" not in result
        assert result["rectangles"] == 2
        outline = Outline.from_dict(result["outline"])
        assert outline.name == "uni0041"
        assert outline.unicode == 0x41

    def test_error_is_returned(self, settings):
        result = compile_glyph({"label": "broken"}, settings.model_dump())
        assert result["label"] == "broken"
        assert "error" in result
        assert "traceback" in result


class TestFullBuild:
    """Tests for FontCompiler.build."""

    def test_build_writes_both_weights(self, tmp_path, settings, write_ascii_corpus):
        write_ascii_corpus()
        out = tmp_path / "build"

        stats = FontCompiler(settings, quiet=True).build(out)

        written = sorted(p.name for p in out.iterdir())
        assert written == [
            "Gridfont-Bold.ttf",
            "Gridfont-Bold.woff2",
            "Gridfont-Regular.ttf",
            "Gridfont-Regular.woff2",
        ]
        assert stats.parsed_count == 95
        assert stats.compiled_count == 190
        assert stats.derived_count == 95
        assert stats.empty_count == 2
        assert [o.weight for o in stats.outputs] == [Weight.REGULAR, Weight.BOLD]

    def test_regular_font_contents(self, tmp_path, settings, write_ascii_corpus):
        write_ascii_corpus()
        FontCompiler(settings, quiet=True).build(tmp_path / "build")

        font = TTFont(str(tmp_path / "build" / "Gridfont-Regular.ttf"))
        cmap = font.getBestCmap()
        assert set(cmap) == set(range(0x20, 0x7F))
        assert cmap[0x41] == "uni0041"
        assert all(font["hmtx"][name][0] == 960 for name in cmap.values())
        assert _contour_count(font, "uni0020") == 0
        assert _contour_count(font, "uni0041") == 2
        font.close()

    def test_bold_is_derived_by_dilation(self, tmp_path, settings, write_ascii_corpus):
        write_ascii_corpus()
        FontCompiler(settings, quiet=True).build(tmp_path / "build")

        regular = TTFont(str(tmp_path / "build" / "Gridfont-Regular.ttf"))
        bold = TTFont(str(tmp_path / "build" / "Gridfont-Bold.ttf"))

        def stem_box(font):
            contours = glyph_to_contours(font.getGlyphSet(), "uni0049")
            return max(contours, key=lambda c: c.bounding_box()[3]).bounding_box()

        # Two-pixel stem grows to three pixels
        assert stem_box(regular) == (360, 120, 600, 1200)
        assert stem_box(bold) == (360, 120, 720, 1200)
        assert bold["OS/2"].usWeightClass == 700
        regular.close()
        bold.close()

    def test_explicit_bold_is_used(self, tmp_path, settings, write_ascii_corpus, write_glyph):
        write_ascii_corpus()
        rows = ["XXXXXXXX"] * 16
        write_glyph("U+0041_A.bold.glyph", glyph_text("A", 0x41, rows, weight="bold"))

        stats = FontCompiler(settings, quiet=True).build(tmp_path / "build")
        assert stats.derived_count == 94

        bold = TTFont(str(tmp_path / "build" / "Gridfont-Bold.ttf"))
        contours = glyph_to_contours(bold.getGlyphSet(), "uni0041")
        assert [c.bounding_box() for c in contours] == [(0, -360, 960, 1560)]
        bold.close()

    def test_no_bold_when_disabled(self, tmp_path, write_ascii_corpus):
        settings = GridfontSettings(
            project_root=tmp_path,
            corpus=CorpusConfig(glyph_dirs=[Path("glyphs")], derive_bold=False),
        )
        write_ascii_corpus()
        out = tmp_path / "build"

        FontCompiler(settings, quiet=True).build(out)

        assert sorted(p.name for p in out.iterdir()) == [
            "Gridfont-Regular.ttf",
            "Gridfont-Regular.woff2",
        ]

    def test_ligature_registered(self, tmp_path, settings, write_ascii_corpus, write_glyph):
        write_ascii_corpus()
        rows = [row * 2 for row in BAR_ROWS]
        write_glyph("LIG_arrow.glyph", glyph_text("=>", components=["c3D", "c3E"], rows=rows))

        stats = FontCompiler(settings, quiet=True).build(tmp_path / "build")
        assert stats.substitution_count == 2

        font = TTFont(str(tmp_path / "build" / "Gridfont-Regular.ttf"))
        assert "lig.003D_003E" in font.getGlyphOrder()
        assert font["hmtx"]["lig.003D_003E"][0] == 1920
        lookup = font["GSUB"].table.LookupList.Lookup[0].SubTable[0]
        assert lookup.ligatures["uni003D"][0].LigGlyph == "lig.003D_003E"
        assert lookup.ligatures["uni003D"][0].Component == ["uni003E"]
        font.close()

    def test_unresolved_ligature_is_left_out(
        self, tmp_path, settings, write_ascii_corpus, write_glyph
    ):
        write_ascii_corpus()
        rows = [row * 2 for row in BAR_ROWS]
        write_glyph("LIG_qq.glyph", glyph_text("qq", components=["q", "nope"], rows=rows))

        stats = FontCompiler(settings, quiet=True).build(tmp_path / "build")
        assert stats.substitution_count == 0

        font = TTFont(str(tmp_path / "build" / "Gridfont-Regular.ttf"))
        assert "GSUB" not in font
        font.close()

    def test_parallel_build_matches_in_process(self, tmp_path, write_ascii_corpus):
        write_ascii_corpus()
        base = dict(project_root=tmp_path, corpus=CorpusConfig(glyph_dirs=[Path("glyphs")]))

        FontCompiler(GridfontSettings(**base), quiet=True).build(tmp_path / "serial")
        FontCompiler(
            GridfontSettings(**base, processing=ProcessingConfig(max_workers=2)), quiet=True
        ).build(tmp_path / "parallel")

        serial = TTFont(str(tmp_path / "serial" / "Gridfont-Regular.ttf"))
        parallel = TTFont(str(tmp_path / "parallel" / "Gridfont-Regular.ttf"))
        assert serial.getGlyphOrder() == parallel.getGlyphOrder()
        for name in serial.getGlyphOrder():
            assert glyph_to_contours(serial.getGlyphSet(), name) == glyph_to_contours(
                parallel.getGlyphSet(), name
            )
        serial.close()
        parallel.close()


class TestValidationGate:
    """Tests that an invalid corpus never produces fonts."""

    def test_missing_glyph_blocks_build(self, tmp_path, settings, write_ascii_corpus):
        paths = write_ascii_corpus()
        paths[0x42 - 0x20].unlink()
        out = tmp_path / "build"

        with pytest.raises(ValidationFailedError) as exc_info:
            FontCompiler(settings, quiet=True).build(out)

        errors = exc_info.value.report.errors
        assert [e.message for e in errors] == ["Missing required glyph: U+0042 'B'."]
        assert not out.exists()

    def test_malformed_file_blocks_build(self, tmp_path, settings, write_ascii_corpus, write_glyph):
        write_ascii_corpus()
        write_glyph("U+00E9_eacute.glyph", "# eacute (U+00E9)\n# weight: heavy\n\nX\n")

        with pytest.raises(ValidationFailedError):
            FontCompiler(settings, quiet=True).build(tmp_path / "build")
        assert not (tmp_path / "build").exists()
