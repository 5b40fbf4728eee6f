"""Unit tests for ligature resolution and feature code."""

from gridfont.core.ligatures import resolve_ligatures
from gridfont.domain import GlyphKind, GlyphSource, LigatureSubstitution
from gridfont.io.writer import liga_feature_code


def _standalone(label: str, codepoint: int) -> GlyphSource:
    return GlyphSource(label=label, codepoint=codepoint, grid=())


def _ligature(label: str, components: tuple[str, ...] | None) -> GlyphSource:
    return GlyphSource(
        label=label,
        codepoint=None,
        grid=(),
        components=components,
        kind=GlyphKind.LIGATURE,
    )


class TestResolveLigatures:
    """Tests for resolve_ligatures."""

    def test_resolved_components(self):
        glyphs = [_standalone("=", 0x3D), _standalone(">", 0x3E), _ligature("=>", ("=", ">"))]
        resolution = resolve_ligatures(glyphs)

        assert resolution.unresolved == []
        assert resolution.substitutions == [
            LigatureSubstitution(
                ligature="lig.003D_003E",
                components=("uni003D", "uni003E"),
                codepoints=(0x3D, 0x3E),
            )
        ]

    def test_unresolved_component_is_reported(self):
        lig = _ligature("=>", ("=", ">"))
        resolution = resolve_ligatures([_standalone("=", 0x3D), lig])

        assert resolution.substitutions == []
        assert resolution.unresolved == [(lig, (">",))]

    def test_ligature_without_components(self):
        lig = _ligature("x", None)
        resolution = resolve_ligatures([lig])
        assert resolution.unresolved == [(lig, ())]

    def test_ligatures_do_not_resolve_against_ligatures(self):
        inner = _ligature("ab", ("a", "b"))
        outer = _ligature("abc", ("ab", "c"))
        resolution = resolve_ligatures(
            [_standalone("a", 0x61), _standalone("b", 0x62), _standalone("c", 0x63), inner, outer]
        )
        assert [s.ligature for s in resolution.substitutions] == ["lig.ab"]
        assert resolution.unresolved == [(outer, ("ab",))]

    def test_label_shared_by_two_glyphs_does_not_resolve(self):
        lig = _ligature("AB", ("A", "B"))
        glyphs = [_standalone("A", 0x41), _standalone("A", 0x391), _standalone("B", 0x42), lig]

        resolution = resolve_ligatures(glyphs)

        assert resolution.substitutions == []
        assert resolution.unresolved == [(lig, ("A",))]


class TestLigaFeatureCode:
    """Tests for liga_feature_code."""

    def test_no_substitutions(self):
        assert liga_feature_code([]) is None

    def test_longest_sequence_first(self):
        pair = LigatureSubstitution("lig.ff", ("uni0066", "uni0066"), (0x66, 0x66))
        triple = LigatureSubstitution("lig.ffi", ("uni0066", "uni0066", "uni0069"), (0x66, 0x66, 0x69))
        code = liga_feature_code([pair, triple])

        assert code == (
            "feature liga {\n"
            "    sub uni0066 uni0066 uni0069 by lig.ffi;\n"
            "    sub uni0066 uni0066 by lig.ff;\n"
            "} liga;"
        )
