"""Ligature resolution.

A ligature record names its components by label. Resolution maps those
labels to the standalone glyphs of the same build; ligatures whose
components do not all resolve are left out of substitution registration.
A label shared by more than one standalone glyph does not resolve.
The label index is built fresh on every call.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from gridfont.core.mapper import glyph_name_for
from gridfont.domain import GlyphSource, LigatureSubstitution


@dataclass
class LigatureResolution:
    """Outcome of resolving the ligatures of one build.

    Attributes:
        substitutions: Ligatures whose components all resolved
        unresolved: Ligatures left out, with the labels that did not resolve
    """

    substitutions: list[LigatureSubstitution] = field(default_factory=list)
    unresolved: list[tuple[GlyphSource, tuple[str, ...]]] = field(default_factory=list)


def resolve_ligatures(glyphs: Sequence[GlyphSource]) -> LigatureResolution:
    """Resolve ligature components against the standalone glyphs given.

    Args:
        glyphs: Records of a single weight variant

    Returns:
        Resolved substitutions and unresolved ligatures, in input order
    """
    candidates: dict[str, list[GlyphSource]] = {}
    for glyph in glyphs:
        if not glyph.is_ligature and glyph.codepoint is not None:
            candidates.setdefault(glyph.label, []).append(glyph)
    by_label = {label: found[0] for label, found in candidates.items() if len(found) == 1}
    resolution = LigatureResolution()

    for glyph in glyphs:
        if not glyph.is_ligature:
            continue

        components = glyph.components or ()
        missing = tuple(label for label in components if label not in by_label)
        if missing or not components:
            resolution.unresolved.append((glyph, missing))
            continue

        targets = [by_label[label] for label in components]
        resolution.substitutions.append(
            LigatureSubstitution(
                ligature=glyph_name_for(glyph),
                components=tuple(glyph_name_for(t) for t in targets),
                codepoints=tuple(t.codepoint for t in targets if t.codepoint is not None),
            )
        )

    return resolution
