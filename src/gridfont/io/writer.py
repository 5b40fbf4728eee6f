"""Font writer for assembling and saving compiled fonts.

This module provides the FontWriter class, which turns the outlines of one
weight variant into a TrueType font with fonttools' FontBuilder and saves
it as `.ttf` and `.woff2`. It also writes generated glyph sources back to
disk.
"""

from collections.abc import Iterable, Sequence
from pathlib import Path

from fontTools.feaLib.builder import addOpenTypeFeaturesFromString
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib import TTFont, newTable

from gridfont.config import GridfontSettings
from gridfont.domain import CompiledFont, GlyphSource, LigatureSubstitution, Weight
from gridfont.exceptions import FontError, FontSaveError
from gridfont.io.converter import outline_to_ttglyph
from gridfont.io.parser import format_glyph, glyph_filename

NOTDEF = ".notdef"

# OS/2 fsSelection and head macStyle bits
FS_SELECTION_BOLD = 1 << 5
FS_SELECTION_REGULAR = 1 << 6
MAC_STYLE_BOLD = 1 << 0


def style_name(weight: Weight) -> str:
    return "Bold" if weight == Weight.BOLD else "Regular"


def liga_feature_code(substitutions: Sequence[LigatureSubstitution]) -> str | None:
    """Generate OpenType feature code for the `liga` feature.

    Longer component sequences come first so that they win over their
    prefixes.

    Returns:
        The feature source, or None if there are no substitutions
    """
    if not substitutions:
        return None

    ordered = sorted(substitutions, key=lambda s: (-len(s.components), s.components))
    lines = ["feature liga {"]
    for sub in ordered:
        lines.append(f"    sub {' '.join(sub.components)} by {sub.ligature};")
    lines.append("} liga;")
    return "\n".join(lines)


class FontWriter:
    """Assembles and saves the font of one weight variant.

    Example:
        writer = FontWriter(settings)
        font = writer.build(compiled)
        ttf_path, woff2_path = writer.save(font, Path("build"), compiled.weight)
    """

    def __init__(self, settings: GridfontSettings) -> None:
        """Initialize the font writer.

        Args:
            settings: Font naming, grid and metrics configuration
        """
        self._settings = settings

    def build(self, compiled: CompiledFont) -> TTFont:
        """Assemble a TrueType font from compiled outlines.

        Args:
            compiled: Outlines and substitutions of one weight variant

        Returns:
            In-memory TTFont

        Raises:
            FontError: If two outlines share a glyph name or a codepoint
        """
        settings = self._settings
        metrics = settings.metrics
        info = settings.font
        style = style_name(compiled.weight)

        glyph_order = [NOTDEF]
        glyphs = {NOTDEF: TTGlyphPen(None).glyph()}
        hmtx = {NOTDEF: (settings.advance_width, 0)}
        cmap: dict[int, str] = {}

        for outline in compiled.outlines:
            if outline.name in glyphs:
                raise FontError(f"Glyph name '{outline.name}' used by more than one glyph")
            glyph_order.append(outline.name)
            glyphs[outline.name] = outline_to_ttglyph(outline)
            hmtx[outline.name] = (outline.advance_width, outline.bounding_box()[0])
            if outline.unicode is not None:
                if outline.unicode in cmap:
                    raise FontError(f"Codepoint U+{outline.unicode:04X} mapped more than once")
                cmap[outline.unicode] = outline.name

        fb = FontBuilder(settings.units_per_em, isTTF=True)
        fb.setupGlyphOrder(glyph_order)
        fb.setupCharacterMap(cmap)
        fb.setupGlyf(glyphs)
        fb.setupHorizontalMetrics(hmtx)
        fb.setupHorizontalHeader(
            ascent=metrics.ascender,
            descent=metrics.descender,
            lineGap=metrics.line_gap,
        )

        family = info.family_name
        ps_name = f"{family.replace(' ', '')}-{style}"
        name_strings = {
            "familyName": family,
            "styleName": style,
            "uniqueFontIdentifier": f"{ps_name};{info.version}",
            "fullName": f"{family} {style}",
            "psName": ps_name,
            "version": f"Version {info.version}",
        }
        if info.description:
            name_strings["description"] = info.description
        if info.designer:
            name_strings["designer"] = info.designer
        if info.url:
            name_strings["vendorURL"] = info.url
        fb.setupNameTable(name_strings)

        is_bold = compiled.weight == Weight.BOLD
        fb.setupOS2(
            sTypoAscender=metrics.ascender,
            sTypoDescender=metrics.descender,
            sTypoLineGap=metrics.line_gap,
            usWinAscent=metrics.ascender,
            usWinDescent=abs(metrics.descender),
            usWeightClass=settings.weights.bold if is_bold else settings.weights.regular,
            fsSelection=FS_SELECTION_BOLD if is_bold else FS_SELECTION_REGULAR,
            fsType=0,
        )
        fb.setupPost(isFixedPitch=1)
        fb.setupMaxp()

        # Grid-fit only, no antialiasing
        gasp = newTable("gasp")
        gasp.gaspRange = {0xFFFF: 0x0001}
        fb.font["gasp"] = gasp

        head = fb.font["head"]
        head.macStyle = MAC_STYLE_BOLD if is_bold else 0
        head.fontRevision = float(info.version)

        fea_code = liga_feature_code(compiled.substitutions)
        if fea_code:
            addOpenTypeFeaturesFromString(fb.font, fea_code)

        return fb.font

    def save(self, font: TTFont, output_dir: Path, weight: Weight) -> tuple[Path, Path]:
        """Save a font as TrueType and WOFF2.

        Args:
            font: Assembled font
            output_dir: Directory to write into (created if missing)
            weight: Weight variant, used in the file names

        Returns:
            Tuple of (ttf_path, woff2_path)

        Raises:
            FontSaveError: If a file cannot be written
        """
        ttf_path = output_dir / f"{self.file_stem(weight)}.ttf"
        woff2_path = ttf_path.with_suffix(".woff2")

        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            font.save(str(ttf_path))
        except OSError as e:
            raise FontSaveError(str(ttf_path), e.strerror or str(e)) from e

        try:
            compressed = TTFont(str(ttf_path))
            compressed.flavor = "woff2"
            compressed.save(str(woff2_path))
            compressed.close()
        except (OSError, ImportError) as e:
            raise FontSaveError(str(woff2_path), str(e)) from e

        return ttf_path, woff2_path

    def file_stem(self, weight: Weight) -> str:
        """File name stem, e.g. ``Gridfont-Regular``."""
        return f"{self._settings.font.family_name.replace(' ', '')}-{style_name(weight)}"


def write_glyph_files(glyphs: Iterable[GlyphSource], output_dir: Path) -> list[Path]:
    """Write records as `.glyph` source files.

    Args:
        glyphs: Records to write
        output_dir: Directory to write into (created if missing)

    Returns:
        Paths written, in input order
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for glyph in glyphs:
        path = output_dir / glyph_filename(glyph)
        path.write_text(format_glyph(glyph), encoding="utf-8")
        written.append(path)
    return written
