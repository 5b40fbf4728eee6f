"""Structural and semantic validation of a glyph corpus.

Every check runs on every record, even after earlier checks failed, so a
single pass reports the complete set of problems. Issues are returned as
data; nothing here raises for a defective corpus.

Order of issues is stable for identical input: parse failures, then
per-record checks in source order, then corpus-wide checks.
"""

import re
from collections.abc import Sequence
from pathlib import Path

from gridfont.config import GridfontSettings
from gridfont.domain import (
    GlyphKind,
    GlyphSource,
    ParseFailure,
    Severity,
    ValidationReport,
    Weight,
)

MAX_CODEPOINT = 0x10FFFF
SURROGATE_START = 0xD800
SURROGATE_END = 0xDFFF

_RASTER_ROW = re.compile(r"[.X]+")


def format_codepoint(cp: int) -> str:
    """Format a codepoint as ``U+XXXX``."""
    return f"U+{cp:04X}"


class CorpusValidator:
    """Validates a parsed glyph corpus against the grid configuration.

    Example:
        validator = CorpusValidator(settings)
        report = validator.validate(glyphs)
        if not report.is_valid:
            for issue in report.errors:
                print(issue)
    """

    def __init__(self, settings: GridfontSettings, root: Path | None = None) -> None:
        """Initialize the validator.

        Args:
            settings: Grid dimensions, required range and ligature switch
            root: Directory source references are made relative to
                (defaults to the configured project root)
        """
        self.settings = settings
        self.root = root if root is not None else settings.project_root

    def validate(
        self,
        glyphs: Sequence[GlyphSource],
        parse_failures: Sequence[ParseFailure] = (),
    ) -> ValidationReport:
        """Run every check over the corpus.

        Args:
            glyphs: Parsed records, sorted by source path
            parse_failures: Files the reader could not parse

        Returns:
            Report with all issues found
        """
        report = ValidationReport()

        for failure in sorted(parse_failures, key=lambda f: str(f.path)):
            report.add(self._relative(failure.path), f"Could not parse file: {failure.reason}")

        ligatures_enabled = self.settings.corpus.ligatures
        active: list[GlyphSource] = []
        for glyph in glyphs:
            if glyph.is_ligature and not ligatures_enabled:
                report.add(
                    self._reference(glyph),
                    "Ligature support is disabled; glyph skipped.",
                    Severity.WARNING,
                )
                continue
            active.append(glyph)
            self._check_record(glyph, report)

        self._check_duplicate_codepoints(active, report)
        self._check_duplicate_labels(active, report)
        self._check_completeness(active, report)
        if ligatures_enabled:
            self._check_ligature_components(active, report)

        return report

    # ── per-record checks ─────────────────────────────────────────────────

    def _check_record(self, glyph: GlyphSource, report: ValidationReport) -> None:
        ref = self._reference(glyph)
        base = self.settings.grid.width
        height = self.settings.grid.height

        if glyph.height != height:
            report.add(ref, f"Grid has {glyph.height} rows, expected {height}.")

        expected_width = self._expected_width(glyph)
        if glyph.is_ligature:
            if glyph.width == 0 or glyph.width % base != 0:
                report.add(
                    ref,
                    f"Ligature grid width is {glyph.width}, expected a positive multiple of {base}.",
                )
            elif glyph.components and glyph.width != expected_width:
                report.add(
                    ref,
                    f"Ligature grid width is {glyph.width}, expected {expected_width} "
                    f"for {len(glyph.components)} components.",
                )
        elif glyph.width != base:
            report.add(ref, f"Grid width is {glyph.width}, expected {base}.")

        for index, row in enumerate(glyph.grid, start=1):
            if len(row) != expected_width:
                report.add(ref, f"Row {index} has {len(row)} columns, expected {expected_width}.")

        for index, line in enumerate(glyph.raster_lines, start=1):
            if not _RASTER_ROW.fullmatch(line):
                report.add(
                    ref,
                    f"Row {index} contains invalid characters. Only '.' and 'X' are "
                    f'allowed in the grid. Got: "{line}"',
                )

        if glyph.codepoint is not None:
            cp = glyph.codepoint
            if cp < 0 or cp > MAX_CODEPOINT:
                report.add(
                    ref,
                    f"Invalid Unicode codepoint {format_codepoint(cp) if cp >= 0 else cp}. "
                    "Must be in range U+0000 to U+10FFFF.",
                )
            elif SURROGATE_START <= cp <= SURROGATE_END:
                report.add(
                    ref,
                    f"Codepoint {format_codepoint(cp)} is in the surrogate range "
                    "(U+D800-U+DFFF) and is not a valid Unicode scalar value.",
                )
        elif not glyph.is_ligature:
            report.add(ref, "Glyph has no codepoint in its header or filename.")

        if glyph.is_ligature and not glyph.components:
            report.add(ref, "Ligature declares no components.")

    def _expected_width(self, glyph: GlyphSource) -> int:
        base = self.settings.grid.width
        if not glyph.is_ligature:
            return base
        if glyph.components:
            return base * len(glyph.components)
        if glyph.width > 0 and glyph.width % base == 0:
            return glyph.width
        return base

    # ── corpus-wide checks ────────────────────────────────────────────────

    def _check_duplicate_codepoints(
        self, glyphs: Sequence[GlyphSource], report: ValidationReport
    ) -> None:
        occurrences: dict[tuple[int, Weight], list[GlyphSource]] = {}
        for glyph in glyphs:
            if glyph.is_ligature or glyph.codepoint is None:
                continue
            occurrences.setdefault((glyph.codepoint, glyph.weight), []).append(glyph)

        for (cp, weight), dups in occurrences.items():
            if len(dups) > 1:
                files = ", ".join(self._reference(g) for g in dups)
                report.add(
                    files,
                    f"Duplicate {weight.value} codepoint {format_codepoint(cp)} "
                    "found in multiple files.",
                )

    def _check_duplicate_labels(
        self, glyphs: Sequence[GlyphSource], report: ValidationReport
    ) -> None:
        occurrences: dict[tuple[GlyphKind, str, Weight], list[GlyphSource]] = {}
        for glyph in glyphs:
            occurrences.setdefault((glyph.kind, glyph.label, glyph.weight), []).append(glyph)

        for (kind, label, weight), dups in occurrences.items():
            if len(dups) < 2:
                continue
            if kind == GlyphKind.LIGATURE:
                message = (
                    f"Duplicate {weight.value} ligature label '{label}' found in multiple files."
                )
            else:
                codepoints = sorted({g.codepoint for g in dups if g.codepoint is not None})
                # Same label on one codepoint is already a duplicate codepoint error
                if len(codepoints) < 2:
                    continue
                rendered = ", ".join(format_codepoint(cp) for cp in codepoints)
                message = (
                    f"Duplicate {weight.value} label '{label}' used by {rendered}. "
                    "Ligature components cannot tell them apart."
                )
            report.add(", ".join(self._reference(g) for g in dups), message)

    def _check_completeness(self, glyphs: Sequence[GlyphSource], report: ValidationReport) -> None:
        corpus = self.settings.corpus
        present = {
            g.codepoint
            for g in glyphs
            if not g.is_ligature and g.weight == Weight.REGULAR and g.codepoint is not None
        }

        for cp in range(corpus.required_start, corpus.required_end + 1):
            if cp in present:
                continue
            char = chr(cp)
            rendered = f" '{char}'" if cp > 0x20 and char.isprintable() else ""
            report.add(
                corpus.missing_reference,
                f"Missing required glyph: {format_codepoint(cp)}{rendered}.",
            )

    def _check_ligature_components(
        self, glyphs: Sequence[GlyphSource], report: ValidationReport
    ) -> None:
        known = {g.label for g in glyphs if not g.is_ligature}

        for glyph in glyphs:
            if not glyph.is_ligature or not glyph.components:
                continue
            missing = [label for label in glyph.components if label not in known]
            if missing:
                report.add(
                    self._reference(glyph),
                    f"Ligature components not found: {', '.join(missing)}. "
                    "The ligature will not be registered.",
                    Severity.WARNING,
                )

    # ── helpers ───────────────────────────────────────────────────────────

    def _reference(self, glyph: GlyphSource) -> str:
        if glyph.source_path is None:
            return glyph.label
        return self._relative(glyph.source_path)

    def _relative(self, path: Path) -> str:
        try:
            return path.resolve().relative_to(self.root.resolve()).as_posix()
        except ValueError:
            return path.as_posix()


def validate_corpus(
    glyphs: Sequence[GlyphSource],
    settings: GridfontSettings,
    root: Path | None = None,
    parse_failures: Sequence[ParseFailure] = (),
) -> ValidationReport:
    """Validate a corpus; see `CorpusValidator.validate`."""
    return CorpusValidator(settings, root=root).validate(glyphs, parse_failures)
