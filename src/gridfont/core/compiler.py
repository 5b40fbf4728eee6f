"""Build orchestration for the glyph-to-font pipeline.

This module coordinates the full build: read the corpus, validate it as a
hard gate, compile each glyph (compaction + coordinate mapping) and hand the
outlines to the font writer. Glyphs are independent of each other, so they
can be compiled in parallel with ProcessPoolExecutor.

Key components:
- compile_glyph: Top-level picklable function for parallel execution
- FontCompiler: Main orchestrator class
"""

import time
import traceback
from collections.abc import Callable, Sequence
from concurrent.futures import ProcessPoolExecutor
from pathlib import Path
from typing import Any

from gridfont.config import GridfontSettings
from gridfont.core.compactor import compact_grid
from gridfont.core.ligatures import resolve_ligatures
from gridfont.core.mapper import build_outline
from gridfont.core.validator import CorpusValidator
from gridfont.core.weight import resolve_weight
from gridfont.domain import CompiledFont, GlyphSource, Outline, ValidationReport, Weight
from gridfont.exceptions import GlyphCompileError, ValidationFailedError
from gridfont.io import CorpusParseResult, FontWriter, GlyphReader
from gridfont.utils import BuildLogger, BuildStats, WeightOutput, configure_logging


def compile_glyph(glyph_dict: dict[str, Any], settings_dict: dict[str, Any]) -> dict[str, Any]:
    """Compile a single glyph into its outline.

    Top-level function designed to be picklable for use with
    ProcessPoolExecutor. Deserializes the record, compacts its raster,
    maps the rectangles and returns the serialized outline.

    Args:
        glyph_dict: Serialized record (from GlyphSource.to_dict())
        settings_dict: Serialized settings (from GridfontSettings.model_dump())

    Returns:
        Dictionary containing either:
        - Success: {"outline": outline_dict, "rectangles": int, "duration_ms": float}
        - Error: {"error": str, "label": str, "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        glyph = GlyphSource.from_dict(glyph_dict)
        settings = GridfontSettings.model_validate(settings_dict)

        rectangles = compact_grid(glyph.grid)
        outline = build_outline(
            glyph,
            rectangles,
            pixel_size=settings.metrics.pixel_size,
            baseline_row=settings.grid.baseline_row,
            base_width=settings.grid.width,
        )

        duration_ms = (time.time() - start_time) * 1000
        return {
            "outline": outline.to_dict(),
            "rectangles": len(rectangles),
            "duration_ms": duration_ms,
        }

    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        return {
            "error": str(e),
            "label": glyph_dict.get("label", "unknown"),
            "traceback": traceback.format_exc(),
            "duration_ms": duration_ms,
        }


class FontCompiler:
    """Orchestrates the glyph-to-font build.

    Manages the complete workflow:
    1. Read glyph sources from the corpus directories
    2. Validate the corpus (no font is written if validation fails)
    3. Compile glyphs per weight variant, in parallel when configured
    4. Resolve ligature substitutions
    5. Assemble and save TTF and WOFF2 files

    Example:
        settings = load_settings(Path("font-config.json"))
        compiler = FontCompiler(settings)
        stats = compiler.build(output_dir=Path("build"))
    """

    def __init__(self, settings: GridfontSettings, quiet: bool = False) -> None:
        """Initialize the compiler with configuration.

        Args:
            settings: Font, grid, corpus and processing configuration
            quiet: Suppress console log output except errors
        """
        self.settings = settings
        self.logger = configure_logging(
            log_file=settings.logging.log_file,
            console_level=settings.logging.log_level,
            file_level=settings.logging.file_log_level,
            quiet=quiet,
        )
        self.build_logger = BuildLogger(self.logger)
        self.validator = CorpusValidator(settings)
        self.reader = GlyphReader(max_workers=settings.processing.max_workers)

    def load(self, directories: Sequence[Path] | None = None) -> CorpusParseResult:
        """Read the glyph corpus.

        Args:
            directories: Directories to scan (defaults to the configured ones)

        Returns:
            Parsed records and per-file failures
        """
        if directories is None:
            directories = self.settings.glyph_dirs()
        result = self.reader.read_corpus(directories)
        self.logger.info(
            "Corpus loaded",
            directories=[str(d) for d in directories],
            glyphs=len(result.glyphs),
            failures=len(result.failures),
        )
        return result

    def validate(self, corpus: CorpusParseResult) -> ValidationReport:
        """Validate a loaded corpus, folding parse failures into the report."""
        report = self.validator.validate(corpus.glyphs, corpus.failures)
        self.logger.info(
            "Corpus validated",
            errors=len(report.errors),
            warnings=len(report.warnings),
        )
        return report

    def compile(
        self,
        glyphs: Sequence[GlyphSource],
        weight: Weight,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> CompiledFont:
        """Compile the outlines of one weight variant.

        Glyphs must already have passed validation.

        Args:
            glyphs: Validated corpus, sorted by source path
            weight: Weight variant to compile
            progress_callback: Optional callback(completed, total, label, success)

        Returns:
            Outlines in corpus order plus ligature substitutions

        Raises:
            GlyphCompileError: If a glyph fails to compile
        """
        selected = resolve_weight(glyphs, weight)
        if not self.settings.corpus.ligatures:
            selected = [g for g in selected if not g.is_ligature]

        outlines = self._compile_glyphs(selected, progress_callback)

        substitutions = ()
        if self.settings.corpus.ligatures:
            resolution = resolve_ligatures(selected)
            for glyph, missing in resolution.unresolved:
                self.build_logger.log_ligature_skipped(
                    glyph.label,
                    f"unresolved components: {', '.join(missing)}" if missing else "no components",
                )
            substitutions = tuple(resolution.substitutions)
            self.build_logger.stats.substitution_count += len(substitutions)

        return CompiledFont(weight=weight, outlines=tuple(outlines), substitutions=substitutions)

    def build(
        self,
        output_dir: Path,
        directories: Sequence[Path] | None = None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> BuildStats:
        """Run the full build.

        Args:
            output_dir: Directory the font files are written to
            directories: Corpus directories (defaults to the configured ones)
            progress_callback: Optional callback(completed, total, label, success)

        Returns:
            BuildStats with counts, timings and written files

        Raises:
            ValidationFailedError: If the corpus fails validation; nothing is written
            GlyphCompileError: If a glyph fails to compile
            FontSaveError: If a font file cannot be written
        """
        stats = self.build_logger.stats
        stats.start_time = time.time()

        corpus = self.load(directories)
        stats.parsed_count = len(corpus.glyphs)

        report = self.validate(corpus)
        if not report.is_valid:
            raise ValidationFailedError(report)

        weights = [Weight.REGULAR]
        if self.settings.corpus.derive_bold or any(g.weight == Weight.BOLD for g in corpus.glyphs):
            weights.append(Weight.BOLD)

        writer = FontWriter(self.settings)
        for weight in weights:
            compiled = self.compile(corpus.glyphs, weight, progress_callback)
            font = writer.build(compiled)
            ttf_path, woff2_path = writer.save(font, output_dir, weight)
            font.close()

            stats.outputs.append(
                WeightOutput(
                    weight=weight,
                    glyph_count=len(compiled.outlines),
                    ttf_path=ttf_path,
                    woff2_path=woff2_path,
                )
            )
            self.logger.info(
                "Font saved",
                weight=weight.value,
                glyphs=len(compiled.outlines),
                rectangles=compiled.rectangle_count,
                ligatures=len(compiled.substitutions),
                ttf=str(ttf_path),
                woff2=str(woff2_path),
            )

        stats.end_time = time.time()
        self.logger.info(
            "Build complete",
            compiled=stats.compiled_count,
            derived=stats.derived_count,
            rectangles=stats.rectangle_count,
            duration_seconds=round(stats.duration_seconds, 2),
        )
        return stats

    def _compile_glyphs(
        self,
        glyphs: Sequence[GlyphSource],
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> list[Outline]:
        """Compile glyphs in-process or on a process pool.

        Results are collected in input order regardless of completion order.
        """
        settings_dict = self.settings.model_dump()
        tasks = [glyph.to_dict() for glyph in glyphs]
        max_workers = self.settings.processing.max_workers

        if max_workers == 1:
            results = (compile_glyph(task, settings_dict) for task in tasks)
            return self._collect(glyphs, results, progress_callback)

        self.logger.info("Starting parallel compilation", glyphs=len(tasks), max_workers=max_workers)
        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            results = executor.map(
                compile_glyph, tasks, [settings_dict] * len(tasks), chunksize=16
            )
            return self._collect(glyphs, results, progress_callback)

    def _collect(
        self,
        glyphs: Sequence[GlyphSource],
        results: Any,
        progress_callback: Callable[[int, int, str, bool], None] | None,
    ) -> list[Outline]:
        outlines: list[Outline] = []
        total = len(glyphs)

        for completed, (glyph, result) in enumerate(zip(glyphs, results), start=1):
            if "error" in result:
                self.build_logger.log_glyph_error(
                    label=result["label"],
                    error=result["error"],
                    traceback=result.get("traceback"),
                )
                if progress_callback is not None:
                    progress_callback(completed, total, glyph.label, False)
                raise GlyphCompileError(glyph.label, result["error"])

            outlines.append(Outline.from_dict(result["outline"]))
            self.build_logger.log_glyph_compiled(
                label=glyph.label,
                weight=glyph.weight,
                rectangles=result["rectangles"],
                duration_ms=result["duration_ms"],
                derived=glyph.derived,
            )
            if progress_callback is not None:
                progress_callback(completed, total, glyph.label, True)

        return outlines
