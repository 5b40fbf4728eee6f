"""Logging utilities for gridfont."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from gridfont.domain import Weight

_HANDLER_NAME = "gridfont"


@dataclass
class WeightOutput:
    """Files written for one weight variant."""

    weight: Weight
    glyph_count: int
    ttf_path: Path | None = None
    woff2_path: Path | None = None


@dataclass
class BuildStats:
    """Statistics from a build run."""

    parsed_count: int = 0
    compiled_count: int = 0
    derived_count: int = 0
    empty_count: int = 0
    error_count: int = 0
    rectangle_count: int = 0
    substitution_count: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    glyph_timings_ms: list[float] = field(default_factory=list)
    outputs: list[WeightOutput] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate build duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_glyph_time_ms(self) -> float | None:
        if not self.glyph_timings_ms:
            return None
        return sum(self.glyph_timings_ms) / len(self.glyph_timings_ms)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Calling this again replaces the handlers installed by a previous call.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in list(root_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.set_name(_HANDLER_NAME)
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.set_name(_HANDLER_NAME)
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("gridfont")
    logger.debug("Logging initialized", log_file=str(log_file) if log_file else None)

    return logger


class BuildLogger:
    """Logger for tracking compilation progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = BuildStats()

    def log_glyph_compiled(
        self,
        label: str,
        weight: Weight,
        rectangles: int,
        duration_ms: float,
        derived: bool = False,
    ) -> None:
        """Log successful glyph compilation."""
        self._logger.debug(
            "Glyph compiled",
            glyph=label,
            weight=weight.value,
            rectangles=rectangles,
            derived=derived,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.compiled_count += 1
        self._stats.rectangle_count += rectangles
        self._stats.glyph_timings_ms.append(duration_ms)
        if derived:
            self._stats.derived_count += 1
        if rectangles == 0:
            self._stats.empty_count += 1

    def log_glyph_error(
        self,
        label: str,
        error: str,
        traceback: str | None = None,
    ) -> None:
        """Log glyph compilation error."""
        self._logger.error(
            "Glyph compilation failed",
            glyph=label,
            error=error,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((label, error))

    def log_ligature_skipped(self, label: str, reason: str) -> None:
        """Log a ligature left out of substitution registration."""
        self._logger.warning("Ligature skipped", glyph=label, reason=reason)

    @property
    def stats(self) -> BuildStats:
        """Get current build statistics."""
        return self._stats
