"""Glyph source reader.

This module provides the GlyphReader class for enumerating `.glyph` files
in the corpus directories and parsing them into domain records.
"""

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from gridfont.domain import GlyphSource, ParseFailure
from gridfont.exceptions import GlyphReadError, GlyphSourceError
from gridfont.io.parser import GLYPH_SUFFIX, parse_glyph_text

logger = structlog.get_logger(__name__)


@dataclass
class CorpusParseResult:
    """Records parsed from a set of directories.

    Attributes:
        glyphs: Successfully parsed records, sorted by source path
        failures: Files that could not be read or parsed, sorted by path
    """

    glyphs: list[GlyphSource] = field(default_factory=list)
    failures: list[ParseFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class GlyphReader:
    """Reads `.glyph` source files from corpus directories.

    Files are independent, so they may be parsed on a thread pool; results
    are always returned in path order.

    Example:
        reader = GlyphReader(max_workers=4)
        result = reader.read_corpus([Path("glyphs/ascii")])
        for glyph in result.glyphs:
            print(glyph.label)
    """

    def __init__(self, max_workers: int | None = 1) -> None:
        """Initialize the reader.

        Args:
            max_workers: Parser threads (1 = parse sequentially, None = auto)
        """
        self._max_workers = max_workers

    @staticmethod
    def discover(directories: Iterable[Path]) -> list[Path]:
        """List `.glyph` files directly inside each directory.

        Missing directories contribute nothing.

        Returns:
            Sorted file paths
        """
        files: list[Path] = []
        for directory in directories:
            if not directory.is_dir():
                logger.debug("Glyph directory not found, skipping", directory=str(directory))
                continue
            files.extend(
                entry
                for entry in directory.iterdir()
                if entry.name.endswith(GLYPH_SUFFIX) and entry.is_file()
            )
        return sorted(files)

    @staticmethod
    def read_file(path: Path) -> GlyphSource:
        """Read and parse one source file.

        Args:
            path: Path to the `.glyph` file

        Returns:
            Parsed record

        Raises:
            GlyphReadError: If the file cannot be read or is not UTF-8
            GlyphParseError: If the header is malformed
        """
        try:
            text = path.read_bytes().decode("utf-8")
        except UnicodeDecodeError as e:
            raise GlyphReadError(str(path), f"not valid UTF-8 ({e.reason})") from e
        except OSError as e:
            raise GlyphReadError(str(path), e.strerror or str(e)) from e

        return parse_glyph_text(text, path)

    def read_corpus(self, directories: Iterable[Path], strict: bool = False) -> CorpusParseResult:
        """Parse every `.glyph` file in the given directories.

        A file that fails to parse is recorded as a failure and the rest of
        the corpus is still read.

        Args:
            directories: Directories to scan (non-recursive)
            strict: Raise the first failure instead of collecting it

        Returns:
            Parsed records and failures, both in path order

        Raises:
            GlyphSourceError: On the first failure, when ``strict`` is set
        """
        files = self.discover(directories)
        result = CorpusParseResult()

        if self._max_workers == 1:
            outcomes = [self._read_one(path) for path in files]
        else:
            with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
                outcomes = list(executor.map(self._read_one, files))

        for path, outcome in zip(files, outcomes):
            if isinstance(outcome, GlyphSourceError):
                if strict:
                    raise outcome
                logger.warning("Glyph source rejected", file=str(path), error=str(outcome))
                result.failures.append(ParseFailure(path=path, reason=_reason(outcome)))
            else:
                result.glyphs.append(outcome)

        logger.info(
            "Corpus read",
            files=len(files),
            glyphs=len(result.glyphs),
            failures=len(result.failures),
        )
        return result

    def _read_one(self, path: Path) -> GlyphSource | GlyphSourceError:
        try:
            return self.read_file(path)
        except GlyphSourceError as e:
            return e


def _reason(error: GlyphSourceError) -> str:
    return getattr(error, "reason", str(error))


def read_corpus(
    directories: Iterable[Path],
    max_workers: int | None = 1,
    strict: bool = False,
) -> CorpusParseResult:
    """Parse every `.glyph` file in the given directories."""
    return GlyphReader(max_workers=max_workers).read_corpus(directories, strict=strict)
