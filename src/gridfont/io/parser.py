"""Parser for `.glyph` source text.

A `.glyph` file consists of:
- Header lines starting with '#' (label, codepoint, weight, components)
- Optional blank lines
- Raster lines using '.' (empty) and 'X' (filled)

Example::

    # A (U+0041)
    # weight: regular

    ........
    ...XX...
    ...

Header lines are classified by a small tagged-line grammar: each line is
tried against the field patterns in a fixed order and the first match
decides its kind. The parser records raster rows as-is; dimension and
character-set correctness are checked by the validator.
"""

import re
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path

from gridfont.domain import EMPTY, FILLED, GlyphKind, GlyphSource, Weight, grid_from_rows
from gridfont.exceptions import GlyphParseError

COMMENT_MARKER = "#"
GLYPH_SUFFIX = ".glyph"
BLANK_CHARS = " \t"

_WEIGHT_FIELD = re.compile(r"^weight\s*:\s*(?P<value>.*)$", re.IGNORECASE)
_WEIGHT_VALUE = re.compile(r"^(regular|bold)$", re.IGNORECASE)
_COMPONENTS_FIELD = re.compile(r"^components\s*:(?P<value>.*)$", re.IGNORECASE)
_LABEL_CODEPOINT = re.compile(r"^(?P<label>.+?)\s+\(U\+(?P<hex>[0-9A-Fa-f]{4,6})\)$")
_LABEL_LIGATURE = re.compile(r"^(?P<label>.+?)\s+\(ligature\)$", re.IGNORECASE)

_FILENAME_CODEPOINT = re.compile(r"^U\+(?P<hex>[0-9A-Fa-f]{4,6})_")
_FILENAME_PREFIX = re.compile(r"^(U\+[0-9A-Fa-f]+_|LIG_)")


class HeaderFieldKind(Enum):
    """Kinds of header line, in the order they are tried."""

    BLANK = auto()
    WEIGHT = auto()
    COMPONENTS = auto()
    LABEL_CODEPOINT = auto()
    LABEL_LIGATURE = auto()
    LABEL_PLAIN = auto()


@dataclass(frozen=True)
class HeaderLine:
    """One classified header line.

    Attributes:
        kind: Which field the line carries
        text: Line content without the comment marker
        value: Field value (weight name, components, label)
        codepoint: Codepoint for LABEL_CODEPOINT lines
    """

    kind: HeaderFieldKind
    text: str
    value: str | tuple[str, ...] | None = None
    codepoint: int | None = None


@dataclass(frozen=True)
class GlyphHeader:
    """Metadata collected from the header block."""

    label: str
    codepoint: int | None
    weight: Weight
    components: tuple[str, ...] | None
    kind: GlyphKind


def classify_header_line(raw: str, path: str = "<text>") -> HeaderLine:
    """Classify a single header line.

    Args:
        raw: Line including its leading comment marker
        path: Source reference for error messages

    Returns:
        Classified header line

    Raises:
        GlyphParseError: If a weight or components field has a malformed value
    """
    text = raw.lstrip()
    if text.startswith(COMMENT_MARKER):
        text = text[len(COMMENT_MARKER):]
    text = text.strip()

    if not text:
        return HeaderLine(HeaderFieldKind.BLANK, text)

    match = _WEIGHT_FIELD.match(text)
    if match:
        value = match.group("value").strip()
        if not _WEIGHT_VALUE.match(value):
            raise GlyphParseError(path, f"unknown weight {value!r} (expected regular or bold)")
        return HeaderLine(HeaderFieldKind.WEIGHT, text, value=value.lower())

    match = _COMPONENTS_FIELD.match(text)
    if match:
        components = tuple(match.group("value").split())
        if not components:
            raise GlyphParseError(path, "components field lists no labels")
        return HeaderLine(HeaderFieldKind.COMPONENTS, text, value=components)

    match = _LABEL_CODEPOINT.match(text)
    if match:
        return HeaderLine(
            HeaderFieldKind.LABEL_CODEPOINT,
            text,
            value=match.group("label").strip(),
            codepoint=int(match.group("hex"), 16),
        )

    match = _LABEL_LIGATURE.match(text)
    if match:
        return HeaderLine(HeaderFieldKind.LABEL_LIGATURE, text, value=match.group("label").strip())

    return HeaderLine(HeaderFieldKind.LABEL_PLAIN, text, value=text)


def parse_header(header_lines: list[str], path: Path | None = None) -> GlyphHeader:
    """Collect glyph metadata from header lines.

    The first label-kind line supplies the label; later label-kind lines are
    free-form comments. Weight and components may appear in any order.

    Args:
        header_lines: Comment lines preceding the raster
        path: Source path, used for filename fallbacks and errors

    Returns:
        Parsed header

    Raises:
        GlyphParseError: If a field value is malformed or a field repeats
    """
    reference = str(path) if path is not None else "<text>"
    label: str | None = None
    codepoint: int | None = None
    weight: Weight | None = None
    components: tuple[str, ...] | None = None
    ligature_label = False

    for raw in header_lines:
        line = classify_header_line(raw, reference)

        if line.kind == HeaderFieldKind.BLANK:
            continue

        if line.kind == HeaderFieldKind.WEIGHT:
            if weight is not None:
                raise GlyphParseError(reference, "weight field given more than once")
            weight = Weight(line.value)
            continue

        if line.kind == HeaderFieldKind.COMPONENTS:
            if components is not None:
                raise GlyphParseError(reference, "components field given more than once")
            components = line.value  # type: ignore[assignment]
            continue

        if label is not None:
            continue

        label = line.value  # type: ignore[assignment]
        if line.kind == HeaderFieldKind.LABEL_CODEPOINT:
            codepoint = line.codepoint
        elif line.kind == HeaderFieldKind.LABEL_LIGATURE:
            ligature_label = True

    stem = path.name.removesuffix(GLYPH_SUFFIX) if path is not None else ""

    if label is None:
        label = _FILENAME_PREFIX.sub("", stem)
        if not label:
            raise GlyphParseError(reference, "no label in header or filename")

    is_ligature = ligature_label or components is not None

    if codepoint is None and not is_ligature:
        match = _FILENAME_CODEPOINT.match(stem)
        if match:
            codepoint = int(match.group("hex"), 16)

    return GlyphHeader(
        label=label,
        codepoint=codepoint,
        weight=weight or Weight.REGULAR,
        components=components,
        kind=GlyphKind.LIGATURE if is_ligature else GlyphKind.STANDALONE,
    )


def _is_blank(line: str) -> bool:
    return not line.strip(BLANK_CHARS)


def split_lines(text: str) -> list[str]:
    """Split on '\\n' only, dropping one trailing '\\r' per line for CRLF files.

    Other characters Python treats as line boundaries (form feed, U+2028 and
    friends) stay inside the row so the validator can reject them.
    """
    return [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]


def split_sections(text: str) -> tuple[list[str], list[str]]:
    """Split source text into header lines and raster lines.

    The first non-comment, non-blank line starts the raster. Everything from
    there on is raster, including blank lines, except blank lines at the very
    end of the file.

    Returns:
        Tuple of (header_lines, raster_lines)
    """
    lines = split_lines(text)
    while lines and _is_blank(lines[-1]):
        lines.pop()

    header: list[str] = []
    for index, line in enumerate(lines):
        if line.startswith(COMMENT_MARKER):
            header.append(line)
        elif not _is_blank(line):
            return header, lines[index:]
    return header, []


def parse_raster(raster_lines: list[str]) -> list[list[bool]]:
    """Map raster characters 1:1 to cells; only 'X' is filled."""
    return [[char == FILLED for char in line] for line in raster_lines]


def parse_glyph_text(text: str, path: Path | None = None) -> GlyphSource:
    """Parse the contents of one `.glyph` file.

    Args:
        text: File contents
        path: Source path (used for fallbacks and as the record's source)

    Returns:
        Parsed glyph record

    Raises:
        GlyphParseError: If the header is malformed
    """
    header_lines, raster_lines = split_sections(text)
    header = parse_header(header_lines, path)

    return GlyphSource(
        label=header.label,
        codepoint=header.codepoint,
        grid=grid_from_rows(parse_raster(raster_lines)),
        weight=header.weight,
        components=header.components,
        kind=header.kind,
        raster_lines=tuple(raster_lines),
        source_path=path,
    )


def format_glyph(glyph: GlyphSource) -> str:
    """Render a record in the canonical `.glyph` file format."""
    if glyph.is_ligature:
        lines = [f"{COMMENT_MARKER} {glyph.label} (ligature)"]
    elif glyph.codepoint is not None:
        lines = [f"{COMMENT_MARKER} {glyph.label} (U+{glyph.codepoint:04X})"]
    else:
        lines = [f"{COMMENT_MARKER} {glyph.label}"]

    if glyph.weight != Weight.REGULAR:
        lines.append(f"{COMMENT_MARKER} weight: {glyph.weight.value}")
    if glyph.components:
        lines.append(f"{COMMENT_MARKER} components: {' '.join(glyph.components)}")

    lines.append("")
    lines.extend("".join(FILLED if cell else EMPTY for cell in row) for row in glyph.grid)
    return "\n".join(lines) + "\n"


def glyph_filename(glyph: GlyphSource) -> str:
    """Conventional filename: ``U+XXXX_<label>.glyph`` or ``LIG_<label>.glyph``."""
    if glyph.is_ligature or glyph.codepoint is None:
        name = f"LIG_{glyph.label}"
    else:
        name = f"U+{glyph.codepoint:04X}_{glyph.label}"
    if glyph.weight != Weight.REGULAR:
        name += f".{glyph.weight.value}"
    return name + GLYPH_SUFFIX
