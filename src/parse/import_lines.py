"""Line-local recognition of Python import statements.

This is deliberately not a parser: each physical line is matched against
a small table of import shapes, and the first shape that matches decides
which module names are reported for that line. Statements continued over
several lines are not recognised.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from contract.models import ModuleReference

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


def _single_name(match: re.Match[str], line: int) -> list[ModuleReference]:
    name = match.group("name")
    column = match.start("name")
    return [ModuleReference(name=name, line=line, column=column, length=len(name))]


def _comma_separated(match: re.Match[str], line: int) -> list[ModuleReference]:
    """Split ``a, b as c, d`` into references positioned left to right.

    Each name is searched for starting at its own segment, which is never
    before the end of the previous name, so repeated names on one line get
    distinct positions.
    """
    text = match.string
    references: list[ModuleReference] = []
    segment_start = match.start("names")
    for segment in match.group("names").split(","):
        words = segment.split()
        next_segment = segment_start + len(segment) + 1
        if not words:
            segment_start = next_segment
            continue

        name = words[0]
        column = text.find(name, segment_start)
        if column != -1:
            references.append(
                ModuleReference(name=name, line=line, column=column, length=len(name))
            )
        segment_start = next_segment
    return references


@dataclass(frozen=True)
class ImportShape:
    name: str
    pattern: re.Pattern[str]
    extract: Callable[[re.Match[str], int], list[ModuleReference]]


# Priority order matters: a line naming one module is always claimed by the
# single-import shape before the comma-separated shape is tried.
IMPORT_SHAPES: tuple[ImportShape, ...] = (
    ImportShape(
        "import",
        re.compile(
            r"^\s*import\s+(?P<name>[\w.]+)(?:\s+as\s+\w+)?\s*;?\s*(?:#.*)?$"
        ),
        _single_name,
    ),
    ImportShape(
        "from_import",
        re.compile(r"^\s*from\s+(?P<name>[\w.]+)\s+import\b"),
        _single_name,
    ),
    ImportShape(
        "multi_import",
        re.compile(r"^\s*import\s+(?P<names>[\w.\s,]+)"),
        _comma_separated,
    ),
)


def match_shape(line_text: str) -> tuple[ImportShape, re.Match[str]] | None:
    """Return the first shape matching the line, with its match."""
    for shape in IMPORT_SHAPES:
        match = shape.pattern.match(line_text)
        if match:
            return shape, match
    return None


def scan_line(line_text: str, line: int = 0) -> list[ModuleReference]:
    """Extract the module references named by an import on one line."""
    found = match_shape(line_text.rstrip("\r"))
    if found is None:
        return []
    shape, match = found
    return shape.extract(match, line)


def scan_text(text: str) -> Iterator[ModuleReference]:
    """Yield references for every line of a document, in order."""
    for line, line_text in enumerate(text.split("\n")):
        yield from scan_line(line_text, line)


__all__ = ["IMPORT_SHAPES", "ImportShape", "match_shape", "scan_line", "scan_text"]
