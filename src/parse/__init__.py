"""Import statement recognition for host-language text."""

from parse.import_lines import (
    IMPORT_SHAPES,
    ImportShape,
    match_shape,
    scan_line,
    scan_text,
)

__all__ = [
    "IMPORT_SHAPES",
    "ImportShape",
    "match_shape",
    "scan_line",
    "scan_text",
]
