"""Recognition of analyzer diagnostics that report a missing import.

Classification happens in two steps. Eligibility looks at the diagnostic
source and a handful of message phrases. Extraction then pulls the module
name out of the message with an ordered pattern table. A diagnostic that
is eligible but whose module name cannot be extracted is never touched.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from rules.config import DEFAULT_ANALYZER_SOURCES

if TYPE_CHECKING:
    from collections.abc import Sequence

    from contract.models import Diagnostic

MISSING_IMPORT_CODE = "reportmissingimports"


@dataclass(frozen=True)
class MessagePattern:
    name: str
    pattern: re.Pattern[str]


MESSAGE_PATTERNS: tuple[MessagePattern, ...] = (
    MessagePattern(
        "import_unresolved",
        re.compile(r'Import\s+"([^"]+)"\s+could\s+not\s+be\s+resolved', re.I),
    ),
    MessagePattern(
        "not_defined",
        re.compile(r'"([^"]+)"\s+is\s+not\s+defined', re.I),
    ),
    MessagePattern(
        "no_module_named",
        re.compile(r"""No\s+module\s+named\s+['"]([^'"]+)['"]""", re.I),
    ),
)


def _message_looks_like_missing_import(message: str) -> bool:
    lowered = message.lower()
    return (
        "could not be resolved" in lowered
        or MISSING_IMPORT_CODE in lowered
        or ("import" in lowered and "could not" in lowered)
        or "is not defined" in lowered
    )


def is_suppressible_candidate(
    diagnostic: Diagnostic,
    analyzer_sources: Sequence[str] = DEFAULT_ANALYZER_SOURCES,
) -> bool:
    """Return True for missing-import style diagnostics from a known analyzer."""
    source = (diagnostic.source or "").lower()
    if not any(analyzer in source for analyzer in analyzer_sources):
        return False
    return _message_looks_like_missing_import(diagnostic.message)


def extract_module_name(message: str) -> str | None:
    """Return the module name named by the first matching pattern."""
    for entry in MESSAGE_PATTERNS:
        match = entry.pattern.search(message)
        if match and match.group(1):
            return match.group(1)
    return None


def classify(
    diagnostic: Diagnostic,
    analyzer_sources: Sequence[str] = DEFAULT_ANALYZER_SOURCES,
) -> str | None:
    """Return the referenced module name, or None to leave the diagnostic be."""
    if not is_suppressible_candidate(diagnostic, analyzer_sources):
        return None
    return extract_module_name(diagnostic.message)


__all__ = [
    "MESSAGE_PATTERNS",
    "MISSING_IMPORT_CODE",
    "MessagePattern",
    "classify",
    "extract_module_name",
    "is_suppressible_candidate",
]
