"""Classification of third-party analyzer diagnostics."""

from diagnostics.classifier import (
    MESSAGE_PATTERNS,
    classify,
    extract_module_name,
    is_suppressible_candidate,
)

__all__ = [
    "MESSAGE_PATTERNS",
    "classify",
    "extract_module_name",
    "is_suppressible_candidate",
]
