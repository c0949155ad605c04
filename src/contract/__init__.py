"""Stable record and legend surface shared by the passes and the host.

Treat these exports as the boundary between the resolution core and any
editor integration that consumes its output.
"""

from contract.legend import (
    DEFAULT_LEGEND,
    OVERRIDE_COLLECTION_NAME,
    OVERRIDE_SOURCE,
    RESOLVED_MODIFIER,
    TOKEN_TYPE_MODULE_REFERENCE,
    TokenLegend,
    encode_semantic_tokens,
)

_MODEL_EXPORTS = frozenset(
    {
        "Annotation",
        "AnnotationBatch",
        "Diagnostic",
        "HostDocument",
        "ModuleReference",
        "OverrideDiagnostic",
        "Position",
        "Range",
        "Severity",
    }
)


def __getattr__(name: str) -> object:
    if name in _MODEL_EXPORTS:
        from contract import models

        return getattr(models, name)

    msg = f"module 'contract' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "DEFAULT_LEGEND",
    "OVERRIDE_COLLECTION_NAME",
    "OVERRIDE_SOURCE",
    "RESOLVED_MODIFIER",
    "TOKEN_TYPE_MODULE_REFERENCE",
    "Annotation",
    "AnnotationBatch",
    "Diagnostic",
    "HostDocument",
    "ModuleReference",
    "OverrideDiagnostic",
    "Position",
    "Range",
    "Severity",
    "TokenLegend",
    "encode_semantic_tokens",
]
