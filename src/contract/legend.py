"""Token legend and identity constants shared with the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from contract.models import Annotation

TOKEN_TYPE_MODULE_REFERENCE = "moduleReference"
RESOLVED_MODIFIER = "resolved"

OVERRIDE_SOURCE = "Jac Extension"
OVERRIDE_COLLECTION_NAME = "jacPythonSuppress"


@dataclass(frozen=True)
class TokenLegend:
    """Token types and modifiers declared to the renderer, in index order."""

    token_types: tuple[str, ...] = field(default=(TOKEN_TYPE_MODULE_REFERENCE,))
    token_modifiers: tuple[str, ...] = field(default=(RESOLVED_MODIFIER,))

    def type_index(self, token_type: str) -> int:
        return self.token_types.index(token_type)

    def modifier_bits(self, *modifiers: str) -> int:
        bits = 0
        for modifier in modifiers:
            bits |= 1 << self.token_modifiers.index(modifier)
        return bits


DEFAULT_LEGEND = TokenLegend()


def encode_semantic_tokens(
    annotations: Iterable[Annotation], legend: TokenLegend = DEFAULT_LEGEND
) -> list[int]:
    """Encode annotations into the relative integer stream used by LSP.

    Each annotation contributes five integers: line delta, start delta
    (relative to the previous token only when on the same line), length,
    token type index and modifier bitset. Annotations must already be in
    document order.
    """
    data: list[int] = []
    prev_line = 0
    prev_start = 0
    for annotation in annotations:
        delta_line = annotation.line - prev_line
        delta_start = (
            annotation.column - prev_start if delta_line == 0 else annotation.column
        )
        data.extend(
            (
                delta_line,
                delta_start,
                annotation.length,
                legend.type_index(annotation.token_type),
                legend.modifier_bits(annotation.modifier),
            )
        )
        prev_line = annotation.line
        prev_start = annotation.column
    return data


__all__ = [
    "DEFAULT_LEGEND",
    "OVERRIDE_COLLECTION_NAME",
    "OVERRIDE_SOURCE",
    "RESOLVED_MODIFIER",
    "TOKEN_TYPE_MODULE_REFERENCE",
    "TokenLegend",
    "encode_semantic_tokens",
]
