"""Per-URI override diagnostics with full-replace semantics."""

from __future__ import annotations

from typing import TYPE_CHECKING

from contract.legend import OVERRIDE_COLLECTION_NAME

if TYPE_CHECKING:
    from collections.abc import Iterable

    from contract.models import OverrideDiagnostic


class OverrideCollection:
    """Override batches keyed by document URI.

    ``set`` always replaces the whole batch for a URI. An empty batch is
    never stored: setting one removes the URI instead.
    """

    def __init__(self, name: str = OVERRIDE_COLLECTION_NAME) -> None:
        self.name = name
        self._batches: dict[str, tuple[OverrideDiagnostic, ...]] = {}

    def set(self, uri: str, diagnostics: Iterable[OverrideDiagnostic]) -> None:
        batch = tuple(diagnostics)
        if not batch:
            self.delete(uri)
            return
        self._batches[uri] = batch

    def get(self, uri: str) -> tuple[OverrideDiagnostic, ...]:
        return self._batches.get(uri, ())

    def delete(self, uri: str) -> None:
        self._batches.pop(uri, None)

    def has(self, uri: str) -> bool:
        return uri in self._batches

    def uris(self) -> list[str]:
        return sorted(self._batches)

    def clear(self) -> None:
        self._batches.clear()

    def __len__(self) -> int:
        return len(self._batches)


__all__ = ["OverrideCollection"]
