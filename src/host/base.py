"""Boundary between the passes and the hosting editor."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from contract.models import Diagnostic, HostDocument
    from host.collection import OverrideCollection


class Notifier(Protocol):
    """User-visible status messages."""

    def show_info(self, message: str) -> None: ...


class Subscription(Protocol):
    def dispose(self) -> None: ...


class EditorHost(Protocol):
    """What the passes need from the editor.

    ``get_diagnostics`` returns the analyzer diagnostics currently published
    for a URI; it never includes this package's own overrides.
    """

    @property
    def overrides(self) -> OverrideCollection: ...

    @property
    def notifier(self) -> Notifier: ...

    def get_document(self, uri: str) -> HostDocument | None: ...

    def get_diagnostics(self, uri: str) -> Sequence[Diagnostic]: ...

    def on_did_change_diagnostics(
        self, listener: Callable[[Sequence[str]], None]
    ) -> Subscription: ...


__all__ = ["EditorHost", "Notifier", "Subscription"]
