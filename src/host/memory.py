"""Dictionary-backed editor host for the CLI and tests."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from contract.models import Diagnostic, HostDocument
from host.collection import OverrideCollection
from utils import path_to_uri

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence
    from pathlib import Path

logger = logging.getLogger(__name__)


class LoggingNotifier:
    """Sends status messages to the log and keeps them for inspection."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def show_info(self, message: str) -> None:
        self.messages.append(message)
        logger.info(message)


class _ListenerSubscription:
    def __init__(self, host: InMemoryHost, listener: Callable) -> None:
        self._host = host
        self._listener = listener

    def dispose(self) -> None:
        self._host._remove_listener(self._listener)


class InMemoryHost:
    """Holds open documents and analyzer diagnostics in plain dicts."""

    def __init__(self, workspace_root: Path | None = None) -> None:
        self.workspace_root = workspace_root
        self._documents: dict[str, HostDocument] = {}
        self._diagnostics: dict[str, tuple[Diagnostic, ...]] = {}
        self._listeners: list[Callable[[Sequence[str]], None]] = []
        self._overrides = OverrideCollection()
        self._notifier = LoggingNotifier()

    @property
    def overrides(self) -> OverrideCollection:
        return self._overrides

    @property
    def notifier(self) -> LoggingNotifier:
        return self._notifier

    def open_document(
        self,
        path: Path,
        text: str | None = None,
        *,
        language_id: str = "python",
    ) -> HostDocument:
        """Register a document; the text is read from disk when omitted."""
        if text is None:
            text = path.read_text(encoding="utf-8", errors="replace")
        document = HostDocument(
            uri=path_to_uri(path),
            path=path,
            language_id=language_id,
            text=text,
            workspace_root=self._workspace_for(path),
        )
        self._documents[document.uri] = document
        return document

    def close_document(self, uri: str) -> None:
        self._documents.pop(uri, None)

    def get_document(self, uri: str) -> HostDocument | None:
        return self._documents.get(uri)

    def documents(self) -> list[HostDocument]:
        return [self._documents[uri] for uri in sorted(self._documents)]

    def get_diagnostics(self, uri: str) -> tuple[Diagnostic, ...]:
        return self._diagnostics.get(uri, ())

    def publish_diagnostics(self, uri: str, diagnostics: Iterable[Diagnostic]) -> None:
        """Replace the analyzer diagnostics for a URI and notify listeners."""
        self._diagnostics[uri] = tuple(diagnostics)
        self._fire([uri])

    def on_did_change_diagnostics(
        self, listener: Callable[[Sequence[str]], None]
    ) -> _ListenerSubscription:
        self._listeners.append(listener)
        return _ListenerSubscription(self, listener)

    def _remove_listener(self, listener: Callable) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _fire(self, uris: Sequence[str]) -> None:
        for listener in list(self._listeners):
            listener(list(uris))

    def _workspace_for(self, path: Path) -> Path | None:
        if self.workspace_root is None:
            return None
        try:
            path.resolve().relative_to(self.workspace_root.resolve())
        except (OSError, ValueError):
            return None
        return self.workspace_root


__all__ = ["InMemoryHost", "LoggingNotifier"]
