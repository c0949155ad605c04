"""Replacement of false missing-import errors with informational notes.

Analyzers that do not know about Jac report ``import util`` as unresolved
when ``util.jac`` sits next to the document. Whenever diagnostics change
for an open Python document, the suppressor waits a short settle delay
(the analyzer may still be publishing), re-reads the current diagnostics
and publishes one override per missing-import error whose module resolves
to a Jac file. Each run replaces the document's whole override batch and
a run that a newer run overtook while suspended publishes nothing, so the
latest state of the analyzer always wins.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from contract.models import OverrideDiagnostic
from diagnostics.classifier import classify
from rules.config import BridgeConfig

if TYPE_CHECKING:
    from collections.abc import Sequence

    from contract.models import Diagnostic, HostDocument
    from host.base import EditorHost, Subscription
    from resolve.paths import PathResolver

logger = logging.getLogger(__name__)


class DiagnosticSuppressor:
    """Keeps the host's override collection in step with analyzer output."""

    def __init__(
        self,
        host: EditorHost,
        resolver: PathResolver,
        config: BridgeConfig | None = None,
    ) -> None:
        self.host = host
        self.resolver = resolver
        self.config = config or BridgeConfig()
        self.settle_delay = self.config.settle_delay
        self._subscription: Subscription | None = None
        self._pending: dict[str, asyncio.Task[None]] = {}
        self._generations: dict[str, int] = {}
        self._published: set[str] = set()
        self._stopped = False

    @property
    def running(self) -> bool:
        return self._subscription is not None

    def start(self) -> None:
        if self._subscription is not None:
            return
        self._stopped = False
        self._subscription = self.host.on_did_change_diagnostics(
            self.on_diagnostics_changed
        )

    def stop(self) -> None:
        """Unsubscribe, cancel pending runs and withdraw every override."""
        self._stopped = True
        if self._subscription is not None:
            self._subscription.dispose()
            self._subscription = None
        for task in list(self._pending.values()):
            task.cancel()
        self._pending.clear()
        for uri in self._published:
            self.host.overrides.delete(uri)
        self._published.clear()

    def on_diagnostics_changed(self, uris: Sequence[str]) -> None:
        """Schedule a settled reconcile for each changed host-language document.

        A change for a URI that already has a pending run restarts its settle
        timer. Outside a running event loop the change is logged and skipped.
        """
        for uri in uris:
            document = self.host.get_document(uri)
            if document is None or not self._is_host_language(document):
                continue
            self._schedule(uri)

    async def wait_idle(self) -> None:
        """Wait for every scheduled reconcile to finish."""
        while self._pending:
            await asyncio.gather(
                *list(self._pending.values()), return_exceptions=True
            )

    async def reconcile(self, uri: str) -> tuple[OverrideDiagnostic, ...]:
        """Recompute and publish the override batch for one document.

        A run that a newer run for the same URI overtook while suspended
        publishes nothing. If the analyzer's diagnostics changed during the
        run, the overrides are recomputed before publishing. Unexpected
        failures are logged and leave the collection untouched.
        """
        generation = self._generations.get(uri, 0) + 1
        self._generations[uri] = generation
        try:
            while True:
                snapshot, overrides = await self._compute_overrides(uri)
                if self._generations.get(uri) != generation:
                    logger.debug("Dropping superseded run for %s", uri)
                    return overrides
                if tuple(self.host.get_diagnostics(uri)) == snapshot:
                    break
        except Exception:
            logger.exception("Failed to reconcile diagnostics for %s", uri)
            return ()

        if self._stopped:
            return overrides

        if overrides:
            self.host.overrides.set(uri, overrides)
            self._published.add(uri)
        else:
            self.host.overrides.delete(uri)
            self._published.discard(uri)
        logger.debug("%d override(s) for %s", len(overrides), uri)
        return overrides

    def _schedule(self, uri: str) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop; skipping reconcile for %s", uri)
            return

        previous = self._pending.get(uri)
        if previous is not None:
            previous.cancel()
        task = loop.create_task(self._settle_then_reconcile(uri))
        self._pending[uri] = task
        task.add_done_callback(lambda done: self._forget(uri, done))

    def _forget(self, uri: str, task: asyncio.Task[None]) -> None:
        if self._pending.get(uri) is task:
            del self._pending[uri]

    async def _settle_then_reconcile(self, uri: str) -> None:
        await asyncio.sleep(self.settle_delay)
        await self.reconcile(uri)

    async def _compute_overrides(
        self, uri: str
    ) -> tuple[tuple[Diagnostic, ...], tuple[OverrideDiagnostic, ...]]:
        """Classify a snapshot of the current diagnostics.

        Returns the snapshot together with the overrides derived from it.
        """
        snapshot = tuple(self.host.get_diagnostics(uri))
        document = self.host.get_document(uri)
        if document is None or not self._is_host_language(document):
            return snapshot, ()

        overrides: list[OverrideDiagnostic] = []
        for diagnostic in snapshot:
            module = classify(diagnostic, self.config.analyzer_sources)
            if module is None:
                continue
            if await self._resolves(document, module):
                overrides.append(OverrideDiagnostic.for_module(diagnostic, module))
        return snapshot, tuple(overrides)

    async def _resolves(self, document: HostDocument, module: str) -> bool:
        try:
            return await self.resolver.resolve(
                document.path, document.workspace_root, module
            )
        except Exception as exc:
            logger.warning("Could not resolve %r for %s: %s", module, document.uri, exc)
            return False

    def _is_host_language(self, document: HostDocument) -> bool:
        return document.language_id == self.config.host_language_id


__all__ = ["DiagnosticSuppressor"]
