"""Composition root wiring the passes to an editor host."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from passes.annotation import ImportAnnotator
from passes.suppression import DiagnosticSuppressor
from resolve.paths import PathResolver
from rules.config import BridgeConfig

if TYPE_CHECKING:
    from types import TracebackType

    from host.base import EditorHost

logger = logging.getLogger(__name__)


class BridgeSession:
    """Owns one resolver and the passes enabled by configuration."""

    def __init__(self, host: EditorHost, config: BridgeConfig | None = None) -> None:
        self.host = host
        self.config = config or BridgeConfig()
        self.resolver = PathResolver(
            source_dirs=self.config.source_dirs,
            extension=self.config.extension,
        )
        self.annotator: ImportAnnotator | None = None
        self.suppressor: DiagnosticSuppressor | None = None

    def start(self) -> None:
        if self.config.enable_semantic_highlighting and self.annotator is None:
            self.annotator = ImportAnnotator(
                self.resolver, self.host.notifier, self.config
            )
        if self.config.suppress_analyzer_diagnostics and self.suppressor is None:
            self.suppressor = DiagnosticSuppressor(
                self.host, self.resolver, self.config
            )
            self.suppressor.start()
        logger.debug(
            "session started (annotations=%s, suppression=%s)",
            self.annotator is not None,
            self.suppressor is not None,
        )

    def stop(self) -> None:
        if self.suppressor is not None:
            self.suppressor.stop()
            self.suppressor = None
        self.annotator = None

    async def __aenter__(self) -> BridgeSession:
        self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()


__all__ = ["BridgeSession"]
