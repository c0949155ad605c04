"""Annotation of import references that resolve to Jac modules."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from contract.legend import DEFAULT_LEGEND, TokenLegend, encode_semantic_tokens
from contract.models import Annotation, AnnotationBatch
from parse.import_lines import scan_line
from rules.config import BridgeConfig

if TYPE_CHECKING:
    from contract.models import HostDocument
    from host.base import Notifier
    from resolve.paths import PathResolver

logger = logging.getLogger(__name__)


class CancellationToken:
    """Cooperative cancellation flag checked between lines."""

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def is_cancellation_requested(self) -> bool:
        return self._cancelled


class ImportAnnotator:
    """Scans a Python document and marks imports of Jac modules.

    Every scan starts from scratch and returns an immutable batch. When
    cancellation is requested the scan stops at the next line boundary and
    returns what it has collected so far.
    """

    def __init__(
        self,
        resolver: PathResolver,
        notifier: Notifier | None = None,
        config: BridgeConfig | None = None,
        legend: TokenLegend = DEFAULT_LEGEND,
    ) -> None:
        self.resolver = resolver
        self.notifier = notifier
        self.config = config or BridgeConfig()
        self.legend = legend

    async def annotate(
        self,
        document: HostDocument | None,
        cancellation: CancellationToken | None = None,
    ) -> AnnotationBatch:
        if document is None or document.language_id != self.config.host_language_id:
            return AnnotationBatch()

        try:
            return await self._scan(document, cancellation)
        except Exception:
            logger.exception("Failed to annotate %s", document.uri)
            return AnnotationBatch()

    async def semantic_tokens(
        self,
        document: HostDocument,
        cancellation: CancellationToken | None = None,
    ) -> list[int]:
        """Annotate and encode the result against this annotator's legend."""
        batch = await self.annotate(document, cancellation)
        return encode_semantic_tokens(batch, self.legend)

    async def _scan(
        self, document: HostDocument, cancellation: CancellationToken | None
    ) -> AnnotationBatch:
        self._status("Jac: Processing semantic tokens for Python file")

        annotations: list[Annotation] = []
        cancelled = False
        for line, line_text in enumerate(document.lines()):
            if cancellation is not None and cancellation.is_cancellation_requested:
                cancelled = True
                logger.debug("Annotation of %s cancelled at line %d", document.uri, line)
                break
            for reference in scan_line(line_text, line):
                if await self.resolver.resolve(
                    document.path, document.workspace_root, reference.name
                ):
                    annotations.append(
                        Annotation(
                            line=reference.line,
                            column=reference.column,
                            length=reference.length,
                        )
                    )

        if annotations:
            self._status(f"Jac: Generated {len(annotations)} semantic tokens")
        return AnnotationBatch(tuple(annotations), cancelled=cancelled)

    def _status(self, message: str) -> None:
        if self.config.developer_mode and self.notifier is not None:
            self.notifier.show_info(message)


__all__ = ["CancellationToken", "ImportAnnotator"]
