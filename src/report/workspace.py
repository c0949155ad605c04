"""Whole-workspace runs of the passes, used by the command line."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from host.memory import InMemoryHost
from rules.config import BridgeConfig
from scan.files import find_host_files
from session import BridgeSession

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path

    from contract.models import Diagnostic

logger = logging.getLogger(__name__)


async def annotate_workspace(
    root: Path,
    config: BridgeConfig | None = None,
    *,
    exclude_patterns: list[str] | None = None,
) -> list[dict[str, object]]:
    """Annotate every Python file under root.

    Returns one record per annotation, each carrying the document's path
    relative to root.
    """
    config = config or BridgeConfig()
    host = InMemoryHost(workspace_root=root)
    session = BridgeSession(
        host, config.model_copy(update={"suppress_analyzer_diagnostics": False})
    )

    records: list[dict[str, object]] = []
    async with session:
        if session.annotator is None:
            return records
        for path in find_host_files(root, exclude_patterns=exclude_patterns):
            document = host.open_document(path, language_id=config.host_language_id)
            batch = await session.annotator.annotate(document)
            relative = path.relative_to(root).as_posix()
            logger.debug("%s: %d annotation(s)", relative, len(batch))
            records.extend(
                {"path": relative, **record} for record in batch.to_records()
            )
    return records


async def suppress_workspace(
    root: Path,
    diagnostics: Mapping[str, Sequence[Diagnostic]],
    config: BridgeConfig | None = None,
) -> dict[str, list[dict[str, object]]]:
    """Reconcile the given analyzer diagnostics for each listed document.

    Keys of ``diagnostics`` are paths relative to root. Documents that end
    up without overrides are omitted from the result.
    """
    config = config or BridgeConfig()
    host = InMemoryHost(workspace_root=root)
    session = BridgeSession(
        host,
        config.model_copy(
            update={"enable_semantic_highlighting": False, "settle_delay": 0.0}
        ),
    )

    result: dict[str, list[dict[str, object]]] = {}
    async with session:
        if session.suppressor is None:
            return result

        uris: dict[str, str] = {}
        for relative in sorted(diagnostics):
            path = root / relative
            text = (
                path.read_text(encoding="utf-8", errors="replace")
                if path.is_file()
                else ""
            )
            document = host.open_document(
                path, text, language_id=config.host_language_id
            )
            uris[relative] = document.uri
            host.publish_diagnostics(document.uri, diagnostics[relative])
        await session.suppressor.wait_idle()

        for relative, uri in uris.items():
            overrides = host.overrides.get(uri)
            if overrides:
                result[relative] = [
                    override.model_dump(mode="json") for override in overrides
                ]
    return result
