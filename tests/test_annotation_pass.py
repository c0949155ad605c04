from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from contract.legend import RESOLVED_MODIFIER, TOKEN_TYPE_MODULE_REFERENCE
from host.memory import InMemoryHost
from passes.annotation import CancellationToken, ImportAnnotator
from resolve.paths import PathResolver
from rules.config import BridgeConfig

if TYPE_CHECKING:
    from pathlib import Path

    from contract.models import AnnotationBatch, HostDocument

DOCUMENT = """import util
import os
from util.sub import thing
import a, util, util
    import walker as w
"""


class CancelAfterLines(CancellationToken):
    """Requests cancellation once ``lines`` lines have been scanned."""

    def __init__(self, lines: int) -> None:
        super().__init__()
        self.lines = lines
        self.checks = 0

    @property
    def is_cancellation_requested(self) -> bool:
        self.checks += 1
        return self.checks > self.lines


def _open(workspace: Path, text: str = DOCUMENT, **kwargs: str) -> HostDocument:
    (workspace / "util.jac").write_text("", encoding="utf-8")
    (workspace / "src").mkdir(exist_ok=True)
    (workspace / "src" / "walker.jac").write_text("", encoding="utf-8")
    (workspace / "main.py").write_text(text, encoding="utf-8")
    host = InMemoryHost(workspace_root=workspace)
    return host.open_document(workspace / "main.py", **kwargs)


def _annotate(
    document: HostDocument,
    cancellation: CancellationToken | None = None,
    annotator: ImportAnnotator | None = None,
) -> AnnotationBatch:
    annotator = annotator or ImportAnnotator(PathResolver())
    return asyncio.run(annotator.annotate(document, cancellation))


def test_annotates_every_resolved_reference(workspace: Path) -> None:
    batch = _annotate(_open(workspace))

    assert [(a.line, a.column, a.length) for a in batch] == [
        (0, 7, 4),
        (2, 5, 8),
        (3, 10, 4),
        (3, 16, 4),
        (4, 11, 6),
    ]
    assert all(a.token_type == TOKEN_TYPE_MODULE_REFERENCE for a in batch)
    assert all(a.modifier == RESOLVED_MODIFIER for a in batch)
    assert batch.cancelled is False


def test_single_import_scenario(workspace: Path) -> None:
    batch = _annotate(_open(workspace, "import util"))

    assert len(batch) == 1
    assert (batch[0].line, batch[0].column, batch[0].length) == (0, 7, 4)


def test_non_host_language_document_is_rejected(workspace: Path) -> None:
    document = _open(workspace, language_id="jac")

    assert len(_annotate(document)) == 0


def test_document_without_workspace_yields_nothing(tmp_path: Path) -> None:
    (tmp_path / "util.jac").write_text("", encoding="utf-8")
    (tmp_path / "main.py").write_text("import util\n", encoding="utf-8")
    document = InMemoryHost().open_document(tmp_path / "main.py")

    assert len(_annotate(document)) == 0


def test_cancellation_returns_partial_results(workspace: Path) -> None:
    document = _open(workspace)

    batch = _annotate(document, CancelAfterLines(3))

    assert batch.cancelled is True
    assert [a.line for a in batch] == [0, 2]


def test_cancellation_before_first_line(workspace: Path) -> None:
    token = CancellationToken()
    token.cancel()

    batch = _annotate(_open(workspace), token)

    assert len(batch) == 0
    assert batch.cancelled is True


def test_scan_is_rebuilt_on_every_call(workspace: Path) -> None:
    document = _open(workspace, "import util\n")
    annotator = ImportAnnotator(PathResolver())

    first = _annotate(document, annotator=annotator)
    (workspace / "util.jac").unlink()
    second = _annotate(document, annotator=annotator)

    assert len(first) == 1
    assert len(second) == 0


def test_developer_mode_reports_status(workspace: Path) -> None:
    host = InMemoryHost(workspace_root=workspace)
    (workspace / "util.jac").write_text("", encoding="utf-8")
    (workspace / "main.py").write_text("import util\n", encoding="utf-8")
    document = host.open_document(workspace / "main.py")
    annotator = ImportAnnotator(
        PathResolver(), host.notifier, BridgeConfig(developer_mode=True)
    )

    _annotate(document, annotator=annotator)

    assert host.notifier.messages == [
        "Jac: Processing semantic tokens for Python file",
        "Jac: Generated 1 semantic tokens",
    ]


def test_status_messages_are_silent_by_default(workspace: Path) -> None:
    host = InMemoryHost(workspace_root=workspace)
    (workspace / "main.py").write_text("import util\n", encoding="utf-8")
    document = host.open_document(workspace / "main.py")

    _annotate(document, annotator=ImportAnnotator(PathResolver(), host.notifier))

    assert host.notifier.messages == []


def test_unexpected_failure_yields_empty_batch(workspace: Path) -> None:
    document = _open(workspace)

    class BrokenResolver(PathResolver):
        async def resolve(self, *args: object, **kwargs: object) -> bool:
            raise RuntimeError("boom")

    assert len(_annotate(document, annotator=ImportAnnotator(BrokenResolver()))) == 0


def test_missing_document_yields_empty_batch() -> None:
    batch = asyncio.run(ImportAnnotator(PathResolver()).annotate(None))

    assert len(batch) == 0
    assert batch.cancelled is False


def test_semantic_tokens_are_delta_encoded(workspace: Path) -> None:
    document = _open(workspace, "import util\nimport a, util\n")
    annotator = ImportAnnotator(PathResolver())

    data = asyncio.run(annotator.semantic_tokens(document))

    assert data == [0, 7, 4, 0, 1, 1, 10, 4, 0, 1]
