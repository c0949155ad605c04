from __future__ import annotations

import sys


def test_passes_import_does_not_load_batch_stack() -> None:
    before_modules = set(sys.modules)
    import passes  # noqa: F401

    newly_imported = set(sys.modules) - before_modules
    assert not any(
        name in {"report", "scan", "gitignore_parser", "cli"}
        or name.startswith(("report.", "scan."))
        for name in newly_imported
    )
