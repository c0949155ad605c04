from __future__ import annotations

import shutil
from pathlib import Path

import orjson
import pytest

from cli import main

FIXTURE = Path(__file__).parent / "fixtures" / "mini_workspace"


def _copy_fixture(root: Path) -> Path:
    shutil.copytree(FIXTURE, root)
    return root


def test_cli_resolve_found(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    root = _copy_fixture(tmp_path / "ws")

    exit_code = main(["resolve", str(root), "main.py", "helpers.greet"])

    assert exit_code == 0
    assert capsys.readouterr().out == "helpers.greet: jac\n"


def test_cli_resolve_unresolved(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    root = _copy_fixture(tmp_path / "ws")

    exit_code = main(["resolve", str(root), "main.py", "json"])

    assert exit_code == 1
    assert capsys.readouterr().out == "json: unresolved\n"


def test_cli_resolve_explain_lists_candidates(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    root = _copy_fixture(tmp_path / "ws")

    exit_code = main(["resolve", str(root), "main.py", "util", "--explain"])

    assert exit_code == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 8
    assert lines[0] == f"found: {root.resolve() / 'util.jac'}"
    assert all(line.startswith(("found: ", "not_found: ")) for line in lines)


def test_cli_annotate_writes_jsonl(tmp_path: Path) -> None:
    root = _copy_fixture(tmp_path / "ws")
    out = tmp_path / "annotations.jsonl"

    exit_code = main(["annotate", str(root), "--out", str(out)])

    assert exit_code == 0
    records = [orjson.loads(line) for line in out.read_bytes().splitlines()]
    assert [(r["path"], r["line"], r["column"], r["length"]) for r in records] == [
        ("main.py", 0, 7, 4),
        ("main.py", 1, 7, 7),
        ("main.py", 2, 5, 7),
    ]
    assert {r["token_type"] for r in records} == {"moduleReference"}


def test_cli_annotate_exclude_pattern(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    root = _copy_fixture(tmp_path / "ws")

    exit_code = main(["annotate", str(root), "--exclude", "main.py"])

    assert exit_code == 0
    assert capsys.readouterr().out == ""


def test_cli_suppress_writes_overrides(tmp_path: Path) -> None:
    root = _copy_fixture(tmp_path / "ws")
    out = tmp_path / "overrides.json"

    exit_code = main(
        ["suppress", str(root), str(root / "diagnostics.json"), "--out", str(out)]
    )

    assert exit_code == 0
    overrides = orjson.loads(out.read_bytes())
    assert list(overrides) == ["main.py"]
    [override] = overrides["main.py"]
    assert override["message"] == 'Jac module "util" found'
    assert override["severity"] == "information"
    assert override["source"] == "Jac Extension"
    assert override["range"]["start"] == {"line": 0, "character": 7}


def test_cli_suppress_rejects_invalid_diagnostics(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    root = _copy_fixture(tmp_path / "ws")
    bad = tmp_path / "bad.json"
    bad.write_text('{"main.py": [{"message": 3}]}', encoding="utf-8")

    exit_code = main(["suppress", str(root), str(bad)])

    assert exit_code == 2
    assert "Invalid diagnostics" in capsys.readouterr().err


def test_cli_reports_invalid_config(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    root = _copy_fixture(tmp_path / "ws")
    (root / "jacbridge.toml").write_text("bogus = 1", encoding="utf-8")

    exit_code = main(["annotate", str(root)])

    assert exit_code == 2
    assert "Invalid config" in capsys.readouterr().err


def test_cli_honors_disabled_highlighting(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    root = _copy_fixture(tmp_path / "ws")
    (root / "jacbridge.toml").write_text(
        "enable_semantic_highlighting = false", encoding="utf-8"
    )

    exit_code = main(["annotate", str(root)])

    assert exit_code == 0
    assert capsys.readouterr().out == ""
