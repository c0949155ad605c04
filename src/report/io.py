"""JSON input and output for batch runs."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import orjson
from pydantic import TypeAdapter, ValidationError

from contract.models import Diagnostic

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

_DIAGNOSTICS_FILE = TypeAdapter(dict[str, list[Diagnostic]])


class ReportInputError(Exception):
    """Raised when a diagnostics input file cannot be read or validated."""


def _to_dict(obj: object) -> object:
    """Convert object to dict for JSON serialization."""
    from dataclasses import asdict, is_dataclass

    if hasattr(obj, "model_dump"):
        return obj.model_dump(mode="json")
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    if isinstance(obj, dict):
        return {key: _to_dict(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_to_dict(item) for item in obj]
    return obj


def dumps_jsonl(records: Sequence[object]) -> bytes:
    return b"".join(
        orjson.dumps(_to_dict(rec), option=orjson.OPT_SORT_KEYS) + b"\n"
        for rec in records
    )


def dumps_json(obj: object) -> bytes:
    opts = orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2
    return orjson.dumps(_to_dict(obj), option=opts) + b"\n"


def load_diagnostics(path: Path) -> dict[str, list[Diagnostic]]:
    """Load ``{relative path: [diagnostic, ...]}`` from a JSON file."""
    try:
        data: Any = orjson.loads(path.read_bytes())
    except OSError as exc:
        msg = f"Failed to read {path}: {exc}"
        raise ReportInputError(msg) from exc
    except orjson.JSONDecodeError as exc:
        msg = f"Invalid JSON in {path}: {exc}"
        raise ReportInputError(msg) from exc

    try:
        return _DIAGNOSTICS_FILE.validate_python(data)
    except ValidationError as exc:
        msg = f"Invalid diagnostics in {path}: {exc}"
        raise ReportInputError(msg) from exc


__all__ = ["ReportInputError", "dumps_json", "dumps_jsonl", "load_diagnostics"]
