"""Batch runs of the passes over a workspace."""

from report.io import ReportInputError, dumps_json, dumps_jsonl, load_diagnostics
from report.workspace import annotate_workspace, suppress_workspace

__all__ = [
    "ReportInputError",
    "annotate_workspace",
    "dumps_json",
    "dumps_jsonl",
    "load_diagnostics",
    "suppress_workspace",
]
