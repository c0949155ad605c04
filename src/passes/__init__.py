"""Suppression and annotation passes over host documents."""

from passes.annotation import CancellationToken, ImportAnnotator
from passes.suppression import DiagnosticSuppressor

__all__ = ["CancellationToken", "DiagnosticSuppressor", "ImportAnnotator"]
