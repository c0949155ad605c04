from __future__ import annotations

import pytest

from contract.models import Diagnostic, Range
from diagnostics.classifier import (
    classify,
    extract_module_name,
    is_suppressible_candidate,
)


def _diagnostic(message: str, source: str | None = "Pylance") -> Diagnostic:
    return Diagnostic(range=Range.on_line(0, 7, 11), message=message, source=source)


def test_import_could_not_be_resolved() -> None:
    diagnostic = _diagnostic('Import "mypkg" could not be resolved')

    assert classify(diagnostic) == "mypkg"


def test_is_not_defined() -> None:
    assert classify(_diagnostic('"foo" is not defined')) == "foo"


def test_no_module_named_with_either_quote_style() -> None:
    assert extract_module_name("No module named 'bar'") == "bar"
    assert extract_module_name('No module named "bar.baz"') == "bar.baz"


def test_extraction_order_prefers_import_pattern() -> None:
    message = 'Import "first" could not be resolved; "second" is not defined'

    assert extract_module_name(message) == "first"


def test_eligible_without_recognizable_name_passes_through() -> None:
    diagnostic = _diagnostic("Import could not be resolved from source")

    assert is_suppressible_candidate(diagnostic) is True
    assert classify(diagnostic) is None


@pytest.mark.parametrize(
    "message",
    [
        'Import "x" could not be resolved',
        "reportMissingImports: something",
        "import failed: could not locate",
        '"x" is not defined',
    ],
)
def test_message_eligibility(message: str) -> None:
    assert is_suppressible_candidate(_diagnostic(message)) is True


@pytest.mark.parametrize("source", ["Pylance", "pyright", "PYRIGHT (basic)"])
def test_known_sources_are_case_insensitive(source: str) -> None:
    assert classify(_diagnostic('Import "m" could not be resolved', source)) == "m"


@pytest.mark.parametrize("source", [None, "", "mypy", "Jac Extension"])
def test_unknown_sources_are_ignored(source: str | None) -> None:
    assert classify(_diagnostic('Import "m" could not be resolved', source)) is None


def test_unrelated_message_is_ignored() -> None:
    diagnostic = _diagnostic('"x" is possibly unbound')

    assert is_suppressible_candidate(diagnostic) is False
    assert classify(diagnostic) is None


def test_custom_analyzer_sources() -> None:
    diagnostic = _diagnostic('Import "m" could not be resolved', "basedpyright")

    assert classify(diagnostic, analyzer_sources=["mypy"]) is None
    assert classify(diagnostic, analyzer_sources=["basedpyright"]) == "m"
