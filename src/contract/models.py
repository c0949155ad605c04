"""Records exchanged with the host editor.

Positions and ranges are zero-based, exactly as the editor reports them.
Diagnostics and annotations are pydantic models so the CLI can read and
write them as JSON without a second schema.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path  # noqa: TC003
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from contract.legend import (
    OVERRIDE_SOURCE,
    RESOLVED_MODIFIER,
    TOKEN_TYPE_MODULE_REFERENCE,
)

if TYPE_CHECKING:
    from collections.abc import Iterator


class Severity(str, Enum):
    """Diagnostic severities understood by the host editor."""

    ERROR = "error"
    WARNING = "warning"
    INFORMATION = "information"
    HINT = "hint"


class Position(BaseModel):
    model_config = ConfigDict(frozen=True)

    line: int = Field(ge=0)
    character: int = Field(ge=0)


class Range(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: Position
    end: Position

    @classmethod
    def on_line(cls, line: int, start: int, end: int) -> Range:
        return cls(
            start=Position(line=line, character=start),
            end=Position(line=line, character=end),
        )


class Diagnostic(BaseModel):
    """A diagnostic as published by an analyzer for one document."""

    model_config = ConfigDict(frozen=True)

    range: Range
    message: str
    source: str | None = None
    severity: Severity = Severity.ERROR
    code: str | None = None


class OverrideDiagnostic(Diagnostic):
    """Informational diagnostic published in place of a false import error."""

    severity: Severity = Severity.INFORMATION
    source: str | None = OVERRIDE_SOURCE
    module: str = Field(description="Module name that resolved to a Jac file")

    @classmethod
    def for_module(cls, original: Diagnostic, module: str) -> OverrideDiagnostic:
        return cls(
            range=original.range,
            message=f'Jac module "{module}" found',
            module=module,
        )


class Annotation(BaseModel):
    """A positioned marker over an import reference that resolved to Jac."""

    model_config = ConfigDict(frozen=True)

    line: int = Field(ge=0)
    column: int = Field(ge=0)
    length: int = Field(gt=0)
    token_type: str = TOKEN_TYPE_MODULE_REFERENCE
    modifier: str = RESOLVED_MODIFIER


class AnnotationBatch:
    """Immutable, ordered result of one full document scan."""

    __slots__ = ("_annotations", "_cancelled")

    def __init__(
        self, annotations: tuple[Annotation, ...] = (), *, cancelled: bool = False
    ) -> None:
        self._annotations = tuple(annotations)
        self._cancelled = cancelled

    @property
    def cancelled(self) -> bool:
        """True when the scan stopped early on a cancellation request."""
        return self._cancelled

    def __iter__(self) -> Iterator[Annotation]:
        return iter(self._annotations)

    def __len__(self) -> int:
        return len(self._annotations)

    def __getitem__(self, index: int) -> Annotation:
        return self._annotations[index]

    def __bool__(self) -> bool:
        return bool(self._annotations)

    def __repr__(self) -> str:
        return f"AnnotationBatch({len(self._annotations)}, cancelled={self.cancelled})"

    def to_records(self) -> list[dict[str, object]]:
        return [annotation.model_dump() for annotation in self._annotations]


class HostDocument(BaseModel):
    """An open editor buffer together with its owning workspace root."""

    model_config = ConfigDict(frozen=True)

    uri: str
    path: Path
    language_id: str
    text: str = ""
    workspace_root: Path | None = None

    def lines(self) -> list[str]:
        return self.text.split("\n")


@dataclass(frozen=True)
class ModuleReference:
    """A module name found on one line of host-language text."""

    name: str
    line: int
    column: int
    length: int

    @property
    def head(self) -> str:
        """First dotted segment; the only part that is ever resolved."""
        return self.name.split(".", 1)[0]

    @property
    def end(self) -> int:
        return self.column + self.length


__all__ = [
    "Annotation",
    "AnnotationBatch",
    "Diagnostic",
    "HostDocument",
    "ModuleReference",
    "OverrideDiagnostic",
    "Position",
    "Range",
    "Severity",
]
