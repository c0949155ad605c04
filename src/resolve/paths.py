"""Resolution of module names to Jac files on disk.

A module name resolves when any file on a short, fixed search path
exists as a regular file. Only the first dotted segment of the name is
considered. Nothing is cached: every call re-probes the file system, so
results always reflect the current workspace.
"""

from __future__ import annotations

import asyncio
import logging
import os
import stat
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from rules.config import DEFAULT_SOURCE_DIRS

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

NAMING_CONVENTIONS = ("{name}.{ext}", "{name}/index.{ext}", "{name}/__init__.{ext}")


class ProbeResult(Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    PROBE_ERROR = "probe_error"


def module_head(module_name: str) -> str:
    """Return the first dotted segment of a module name.

    Examples:
        >>> module_head("pkg.sub.mod")
        'pkg'
        >>> module_head(".relative")
        ''
    """
    return module_name.strip().split(".", 1)[0]


def probe_path(path: Path) -> ProbeResult:
    """Stat a single candidate and classify the outcome.

    Directories and other non-regular files count as NOT_FOUND. Errors other
    than a missing path component (for example permission denied) are
    reported as PROBE_ERROR rather than raised.
    """
    try:
        mode = os.stat(path).st_mode
    except (FileNotFoundError, NotADirectoryError):
        return ProbeResult.NOT_FOUND
    except (OSError, ValueError) as exc:
        logger.debug("probe failed for %s: %s", path, exc)
        return ProbeResult.PROBE_ERROR
    return ProbeResult.FOUND if stat.S_ISREG(mode) else ProbeResult.NOT_FOUND


def build_search_path(
    document_path: Path,
    workspace_root: Path,
    module_name: str,
    *,
    source_dirs: Sequence[str] = DEFAULT_SOURCE_DIRS,
    extension: str = "jac",
) -> list[Path]:
    """Return the ordered candidate files for a module name.

    The document's directory and the workspace root are each tried with
    every naming convention, then each source directory with the plain
    ``<name>.<ext>`` form. With the default source directories this yields
    eight candidates.
    """
    head = module_head(module_name)
    if not head:
        return []

    document_dir = Path(document_path).parent
    candidates: list[Path] = []
    for base in (document_dir, Path(workspace_root)):
        for convention in NAMING_CONVENTIONS:
            relative = convention.format(name=head, ext=extension)
            candidates.append(Path(os.path.normpath(base / relative)))

    for source_dir in source_dirs:
        relative = NAMING_CONVENTIONS[0].format(name=head, ext=extension)
        candidates.append(
            Path(os.path.normpath(Path(workspace_root) / source_dir / relative))
        )

    return candidates


class PathResolver:
    """Decides whether a module name refers to a Jac file in the workspace."""

    def __init__(
        self,
        *,
        source_dirs: Sequence[str] = DEFAULT_SOURCE_DIRS,
        extension: str = "jac",
    ) -> None:
        self.source_dirs = tuple(source_dirs)
        self.extension = extension

    def search_path(
        self, document_path: Path, workspace_root: Path, module_name: str
    ) -> list[Path]:
        return build_search_path(
            document_path,
            workspace_root,
            module_name,
            source_dirs=self.source_dirs,
            extension=self.extension,
        )

    async def resolve(
        self,
        document_path: Path,
        workspace_root: Path | None,
        module_name: str,
    ) -> bool:
        """Return True when the first candidate that exists is found.

        A document outside any workspace never resolves.
        """
        if workspace_root is None:
            return False

        for candidate in self.search_path(document_path, workspace_root, module_name):
            result = await asyncio.to_thread(probe_path, candidate)
            if result is ProbeResult.FOUND:
                logger.debug("%s resolved to %s", module_name, candidate)
                return True
        return False

    def explain(
        self,
        document_path: Path,
        workspace_root: Path | None,
        module_name: str,
    ) -> list[tuple[Path, ProbeResult]]:
        """Probe every candidate without short-circuiting."""
        if workspace_root is None:
            return []
        return [
            (candidate, probe_path(candidate))
            for candidate in self.search_path(
                document_path, workspace_root, module_name
            )
        ]


__all__ = [
    "NAMING_CONVENTIONS",
    "PathResolver",
    "ProbeResult",
    "build_search_path",
    "module_head",
    "probe_path",
]
