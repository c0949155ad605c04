"""Discovery of host-language files in a workspace."""

from __future__ import annotations

from fnmatch import fnmatch
from typing import TYPE_CHECKING, cast

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path


def _is_within_root(path: Path, root: Path) -> bool:
    """Return True when the resolved path stays within the resolved root."""
    try:
        path.resolve().relative_to(root.resolve())
    except (OSError, ValueError):
        return False
    return True


def _build_gitignore_matcher(root: Path) -> Callable[[str], bool] | None:
    gitignore_path = root / ".gitignore"
    if gitignore_path.is_file():
        return cast("Callable[[str], bool]", parse_gitignore(gitignore_path))
    return None


def _is_candidate(
    path: Path,
    root: Path,
    gitignore_matches: Callable[[str], bool] | None,
    exclude_patterns: list[str] | None,
) -> bool:
    if not path.is_file() or path.is_symlink():
        return False

    if not _is_within_root(path, root):
        return False

    rel_path = path.relative_to(root)
    if any(part.startswith(".") for part in rel_path.parts[:-1]):
        return False

    if gitignore_matches is not None and gitignore_matches(str(path)):
        return False

    rel_path_str = rel_path.as_posix()
    return not (
        exclude_patterns and any(fnmatch(rel_path_str, pat) for pat in exclude_patterns)
    )


def find_host_files(
    directory: Path,
    *,
    suffix: str = ".py",
    exclude_patterns: list[str] | None = None,
) -> Iterator[Path]:
    """Yield host-language files under a workspace root.

    Files ignored by the root ``.gitignore``, files inside hidden
    directories, symlinks and anything matching an exclude pattern are
    skipped. Results are sorted by relative path.
    """
    gitignore_matches = _build_gitignore_matcher(directory)

    matched_files = [
        path
        for path in directory.rglob(f"*{suffix}")
        if _is_candidate(path, directory, gitignore_matches, exclude_patterns)
    ]
    matched_files.sort(key=lambda p: p.relative_to(directory).as_posix())

    yield from matched_files


__all__ = ["find_host_files"]
