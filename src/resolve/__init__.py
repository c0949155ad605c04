"""Resolution of module names to Jac files."""

from resolve.paths import (
    PathResolver,
    ProbeResult,
    build_search_path,
    module_head,
    probe_path,
)

__all__ = [
    "PathResolver",
    "ProbeResult",
    "build_search_path",
    "module_head",
    "probe_path",
]
