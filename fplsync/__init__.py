"""Top-level fplsync package.

Re-exports the pipeline subpackages (fetch, compute, report, publish, cli).
"""

from importlib import import_module as _imp

__version__ = "1.0.0"

_SUBPACKAGES = ["api", "compute", "report", "publish", "cli"]

for _name in _SUBPACKAGES:
    _imp(f"fplsync.{_name}")

__all__ = list(_SUBPACKAGES)
