"""Validate snapshot JSON files against the layout the UI reads."""

from __future__ import annotations

import argparse
import os
import sys

# Ensure project root is on sys.path when executed directly
_THIS_DIR = os.path.dirname(__file__)
_PROJ_ROOT = os.path.dirname(_THIS_DIR)
if _PROJ_ROOT not in sys.path:
    sys.path.insert(0, _PROJ_ROOT)

from fplsync.report.validate import validate_file  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Validate published snapshot files for structure"
    )
    parser.add_argument("paths", nargs="+", help="Snapshot JSON file(s)")
    args = parser.parse_args(argv)

    failures = 0
    for path in args.paths:
        if not os.path.exists(path):
            failures += 1
            print(f"FAIL {path}: no such file")
            continue
        errs = validate_file(path)
        if errs:
            failures += 1
            print(f"FAIL {path}")
            for e in errs:
                print(f"  - {e}")
        else:
            print(f"OK   {path}")

    if failures:
        print(f"Validation completed with {failures} failing file(s).")
        return 1
    print("All snapshots valid.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
