#!/usr/bin/env python3
"""Clear the memory backend's demo dataset file.

Usage:
    python scripts/reset_demo_data.py                 # uses DEMO_DATA_PATH
    python scripts/reset_demo_data.py path/to/data.json

Stop the server first; a running process keeps its own copy in memory.
Exits 0 on success, 1 on failure.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from levelcre.config import get_settings
from levelcre.storage import MemoryStore


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    path = args[0] if args else get_settings().demo_data_path
    if not path:
        print("ERROR: no path given and DEMO_DATA_PATH is not set", file=sys.stderr)
        return 1
    try:
        MemoryStore(path).reset()
    except (OSError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    print(f"reset demo data at {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
