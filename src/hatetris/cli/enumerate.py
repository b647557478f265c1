# src/hatetris/cli/enumerate.py
from __future__ import annotations

from hatetris.apps.enumerate.entrypoint import parse_args, run_enumerate


def main() -> int:
    return run_enumerate(parse_args())


if __name__ == "__main__":
    raise SystemExit(main())
