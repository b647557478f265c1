# src/hatetris/cli/duel.py
from __future__ import annotations

from hatetris.apps.duel.entrypoint import parse_args, run_duel


def main() -> int:
    return run_duel(parse_args())


if __name__ == "__main__":
    raise SystemExit(main())
