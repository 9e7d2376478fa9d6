"""Allow python -m cep_race to run a lookup."""
from __future__ import annotations

from cep_race.cli.main import main

if __name__ == "__main__":
    raise SystemExit(main())
