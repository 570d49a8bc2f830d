"""Module entrypoint for ``python -m gemha_settings``."""

from __future__ import annotations

from gemha_settings.main import cli_entrypoint

if __name__ == "__main__":
    raise SystemExit(cli_entrypoint())
