"""``python -m zeekr_app``: opens the logo window unless a command is given."""

from __future__ import annotations

import sys

try:
    # Normal package import path.
    from .cli import main as _cli_main
except ImportError:
    # Script/frozen entrypoint path.
    from zeekr_app.cli import main as _cli_main

DEFAULT_COMMAND = "run"


def main(argv: list[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    return int(_cli_main(args or [DEFAULT_COMMAND]))


if __name__ == "__main__":
    raise SystemExit(main())
