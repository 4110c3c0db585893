"""Shadow ``pnpm``: check requested packages, then run the real pnpm."""

from __future__ import annotations

import sys

from socket_cli.shadow.safe_install import shadow_main


def main() -> None:
    shadow_main("pnpm", sys.argv[1:])


if __name__ == "__main__":
    main()
