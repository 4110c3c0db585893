"""Shadow ``npm``: check requested packages, then run the real npm."""

from __future__ import annotations

import sys

from socket_cli.shadow.safe_install import shadow_main


def main() -> None:
    shadow_main("npm", sys.argv[1:])


if __name__ == "__main__":
    main()
