"""socket-cli — Socket.dev security command-line client.

Wraps npm/npx/pnpm with package-risk checks and queries the Socket
security-analysis API, with a strict layered architecture.
"""

from socket_cli.version import __version__

__all__: list[str] = ["__version__"]
