"""Custom exception hierarchy for socket-cli.

All exceptions that cross layer boundaries must inherit from
:class:`SocketCliError`.  Raw third-party exceptions (e.g. from httpx)
must NEVER propagate beyond the infrastructure layer unless they are
chained as the ``__cause__`` of a typed subclass defined here.

Hierarchy
---------
SocketCliError
├── InputError
├── AuthError
├── HttpError
├── NetworkError
├── RegistryError
└── EnvironmentError
"""

from __future__ import annotations


class SocketCliError(Exception):
    """Base exception for all socket-cli errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- User input ------------------------------------------------------------

class InputError(SocketCliError):
    """Raised when user-supplied arguments or flags are invalid."""

    def __init__(
        self,
        message: str,
        body: str | None = None,
        *,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.body: str | None = body
        """Optional usage text printed after the message."""


# --- Credentials -----------------------------------------------------------

LOGIN_HINT = (
    "To log in, run the command `socket login` and enter your API key "
    "from https://socket.dev/dashboard"
)


class AuthError(SocketCliError):
    """Raised when the API key is missing or rejected by the API."""

    def __init__(self, message: str = "", *, hint: str | None = LOGIN_HINT) -> None:
        super().__init__(
            message or "User must be authenticated to run this command.",
            hint=hint,
        )


# --- Remote API ------------------------------------------------------------

class HttpError(SocketCliError):
    """Raised when a remote call fails or returns a non-2xx status."""

    def __init__(self, status: int, message: str, *, hint: str | None = None) -> None:
        super().__init__(f"API returned an error ({status}): {message}", hint=hint)
        self.status: int = status


class NetworkError(SocketCliError):
    """Raised when no HTTP response could be obtained at all."""


# --- Configuration ---------------------------------------------------------

class RegistryError(SocketCliError):
    """Raised when a subcommand registry is built with conflicting names."""


class EnvironmentError(SocketCliError):
    """Raised when a required runtime dependency is not available."""


# ---------------------------------------------------------------------------
# Cause-chain rendering
# ---------------------------------------------------------------------------

def iter_causes(exc: BaseException) -> list[BaseException]:
    """Return *exc* followed by every explicit or implicit cause.

    Cycles are cut at the first repeated exception.
    """
    chain: list[BaseException] = []
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        chain.append(current)
        current = current.__cause__ or (
            None if current.__suppress_context__ else current.__context__
        )
    return chain


def messages_with_causes(exc: BaseException) -> str:
    """Join the messages of *exc* and its causes with ``": caused by: "``."""
    parts: list[str] = []
    for link in iter_causes(exc):
        text = str(link) or type(link).__name__
        if isinstance(link, SocketCliError) or not parts:
            parts.append(text)
        else:
            parts.append(f"{type(link).__name__}: {text}")
    return ": caused by: ".join(parts)
