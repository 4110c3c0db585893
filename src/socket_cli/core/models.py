"""Domain models for socket-cli.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O and zero dependencies
on external packages.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar, Literal, Union


# ---------------------------------------------------------------------------
# Raw SDK response
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SdkResult:
    """A single response as returned by the Socket SDK.

    Transport failures never produce an ``SdkResult``; they raise.
    """

    success: bool
    """``True`` for any 2xx response."""

    status: int
    """HTTP status code."""

    data: Any = None
    """Decoded JSON body on success."""

    error: Mapping[str, Any] | None = None
    """The ``error`` object of the response body on failure."""

    @property
    def error_message(self) -> str:
        """Server-provided error message, or a stable placeholder."""
        if self.error and isinstance(self.error.get("message"), str):
            return self.error["message"]
        return "No error message returned"


# ---------------------------------------------------------------------------
# Classified outcome of one API call
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ApiSuccess:
    """The call succeeded; *data* is the decoded payload."""

    kind: ClassVar[Literal["success"]] = "success"
    data: Any


@dataclass(frozen=True, slots=True)
class ApiHttpError:
    """The call failed at the transport level or with an unmapped status."""

    kind: ClassVar[Literal["httpError"]] = "httpError"
    status: int
    message: str
    cause: BaseException | None = field(default=None, compare=False)


@dataclass(frozen=True, slots=True)
class ApiAuthError:
    """The API rejected the credentials (401/403)."""

    kind: ClassVar[Literal["authError"]] = "authError"
    message: str = ""


@dataclass(frozen=True, slots=True)
class ApiInputError:
    """The request referred to something that does not exist (404)."""

    kind: ClassVar[Literal["inputError"]] = "inputError"
    message: str


ApiOutcome = Union[ApiSuccess, ApiHttpError, ApiAuthError, ApiInputError]


# ---------------------------------------------------------------------------
# Process proxy
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ProcessProxySpec:
    """Everything needed to spawn one wrapped package-manager call."""

    executable_path: str
    """Path of the wrapper executable (or real binary for ``raw-npx``)."""

    forwarded_args: tuple[str, ...]
    """Arguments appended verbatim after the executable."""

    stdio_mode: Literal["inherit"] = "inherit"

    interpreter: str | None = None
    """When set, the executable is run through this interpreter."""

    def command_line(self) -> list[str]:
        """Return the full argv handed to the OS."""
        head = [self.interpreter, self.executable_path] if self.interpreter else [self.executable_path]
        return [*head, *self.forwarded_args]


@dataclass(frozen=True, slots=True)
class ChildTermination:
    """How a wrapped child process ended.

    Exactly one of *exit_code* / *signal_number* is set.
    """

    exit_code: int | None = None
    signal_number: int | None = None

    @classmethod
    def from_returncode(cls, returncode: int) -> ChildTermination:
        """Decode a :mod:`subprocess`-style return code.

        Negative values mean the child was killed by signal ``-returncode``.
        """
        if returncode < 0:
            return cls(signal_number=-returncode)
        return cls(exit_code=returncode)


# ---------------------------------------------------------------------------
# API payload views
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Organization:
    """One organization the API key has access to."""

    id: str
    name: str
    plan: str = ""
    slug: str = ""

    @classmethod
    def from_payload(cls, raw: Mapping[str, Any]) -> Organization:
        return cls(
            id=str(raw.get("id", "")),
            name=str(raw.get("name", "")),
            plan=str(raw.get("plan", "") or ""),
            slug=str(raw.get("slug", "") or ""),
        )


@dataclass(frozen=True, slots=True)
class AuditLogQuery:
    """Query parameters for the organization audit-log endpoint."""

    org_slug: str
    type: str = ""
    page: int = 1
    per_page: int = 30

    def to_params(self) -> dict[str, str]:
        """Build query parameters; ``type`` is sent capitalised."""
        params = {"page": str(self.page), "per_page": str(self.per_page)}
        if self.type:
            params["type"] = self.type[:1].upper() + self.type[1:]
        return params


@dataclass(frozen=True, slots=True)
class PackageIssueReport:
    """Issue lookup result for one ``name@version`` package spec."""

    package: str
    version: str
    blocking_issues: tuple[str, ...] = ()
    error: str | None = None

    @property
    def spec(self) -> str:
        return f"{self.package}@{self.version}"

    @property
    def risky(self) -> bool:
        return bool(self.blocking_issues)
