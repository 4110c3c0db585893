"""Infrastructure: locate real package-manager binaries on PATH.

When ``npm`` is aliased to ``socket npm`` (or a shadow bin directory is
first on PATH), the shadow entry points must find the *real* tool while
skipping themselves.

Rules
-----
* Detection via :func:`shutil.which` only — no subprocess.
* No permanent PATH modification.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import os
import platform
import shutil
from dataclasses import dataclass
from pathlib import Path

from socket_cli.exceptions import EnvironmentError

BINARY_NOT_FOUND_EXIT_CODE: int = 127
"""Shell convention for "command not found"."""


@dataclass(frozen=True, slots=True)
class BinaryStatus:
    """Result of a PATH probe for one executable.

    Attributes
    ----------
    name : str
        Executable name that was searched for.
    found : bool
        Whether a usable executable was located.
    path : Path | None
        Absolute path to the executable, or ``None``.
    install_commands : tuple[str, ...]
        Suggested install commands for the current platform.  Empty when
        the executable is present.
    """

    name: str
    found: bool
    path: Path | None
    install_commands: tuple[str, ...]


class BinaryNotFoundError(EnvironmentError):
    """Raised when a required package-manager binary is not on PATH."""


def candidate_paths(name: str, search_path: str | None = None) -> list[Path]:
    """Return every PATH entry's *name* executable, in PATH order."""
    raw = os.environ.get("PATH", "") if search_path is None else search_path
    found: list[Path] = []
    for entry in raw.split(os.pathsep):
        if not entry:
            continue
        hit = shutil.which(name, path=entry)
        if hit is not None:
            candidate = Path(hit)
            if candidate not in found:
                found.append(candidate)
    return found


def detect_binary(
    name: str,
    *,
    exclude_dir: Path | None = None,
    search_path: str | None = None,
) -> BinaryStatus:
    """Probe PATH for *name*, skipping executables inside *exclude_dir*."""
    excluded = exclude_dir.resolve() if exclude_dir is not None else None
    for candidate in candidate_paths(name, search_path):
        if excluded is not None and candidate.resolve().parent == excluded:
            continue
        return BinaryStatus(name=name, found=True, path=candidate, install_commands=())
    return BinaryStatus(
        name=name,
        found=False,
        path=None,
        install_commands=_platform_install_commands(name),
    )


def require_binary(
    name: str,
    *,
    exclude_dir: Path | None = None,
    search_path: str | None = None,
) -> Path:
    """Locate *name* or raise :class:`BinaryNotFoundError`."""
    status = detect_binary(name, exclude_dir=exclude_dir, search_path=search_path)
    if not status.found or status.path is None:
        hint_lines: list[str] = []
        if status.install_commands:
            hint_lines.append(f"Install {name} using one of:")
            hint_lines.extend(f"  {cmd}" for cmd in status.install_commands)
        raise BinaryNotFoundError(
            f"Socket unable to locate {name}; ensure it is available in the PATH environment variable.",
            hint="\n".join(hint_lines) if hint_lines else None,
        )
    return status.path


def _platform_install_commands(name: str) -> tuple[str, ...]:
    """Return install commands appropriate for the current OS."""
    if name == "pnpm":
        return ("npm install --global pnpm", "corepack enable pnpm")
    system = platform.system().lower()
    if system == "windows":
        return ("winget install OpenJS.NodeJS.LTS", "choco install nodejs-lts")
    if system == "linux":
        return ("sudo apt install nodejs npm", "sudo dnf install nodejs", "sudo pacman -S nodejs npm")
    if system == "darwin":
        return ("brew install node",)
    return ("Please install Node.js from https://nodejs.org/",)
