"""Tests for PATH probing (infra/binary_locator.py).

Fake executables are created in temporary directories; the real PATH is
never consulted.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from socket_cli.infra.binary_locator import (
    BinaryNotFoundError,
    candidate_paths,
    detect_binary,
    require_binary,
)

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="POSIX executables")


def _make_executable(directory: Path, name: str = "npm") -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
    path.chmod(0o755)
    return path


def test_candidates_in_path_order(tmp_path: Path) -> None:
    first = _make_executable(tmp_path / "a")
    second = _make_executable(tmp_path / "b")
    search = os.pathsep.join([str(tmp_path / "a"), "", str(tmp_path / "b")])
    assert candidate_paths("npm", search) == [first, second]


def test_detect_skips_excluded_directory(tmp_path: Path) -> None:
    _make_executable(tmp_path / "shadow")
    real = _make_executable(tmp_path / "real")
    search = os.pathsep.join([str(tmp_path / "shadow"), str(tmp_path / "real")])

    status = detect_binary("npm", exclude_dir=tmp_path / "shadow", search_path=search)
    assert status.found is True
    assert status.path == real
    assert status.install_commands == ()


def test_not_executable_is_ignored(tmp_path: Path) -> None:
    plain = tmp_path / "bin" / "npm"
    plain.parent.mkdir()
    plain.write_text("not a program", encoding="utf-8")
    status = detect_binary("npm", search_path=str(plain.parent))
    assert status.found is False
    assert status.install_commands


def test_require_binary_missing(tmp_path: Path) -> None:
    with pytest.raises(BinaryNotFoundError) as exc_info:
        require_binary("pnpm", search_path=str(tmp_path))
    assert "unable to locate pnpm" in str(exc_info.value)
    assert exc_info.value.hint is not None
    assert "corepack enable pnpm" in exc_info.value.hint


def test_require_binary_found(tmp_path: Path) -> None:
    real = _make_executable(tmp_path / "bin", "npx")
    assert require_binary("npx", search_path=str(tmp_path / "bin")) == real
