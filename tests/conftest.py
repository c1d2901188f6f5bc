"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import os
import zipfile
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture(autouse=True)
def isolated_config_home(
    tmp_path_factory: pytest.TempPathFactory,
    monkeypatch: pytest.MonkeyPatch,
) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory for every test."""
    config_home = tmp_path_factory.mktemp("xdg-config")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create ``r/a.txt``, ``r/sub/b.txt`` and an empty ``r/sub/empty``."""
    root = tmp_path / "r"
    (root / "sub" / "empty").mkdir(parents=True)
    (root / "a.txt").write_text("alpha")
    (root / "sub" / "b.txt").write_text("beta")
    return root


@pytest.fixture
def make_zip() -> Callable[[Path, dict[str, bytes]], Path]:
    """Return a factory writing a zip archive with the given entries."""

    def _make(path: Path, entries: dict[str, bytes]) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for name, data in entries.items():
                zf.writestr(name, data)
        return path

    return _make


@pytest.fixture
def deny_listing(monkeypatch: pytest.MonkeyPatch) -> Callable[[str], None]:
    """Return a function making directories with a given name unopenable."""
    original_scandir = os.scandir

    def _deny(name: str) -> None:
        def scandir(path: Any = ".") -> Any:
            if Path(path).name == name:
                raise PermissionError("denied")
            return original_scandir(path)

        monkeypatch.setattr(os, "scandir", scandir)

    return _deny
