"""
Shared test fixtures — fake Next.js projects and a fake package manager.
"""

import json
import subprocess
from pathlib import Path
from typing import Callable

import pytest


def _write_package(root: Path, name: str, version: str = "14.2.3") -> None:
    pkg = root / "node_modules" / name
    pkg.mkdir(parents=True, exist_ok=True)
    (pkg / "package.json").write_text(json.dumps({"name": name, "version": version}))


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., Path]:
    """Factory: build a Next.js project tree under tmp_path.

    Args (to the returned callable):
        *dirs: Directories to create relative to the project root
            (e.g. ``"app"``, ``"src/pages"``).
        with_next: Install a fake ``node_modules/next``.
        lock_file: Optional lock file name to create.
    """

    def _make(*dirs: str, with_next: bool = True, lock_file: str | None = None) -> Path:
        root = tmp_path / "project"
        root.mkdir(exist_ok=True)
        (root / "package.json").write_text(json.dumps({"name": "web", "private": True}))
        if with_next:
            _write_package(root, "next")
        for d in dirs:
            (root / d).mkdir(parents=True, exist_ok=True)
        if lock_file:
            (root / lock_file).write_text("")
        return root

    return _make


class FakePackageManager:
    """Records install commands instead of running them."""

    def __init__(self) -> None:
        self.calls: list[dict] = []
        self.fail_on: dict[str, int] = {}

    def run(self, args, cwd=None, check=False, **kwargs):
        self.calls.append({"args": list(args), "cwd": cwd})
        code = 0
        for package, rc in self.fail_on.items():
            if package in args:
                code = rc
        return subprocess.CompletedProcess(args, code)

    @property
    def packages(self) -> list[str]:
        return [c["args"][-1] for c in self.calls]


@pytest.fixture
def fake_pm(monkeypatch) -> FakePackageManager:
    """Patch subprocess.run / shutil.which used by the installer."""
    from authsetup.core.services import package_install

    fake = FakePackageManager()
    monkeypatch.setattr(package_install.subprocess, "run", fake.run)
    monkeypatch.setattr(package_install.shutil, "which", lambda cmd: f"/usr/bin/{cmd}")
    return fake
