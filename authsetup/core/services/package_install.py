"""
Package installation — map selected auth methods to npm packages.

Each selected method installs exactly one package, in a fixed order,
through the project's package manager.  Installs run synchronously with
the child process attached to the operator's terminal; the first
failure stops the sequence and its exit status is carried back to the
caller.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from authsetup.core.models.auth import AuthMethod, AuthSelection
from authsetup.core.models.config import SetupConfig

logger = logging.getLogger(__name__)


# ── Method → package ────────────────────────────────────────────

DEFAULT_PACKAGES: dict[AuthMethod, str] = {
    AuthMethod.OAUTH_PROVIDERS: "next-auth@5.0.0-beta.18",
    AuthMethod.MAGIC_LINK: "next-auth-email",
    AuthMethod.CREDENTIALS: "bcryptjs",
}


# ── Package manager definitions ─────────────────────────────────

_PACKAGE_MANAGERS: dict[str, dict] = {
    "pnpm": {
        "name": "pnpm",
        "lock_files": ["pnpm-lock.yaml"],
        "cli": "pnpm",
        "add": ["add"],
    },
    "yarn": {
        "name": "Yarn",
        "lock_files": ["yarn.lock"],
        "cli": "yarn",
        "add": ["add"],
    },
    "bun": {
        "name": "Bun",
        "lock_files": ["bun.lockb", "bun.lock"],
        "cli": "bun",
        "add": ["add"],
    },
    "npm": {
        "name": "npm",
        "lock_files": ["package-lock.json"],
        "cli": "npm",
        "add": ["install"],
    },
}

# Exit status reported when the package manager binary is missing.
EXIT_COMMAND_NOT_FOUND = 127

# A child killed by signal N reports returncode -N; shells report 128 + N.
_EXIT_SIGNAL_BASE = 128


class InstallError(Exception):
    """A package-manager invocation exited non-zero."""

    def __init__(self, package: str, command: list[str], returncode: int) -> None:
        self.package = package
        self.command = command
        self.returncode = returncode
        super().__init__(
            f"Installing {package} failed (exit {returncode}): {' '.join(command)}"
        )

    @property
    def exit_status(self) -> int:
        """Process exit status to report, mapping signal deaths to 128 + N."""
        if self.returncode < 0:
            return _EXIT_SIGNAL_BASE - self.returncode
        return self.returncode


@dataclass
class InstallPlan:
    """What will be installed, and with which tool."""

    manager: str
    packages: list[tuple[AuthMethod, str]] = field(default_factory=list)

    def command_for(self, package: str) -> list[str]:
        spec = _PACKAGE_MANAGERS[self.manager]
        return [spec["cli"], *spec["add"], package]

    def to_dict(self) -> dict:
        return {
            "manager": self.manager,
            "packages": [
                {"method": m.value, "package": p, "command": self.command_for(p)}
                for m, p in self.packages
            ],
        }


def detect_package_manager(project_root: Path) -> str:
    """Pick the package manager from the lock file in *project_root* (npm if none)."""
    for pm_id, spec in _PACKAGE_MANAGERS.items():
        if any((project_root / f).is_file() for f in spec["lock_files"]):
            logger.debug("Lock file for %s found in %s", spec["name"], project_root)
            return pm_id
    return "npm"


def plan_install(
    project_root: Path,
    selection: AuthSelection,
    config: SetupConfig | None = None,
) -> InstallPlan:
    """Resolve the package manager and the package list for a selection."""
    config = config or SetupConfig()
    if config.package_manager == "auto":
        manager = detect_package_manager(project_root)
    else:
        manager = config.package_manager

    packages = [
        (method, config.packages.get(method, DEFAULT_PACKAGES[method]))
        for method in selection
    ]
    return InstallPlan(manager=manager, packages=packages)


def _run_install(command: list[str], cwd: Path) -> int:
    """Run one install, streaming output to the terminal; return the exit status."""
    logger.debug("Executing: %s (cwd=%s)", " ".join(command), cwd)
    if shutil.which(command[0]) is None:
        logger.error("%s not found on PATH", command[0])
        return EXIT_COMMAND_NOT_FOUND
    # Output goes straight to the terminal; no timeout.
    result = subprocess.run(command, cwd=str(cwd), check=False)
    return result.returncode


def install_packages(
    project_root: Path,
    plan: InstallPlan,
    *,
    on_start: Callable[[AuthMethod, str], None] | None = None,
) -> list[str]:
    """Install every package in *plan*, in order.

    *on_start* is called before each install so the caller can announce it.

    Returns:
        The package specs that were installed.

    Raises:
        InstallError: On the first non-zero exit.  Packages installed
            before the failure stay installed.
    """
    installed: list[str] = []
    for method, package in plan.packages:
        command = plan.command_for(package)
        logger.info("Installing %s for %s", package, method.label)
        if on_start is not None:
            on_start(method, package)
        returncode = _run_install(command, project_root)
        if returncode != 0:
            raise InstallError(package, command, returncode)
        installed.append(package)
    return installed
