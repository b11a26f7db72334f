"""
Setup use case — wire NextAuth into a project, end to end.

Ties together config loading, the framework check, router detection,
package installation and file emission.  Every step receives the
project root explicitly; nothing here changes the working directory or
terminates the process.  Failures come back as a named ``failure``
reason plus the exit status the CLI should use.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from authsetup.core.config.loader import ConfigError, load_config
from authsetup.core.models.auth import AuthMethod, AuthSelection
from authsetup.core.models.router import DetectionResult
from authsetup.core.models.template import GeneratedFile
from authsetup.core.services.config_emit import plan_files, write_files
from authsetup.core.services.framework_check import FRAMEWORK_PACKAGE, check_framework
from authsetup.core.services.package_install import (
    InstallError,
    install_packages,
    plan_install,
)
from authsetup.core.services.router_detect import detect_router

logger = logging.getLogger(__name__)


# ── Failure reasons ─────────────────────────────────────────────

MISSING_PROJECT = "missing-project"
CONFIG_INVALID = "config-invalid"
NO_FRAMEWORK = "no-framework"
NO_ROUTER = "no-router"
INSTALL_FAILED = "install-failed"
WRITE_FAILED = "write-failed"


@dataclass
class SetupResult:
    """Result of the setup use case."""

    project_root: Path | None = None
    detection: DetectionResult | None = None
    package_manager: str | None = None
    installed: list[str] = field(default_factory=list)
    files: list[GeneratedFile] = field(default_factory=list)
    written: list[str] = field(default_factory=list)
    dry_run: bool = False
    failure: str | None = None
    error: str | None = None
    exit_code: int = 0

    @property
    def ok(self) -> bool:
        return self.failure is None

    def fail(self, reason: str, message: str, exit_code: int = 1) -> SetupResult:
        self.failure = reason
        self.error = message
        self.exit_code = exit_code
        return self

    def to_dict(self) -> dict:
        result: dict = {"ok": self.ok, "exit_code": self.exit_code}
        if self.failure:
            result["failure"] = self.failure
            result["error"] = self.error
        if self.project_root:
            result["project_root"] = str(self.project_root)
        if self.detection:
            result["detection"] = self.detection.to_dict()
        result["package_manager"] = self.package_manager
        result["installed"] = self.installed
        result["written"] = self.written
        result["dry_run"] = self.dry_run
        return result


def run_setup(
    project_root: Path,
    selection: AuthSelection,
    *,
    config_path: Path | None = None,
    skip_install: bool = False,
    dry_run: bool = False,
    on_detect: Callable[[DetectionResult], None] | None = None,
    on_install: Callable[[AuthMethod, str], None] | None = None,
) -> SetupResult:
    """Configure NextAuth for the project at *project_root*.

    Args:
        project_root: Target project directory.
        selection: Methods chosen by the operator.
        config_path: Explicit authsetup.yml (default: look in the project).
        skip_install: Do not run the package manager.
        dry_run: Render files and resolve installs, but change nothing.
        on_detect: Called once the router convention is known.
        on_install: Called before each package install.

    Returns:
        SetupResult; check ``ok`` / ``failure`` / ``exit_code``.
    """
    result = SetupResult(dry_run=dry_run)

    if not project_root.is_dir():
        return result.fail(MISSING_PROJECT, f"Project directory not found: {project_root}")
    project_root = project_root.resolve()
    result.project_root = project_root

    try:
        config = load_config(project_root, config_path)
    except ConfigError as e:
        return result.fail(CONFIG_INVALID, str(e))

    framework = check_framework(project_root)
    if not framework.found:
        return result.fail(
            NO_FRAMEWORK,
            f"'{FRAMEWORK_PACKAGE}' is not installed in {project_root}. "
            "Install Next.js before continuing.",
        )

    detection = detect_router(project_root)
    if detection is None:
        return result.fail(
            NO_ROUTER,
            "No router detected (no app/ or pages/ directory). "
            "Make sure this is a valid Next.js project.",
        )
    result.detection = detection
    if on_detect is not None:
        on_detect(detection)

    plan = plan_install(project_root, selection, config)
    result.package_manager = plan.manager

    if dry_run or skip_install or not config.install:
        logger.info("Skipping package installation (%d package(s))", len(plan.packages))
    else:
        try:
            result.installed = install_packages(project_root, plan, on_start=on_install)
        except InstallError as e:
            return result.fail(INSTALL_FAILED, str(e), exit_code=e.exit_status)

    result.files = plan_files(project_root, detection, selection)
    if dry_run:
        return result

    emitted = write_files(project_root, result.files)
    result.written = emitted.written
    if not emitted.ok:
        return result.fail(WRITE_FAILED, emitted.error or "write failed")

    logger.info("Setup complete: %s", ", ".join(result.written))
    return result
