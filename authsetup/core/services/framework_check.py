"""
Framework check — is Next.js resolvable from the target project?

Mirrors Node's module resolution for a bare specifier: look for
``node_modules/next`` in the project root, then in each ancestor,
stopping at the filesystem root.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

FRAMEWORK_PACKAGE = "next"


@dataclass(frozen=True)
class FrameworkCheck:
    """Outcome of resolving the framework package."""

    found: bool
    package_dir: Path | None = None
    version: str | None = None

    def to_dict(self) -> dict:
        return {
            "found": self.found,
            "package_dir": str(self.package_dir) if self.package_dir else None,
            "version": self.version,
        }


def resolve_package(project_root: Path, package: str = FRAMEWORK_PACKAGE) -> Path | None:
    """Return the installed package directory for *package*, or None."""
    current = project_root.resolve()
    while True:
        candidate = current / "node_modules" / package
        if (candidate / "package.json").is_file():
            return candidate
        parent = current.parent
        if parent == current:
            return None
        current = parent


def check_framework(project_root: Path) -> FrameworkCheck:
    """Check that the framework dependency resolves from *project_root*."""
    package_dir = resolve_package(project_root)
    if package_dir is None:
        logger.info("'%s' not resolvable from %s", FRAMEWORK_PACKAGE, project_root)
        return FrameworkCheck(found=False)

    version = None
    try:
        data = json.loads((package_dir / "package.json").read_text(encoding="utf-8"))
        version = data.get("version")
    except (OSError, json.JSONDecodeError) as e:
        logger.debug("Cannot read %s/package.json: %s", package_dir, e)

    logger.debug("Resolved %s %s at %s", FRAMEWORK_PACKAGE, version or "?", package_dir)
    return FrameworkCheck(found=True, package_dir=package_dir, version=version)
