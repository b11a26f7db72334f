"""
Config emission — render and write the NextAuth files for a project.

Two files per run, always in this order:

    1. ``<base>/auth.ts``                      — provider list, session, callbacks
    2. ``<base>/app/api/auth/[...nextauth]/route.ts``   (App Router)
       ``<base>/pages/api/auth/[...nextauth].ts``       (Pages Router)

``<base>`` is the directory that holds the router marker (project root
or ``src/``).  Writes overwrite without backup and are not transactional:
if the second write fails the first file stays on disk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from authsetup.core.models.auth import AuthSelection
from authsetup.core.models.router import DetectionResult
from authsetup.core.models.template import GeneratedFile
from authsetup.core.services.generators.auth_config import (
    generate_auth_config,
    methods_without_fragment,
)
from authsetup.core.services.generators.route_handler import generate_route_handler

logger = logging.getLogger(__name__)


@dataclass
class EmitResult:
    """Outcome of writing the generated files."""

    written: list[str] = field(default_factory=list)
    failed_path: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        result: dict = {"written": self.written}
        if self.error:
            result["error"] = self.error
            result["failed_path"] = self.failed_path
        return result


def relative_base_dir(project_root: Path, detection: DetectionResult) -> PurePosixPath:
    """The marker's parent directory relative to the project root, POSIX-style."""
    rel = detection.base_dir.relative_to(project_root.resolve())
    return PurePosixPath(rel.as_posix())


def plan_files(
    project_root: Path,
    detection: DetectionResult,
    selection: AuthSelection,
) -> list[GeneratedFile]:
    """Render both files without touching the disk.

    Returns:
        ``[auth config, route handler]`` with paths relative to *project_root*.
    """
    base = relative_base_dir(project_root, detection)

    for method in methods_without_fragment(selection):
        logger.warning(
            "'%s' has no template: its package is installed but the provider "
            "must be added to auth.ts by hand",
            method.label,
        )

    return [
        generate_auth_config(base, selection),
        generate_route_handler(base, detection.convention),
    ]


def write_files(project_root: Path, files: list[GeneratedFile]) -> EmitResult:
    """Write *files* under *project_root*, creating parent directories.

    Stops at the first failure; files already written are left in place.
    """
    result = EmitResult()

    for gen in files:
        target = project_root / gen.path

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("Cannot create directory %s: %s", target.parent, e)
            result.failed_path = gen.path
            result.error = f"Cannot create directory for {gen.path}: {e}"
            return result

        if target.exists():
            logger.info("Overwriting %s", gen.path)

        try:
            target.write_text(gen.content, encoding="utf-8")
        except OSError as e:
            logger.error("Cannot write %s: %s", target, e)
            result.failed_path = gen.path
            result.error = f"Cannot write {gen.path}: {e}"
            return result

        logger.debug("Wrote %s (%d bytes) — %s", gen.path, len(gen.content), gen.reason)
        result.written.append(gen.path)

    return result
