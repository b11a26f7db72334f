"""
Router detection — find which Next.js routing convention a project uses.

Looks for a directory literally named ``app`` (App Router) or ``pages``
(Pages Router).  The places Next.js itself reads first are checked for
both markers:

    <root>/app, <root>/src/app, <root>/pages, <root>/src/pages

Only when none of those exist is the tree walked depth-first, ``app``
before ``pages``.  The walk never enters build output, dependency
directories, or the other convention's marker directory.

Pure logic — read-only, no side effects.
"""

from __future__ import annotations

import logging
from pathlib import Path

from authsetup.core.models.router import DetectionResult, RouterConvention

logger = logging.getLogger(__name__)


SOURCE_DIR = "src"

_SKIP_DIRS = frozenset({
    "node_modules", ".next", ".git", "dist", "build", "out",
    ".turbo", ".vercel", "coverage", ".cache",
})

# Fixed search order: App Router wins when both markers exist.
_SEARCH_ORDER: tuple[RouterConvention, ...] = (
    RouterConvention.APP_ROUTER,
    RouterConvention.PAGES_ROUTER,
)

_MARKERS = frozenset(c.marker for c in _SEARCH_ORDER)


def _should_skip(name: str) -> bool:
    return name in _SKIP_DIRS or name.startswith(".")


def _subdirs(directory: Path) -> list[Path]:
    """Child directories in sorted name order (unreadable → empty)."""
    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        logger.debug("Cannot list %s: %s", directory, e)
        return []
    return [
        p for p in entries
        if p.is_dir() and not p.is_symlink() and not _should_skip(p.name)
    ]


def conventional_marker(root: Path, marker: str) -> Path | None:
    """``<root>/<marker>`` or ``<root>/src/<marker>``, whichever exists first."""
    for base in (root, root / SOURCE_DIR):
        candidate = base / marker
        if candidate.is_dir():
            return candidate
    return None


def walk_for_marker(root: Path, marker: str) -> Path | None:
    """Depth-first pre-order walk for a directory named *marker*.

    Direct children are checked before descending, so the shallowest
    match on the first branch wins.  Directories named after any other
    router marker are not entered.
    """
    stack: list[Path] = [root]
    while stack:
        current = stack.pop()
        children = _subdirs(current)
        for child in children:
            if child.name == marker:
                return child
        descend = [c for c in children if c.name not in _MARKERS]
        # Reversed so the alphabetically-first child is visited first
        stack.extend(reversed(descend))
    return None


def detect_router(project_root: Path) -> DetectionResult | None:
    """Detect the routing convention of a project.

    Returns:
        DetectionResult for the first convention whose marker exists,
        or None when neither ``app/`` nor ``pages/`` is present.
    """
    root = project_root.resolve()
    for search in (conventional_marker, walk_for_marker):
        for convention in _SEARCH_ORDER:
            marker_dir = search(root, convention.marker)
            if marker_dir is not None:
                logger.info("%s detected at %s", convention.display_name, marker_dir)
                return DetectionResult(convention=convention, marker_dir=marker_dir)

    logger.info("No router directory found under %s", root)
    return None
