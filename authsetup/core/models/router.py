"""
Router models — which Next.js routing convention a project uses.

Detection produces exactly one ``DetectionResult`` per run; the emitter
anchors every generated path on its ``base_dir``.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict


class RouterConvention(str, Enum):
    """Supported routing layouts."""

    APP_ROUTER = "app-router"
    PAGES_ROUTER = "pages-router"

    @property
    def marker(self) -> str:
        """Directory name whose presence identifies this convention."""
        return "app" if self is RouterConvention.APP_ROUTER else "pages"

    @property
    def display_name(self) -> str:
        return "App Router" if self is RouterConvention.APP_ROUTER else "Pages Router"

    @classmethod
    def parse(cls, value: str) -> RouterConvention:
        needle = value.strip().lower()
        for conv in cls:
            if needle in (conv.value, conv.marker):
                return conv
        raise ValueError(f"Unknown router convention: {value!r}")


class DetectionResult(BaseModel):
    """Where the marker directory was found and what it means.

    Attributes:
        convention: The detected routing layout.
        marker_dir: Absolute path of the ``app/`` or ``pages/`` directory.
    """

    model_config = ConfigDict(frozen=True)

    convention: RouterConvention
    marker_dir: Path

    @property
    def base_dir(self) -> Path:
        """Directory holding the marker (project root or ``src/``)."""
        return self.marker_dir.parent

    def to_dict(self) -> dict:
        return {
            "router": self.convention.value,
            "marker_dir": str(self.marker_dir),
            "base_dir": str(self.base_dir),
        }
