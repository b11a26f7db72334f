"""
Domain models — Pydantic types for the setup tool.

All models are re-exported here for convenient access:

    from authsetup.core.models import AuthMethod, AuthSelection, DetectionResult
"""

from authsetup.core.models.auth import PROMPT_ORDER, AuthMethod, AuthSelection
from authsetup.core.models.config import SetupConfig
from authsetup.core.models.router import DetectionResult, RouterConvention
from authsetup.core.models.template import GeneratedFile

__all__ = [
    # auth.py
    "AuthMethod",
    "AuthSelection",
    # router.py
    "DetectionResult",
    # template.py
    "GeneratedFile",
    "PROMPT_ORDER",
    "RouterConvention",
    # config.py
    "SetupConfig",
]
