"""
Setup config model — optional per-project settings from authsetup.yml.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from authsetup.core.models.auth import AuthMethod


class SetupConfig(BaseModel):
    """Settings that tune installation for one project.

    Every field has a default, so a project without authsetup.yml
    behaves exactly like an empty file.
    """

    model_config = ConfigDict(extra="forbid")

    package_manager: Literal["auto", "npm", "yarn", "pnpm", "bun"] = "auto"
    install: bool = True
    packages: dict[AuthMethod, str] = Field(default_factory=dict)

    @field_validator("packages", mode="before")
    @classmethod
    def _parse_method_keys(cls, value: object) -> object:
        if not isinstance(value, dict):
            return value
        return {
            (AuthMethod.parse(k) if isinstance(k, str) else k): v
            for k, v in value.items()
        }

    @field_validator("packages")
    @classmethod
    def _non_empty_specs(cls, value: dict[AuthMethod, str]) -> dict[AuthMethod, str]:
        for method, spec in value.items():
            if not spec.strip():
                raise ValueError(f"Empty package spec for '{method.value}'")
        return value
