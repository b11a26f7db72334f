"""
Auth models — which authentication methods the operator selected.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator


class AuthMethod(str, Enum):
    """A selectable authentication method.

    Declaration order is the canonical order: installs and template
    fragments are always processed in this order.
    """

    OAUTH_PROVIDERS = "oauth"
    MAGIC_LINK = "magic-link"
    CREDENTIALS = "credentials"

    @property
    def label(self) -> str:
        """Operator-facing label shown in the prompt."""
        return _LABELS[self]

    @classmethod
    def parse(cls, value: str) -> AuthMethod:
        """Resolve a method from its id or its prompt label (case-insensitive)."""
        needle = value.strip().lower()
        for method in cls:
            if needle in (method.value, method.label.lower(), method.name.lower()):
                return method
        raise ValueError(f"Unknown authentication method: {value!r}")


_LABELS: dict[AuthMethod, str] = {
    AuthMethod.OAUTH_PROVIDERS: "Providers (Google, GitHub, etc.)",
    AuthMethod.CREDENTIALS: "Credentials",
    AuthMethod.MAGIC_LINK: "Magic Link",
}

# Prompt order, as presented to the operator.
PROMPT_ORDER: tuple[AuthMethod, ...] = (
    AuthMethod.OAUTH_PROVIDERS,
    AuthMethod.CREDENTIALS,
    AuthMethod.MAGIC_LINK,
)


@dataclass(frozen=True)
class AuthSelection:
    """The set of methods chosen by the operator. Immutable."""

    methods: frozenset[AuthMethod] = field(default_factory=frozenset)

    @classmethod
    def of(cls, methods: Iterable[AuthMethod | str]) -> AuthSelection:
        resolved = {
            m if isinstance(m, AuthMethod) else AuthMethod.parse(m) for m in methods
        }
        return cls(methods=frozenset(resolved))

    def __contains__(self, method: object) -> bool:
        return method in self.methods

    def __iter__(self) -> Iterator[AuthMethod]:
        return (m for m in AuthMethod if m in self.methods)

    def __len__(self) -> int:
        return len(self.methods)

    @property
    def is_empty(self) -> bool:
        return not self.methods

    def labels(self) -> list[str]:
        return [m.label for m in self]

    def to_dict(self) -> dict:
        return {"methods": [m.value for m in self]}
