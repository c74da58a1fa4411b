"""Core data contracts: domain rules, the navigation policy, and decisions."""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import StrEnum
from typing import Any, Final

from pydantic import (
    BaseModel,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

from navpolicy.core.defaults import (
    DEFAULT_ALLOWED_DOMAINS,
    DEFAULT_ALLOWED_SCHEMES,
    DEFAULT_BASE_URL,
    WILDCARD_PREFIX,
)
from navpolicy.core.hashing import stable_hash_of

_HOSTNAME_RE: Final[re.Pattern[str]] = re.compile(r"^[a-z0-9_-]+(?:\.[a-z0-9_-]+)*$")


class DomainRule(BaseModel, frozen=True):
    """One entry of the domain allow-list.

    ``pattern`` is either an exact hostname (``"example.com"``) or a
    wildcard rule (``"*.example.com"``) covering the base domain and every
    dot-separated subdomain of it.  Patterns are stored lower-cased.

    A bare string validates directly into a rule, so YAML lists of
    hostnames load without wrapping::

        DomainRule.model_validate("*.Example.com").pattern  # "*.example.com"
    """

    pattern: str = Field(min_length=1, description="Exact hostname or '*.'-prefixed wildcard.")

    @model_validator(mode="before")
    @classmethod
    def _coerce_str(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"pattern": data}
        return data

    @field_validator("pattern")
    @classmethod
    def _normalize(cls, value: str) -> str:
        value = value.strip().lower()
        if not value:
            raise ValueError("domain rule must not be empty")
        body = value[len(WILDCARD_PREFIX):] if value.startswith(WILDCARD_PREFIX) else value
        if not body or "*" in body:
            raise ValueError(
                f"Invalid domain rule {value!r}; wildcards are only allowed "
                f"as a leading {WILDCARD_PREFIX!r}"
            )
        if body.startswith(".") or body.endswith("."):
            raise ValueError(f"Invalid domain rule {value!r}; stray dot")
        if not _HOSTNAME_RE.match(body):
            raise ValueError(
                f"Invalid domain rule {value!r}; expected a bare hostname "
                f"without scheme, port or path"
            )
        return value

    @property
    def is_wildcard(self) -> bool:
        return self.pattern.startswith(WILDCARD_PREFIX)

    @property
    def base(self) -> str:
        """The hostname the rule is anchored on (wildcard prefix removed)."""
        if self.is_wildcard:
            return self.pattern[len(WILDCARD_PREFIX):]
        return self.pattern


def _default_rules() -> tuple[DomainRule, ...]:
    return tuple(DomainRule(pattern=d) for d in DEFAULT_ALLOWED_DOMAINS)


class PolicyConfig(BaseModel, frozen=True):
    """Immutable navigation policy, loaded once at startup.

    Instances are passed explicitly into every engine entry point; there is
    no process-wide singleton, so tests may hold several side by side.

    Schemes are stored without their trailing ``:`` and compared
    case-sensitively.  Domain rules keep their configured order, although
    matching does not depend on it.
    """

    base_url: str = Field(default=DEFAULT_BASE_URL, min_length=1, description="Start page loaded into the embedded surface.")
    allowed_domains: tuple[DomainRule, ...] = Field(
        default_factory=_default_rules,
        min_length=1,
        description="Ordered domain allow-list.",
    )
    allowed_schemes: frozenset[str] = Field(
        default=frozenset(DEFAULT_ALLOWED_SCHEMES),
        min_length=1,
        description="Scheme allow-list, without trailing ':'.",
    )

    @field_validator("base_url")
    @classmethod
    def _strip_base_url(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("base_url must not be empty")
        return value

    @field_validator("allowed_schemes", mode="before")
    @classmethod
    def _normalize_schemes(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, Iterable):
            return value
        schemes: set[str] = set()
        for raw in value:
            if not isinstance(raw, str):
                raise ValueError(f"scheme must be a string, got {raw!r}")
            scheme = raw.strip().rstrip(":")
            if not scheme:
                raise ValueError("scheme must not be empty")
            schemes.add(scheme)
        return frozenset(schemes)

    @field_serializer("allowed_domains")
    def _dump_domains(self, rules: tuple[DomainRule, ...]) -> list[str]:
        return [r.pattern for r in rules]

    @field_serializer("allowed_schemes")
    def _dump_schemes(self, schemes: frozenset[str]) -> list[str]:
        return sorted(schemes)

    @property
    def fingerprint(self) -> str:
        """Deterministic 12-hex-char digest of the normalized policy."""
        return stable_hash_of(
            [
                self.base_url,
                *(r.pattern for r in self.allowed_domains),
                "|",
                *sorted(self.allowed_schemes),
            ]
        )


class DecisionKind(StrEnum):
    """The three outcomes of a navigation attempt."""

    RENDER_INLINE = "render_inline"
    DELEGATE_EXTERNAL = "delegate_external"
    BLOCK = "block"


class NavigationDecision(BaseModel, frozen=True):
    """Result of routing one candidate URL.

    ``url`` is set only for ``DELEGATE_EXTERNAL`` and ``reason`` only for
    ``BLOCK``.  Use the :meth:`render_inline`, :meth:`delegate_external` and
    :meth:`block` constructors rather than building instances by hand.
    """

    kind: DecisionKind
    url: str | None = None
    reason: str | None = None

    @model_validator(mode="after")
    def _check_variant(self) -> NavigationDecision:
        if self.kind == DecisionKind.DELEGATE_EXTERNAL:
            if not self.url or self.reason is not None:
                raise ValueError("delegate_external requires url and no reason")
        elif self.kind == DecisionKind.BLOCK:
            if not self.reason or self.url is not None:
                raise ValueError("block requires reason and no url")
        elif self.url is not None or self.reason is not None:
            raise ValueError("render_inline carries neither url nor reason")
        return self

    @classmethod
    def render_inline(cls) -> NavigationDecision:
        return cls(kind=DecisionKind.RENDER_INLINE)

    @classmethod
    def delegate_external(cls, url: str) -> NavigationDecision:
        return cls(kind=DecisionKind.DELEGATE_EXTERNAL, url=url)

    @classmethod
    def block(cls, reason: str) -> NavigationDecision:
        return cls(kind=DecisionKind.BLOCK, reason=reason)

    @property
    def allows_navigation(self) -> bool:
        """Whether the embedded surface itself may proceed."""
        return self.kind == DecisionKind.RENDER_INLINE
