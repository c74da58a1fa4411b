"""Top-level navigation decision consumed by the embedded-browser host.

Typical flow::

    policy = load_config(Path("configs/shell.yaml")).policy
    router = NavigationRouter(policy)
    decision = router.decide(candidate_url)
    # decision.kind in {RENDER_INLINE, DELEGATE_EXTERNAL, BLOCK}

The order of checks is security-critical and must not be rearranged:

1. sanitize (deny-list), else ``Block("invalid or dangerous URL")``
2. ``https`` on an allowed domain, then ``RenderInline``
3. safe URL (scheme + domain gates), then ``DelegateExternal``
4. otherwise ``Block("navigation not permitted")``

Step 2 requires the secure scheme itself: an allowed non-secure scheme on
an allowed domain is never rendered inline.
"""

from __future__ import annotations

import logging

from navpolicy.core.defaults import (
    REASON_INVALID_URL,
    REASON_NOT_PERMITTED,
    SECURE_SCHEME,
)
from navpolicy.core.logging import DiagnosticsSink, default_sink, redact_url
from navpolicy.core.types import NavigationDecision, PolicyConfig
from navpolicy.policy.classifier import is_safe_url
from navpolicy.policy.matchers import extract_scheme, is_allowed_domain
from navpolicy.policy.sanitize import sanitize_url


def decide(
    config: PolicyConfig,
    raw_url: object,
    *,
    sink: DiagnosticsSink | None = None,
) -> NavigationDecision:
    """Classify one navigation attempt.

    Pure over ``(config, raw_url)``: no I/O beyond diagnostics, no state
    carried between calls.  Never raises for any input.

    Args:
        config: Active navigation policy.
        raw_url: Candidate URL exactly as the embedded browser reported it.
        sink: Diagnostics sink for rejected URLs.

    Returns:
        The :class:`~navpolicy.core.types.NavigationDecision` for *raw_url*.
    """
    sink = sink or default_sink()

    sanitized = sanitize_url(raw_url, sink=sink)
    if not sanitized:
        return NavigationDecision.block(REASON_INVALID_URL)

    if extract_scheme(sanitized) == SECURE_SCHEME and is_allowed_domain(config, sanitized):
        return NavigationDecision.render_inline()

    if is_safe_url(config, sanitized):
        return NavigationDecision.delegate_external(sanitized)

    sink(logging.WARNING, f"Blocked navigation to: {redact_url(sanitized)}")
    return NavigationDecision.block(REASON_NOT_PERMITTED)


class NavigationRouter:
    """Binds a policy and a diagnostics sink to :func:`decide`.

    Holds no per-call state; concurrent callers share the same immutable
    policy and get independent decisions.
    """

    def __init__(self, config: PolicyConfig, sink: DiagnosticsSink | None = None) -> None:
        self._config = config
        self._sink = sink or default_sink()

    @property
    def config(self) -> PolicyConfig:
        return self._config

    def decide(self, raw_url: object) -> NavigationDecision:
        return decide(self._config, raw_url, sink=self._sink)
