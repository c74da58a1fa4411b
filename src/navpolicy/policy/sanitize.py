"""Deny-list gate that runs before any allow-list check.

Sanitization here means rejection, not normalization: a URL either comes
back trimmed and otherwise untouched, or comes back as ``""``.
"""

from __future__ import annotations

import logging

from navpolicy.core.defaults import DANGEROUS_SCHEME_PREFIXES, INSECURE_SCHEME
from navpolicy.core.logging import DiagnosticsSink, default_sink, redact_url


def sanitize_url(raw: object, *, sink: DiagnosticsSink | None = None) -> str:
    """Trim *raw* and reject script-capable schemes.

    The prefix check is case-insensitive and covers ``javascript:``,
    ``data:``, ``file:`` and ``vbscript:``.  No domain or scheme allow-list
    can override it.

    Args:
        raw: Candidate URL as received from the embedded browser.
        sink: Diagnostics sink notified on rejection.  Defaults to the
            ``navpolicy.diagnostics`` logger.

    Returns:
        The trimmed URL, or ``""`` when the input is rejected.
    """
    url = raw.strip() if isinstance(raw, str) else ""
    if not url:
        (sink or default_sink())(logging.WARNING, "Blocked invalid URL")
        return ""

    lowered = url.lower()
    for prefix in DANGEROUS_SCHEME_PREFIXES:
        if lowered.startswith(prefix):
            (sink or default_sink())(
                logging.WARNING, f"Blocked dangerous URL: {redact_url(url)}"
            )
            return ""

    return url


def is_insecure_url(url: object) -> bool:
    """Whether *url* uses plain ``http:`` (case-insensitive)."""
    if not isinstance(url, str):
        return False
    return url.strip().lower().startswith(INSECURE_SCHEME + ":")
