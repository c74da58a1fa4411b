"""Scheme and domain allow-list matching.

Both matchers parse the candidate URL through :func:`parse_url`, the single
parse boundary of the engine.  A URL that cannot be parsed is never
allowed: every predicate here returns ``False`` instead of raising.
"""

from __future__ import annotations

import re
from typing import Final
from urllib.parse import SplitResult, urlsplit

from navpolicy.core.defaults import HOST_REQUIRED_SCHEMES
from navpolicy.core.types import DomainRule, PolicyConfig

# Whitespace, C0/C1 control characters and backslashes.  Browsers silently
# drop some of these ("java\tscript:") and read a backslash as "/" in web URLs,
# which urlsplit does not, so their presence makes the URL unparseable here.
_FORBIDDEN_CHARS: Final[re.Pattern[str]] = re.compile(r"[\x00-\x20\x7f-\x9f\\]")


def parse_url(url: object) -> SplitResult | None:
    """Split *url* into components, or return ``None`` if it is malformed.

    A URL is malformed when it is not a string, contains whitespace,
    control characters or backslashes, has no scheme, is rejected by
    :func:`urllib.parse.urlsplit`, uses a web scheme (``http``, ``https``,
    ``ws``, ``wss``, ``ftp``) without a host, or carries a bad port.
    """
    if not isinstance(url, str) or not url:
        return None
    if _FORBIDDEN_CHARS.search(url):
        return None
    try:
        parts = urlsplit(url)
        if not parts.scheme:
            return None
        if parts.netloc:
            parts.port  # raises ValueError for out-of-range / non-numeric ports
        if parts.scheme in HOST_REQUIRED_SCHEMES and not parts.hostname:
            return None
    except ValueError:
        return None
    return parts


def extract_scheme(url: object) -> str:
    """Return the scheme of *url* without its trailing ``:``, or ``""``."""
    parts = parse_url(url)
    return parts.scheme if parts is not None else ""


def extract_hostname(url: object) -> str:
    """Return the lower-cased hostname of *url*, or ``""`` if it has none."""
    parts = parse_url(url)
    if parts is None:
        return ""
    return (parts.hostname or "").lower()


def has_authority(url: object) -> bool:
    """Whether *url* parses and carries a ``//host`` authority component."""
    parts = parse_url(url)
    return parts is not None and bool(parts.netloc)


def match_domain_rule(rule: DomainRule, hostname: str) -> bool:
    """Check one allow-list rule against an already lower-cased *hostname*.

    Wildcard rules ``*.base`` match ``base`` itself and anything ending in
    ``.base``; exact rules require equality.  ``evilbase.com`` therefore
    never matches ``*.base.com``.
    """
    if not hostname:
        return False
    if rule.is_wildcard:
        base = rule.base
        return hostname == base or hostname.endswith("." + base)
    return hostname == rule.pattern


def is_allowed_scheme(config: PolicyConfig, url: object) -> bool:
    """Whether the scheme of *url* is in ``config.allowed_schemes``."""
    parts = parse_url(url)
    if parts is None:
        return False
    return parts.scheme in config.allowed_schemes


def is_allowed_domain(config: PolicyConfig, url: object) -> bool:
    """Whether the hostname of *url* matches any rule in the domain allow-list."""
    hostname = extract_hostname(url)
    if not hostname:
        return False
    return any(match_domain_rule(rule, hostname) for rule in config.allowed_domains)
