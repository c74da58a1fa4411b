"""The "may this URL ever be acted upon" predicate.

:func:`is_safe_url` does not decide *how* a URL is handled; that is the
router's job.  It repeats the dangerous-scheme check on its own so that it
stays correct when called without the sanitizer in front of it.
"""

from __future__ import annotations

from navpolicy.core.defaults import DANGEROUS_SCHEME_PREFIXES
from navpolicy.core.types import PolicyConfig
from navpolicy.policy.matchers import (
    has_authority,
    is_allowed_domain,
    is_allowed_scheme,
)


def is_safe_url(config: PolicyConfig, url: object) -> bool:
    """Whether *url* passes the dangerous-scheme, scheme and domain gates.

    Opaque URLs without a ``//host`` part (``tel:``, ``mailto:``, ``sms:``)
    have nothing for the domain gate to check and pass it; any URL that
    does name a host must match the domain allow-list.

    Args:
        config: Active navigation policy.
        url: Candidate URL, normally already sanitized.

    Returns:
        ``True`` only when every gate accepts *url*.
    """
    if not isinstance(url, str) or not url:
        return False

    lowered = url.lower()
    if any(lowered.startswith(prefix) for prefix in DANGEROUS_SCHEME_PREFIXES):
        return False

    if not is_allowed_scheme(config, url):
        return False

    if not has_authority(url):
        return True
    return is_allowed_domain(config, url)
