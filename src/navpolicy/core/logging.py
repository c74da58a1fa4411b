"""Diagnostics sink and URL-redacting log filter.

Blocked and rejected URLs are reported through a write-only
:class:`DiagnosticsSink`.  The default :class:`LoggingSink` forwards to the
``navpolicy.diagnostics`` logger.  Candidate URLs routinely carry session
tokens in query strings, credentials in the authority, and phone numbers
or addresses in ``tel:`` / ``mailto:`` bodies, so every URL is passed
through :func:`redact_url` before it reaches a handler.
"""

from __future__ import annotations

import logging
import re
from typing import Final, Protocol, runtime_checkable

from navpolicy.core.defaults import DIAGNOSTICS_LOGGER_NAME

_REDACTED: Final[str] = "[REDACTED]"
_MAX_LOGGED_URL: Final[int] = 200

_OPAQUE_PII_SCHEMES: Final[tuple[str, ...]] = ("mailto", "tel", "sms")

_USERINFO_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?P<prefix>[A-Za-z][A-Za-z0-9+.\-]*://)[^/?#@]*@"
)

_URL_IN_TEXT_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(?:[A-Za-z][A-Za-z0-9+.\-]*://|\b(?:"
    + "|".join(_OPAQUE_PII_SCHEMES)
    + r"):)[^\s'\"<>]+",
    re.IGNORECASE,
)


def redact_url(url: object) -> str:
    """Strip the sensitive parts of *url* for logging.

    Removes userinfo, replaces any query string or fragment with a single
    marker, hides the body of ``mailto:`` / ``tel:`` / ``sms:`` links, and
    truncates very long values.  Never raises.

    Args:
        url: Value to redact.  Non-strings are rendered with ``repr``.

    Returns:
        A log-safe rendering of *url*.
    """
    if not isinstance(url, str):
        return repr(url)

    text = url.strip()
    scheme, sep, _ = text.partition(":")
    if sep and scheme.lower() in _OPAQUE_PII_SCHEMES:
        return f"{scheme}:{_REDACTED}"

    text = _USERINFO_PATTERN.sub(lambda m: f"{m.group('prefix')}{_REDACTED}@", text)

    cut = min((i for i in (text.find("?"), text.find("#")) if i != -1), default=-1)
    if cut != -1:
        text = f"{text[:cut]}?{_REDACTED}"

    if len(text) > _MAX_LOGGED_URL:
        text = text[:_MAX_LOGGED_URL] + "..."
    return text


def redact_message(message: str) -> str:
    """Apply :func:`redact_url` to every URL-looking token in *message*."""
    return _URL_IN_TEXT_PATTERN.sub(lambda m: redact_url(m.group(0)), message)


class SanitizingFilter(logging.Filter):
    """A :class:`logging.Filter` that rewrites log records to strip URL secrets.

    Attach to any logger or handler via :func:`install_sanitizing_filter`
    to ensure tokens and personal data embedded in URLs never reach log
    output.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.args:
            record.msg = redact_message(record.getMessage())
            record.args = None
        else:
            record.msg = redact_message(str(record.msg))
        return True


def install_sanitizing_filter(
    logger: logging.Logger | None = None,
    *,
    handler_level: bool = False,
) -> SanitizingFilter:
    """Attach a :class:`SanitizingFilter` to *logger* (or the root logger).

    Args:
        logger: Target logger.  Defaults to the root logger if ``None``.
        handler_level: If ``True``, install on each handler of *logger*
            instead of the logger itself.

    Returns:
        The filter instance that was installed (useful for later removal).
    """
    filt = SanitizingFilter()
    target = logger or logging.getLogger()

    if handler_level:
        for handler in target.handlers:
            handler.addFilter(filt)
    else:
        target.addFilter(filt)

    return filt


@runtime_checkable
class DiagnosticsSink(Protocol):
    """Write-only channel for ``(level, message)`` diagnostic pairs.

    The policy engine only ever writes to a sink; nothing it decides
    depends on what the sink does with the record.
    """

    def __call__(self, level: int, message: str) -> None: ...


class LoggingSink:
    """Diagnostics sink backed by a standard :mod:`logging` logger.

    Messages are redacted before they are handed to the logger, so handlers
    further down never see raw URLs.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(DIAGNOSTICS_LOGGER_NAME)

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def __call__(self, level: int, message: str) -> None:
        self._logger.log(level, "%s", redact_message(message))


def default_sink() -> DiagnosticsSink:
    """Return a :class:`LoggingSink` on the ``navpolicy.diagnostics`` logger."""
    return LoggingSink()
