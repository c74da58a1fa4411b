"""Hand-off of approved URLs to the host platform's URL handlers."""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from navpolicy.core.logging import DiagnosticsSink, default_sink, redact_url
from navpolicy.core.types import PolicyConfig
from navpolicy.policy.matchers import is_allowed_scheme


@runtime_checkable
class UrlHandler(Protocol):
    """Platform URL-handler service (dialer, mail client, SMS app, ...)."""

    def can_open(self, url: str) -> bool: ...

    def open(self, url: str) -> None: ...


class ExternalDelegate:
    """Open ``DelegateExternal`` URLs through a :class:`UrlHandler`.

    :meth:`delegate` re-checks the scheme allow-list before touching the
    platform, so a stale decision cannot smuggle a URL out.  It never
    raises: handler failures come back as ``False`` plus an ``ERROR``
    diagnostic.
    """

    def __init__(
        self,
        config: PolicyConfig,
        handler: UrlHandler,
        sink: DiagnosticsSink | None = None,
    ) -> None:
        self._config = config
        self._handler = handler
        self._sink = sink or default_sink()

    def delegate(self, url: str) -> bool:
        """Open *url* externally.

        Returns:
            ``True`` if a handler existed and was invoked, ``False`` if the
            scheme is not allowed, no handler exists, or the platform failed.
        """
        if not is_allowed_scheme(self._config, url):
            self._sink(
                logging.WARNING,
                f"Blocked URL with disallowed scheme: {redact_url(url)}",
            )
            return False

        try:
            if not self._handler.can_open(url):
                return False
            self._handler.open(url)
        except Exception as exc:
            self._sink(
                logging.ERROR,
                f"Error opening external URL {redact_url(url)}: {exc!r}",
            )
            return False
        return True
