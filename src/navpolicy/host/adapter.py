"""Glue between the embedded browser's callbacks and the navigation engine.

The host registers :meth:`NavigationInterceptor.on_before_navigate` as its
"should start load" hook.  The browser surface proceeds only when the hook
returns ``True``; delegated and blocked URLs never load in-app.

The load callbacks (``on_load_start``, ``on_load_progress``,
``on_load_end``, ``on_error``, ``on_http_error``) feed the interceptor's
:class:`~navpolicy.host.state.LoadStateTracker`.  Policy decisions never
touch the tracker: a ``Block`` is not a loading error.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, Future

from navpolicy.core.config import ErrorMessages
from navpolicy.core.types import DecisionKind, NavigationDecision
from navpolicy.host.state import LoadStateTracker, NavigationError, select_error_message
from navpolicy.policy.delegate import ExternalDelegate
from navpolicy.policy.router import NavigationRouter

logger = logging.getLogger(__name__)


class NavigationInterceptor:
    """Adapter from the host's browser callbacks to the router and tracker.

    When an *executor* is supplied, external hand-offs are submitted to it
    and not awaited; otherwise they run inline and their result is ignored.
    Either way the return value of :meth:`on_before_navigate` depends only
    on the router's decision.

    Args:
        router: Router bound to the active policy.
        delegate: Platform hand-off for ``DELEGATE_EXTERNAL`` decisions.
        executor: Optional executor for fire-and-forget hand-offs.
        tracker: Load-state tracker fed by the load callbacks.  A fresh
            one is created when omitted.
        messages: User-facing error texts for :attr:`error_message`.
    """

    def __init__(
        self,
        router: NavigationRouter,
        delegate: ExternalDelegate,
        executor: Executor | None = None,
        *,
        tracker: LoadStateTracker | None = None,
        messages: ErrorMessages | None = None,
    ) -> None:
        self._router = router
        self._delegate = delegate
        self._executor = executor
        self._tracker = tracker if tracker is not None else LoadStateTracker()
        self._messages = messages if messages is not None else ErrorMessages()
        self._last_decision: NavigationDecision | None = None

    @property
    def tracker(self) -> LoadStateTracker:
        return self._tracker

    @property
    def last_decision(self) -> NavigationDecision | None:
        """Decision made by the most recent :meth:`on_before_navigate` call."""
        return self._last_decision

    @property
    def error_message(self) -> str | None:
        """Message for the current load failure, or ``None`` when there is none."""
        error = self._tracker.error
        if error is None:
            return None
        return select_error_message(error, self._messages)

    def on_before_navigate(self, candidate_url: object) -> bool:
        """Return whether the embedded surface may load *candidate_url*."""
        decision = self._router.decide(candidate_url)
        self._last_decision = decision

        if decision.kind == DecisionKind.DELEGATE_EXTERNAL and decision.url:
            self._hand_off(decision.url)

        return decision.allows_navigation

    def on_load_start(self) -> None:
        self._tracker.load_started()

    def on_load_progress(self, value: float) -> None:
        self._tracker.load_progressed(value)

    def on_load_end(self) -> None:
        self._tracker.load_finished()

    def on_error(self, code: int, description: str = "", domain: str | None = None) -> None:
        """Record a network-level failure reported by the browser."""
        logger.warning("Page load failed with code %d", code)
        self._tracker.load_failed(
            NavigationError(code=code, description=description, domain=domain)
        )

    def on_http_error(self, status_code: int) -> None:
        logger.warning("Page load failed with HTTP status %d", status_code)
        self._tracker.http_failed(status_code)

    def _hand_off(self, url: str) -> None:
        if self._executor is None:
            self._delegate.delegate(url)
            return
        try:
            future: Future[bool] = self._executor.submit(self._delegate.delegate, url)
        except RuntimeError:
            logger.warning("Executor unavailable; external hand-off dropped", exc_info=True)
            return
        future.add_done_callback(_log_hand_off_failure)


def _log_hand_off_failure(future: Future[bool]) -> None:
    exc = future.exception()
    if exc is not None:
        logger.error("External hand-off crashed", exc_info=exc)
