"""Shared fixtures for the navpolicy test suite."""

from __future__ import annotations

import pytest

from navpolicy.core.types import PolicyConfig


class RecordingSink:
    """Diagnostics sink that keeps every ``(level, message)`` pair."""

    def __init__(self) -> None:
        self.records: list[tuple[int, str]] = []

    def __call__(self, level: int, message: str) -> None:
        self.records.append((level, message))


class FakeHandler:
    """In-memory platform URL handler."""

    def __init__(self, openable: bool = True, *, fail_on: str | None = None) -> None:
        self.openable = openable
        self.fail_on = fail_on
        self.checked: list[str] = []
        self.opened: list[str] = []

    def can_open(self, url: str) -> bool:
        self.checked.append(url)
        if self.fail_on == "can_open":
            raise RuntimeError("platform unavailable")
        return self.openable

    def open(self, url: str) -> None:
        if self.fail_on == "open":
            raise OSError("launch failed")
        self.opened.append(url)


@pytest.fixture()
def policy() -> PolicyConfig:
    """Policy with one exact and one wildcard rule for example.com."""
    return PolicyConfig(
        base_url="https://example.com",
        allowed_domains=["example.com", "*.example.com"],
        allowed_schemes=["https", "mailto", "tel", "sms"],
    )


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def handler() -> FakeHandler:
    return FakeHandler()


@pytest.fixture()
def make_handler():
    """Factory for :class:`FakeHandler` instances with custom behaviour."""
    return FakeHandler
