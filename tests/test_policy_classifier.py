"""Tests for the safety classifier predicate."""

from __future__ import annotations

import pytest

from navpolicy.core.types import PolicyConfig
from navpolicy.policy.classifier import is_safe_url


class TestIsSafeUrl:
    def test_allowed_https(self, policy: PolicyConfig) -> None:
        assert is_safe_url(policy, "https://example.com/page")
        assert is_safe_url(policy, "https://api.example.com/x")

    def test_opaque_allowed_schemes(self, policy: PolicyConfig) -> None:
        assert is_safe_url(policy, "tel:+15551234567")
        assert is_safe_url(policy, "mailto:someone@example.com")
        assert is_safe_url(policy, "sms:+15551234567")

    def test_disallowed_domain(self, policy: PolicyConfig) -> None:
        assert not is_safe_url(policy, "https://evil.com")

    def test_allowed_scheme_with_foreign_host(self, policy: PolicyConfig) -> None:
        assert not is_safe_url(policy, "mailto://evil.com/x")

    def test_disallowed_scheme(self, policy: PolicyConfig) -> None:
        assert not is_safe_url(policy, "http://example.com")
        assert not is_safe_url(policy, "ftp://example.com")
        assert not is_safe_url(policy, "market://details?id=x")

    @pytest.mark.parametrize("url", ["", None, 7, "garbage", "https://"])
    def test_empty_or_malformed(self, policy: PolicyConfig, url: object) -> None:
        assert not is_safe_url(policy, url)

    @pytest.mark.parametrize("url", [
        "javascript:alert(1)",
        "JAVASCRIPT://example.com/%0Aalert(1)",
        "data:text/html,hi",
        "file:///etc/passwd",
        "VbScript:msgbox(1)",
    ])
    def test_dangerous_schemes_unconditional(self, url: str) -> None:
        permissive = PolicyConfig(
            allowed_domains=["example.com", "*.example.com"],
            allowed_schemes=["https", "javascript", "data", "file", "vbscript"],
        )
        assert not is_safe_url(permissive, url)

