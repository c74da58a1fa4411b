"""Tests for URL parsing and the scheme / domain allow-list matchers."""

from __future__ import annotations

import pytest

from navpolicy.core.types import DomainRule, PolicyConfig
from navpolicy.policy.matchers import (
    extract_hostname,
    extract_scheme,
    has_authority,
    is_allowed_domain,
    is_allowed_scheme,
    match_domain_rule,
    parse_url,
)


class TestParseUrl:
    @pytest.mark.parametrize("url", [
        "https://example.com/page",
        "tel:+15551234567",
        "mailto:someone@example.com",
        "https://user:pw@example.com:8443/x?y=1#z",
    ])
    def test_well_formed(self, url: str) -> None:
        assert parse_url(url) is not None

    @pytest.mark.parametrize("url", [
        None,
        42,
        "",
        "not a url",
        "example.com/page",
        "/relative/path",
        "https://",
        "https:example.com",
        "https://[::1",
        "https://example.com:99999/",
        "https://example.com:abc/",
        "java\tscript:alert(1)",
        "https://exa mple.com",
        "https://evil.com\\@example.com/",
        "https:\\\\evil.com/",
    ])
    def test_malformed_fails_closed(self, url: object) -> None:
        assert parse_url(url) is None

    def test_extract_scheme(self) -> None:
        assert extract_scheme("HTTPS://Example.com") == "https"
        assert extract_scheme("tel:123") == "tel"
        assert extract_scheme("garbage") == ""

    def test_extract_hostname(self) -> None:
        assert extract_hostname("https://API.Example.COM/x") == "api.example.com"
        assert extract_hostname("tel:+1555") == ""
        assert extract_hostname("::::") == ""

    def test_backslash_never_yields_a_host(self) -> None:
        # Browsers read "\" as "/", so the real host here is evil.com.
        assert extract_hostname("https://evil.com\\@example.com/") == ""
        assert not has_authority("https://evil.com\\@example.com/")

    def test_has_authority(self) -> None:
        assert has_authority("https://example.com")
        assert not has_authority("mailto:a@example.com")
        assert not has_authority("garbage")


class TestMatchDomainRule:
    def test_wildcard_matches_base(self) -> None:
        assert match_domain_rule(DomainRule(pattern="*.base.com"), "base.com")

    def test_wildcard_matches_subdomains(self) -> None:
        rule = DomainRule(pattern="*.base.com")
        assert match_domain_rule(rule, "a.base.com")
        assert match_domain_rule(rule, "a.b.c.base.com")

    def test_wildcard_no_substring_leakage(self) -> None:
        rule = DomainRule(pattern="*.base.com")
        assert not match_domain_rule(rule, "evilbase.com")
        assert not match_domain_rule(rule, "base.com.evil.net")
        assert not match_domain_rule(rule, "notbase.com")

    def test_exact_requires_equality(self) -> None:
        rule = DomainRule(pattern="example.com")
        assert match_domain_rule(rule, "example.com")
        assert not match_domain_rule(rule, "www.example.com")
        assert not match_domain_rule(rule, "example.com.evil.net")

    def test_empty_hostname_never_matches(self) -> None:
        assert not match_domain_rule(DomainRule(pattern="*.base.com"), "")


class TestIsAllowedScheme:
    def test_allowed(self, policy: PolicyConfig) -> None:
        assert is_allowed_scheme(policy, "https://example.com")
        assert is_allowed_scheme(policy, "tel:+15551234567")
        assert is_allowed_scheme(policy, "mailto:a@b.c")
        assert is_allowed_scheme(policy, "sms:+1555")

    def test_not_allowed(self, policy: PolicyConfig) -> None:
        assert not is_allowed_scheme(policy, "http://example.com")
        assert not is_allowed_scheme(policy, "ftp://example.com")
        assert not is_allowed_scheme(policy, "intent://scan")

    def test_case_sensitive_against_config(self) -> None:
        cfg = PolicyConfig(allowed_domains=["example.com"], allowed_schemes=["HTTPS"])
        assert not is_allowed_scheme(cfg, "https://example.com")

    def test_unparseable_is_false(self, policy: PolicyConfig) -> None:
        assert not is_allowed_scheme(policy, "not a url")
        assert not is_allowed_scheme(policy, None)


class TestIsAllowedDomain:
    def test_exact_and_wildcard(self, policy: PolicyConfig) -> None:
        assert is_allowed_domain(policy, "https://example.com/page")
        assert is_allowed_domain(policy, "https://api.example.com/x")
        assert is_allowed_domain(policy, "https://deep.api.example.com")

    def test_case_insensitive(self, policy: PolicyConfig) -> None:
        assert is_allowed_domain(policy, "https://API.EXAMPLE.com")

    def test_not_allowed(self, policy: PolicyConfig) -> None:
        assert not is_allowed_domain(policy, "https://evil.com")
        assert not is_allowed_domain(policy, "https://evilexample.com")
        assert not is_allowed_domain(policy, "https://example.com.evil.com")

    def test_userinfo_does_not_spoof_host(self, policy: PolicyConfig) -> None:
        assert not is_allowed_domain(policy, "https://example.com@evil.com/")

    def test_backslash_does_not_spoof_host(self, policy: PolicyConfig) -> None:
        assert not is_allowed_domain(policy, "https://evil.com\\@example.com/")

    def test_scheme_irrelevant(self, policy: PolicyConfig) -> None:
        assert is_allowed_domain(policy, "http://example.com")

    def test_hostless_is_false(self, policy: PolicyConfig) -> None:
        assert not is_allowed_domain(policy, "tel:+15551234567")

    def test_unparseable_is_false(self, policy: PolicyConfig) -> None:
        assert not is_allowed_domain(policy, "https://[::1")
        assert not is_allowed_domain(policy, 12345)
