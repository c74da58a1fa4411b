"""Centralised default constants for navpolicy.

Every project-wide magic string / number lives here.
Import these instead of hard-coding values in function signatures or CLI options.
"""

from __future__ import annotations

from typing import Final

# ── Shell identity ──
DEFAULT_APP_NAME: Final[str] = "WebViewApp"
DEFAULT_BASE_URL: Final[str] = "https://example.com"
DEFAULT_CONFIG_PATH: Final[str] = "configs/shell.yaml"

# ── Navigation policy ──
DEFAULT_ALLOWED_DOMAINS: Final[tuple[str, ...]] = (
    "example.com",
    "www.example.com",
    "*.example.com",
)
DEFAULT_ALLOWED_SCHEMES: Final[tuple[str, ...]] = ("https", "mailto", "tel", "sms")

SECURE_SCHEME: Final[str] = "https"
INSECURE_SCHEME: Final[str] = "http"
WILDCARD_PREFIX: Final[str] = "*."

DANGEROUS_SCHEME_PREFIXES: Final[tuple[str, ...]] = (
    "javascript:",
    "data:",
    "file:",
    "vbscript:",
)

# Schemes that are meaningless without a host component.
HOST_REQUIRED_SCHEMES: Final[frozenset[str]] = frozenset(
    {"http", "https", "ws", "wss", "ftp"}
)

# ── Block reasons ──
REASON_INVALID_URL: Final[str] = "invalid or dangerous URL"
REASON_NOT_PERMITTED: Final[str] = "navigation not permitted"

# ── Loading errors ──
NO_INTERNET_ERROR_CODES: Final[frozenset[int]] = frozenset({-1009, -1001})

DEFAULT_MSG_NO_INTERNET: Final[str] = (
    "No internet connection. Please check your network settings."
)
DEFAULT_MSG_LOAD_ERROR: Final[str] = "Failed to load the page. Please try again."
DEFAULT_MSG_BLOCKED_NAVIGATION: Final[str] = "Navigation to this URL is not allowed."
DEFAULT_MSG_SSL_ERROR: Final[str] = "SSL certificate error. Cannot load insecure content."

# ── Deep links ──
DEFAULT_DEEP_LINK_SCHEME: Final[str] = "webviewapp"

# ── Diagnostics ──
DIAGNOSTICS_LOGGER_NAME: Final[str] = "navpolicy.diagnostics"
