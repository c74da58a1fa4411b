"""Shell configuration: navigation policy plus embedded-browser settings.

Loaded once at startup from YAML and treated as read-only afterwards.

Typical flow::

    config = load_config(Path("configs/shell.yaml"))
    router = NavigationRouter(config.policy)

Example file::

    app_name: WebViewApp
    policy:
      base_url: https://example.com
      allowed_domains: [example.com, www.example.com, "*.example.com"]
      allowed_schemes: [https, mailto, tel, sms]
    webview:
      javascript_enabled: true
      mixed_content_mode: never
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, model_validator

from navpolicy.core.defaults import (
    DEFAULT_APP_NAME,
    DEFAULT_DEEP_LINK_SCHEME,
    DEFAULT_MSG_BLOCKED_NAVIGATION,
    DEFAULT_MSG_LOAD_ERROR,
    DEFAULT_MSG_NO_INTERNET,
    DEFAULT_MSG_SSL_ERROR,
    SECURE_SCHEME,
)
from navpolicy.core.types import PolicyConfig
from navpolicy.policy.matchers import extract_scheme, is_allowed_domain

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Config models
# ---------------------------------------------------------------------------


class WebViewSettings(BaseModel, frozen=True):
    """Embedded-browser engine switches passed through to the host."""

    javascript_enabled: bool = True
    dom_storage_enabled: bool = True
    allow_file_access: bool = False
    allow_file_access_from_file_urls: bool = False
    allow_universal_access_from_file_urls: bool = False
    mixed_content_mode: Literal["never", "always", "compatibility"] = "never"
    cache_enabled: bool = True
    cache_mode: Literal[
        "LOAD_DEFAULT",
        "LOAD_CACHE_ELSE_NETWORK",
        "LOAD_NO_CACHE",
        "LOAD_CACHE_ONLY",
    ] = "LOAD_DEFAULT"
    third_party_cookies_enabled: bool = True
    geolocation_enabled: bool = False
    media_playback_requires_user_action: bool = False
    allows_inline_media_playback: bool = True


class ErrorMessages(BaseModel, frozen=True):
    """User-facing strings for the loading-error screen."""

    no_internet: str = DEFAULT_MSG_NO_INTERNET
    load_error: str = DEFAULT_MSG_LOAD_ERROR
    blocked_navigation: str = DEFAULT_MSG_BLOCKED_NAVIGATION
    ssl_error: str = DEFAULT_MSG_SSL_ERROR


class DeepLinkConfig(BaseModel, frozen=True):
    scheme: str = Field(default=DEFAULT_DEEP_LINK_SCHEME, min_length=1, pattern=r"^[a-z][a-z0-9+.\-]*$")
    enabled: bool = True


class ShellConfig(BaseModel, frozen=True):
    """Full shell configuration.

    The ``policy`` section is the only part the navigation engine reads;
    the remaining sections are passed through to the host unchanged.
    """

    app_name: str = Field(default=DEFAULT_APP_NAME, min_length=1)
    policy: PolicyConfig = Field(default_factory=PolicyConfig)
    webview: WebViewSettings = Field(default_factory=WebViewSettings)
    error_messages: ErrorMessages = Field(default_factory=ErrorMessages)
    deep_link: DeepLinkConfig = Field(default_factory=DeepLinkConfig)

    @model_validator(mode="after")
    def _validate_base_url(self) -> ShellConfig:
        base_url = self.policy.base_url
        if extract_scheme(base_url) != SECURE_SCHEME:
            raise ValueError(
                f"base_url {base_url!r} must use the {SECURE_SCHEME!r} scheme"
            )
        if not is_allowed_domain(self.policy, base_url):
            raise ValueError(
                f"base_url {base_url!r} is not covered by allowed_domains"
            )
        return self


# ---------------------------------------------------------------------------
# YAML I/O
# ---------------------------------------------------------------------------


def load_config(path: Path) -> ShellConfig:
    """Load and validate a shell config from a YAML file.

    An empty file yields the defaults.

    Args:
        path: Path to a YAML file matching the shell config schema.

    Returns:
        Validated ``ShellConfig``.

    Raises:
        FileNotFoundError: If *path* does not exist.
        yaml.YAMLError / ValidationError: If the YAML is malformed or invalid.
    """
    raw = yaml.safe_load(path.read_text("utf-8"))
    if raw is None:
        raw = {}
    config = ShellConfig.model_validate(raw)
    logger.info(
        "Loaded shell config from %s (policy=%s)", path, config.policy.fingerprint
    )
    return config


def save_config(config: ShellConfig, path: Path) -> Path:
    """Serialize a shell config to YAML.

    Args:
        config: Validated config to write.
        path: Destination file path.

    Returns:
        The *path* that was written.
    """
    data = config.model_dump(mode="json")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.dump(data, default_flow_style=False, sort_keys=False), "utf-8")
    return path


def default_config() -> ShellConfig:
    """Create the stock configuration for ``https://example.com``."""
    return ShellConfig()
