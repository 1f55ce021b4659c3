"""Configuration module for request-authz."""

from __future__ import annotations

from request_authz.config._config import (
    ComponentConfig,
    PolicyConfig,
    configure,
    get_global_config,
)

__all__ = ["ComponentConfig", "PolicyConfig", "configure", "get_global_config"]
