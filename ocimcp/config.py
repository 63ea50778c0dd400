"""
Environment-sourced settings for the OCI tool server.

Everything here is resolved once at process start.  The credential file
itself is parsed by the OCI SDK in :mod:`ocimcp.clients`; this module only
decides *where* it lives and which profile to use.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

DEFAULT_CONFIG_FILE = str(Path.home() / ".oci" / "config")
DEFAULT_PROFILE = "DEFAULT"
DEFAULT_REGION = "us-chicago-1"
DEFAULT_LOG_LEVEL = "WARNING"

# Marker key that selects session-token signing over API-key signing.
SESSION_TOKEN_MARKER = "security_token_file"


@dataclass(frozen=True)
class Settings:
    config_file: str = DEFAULT_CONFIG_FILE
    profile: str = DEFAULT_PROFILE
    tenancy_ocid: str | None = None
    region: str | None = None
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from ``OCI_*`` environment variables.

        Unset or empty variables fall back to the module defaults.
        """
        env = os.environ if environ is None else environ
        return cls(
            config_file=env.get("OCI_CONFIG_FILE") or DEFAULT_CONFIG_FILE,
            profile=env.get("OCI_PROFILE") or DEFAULT_PROFILE,
            tenancy_ocid=env.get("OCI_TENANCY_OCID") or None,
            region=env.get("OCI_REGION") or None,
            log_level=(env.get("OCI_MCP_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        )


def get_compartment_id(params: Mapping[str, Any], default: str | None = None) -> str | None:
    """Return the compartment a tool call should target.

    An explicit ``compartment_id`` argument always wins; otherwise the
    tenancy fallback is used.  ``None`` is passed through so the OCI API
    reports the missing compartment itself.
    """
    explicit = params.get("compartment_id")
    if explicit:
        return explicit
    return default


def uses_session_token(config_file: str) -> bool:
    """True if the credential file configures session-token auth.

    This is a plain substring check on the raw file, not a parse.
    """
    with open(os.path.expanduser(config_file), encoding="utf-8") as f:
        return SESSION_TOKEN_MARKER in f.read()


def resolve_region(settings: Settings, profile_config: Mapping[str, Any]) -> str:
    """Pick the target region: env override, then the profile, then the default."""
    return settings.region or profile_config.get("region") or DEFAULT_REGION
