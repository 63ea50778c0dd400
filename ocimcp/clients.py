"""
OCI client set — one authenticated SDK client per service family.

Clients are built once at startup from the credential profile and shared
read-only by every tool invocation.  A failed initialization does not stop
the server: the resulting :class:`ClientSet` simply has no clients, and any
tool that needs one fails with :class:`ServiceUnavailableError`.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any

import oci

from ocimcp.config import Settings, resolve_region, uses_session_token

logger = logging.getLogger("oci-mcp.clients")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class ServiceUnavailableError(Exception):
    """Raised when a tool needs a client that failed to initialize."""


# ---------------------------------------------------------------------------
# Service families — attribute name -> SDK client class
# ---------------------------------------------------------------------------

SERVICE_FAMILIES: dict[str, Any] = {
    "compute": oci.core.ComputeClient,
    "object_storage": oci.object_storage.ObjectStorageClient,
    "block_storage": oci.core.BlockstorageClient,
    "virtual_network": oci.core.VirtualNetworkClient,
    "database": oci.database.DatabaseClient,
    "identity": oci.identity.IdentityClient,
}


@dataclass(frozen=True)
class ClientSet:
    compute: Any = None
    object_storage: Any = None
    block_storage: Any = None
    virtual_network: Any = None
    database: Any = None
    identity: Any = None
    region: str | None = None
    tenancy_ocid: str | None = None
    init_error: str | None = None

    @classmethod
    def empty(cls, reason: str) -> "ClientSet":
        """A client set with every family unavailable."""
        return cls(init_error=reason)

    def require(self, family: str) -> Any:
        """Return the client for *family* or raise ServiceUnavailableError."""
        if family not in SERVICE_FAMILIES:
            raise ValueError(f"Unknown service family: {family}")
        client = getattr(self, family)
        if client is None:
            reason = self.init_error or "not initialized"
            raise ServiceUnavailableError(f"OCI {family} client is unavailable: {reason}")
        return client

    @property
    def available(self) -> list[str]:
        return [name for name in SERVICE_FAMILIES if getattr(self, name) is not None]


# ---------------------------------------------------------------------------
# Initialization
# ---------------------------------------------------------------------------

def _session_token_signer(profile_config: dict) -> Any:
    """Build a SecurityTokenSigner from the profile's token file and key."""
    token_file = os.path.expanduser(profile_config["security_token_file"])
    with open(token_file, encoding="utf-8") as f:
        token = f.read().strip()
    private_key = oci.signer.load_private_key_from_file(profile_config["key_file"])
    return oci.auth.signers.SecurityTokenSigner(token, private_key)


def _client_kwargs(settings: Settings, profile_config: dict, region: str) -> dict:
    """Return the (config, signer) keyword arguments shared by every client."""
    if uses_session_token(settings.config_file):
        logger.info("Using session token authentication (profile %s)", settings.profile)
        return {
            "config": {"region": region},
            "signer": _session_token_signer(profile_config),
        }

    logger.info("Using API key authentication (profile %s)", settings.profile)
    config = dict(profile_config)
    config["region"] = region
    return {"config": config}


def init_clients(settings: Settings) -> ClientSet:
    """Create the OCI clients for every service family.

    Never raises: a missing or malformed credential file, or a client that
    cannot be constructed, is logged and reflected in the returned set.
    """
    try:
        profile_config = oci.config.from_file(
            file_location=settings.config_file,
            profile_name=settings.profile,
        )
        region = resolve_region(settings, profile_config)
        kwargs = _client_kwargs(settings, profile_config, region)
    except Exception as exc:
        logger.error("Failed to initialize OCI clients: %s", exc)
        return ClientSet.empty(str(exc) or type(exc).__name__)

    clients: dict[str, Any] = {}
    errors: list[str] = []
    for family, client_cls in SERVICE_FAMILIES.items():
        try:
            clients[family] = client_cls(**kwargs)
        except Exception as exc:
            logger.error("Failed to initialize OCI %s client: %s", family, exc)
            errors.append(f"{family}: {exc}")

    client_set = ClientSet(
        region=region,
        tenancy_ocid=profile_config.get("tenancy"),
        init_error="; ".join(errors) or None,
        **clients,
    )
    if errors:
        logger.warning("OCI clients available: %s", ", ".join(client_set.available) or "none")
    else:
        logger.info(
            "OCI clients initialized successfully (region %s): %s",
            region,
            ", ".join(client_set.available),
        )
    return client_set
