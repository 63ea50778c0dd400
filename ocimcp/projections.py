"""
Response projections — reduce OCI SDK models to the tool wire vocabulary.

Each field set is a tuple of ``(wire_name, sdk_attribute)`` pairs.  The wire
names are the external contract and must not change; the SDK attribute names
follow the Python SDK's snake_case models.
"""

from __future__ import annotations

import json
from datetime import date, datetime
from typing import Any, Iterable

FieldSet = tuple[tuple[str, str], ...]


# ---------------------------------------------------------------------------
# Field sets
# ---------------------------------------------------------------------------

INSTANCE_SUMMARY_FIELDS: FieldSet = (
    ("id", "id"),
    ("displayName", "display_name"),
    ("shape", "shape"),
    ("lifecycleState", "lifecycle_state"),
    ("availabilityDomain", "availability_domain"),
    ("region", "region"),
    ("timeCreated", "time_created"),
)

INSTANCE_DETAIL_FIELDS: FieldSet = (
    ("id", "id"),
    ("displayName", "display_name"),
    ("shape", "shape"),
    ("lifecycleState", "lifecycle_state"),
    ("availabilityDomain", "availability_domain"),
    ("faultDomain", "fault_domain"),
    ("region", "region"),
    ("imageId", "image_id"),
    ("timeCreated", "time_created"),
    ("metadata", "metadata"),
    ("shapeConfig", "shape_config"),
)

SHAPE_FIELDS: FieldSet = (
    ("shape", "shape"),
    ("processorDescription", "processor_description"),
    ("ocpus", "ocpus"),
    ("memoryInGBs", "memory_in_gbs"),
    ("networkingBandwidthInGbps", "networking_bandwidth_in_gbps"),
    ("maxVnicAttachments", "max_vnic_attachments"),
    ("gpus", "gpus"),
    ("isFlexible", "is_flexible"),
)

# Shared by instance actions and autonomous database start/stop.
LIFECYCLE_ACTION_FIELDS: FieldSet = (
    ("id", "id"),
    ("displayName", "display_name"),
    ("lifecycleState", "lifecycle_state"),
)

BUCKET_FIELDS: FieldSet = (
    ("name", "name"),
    ("namespace", "namespace"),
    ("compartmentId", "compartment_id"),
    ("createdBy", "created_by"),
    ("timeCreated", "time_created"),
    ("etag", "etag"),
)

CREATED_BUCKET_FIELDS: FieldSet = (
    ("name", "name"),
    ("namespace", "namespace"),
    ("compartmentId", "compartment_id"),
    ("timeCreated", "time_created"),
)

OBJECT_FIELDS: FieldSet = (
    ("name", "name"),
    ("size", "size"),
    ("md5", "md5"),
    ("timeCreated", "time_created"),
    ("timeModified", "time_modified"),
)

VOLUME_FIELDS: FieldSet = (
    ("id", "id"),
    ("displayName", "display_name"),
    ("sizeInGBs", "size_in_gbs"),
    ("lifecycleState", "lifecycle_state"),
    ("availabilityDomain", "availability_domain"),
    ("vpusPerGB", "vpus_per_gb"),
    ("timeCreated", "time_created"),
)

BOOT_VOLUME_FIELDS: FieldSet = (
    ("id", "id"),
    ("displayName", "display_name"),
    ("sizeInGBs", "size_in_gbs"),
    ("lifecycleState", "lifecycle_state"),
    ("availabilityDomain", "availability_domain"),
    ("imageId", "image_id"),
    ("timeCreated", "time_created"),
)

VCN_FIELDS: FieldSet = (
    ("id", "id"),
    ("displayName", "display_name"),
    ("cidrBlock", "cidr_block"),
    ("cidrBlocks", "cidr_blocks"),
    ("lifecycleState", "lifecycle_state"),
    ("dnsLabel", "dns_label"),
    ("defaultRouteTableId", "default_route_table_id"),
    ("defaultSecurityListId", "default_security_list_id"),
    ("timeCreated", "time_created"),
)

CREATED_VCN_FIELDS: FieldSet = (
    ("id", "id"),
    ("displayName", "display_name"),
    ("cidrBlocks", "cidr_blocks"),
    ("lifecycleState", "lifecycle_state"),
    ("timeCreated", "time_created"),
)

SUBNET_FIELDS: FieldSet = (
    ("id", "id"),
    ("displayName", "display_name"),
    ("cidrBlock", "cidr_block"),
    ("availabilityDomain", "availability_domain"),
    ("lifecycleState", "lifecycle_state"),
    ("virtualRouterIp", "virtual_router_ip"),
    ("securityListIds", "security_list_ids"),
    ("timeCreated", "time_created"),
)

# connectionStrings is handled separately: list views reduce it to profile
# display names, the detail view keeps the whole structure.
ADB_SUMMARY_FIELDS: FieldSet = (
    ("id", "id"),
    ("displayName", "display_name"),
    ("dbName", "db_name"),
    ("dbWorkload", "db_workload"),
    ("lifecycleState", "lifecycle_state"),
    ("cpuCoreCount", "cpu_core_count"),
    ("dataStorageSizeInTBs", "data_storage_size_in_tbs"),
    ("isFreeTier", "is_free_tier"),
    ("connectionStrings", "connection_strings"),
    ("timeCreated", "time_created"),
)

ADB_DETAIL_FIELDS: FieldSet = (
    ("id", "id"),
    ("displayName", "display_name"),
    ("dbName", "db_name"),
    ("dbWorkload", "db_workload"),
    ("lifecycleState", "lifecycle_state"),
    ("cpuCoreCount", "cpu_core_count"),
    ("dataStorageSizeInTBs", "data_storage_size_in_tbs"),
    ("isFreeTier", "is_free_tier"),
    ("connectionStrings", "connection_strings"),
    ("serviceConsoleUrl", "service_console_url"),
    ("timeCreated", "time_created"),
)

USER_FIELDS: FieldSet = (
    ("id", "id"),
    ("name", "name"),
    ("email", "email"),
    ("description", "description"),
    ("lifecycleState", "lifecycle_state"),
    ("isMfaActivated", "is_mfa_activated"),
    ("timeCreated", "time_created"),
)

GROUP_FIELDS: FieldSet = (
    ("id", "id"),
    ("name", "name"),
    ("description", "description"),
    ("lifecycleState", "lifecycle_state"),
    ("timeCreated", "time_created"),
)

POLICY_FIELDS: FieldSet = (
    ("id", "id"),
    ("name", "name"),
    ("description", "description"),
    ("statements", "statements"),
    ("lifecycleState", "lifecycle_state"),
    ("timeCreated", "time_created"),
)

COMPARTMENT_FIELDS: FieldSet = GROUP_FIELDS

AVAILABILITY_DOMAIN_FIELDS: FieldSet = (
    ("id", "id"),
    ("name", "name"),
)


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def serialize_value(obj: Any) -> Any:
    """Recursively convert an SDK value to JSON-serializable form."""
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj
    if isinstance(obj, bytes):
        return "<binary data omitted>"
    if isinstance(obj, datetime):
        text = obj.isoformat()
        # UTC is written with a "Z" suffix.
        return text[:-6] + "Z" if text.endswith("+00:00") else text
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, dict):
        return {str(k): serialize_value(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [serialize_value(item) for item in obj]

    # OCI SDK models: attribute_map maps snake_case attributes to wire names.
    attribute_map = getattr(obj, "attribute_map", None)
    if isinstance(attribute_map, dict):
        return {
            wire: serialize_value(getattr(obj, attr, None))
            for attr, wire in attribute_map.items()
        }

    return str(obj)


def serialize_payload(payload: Any) -> str:
    """Render a projected payload as pretty-printed JSON text."""
    return json.dumps(payload, indent=2, default=str)


# ---------------------------------------------------------------------------
# Projection
# ---------------------------------------------------------------------------

def project(obj: Any, fields: FieldSet) -> dict:
    """Project one SDK object onto *fields*; missing attributes become None."""
    return {wire: serialize_value(getattr(obj, attr, None)) for wire, attr in fields}


def project_all(items: Iterable[Any] | None, fields: FieldSet) -> list[dict]:
    return [project(item, fields) for item in items or ()]


def connection_profile_names(connection_strings: Any) -> list[str] | None:
    """Reduce an ADB ``connection_strings`` value to its profile display names."""
    if connection_strings is None:
        return None
    profiles = getattr(connection_strings, "profiles", None)
    if profiles is None:
        return None
    return [profile.display_name for profile in profiles]


def project_adb_summary(db: Any) -> dict:
    result = project(db, ADB_SUMMARY_FIELDS)
    result["connectionStrings"] = connection_profile_names(getattr(db, "connection_strings", None))
    return result
