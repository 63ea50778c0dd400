"""
OCI tool catalog — tool identifiers, descriptions and input schemas.

The order of :data:`TOOL_DESCRIPTIONS` is the advertisement order, grouped by
service family.  Schema ``default`` values are applied by the dispatcher
before a handler runs, so every documented default lives here and nowhere
else.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Shared property definitions
# ---------------------------------------------------------------------------

_COMPARTMENT = {"type": "string", "description": "Compartment OCID (defaults to tenancy)"}


def _limit(description: str, default: int) -> dict:
    return {"type": "integer", "minimum": 1, "description": description, "default": default}


def _object(properties: dict, required: list[str] | None = None) -> dict:
    schema: dict = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


INSTANCE_ACTIONS = ["START", "STOP", "RESET", "SOFTSTOP", "SOFTRESET"]
BUCKET_ACCESS_TYPES = ["NoPublicAccess", "ObjectRead", "ObjectReadWithoutList"]
STORAGE_TIERS = ["Standard", "Archive"]
DEFAULT_VCN_CIDR_BLOCKS = ["10.0.0.0/16"]


# ---------------------------------------------------------------------------
# Tool descriptions — tool id -> description (advertisement order)
# ---------------------------------------------------------------------------

TOOL_DESCRIPTIONS: dict[str, str] = {
    # Compute
    "oci_compute_list_instances": (
        "List all compute instances in a compartment. Shows VM details including "
        "shape, state, and availability domain."
    ),
    "oci_compute_get_instance": "Get detailed information about a specific compute instance",
    "oci_compute_list_shapes": (
        "List available compute shapes including Always Free shapes "
        "(VM.Standard.A1.Flex, VM.Standard.E2.1.Micro)"
    ),
    "oci_compute_instance_action": (
        "Perform action on a compute instance (START, STOP, RESET, SOFTSTOP, SOFTRESET)"
    ),
    # Object Storage
    "oci_os_get_namespace": "Get the Object Storage namespace for the tenancy",
    "oci_os_list_buckets": (
        "List all Object Storage buckets in a compartment (Free Tier: 20GB standard, 20GB archive)"
    ),
    "oci_os_create_bucket": "Create a new Object Storage bucket",
    "oci_os_list_objects": "List objects in a bucket with optional prefix filter",
    "oci_os_delete_bucket": "Delete an empty Object Storage bucket",
    # Block Storage
    "oci_bv_list_volumes": "List block volumes in a compartment (Free Tier: 200GB total)",
    "oci_bv_list_boot_volumes": "List boot volumes in an availability domain",
    # Networking
    "oci_vcn_list": "List Virtual Cloud Networks (VCNs) in a compartment",
    "oci_subnet_list": "List subnets in a VCN",
    "oci_vcn_create": "Create a new Virtual Cloud Network",
    # Autonomous Database
    "oci_adb_list": (
        "List Autonomous Databases (ATP/ADW). Free Tier includes 2 Always Free ATP or ADW databases."
    ),
    "oci_adb_get": "Get detailed information about an Autonomous Database",
    "oci_adb_start": "Start a stopped Autonomous Database",
    "oci_adb_stop": "Stop a running Autonomous Database",
    # IAM
    "oci_iam_list_users": "List IAM users in the tenancy",
    "oci_iam_list_groups": "List IAM groups in the tenancy",
    "oci_iam_list_policies": "List IAM policies in a compartment",
    "oci_iam_list_compartments": "List compartments in the tenancy hierarchy",
    "oci_iam_list_availability_domains": "List availability domains in the region",
}


# ---------------------------------------------------------------------------
# Tool schemas — parameter definitions for each tool
# ---------------------------------------------------------------------------

TOOL_SCHEMAS: dict[str, dict] = {
    # Compute
    "oci_compute_list_instances": _object({
        "compartment_id": _COMPARTMENT,
        "limit": _limit("Maximum number of instances to return", 50),
    }),
    "oci_compute_get_instance": _object(
        {"instance_id": {"type": "string", "description": "Instance OCID"}},
        required=["instance_id"],
    ),
    "oci_compute_list_shapes": _object({
        "compartment_id": _COMPARTMENT,
        "limit": _limit("Maximum shapes to return", 100),
    }),
    "oci_compute_instance_action": _object(
        {
            "instance_id": {"type": "string", "description": "Instance OCID"},
            "action": {"type": "string", "enum": INSTANCE_ACTIONS, "description": "Action to perform"},
        },
        required=["instance_id", "action"],
    ),
    # Object Storage
    "oci_os_get_namespace": _object({"compartment_id": _COMPARTMENT}),
    "oci_os_list_buckets": _object({
        "compartment_id": _COMPARTMENT,
        "limit": _limit("Maximum buckets to return", 100),
    }),
    "oci_os_create_bucket": _object(
        {
            "bucket_name": {"type": "string", "description": "Name for the new bucket"},
            "compartment_id": _COMPARTMENT,
            "public_access": {"type": "string", "enum": BUCKET_ACCESS_TYPES, "default": "NoPublicAccess"},
            "storage_tier": {"type": "string", "enum": STORAGE_TIERS, "default": "Standard"},
        },
        required=["bucket_name"],
    ),
    "oci_os_list_objects": _object(
        {
            "bucket_name": {"type": "string", "description": "Bucket name"},
            "prefix": {"type": "string", "description": "Filter objects by prefix"},
            "compartment_id": _COMPARTMENT,
            "limit": _limit("Maximum objects to return", 100),
        },
        required=["bucket_name"],
    ),
    "oci_os_delete_bucket": _object(
        {
            "bucket_name": {"type": "string", "description": "Bucket name to delete"},
            "compartment_id": _COMPARTMENT,
        },
        required=["bucket_name"],
    ),
    # Block Storage
    "oci_bv_list_volumes": _object({
        "compartment_id": _COMPARTMENT,
        "limit": _limit("Maximum volumes to return", 50),
    }),
    "oci_bv_list_boot_volumes": _object({
        "compartment_id": _COMPARTMENT,
        "availability_domain": {"type": "string", "description": "Availability domain name"},
        "limit": _limit("Maximum volumes to return", 50),
    }),
    # Networking
    "oci_vcn_list": _object({
        "compartment_id": _COMPARTMENT,
        "limit": _limit("Maximum VCNs to return", 50),
    }),
    "oci_subnet_list": _object(
        {
            "vcn_id": {"type": "string", "description": "VCN OCID"},
            "compartment_id": _COMPARTMENT,
            "limit": _limit("Maximum subnets to return", 50),
        },
        required=["vcn_id"],
    ),
    "oci_vcn_create": _object(
        {
            "display_name": {"type": "string", "description": "Display name for the VCN"},
            "cidr_blocks": {
                "type": "array",
                "items": {"type": "string"},
                "description": "CIDR blocks (e.g., ['10.0.0.0/16'])",
                "default": DEFAULT_VCN_CIDR_BLOCKS,
            },
            "dns_label": {"type": "string", "description": "DNS label for the VCN"},
            "compartment_id": _COMPARTMENT,
        },
        required=["display_name"],
    ),
    # Autonomous Database
    "oci_adb_list": _object({
        "compartment_id": _COMPARTMENT,
        "limit": _limit("Maximum databases to return", 50),
    }),
    "oci_adb_get": _object(
        {"database_id": {"type": "string", "description": "Autonomous Database OCID"}},
        required=["database_id"],
    ),
    "oci_adb_start": _object(
        {"database_id": {"type": "string", "description": "Autonomous Database OCID"}},
        required=["database_id"],
    ),
    "oci_adb_stop": _object(
        {"database_id": {"type": "string", "description": "Autonomous Database OCID"}},
        required=["database_id"],
    ),
    # IAM
    "oci_iam_list_users": _object({
        "compartment_id": _COMPARTMENT,
        "limit": _limit("Maximum users to return", 100),
    }),
    "oci_iam_list_groups": _object({
        "compartment_id": _COMPARTMENT,
        "limit": _limit("Maximum groups to return", 100),
    }),
    "oci_iam_list_policies": _object({
        "compartment_id": _COMPARTMENT,
        "limit": _limit("Maximum policies to return", 100),
    }),
    "oci_iam_list_compartments": _object({
        "compartment_id": {"type": "string", "description": "Parent compartment OCID (defaults to tenancy)"},
        "limit": _limit("Maximum compartments to return", 100),
    }),
    "oci_iam_list_availability_domains": _object({"compartment_id": _COMPARTMENT}),
}
