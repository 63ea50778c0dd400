"""
OCI tool handlers — one function per tool.

Each handler receives a :class:`ToolContext` and the tool arguments (already
completed with schema defaults), makes one or two literal SDK calls, and
returns the projected plain-data result.  Handlers do not catch exceptions;
failures are surfaced by the dispatcher.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

import oci

from ocimcp.clients import ClientSet
from ocimcp.config import get_compartment_id
from ocimcp.projections import (
    ADB_DETAIL_FIELDS,
    AVAILABILITY_DOMAIN_FIELDS,
    BOOT_VOLUME_FIELDS,
    BUCKET_FIELDS,
    COMPARTMENT_FIELDS,
    CREATED_BUCKET_FIELDS,
    CREATED_VCN_FIELDS,
    GROUP_FIELDS,
    INSTANCE_DETAIL_FIELDS,
    INSTANCE_SUMMARY_FIELDS,
    LIFECYCLE_ACTION_FIELDS,
    OBJECT_FIELDS,
    POLICY_FIELDS,
    SHAPE_FIELDS,
    SUBNET_FIELDS,
    USER_FIELDS,
    VCN_FIELDS,
    VOLUME_FIELDS,
    project,
    project_adb_summary,
    project_all,
)
from ocimcp.registry import HandlerTable

# Fields requested from list_objects; the API returns only names otherwise.
OBJECT_LIST_FIELDS = "name,size,md5,timeCreated,timeModified"

HANDLERS = HandlerTable()


@dataclass(frozen=True)
class ToolContext:
    clients: ClientSet
    default_compartment_id: str | None = None

    def compartment_id(self, args: Mapping[str, Any]) -> str | None:
        return get_compartment_id(args, self.default_compartment_id)


def _optional(**kwargs: Any) -> dict:
    """Drop keyword arguments the caller did not supply."""
    return {k: v for k, v in kwargs.items() if v is not None}


# ---------------------------------------------------------------------------
# Compute
# ---------------------------------------------------------------------------

@HANDLERS.register("oci_compute_list_instances")
def list_instances(ctx: ToolContext, args: Mapping[str, Any]) -> list[dict]:
    compute = ctx.clients.require("compute")
    response = compute.list_instances(
        compartment_id=ctx.compartment_id(args),
        limit=args["limit"],
    )
    return project_all(response.data, INSTANCE_SUMMARY_FIELDS)


@HANDLERS.register("oci_compute_get_instance")
def get_instance(ctx: ToolContext, args: Mapping[str, Any]) -> dict:
    compute = ctx.clients.require("compute")
    response = compute.get_instance(instance_id=args["instance_id"])
    return project(response.data, INSTANCE_DETAIL_FIELDS)


@HANDLERS.register("oci_compute_list_shapes")
def list_shapes(ctx: ToolContext, args: Mapping[str, Any]) -> list[dict]:
    compute = ctx.clients.require("compute")
    response = compute.list_shapes(
        compartment_id=ctx.compartment_id(args),
        limit=args["limit"],
    )
    return project_all(response.data, SHAPE_FIELDS)


@HANDLERS.register("oci_compute_instance_action")
def instance_action(ctx: ToolContext, args: Mapping[str, Any]) -> dict:
    compute = ctx.clients.require("compute")
    response = compute.instance_action(
        instance_id=args["instance_id"],
        action=args["action"],
    )
    result = project(response.data, LIFECYCLE_ACTION_FIELDS)
    result["action"] = args["action"]
    return result


# ---------------------------------------------------------------------------
# Object Storage
# ---------------------------------------------------------------------------

def _namespace(ctx: ToolContext, args: Mapping[str, Any]) -> str:
    """Resolve the tenancy's Object Storage namespace."""
    object_storage = ctx.clients.require("object_storage")
    return object_storage.get_namespace(compartment_id=ctx.compartment_id(args)).data


@HANDLERS.register("oci_os_get_namespace")
def get_namespace(ctx: ToolContext, args: Mapping[str, Any]) -> dict:
    return {"namespace": _namespace(ctx, args)}


@HANDLERS.register("oci_os_list_buckets")
def list_buckets(ctx: ToolContext, args: Mapping[str, Any]) -> list[dict]:
    namespace = _namespace(ctx, args)
    response = ctx.clients.object_storage.list_buckets(
        namespace_name=namespace,
        compartment_id=ctx.compartment_id(args),
        limit=args["limit"],
    )
    return project_all(response.data, BUCKET_FIELDS)


@HANDLERS.register("oci_os_create_bucket")
def create_bucket(ctx: ToolContext, args: Mapping[str, Any]) -> dict:
    namespace = _namespace(ctx, args)
    details = oci.object_storage.models.CreateBucketDetails(
        name=args["bucket_name"],
        compartment_id=ctx.compartment_id(args),
        public_access_type=args["public_access"],
        storage_tier=args["storage_tier"],
    )
    response = ctx.clients.object_storage.create_bucket(
        namespace_name=namespace,
        create_bucket_details=details,
    )
    return project(response.data, CREATED_BUCKET_FIELDS)


@HANDLERS.register("oci_os_list_objects")
def list_objects(ctx: ToolContext, args: Mapping[str, Any]) -> list[dict]:
    namespace = _namespace(ctx, args)
    response = ctx.clients.object_storage.list_objects(
        namespace_name=namespace,
        bucket_name=args["bucket_name"],
        limit=args["limit"],
        fields=OBJECT_LIST_FIELDS,
        **_optional(prefix=args.get("prefix")),
    )
    return project_all(response.data.objects, OBJECT_FIELDS)


@HANDLERS.register("oci_os_delete_bucket")
def delete_bucket(ctx: ToolContext, args: Mapping[str, Any]) -> dict:
    namespace = _namespace(ctx, args)
    ctx.clients.object_storage.delete_bucket(
        namespace_name=namespace,
        bucket_name=args["bucket_name"],
    )
    return {"deleted": True, "bucket": args["bucket_name"]}


# ---------------------------------------------------------------------------
# Block Storage
# ---------------------------------------------------------------------------

@HANDLERS.register("oci_bv_list_volumes")
def list_volumes(ctx: ToolContext, args: Mapping[str, Any]) -> list[dict]:
    block_storage = ctx.clients.require("block_storage")
    response = block_storage.list_volumes(
        compartment_id=ctx.compartment_id(args),
        limit=args["limit"],
    )
    return project_all(response.data, VOLUME_FIELDS)


@HANDLERS.register("oci_bv_list_boot_volumes")
def list_boot_volumes(ctx: ToolContext, args: Mapping[str, Any]) -> list[dict]:
    block_storage = ctx.clients.require("block_storage")
    response = block_storage.list_boot_volumes(
        compartment_id=ctx.compartment_id(args),
        limit=args["limit"],
        **_optional(availability_domain=args.get("availability_domain")),
    )
    return project_all(response.data, BOOT_VOLUME_FIELDS)


# ---------------------------------------------------------------------------
# Networking
# ---------------------------------------------------------------------------

@HANDLERS.register("oci_vcn_list")
def list_vcns(ctx: ToolContext, args: Mapping[str, Any]) -> list[dict]:
    network = ctx.clients.require("virtual_network")
    response = network.list_vcns(
        compartment_id=ctx.compartment_id(args),
        limit=args["limit"],
    )
    return project_all(response.data, VCN_FIELDS)


@HANDLERS.register("oci_subnet_list")
def list_subnets(ctx: ToolContext, args: Mapping[str, Any]) -> list[dict]:
    network = ctx.clients.require("virtual_network")
    response = network.list_subnets(
        compartment_id=ctx.compartment_id(args),
        vcn_id=args["vcn_id"],
        limit=args["limit"],
    )
    return project_all(response.data, SUBNET_FIELDS)


@HANDLERS.register("oci_vcn_create")
def create_vcn(ctx: ToolContext, args: Mapping[str, Any]) -> dict:
    network = ctx.clients.require("virtual_network")
    details = oci.core.models.CreateVcnDetails(
        compartment_id=ctx.compartment_id(args),
        display_name=args["display_name"],
        cidr_blocks=list(args["cidr_blocks"]),
        dns_label=args.get("dns_label"),
    )
    response = network.create_vcn(create_vcn_details=details)
    return project(response.data, CREATED_VCN_FIELDS)


# ---------------------------------------------------------------------------
# Autonomous Database
# ---------------------------------------------------------------------------

@HANDLERS.register("oci_adb_list")
def list_autonomous_databases(ctx: ToolContext, args: Mapping[str, Any]) -> list[dict]:
    database = ctx.clients.require("database")
    response = database.list_autonomous_databases(
        compartment_id=ctx.compartment_id(args),
        limit=args["limit"],
    )
    return [project_adb_summary(db) for db in response.data or ()]


@HANDLERS.register("oci_adb_get")
def get_autonomous_database(ctx: ToolContext, args: Mapping[str, Any]) -> dict:
    database = ctx.clients.require("database")
    response = database.get_autonomous_database(autonomous_database_id=args["database_id"])
    return project(response.data, ADB_DETAIL_FIELDS)


@HANDLERS.register("oci_adb_start")
def start_autonomous_database(ctx: ToolContext, args: Mapping[str, Any]) -> dict:
    database = ctx.clients.require("database")
    response = database.start_autonomous_database(autonomous_database_id=args["database_id"])
    result = project(response.data, LIFECYCLE_ACTION_FIELDS)
    result["action"] = "START"
    return result


@HANDLERS.register("oci_adb_stop")
def stop_autonomous_database(ctx: ToolContext, args: Mapping[str, Any]) -> dict:
    database = ctx.clients.require("database")
    response = database.stop_autonomous_database(autonomous_database_id=args["database_id"])
    result = project(response.data, LIFECYCLE_ACTION_FIELDS)
    result["action"] = "STOP"
    return result


# ---------------------------------------------------------------------------
# IAM
# ---------------------------------------------------------------------------

@HANDLERS.register("oci_iam_list_users")
def list_users(ctx: ToolContext, args: Mapping[str, Any]) -> list[dict]:
    identity = ctx.clients.require("identity")
    response = identity.list_users(
        compartment_id=ctx.compartment_id(args),
        limit=args["limit"],
    )
    return project_all(response.data, USER_FIELDS)


@HANDLERS.register("oci_iam_list_groups")
def list_groups(ctx: ToolContext, args: Mapping[str, Any]) -> list[dict]:
    identity = ctx.clients.require("identity")
    response = identity.list_groups(
        compartment_id=ctx.compartment_id(args),
        limit=args["limit"],
    )
    return project_all(response.data, GROUP_FIELDS)


@HANDLERS.register("oci_iam_list_policies")
def list_policies(ctx: ToolContext, args: Mapping[str, Any]) -> list[dict]:
    identity = ctx.clients.require("identity")
    response = identity.list_policies(
        compartment_id=ctx.compartment_id(args),
        limit=args["limit"],
    )
    return project_all(response.data, POLICY_FIELDS)


@HANDLERS.register("oci_iam_list_compartments")
def list_compartments(ctx: ToolContext, args: Mapping[str, Any]) -> list[dict]:
    identity = ctx.clients.require("identity")
    response = identity.list_compartments(
        compartment_id=ctx.compartment_id(args),
        limit=args["limit"],
        access_level="ANY",
        compartment_id_in_subtree=True,
    )
    return project_all(response.data, COMPARTMENT_FIELDS)


@HANDLERS.register("oci_iam_list_availability_domains")
def list_availability_domains(ctx: ToolContext, args: Mapping[str, Any]) -> list[dict]:
    identity = ctx.clients.require("identity")
    response = identity.list_availability_domains(compartment_id=ctx.compartment_id(args))
    return project_all(response.data, AVAILABILITY_DOMAIN_FIELDS)
