"""
Tests for ocimcp.dispatch — unknown tools, argument defaults and
validation, error classification, and the end-to-end invocation scenarios.
"""

import asyncio
import os
import sys
from types import SimpleNamespace
from unittest.mock import MagicMock

import oci

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from ocimcp.clients import ClientSet
from ocimcp.dispatch import (
    Dispatcher,
    ErrorKind,
    Failure,
    Success,
    apply_defaults,
    validate_arguments,
)
from ocimcp.registry import build_registry

TENANCY = "ocid1.tenancy.oc1..tenancy"


def _dispatcher(**clients):
    return Dispatcher(build_registry(), ClientSet(**clients), default_compartment_id=TENANCY)


def _invoke(dispatcher, tool_id, params=None):
    return asyncio.run(dispatcher.invoke(tool_id, params))


def _instance(**overrides):
    fields = dict(
        id="i-1",
        display_name="web-1",
        shape="VM.Standard.A1.Flex",
        lifecycle_state="RUNNING",
        availability_domain="AD-1",
        region="us-chicago-1",
        time_created="2024-01-01T00:00:00Z",
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


# =========================================================================
# Tests: end-to-end scenarios
# =========================================================================

class TestScenarios:

    def test_list_instances(self):
        compute = MagicMock()
        compute.list_instances.return_value = SimpleNamespace(data=[_instance()])

        result = _invoke(_dispatcher(compute=compute), "oci_compute_list_instances", {})

        assert result == Success([{
            "id": "i-1",
            "displayName": "web-1",
            "shape": "VM.Standard.A1.Flex",
            "lifecycleState": "RUNNING",
            "availabilityDomain": "AD-1",
            "region": "us-chicago-1",
            "timeCreated": "2024-01-01T00:00:00Z",
        }])
        compute.list_instances.assert_called_once_with(compartment_id=TENANCY, limit=50)

    def test_unknown_tool(self):
        result = _invoke(_dispatcher(), "oci_unknown_tool", {})
        assert isinstance(result, Failure)
        assert result.kind is ErrorKind.UNKNOWN_TOOL
        assert result.message == "Unknown tool: oci_unknown_tool"

    def test_create_bucket_request(self):
        object_storage = MagicMock()
        object_storage.get_namespace.return_value = SimpleNamespace(data="ns1")
        object_storage.create_bucket.return_value = SimpleNamespace(data=SimpleNamespace(
            name="b1", namespace="ns1", compartment_id=TENANCY, time_created="2024-01-01T00:00:00Z",
        ))

        result = _invoke(_dispatcher(object_storage=object_storage), "oci_os_create_bucket", {"bucket_name": "b1"})

        assert isinstance(result, Success)
        object_storage.get_namespace.assert_called_once_with(compartment_id=TENANCY)
        kwargs = object_storage.create_bucket.call_args.kwargs
        assert kwargs["namespace_name"] == "ns1"
        details = kwargs["create_bucket_details"]
        assert details.name == "b1"
        assert details.compartment_id == TENANCY
        assert details.public_access_type == "NoPublicAccess"
        assert details.storage_tier == "Standard"


# =========================================================================
# Tests: failures never escape the dispatcher
# =========================================================================

class TestFailures:

    def test_vendor_service_error(self):
        compute = MagicMock()
        compute.get_instance.side_effect = oci.exceptions.ServiceError(
            404, "NotAuthorizedOrNotFound", {}, "Authorization failed or requested resource not found."
        )
        result = _invoke(_dispatcher(compute=compute), "oci_compute_get_instance", {"instance_id": "i-x"})
        assert result == Failure(
            ErrorKind.VENDOR_ERROR, "Authorization failed or requested resource not found."
        )

    def test_generic_exception(self):
        compute = MagicMock()
        compute.list_shapes.side_effect = ConnectionError("network unreachable")
        result = _invoke(_dispatcher(compute=compute), "oci_compute_list_shapes")
        assert result == Failure(ErrorKind.INTERNAL_ERROR, "network unreachable")

    def test_exception_without_message_still_reported(self):
        compute = MagicMock()
        compute.list_shapes.side_effect = RuntimeError()
        result = _invoke(_dispatcher(compute=compute), "oci_compute_list_shapes")
        assert isinstance(result, Failure)
        assert result.message == "RuntimeError"

    def test_unavailable_client(self):
        dispatcher = Dispatcher(build_registry(), ClientSet.empty("config file not found"), TENANCY)
        result = _invoke(dispatcher, "oci_adb_list")
        assert result.kind is ErrorKind.SERVICE_UNAVAILABLE
        assert "database" in result.message
        assert "config file not found" in result.message

    def test_missing_required_argument(self):
        compute = MagicMock()
        result = _invoke(_dispatcher(compute=compute), "oci_compute_get_instance", {})
        assert result.kind is ErrorKind.INVALID_PARAMS
        assert "instance_id" in result.message
        compute.get_instance.assert_not_called()

    def test_enum_violation(self):
        compute = MagicMock()
        result = _invoke(
            _dispatcher(compute=compute),
            "oci_compute_instance_action",
            {"instance_id": "i-1", "action": "TERMINATE"},
        )
        assert result.kind is ErrorKind.INVALID_PARAMS
        assert result.message.startswith("Invalid arguments for oci_compute_instance_action: action:")
        compute.instance_action.assert_not_called()

    def test_non_object_arguments(self):
        result = _invoke(_dispatcher(), "oci_adb_list", ["not", "an", "object"])
        assert result.kind is ErrorKind.INVALID_PARAMS

    def test_dispatcher_keeps_serving_after_failure(self):
        compute = MagicMock()
        compute.list_instances.return_value = SimpleNamespace(data=[])
        dispatcher = _dispatcher(compute=compute)
        assert isinstance(_invoke(dispatcher, "oci_nope"), Failure)
        assert _invoke(dispatcher, "oci_compute_list_instances") == Success([])


# =========================================================================
# Tests: defaults, fallback and idempotence
# =========================================================================

class TestInvocation:

    def test_none_params_treated_as_empty(self):
        identity = MagicMock()
        identity.list_availability_domains.return_value = SimpleNamespace(data=[])
        result = _invoke(_dispatcher(identity=identity), "oci_iam_list_availability_domains", None)
        assert result == Success([])
        identity.list_availability_domains.assert_called_once_with(compartment_id=TENANCY)

    def test_explicit_compartment_and_limit(self):
        compute = MagicMock()
        compute.list_instances.return_value = SimpleNamespace(data=[])
        _invoke(_dispatcher(compute=compute), "oci_compute_list_instances", {"compartment_id": "X", "limit": 5})
        compute.list_instances.assert_called_once_with(compartment_id="X", limit=5)

    def test_zero_limit_falls_back_to_default(self):
        compute = MagicMock()
        compute.list_instances.return_value = SimpleNamespace(data=[])
        result = _invoke(_dispatcher(compute=compute), "oci_compute_list_instances", {"limit": 0})
        assert result == Success([])
        compute.list_instances.assert_called_once_with(compartment_id=TENANCY, limit=50)

    def test_integral_float_limit_forwarded_as_int(self):
        compute = MagicMock()
        compute.list_instances.return_value = SimpleNamespace(data=[])
        _invoke(_dispatcher(compute=compute), "oci_compute_list_instances", {"limit": 2.0})
        limit = compute.list_instances.call_args.kwargs["limit"]
        assert limit == 2 and type(limit) is int

    def test_fractional_or_negative_limit_rejected(self):
        compute = MagicMock()
        dispatcher = _dispatcher(compute=compute)
        for bad in (2.5, -3):
            result = _invoke(dispatcher, "oci_compute_list_instances", {"limit": bad})
            assert isinstance(result, Failure)
            assert result.kind == ErrorKind.INVALID_PARAMS
        compute.list_instances.assert_not_called()

    def test_list_returns_exactly_n_items(self):
        compute = MagicMock()
        compute.list_instances.return_value = SimpleNamespace(
            data=[_instance(id=f"i-{n}", freeform_tags={"x": "y"}) for n in range(4)]
        )
        result = _invoke(_dispatcher(compute=compute), "oci_compute_list_instances")
        assert len(result.payload) == 4
        for item in result.payload:
            assert "freeformTags" not in item and "freeform_tags" not in item

    def test_repeated_reads_are_identical(self):
        compute = MagicMock()
        compute.list_instances.return_value = SimpleNamespace(data=[_instance()])
        dispatcher = _dispatcher(compute=compute)
        first = _invoke(dispatcher, "oci_compute_list_instances", {"limit": 10})
        second = _invoke(dispatcher, "oci_compute_list_instances", {"limit": 10})
        assert first == second

    def test_caller_params_not_mutated(self):
        compute = MagicMock()
        compute.list_instances.return_value = SimpleNamespace(data=[])
        params = {"compartment_id": "X"}
        _invoke(_dispatcher(compute=compute), "oci_compute_list_instances", params)
        assert params == {"compartment_id": "X"}

    def test_list_capabilities_matches_registry(self):
        assert _dispatcher().list_capabilities() == build_registry().list_capabilities()


# =========================================================================
# Tests: argument helpers
# =========================================================================

class TestArgumentHelpers:

    SCHEMA = {
        "type": "object",
        "properties": {
            "name": {"type": "string"},
            "limit": {"type": "integer", "default": 50},
            "blocks": {"type": "array", "items": {"type": "string"}, "default": ["10.0.0.0/16"]},
        },
        "required": ["name"],
    }

    def test_defaults_fill_gaps(self):
        assert apply_defaults(self.SCHEMA, {"name": "a"}) == {
            "name": "a", "limit": 50, "blocks": ["10.0.0.0/16"],
        }

    def test_null_counts_as_absent(self):
        assert apply_defaults(self.SCHEMA, {"name": "a", "limit": None})["limit"] == 50

    def test_zero_integer_takes_default(self):
        assert apply_defaults(self.SCHEMA, {"name": "a", "limit": 0})["limit"] == 50

    def test_booleans_are_not_coerced(self):
        assert apply_defaults(self.SCHEMA, {"name": "a", "limit": False})["limit"] is False

    def test_default_values_are_copied(self):
        args = apply_defaults(self.SCHEMA, {"name": "a"})
        args["blocks"].append("10.1.0.0/16")
        assert self.SCHEMA["properties"]["blocks"]["default"] == ["10.0.0.0/16"]

    def test_valid_arguments(self):
        assert validate_arguments(self.SCHEMA, {"name": "a", "limit": 1}) is None

    def test_missing_required(self):
        assert "'name' is a required property" in validate_arguments(self.SCHEMA, {})

    def test_wrong_type_reports_path(self):
        message = validate_arguments(self.SCHEMA, {"name": "a", "limit": "ten"})
        assert message.startswith("limit: ")
