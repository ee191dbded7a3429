"""
Tests for building request objects from parameter mappings.
"""

import pytest

from aws_cf.exceptions import MethodResolutionError
from aws_cf.fields import field_table, map_to_object_graph, populate, value_mapper
from aws_cf.model import (
    CreateStackRequest,
    DeleteStackRequest,
    EstimateTemplateCostRequest,
    Parameter,
    UpdateStackRequest,
    member_name,
)

TEMPLATE = '{"Resources": {}}'


class TestMemberName:
    """Test key translation."""

    def test_dashed_key(self) -> None:
        """Test converting a dash-separated key."""
        assert member_name("stack-name") == "StackName"
        assert member_name("timeout-in-minutes") == "TimeoutInMinutes"

    def test_underscore_key(self) -> None:
        """Test converting a snake_case key."""
        assert member_name("template_body") == "TemplateBody"

    def test_single_word(self) -> None:
        """Test a key with a single segment."""
        assert member_name("parameters") == "Parameters"


class TestPopulate:
    """Test populate()."""

    def test_sets_matching_fields(self) -> None:
        """Test that each key lands on its field."""
        request = populate(
            CreateStackRequest,
            {
                "stack-name": "cf-test-stack",
                "template-body": TEMPLATE,
                "disable-rollback": True,
                "capabilities": ["CAPABILITY_IAM"],
            },
        )

        assert isinstance(request, CreateStackRequest)
        assert request.stack_name == "cf-test-stack"
        assert request.template_body == TEMPLATE
        assert request.disable_rollback is True
        assert request.capabilities == ["CAPABILITY_IAM"]
        assert request.parameters is None

    def test_unknown_key_raises(self) -> None:
        """Test that an unmatched key is an error, not silently dropped."""
        with pytest.raises(MethodResolutionError) as exc_info:
            populate(DeleteStackRequest, {"stack-name": "x", "template-body": TEMPLATE})

        assert exc_info.value.key == "template-body"
        assert exc_info.value.member == "TemplateBody"
        assert exc_info.value.target is DeleteStackRequest
        assert "DeleteStackRequest" in str(exc_info.value)

    def test_method_resolution_error_is_attribute_error(self) -> None:
        """Test that callers can treat the error as an AttributeError."""
        with pytest.raises(AttributeError):
            populate(CreateStackRequest, {"no-such-field": 1})

    def test_parameters_key_builds_records(self) -> None:
        """Test that the parameters mapping becomes Parameter records."""
        request = populate(CreateStackRequest, {"parameters": {"KeyName": "foo"}})

        assert request.parameters == [
            Parameter(parameter_key="KeyName", parameter_value="foo")
        ]

    def test_parameters_keep_mapping_order(self) -> None:
        """Test that parameter records follow the mapping order."""
        request = populate(
            UpdateStackRequest,
            {
                "parameters": {
                    "ImageId": "ami-db3479b2",
                    "dbname": "foo-db-1.0.2",
                    "elbname": "elb-cf-test",
                }
            },
        )

        assert [p.parameter_key for p in request.parameters] == [
            "ImageId",
            "dbname",
            "elbname",
        ]

    def test_integer_field_coerced(self) -> None:
        """Test that integer fields accept numeric strings."""
        request = populate(CreateStackRequest, {"timeout-in-minutes": "30"})
        assert request.timeout_in_minutes == 30

    def test_integer_field_keeps_int(self) -> None:
        """Test that integer values pass through unchanged."""
        request = populate(CreateStackRequest, {"timeout-in-minutes": 15})
        assert request.timeout_in_minutes == 15

    def test_parameters_none_gives_empty_list(self) -> None:
        """Test that a missing parameters value becomes an empty list."""
        request = populate(CreateStackRequest, {"stack-name": "web", "parameters": None})
        assert request.parameters == []

    def test_parameters_from_pairs(self) -> None:
        """Test that a sequence of key/value pairs builds Parameter records."""
        request = populate(
            CreateStackRequest,
            {"parameters": [("KeyName", "foo"), ("ImageId", "ami-db3479b2")]},
        )

        assert request.parameters == [
            Parameter(parameter_key="KeyName", parameter_value="foo"),
            Parameter(parameter_key="ImageId", parameter_value="ami-db3479b2"),
        ]

    def test_integer_field_accepts_integral_float(self) -> None:
        """Test that a whole-number float is converted."""
        request = populate(CreateStackRequest, {"timeout-in-minutes": 30.0})
        assert request.timeout_in_minutes == 30

    def test_integer_field_rejects_fractional_float(self) -> None:
        """Test that a fractional float is not truncated."""
        with pytest.raises(ValueError, match="30.7"):
            populate(CreateStackRequest, {"timeout-in-minutes": 30.7})

    def test_integer_coercion_rejects_garbage(self) -> None:
        """Test that coercion failures propagate."""
        with pytest.raises(ValueError):
            populate(CreateStackRequest, {"timeout-in-minutes": "soon"})

    def test_string_field_not_coerced(self) -> None:
        """Test that non-integer fields are left alone."""
        request = populate(CreateStackRequest, {"stack-name": 123})
        assert request.stack_name == 123

    def test_acronym_fields(self) -> None:
        """Test fields whose service member names contain acronyms."""
        request = populate(
            CreateStackRequest,
            {
                "notification-arns": ["arn:aws:sns:us-east-1:123456789012:topic"],
                "template-url": "https://s3.amazonaws.com/bucket/t.json",
                "role-arn": "arn:aws:iam::123456789012:role/cfn",
            },
        )

        assert request.to_api_params() == {
            "NotificationARNs": ["arn:aws:sns:us-east-1:123456789012:topic"],
            "TemplateURL": "https://s3.amazonaws.com/bucket/t.json",
            "RoleARN": "arn:aws:iam::123456789012:role/cfn",
        }

    def test_underscore_keys_accepted(self) -> None:
        """Test that snake_case keys resolve like dashed keys."""
        request = populate(EstimateTemplateCostRequest, {"template_body": TEMPLATE})
        assert request.template_body == TEMPLATE

    def test_empty_params(self) -> None:
        """Test that no params yields an empty request."""
        assert populate(DeleteStackRequest, {}) == DeleteStackRequest()


class TestValueMappers:
    """Test the key-specific value transforms."""

    def test_identity_for_other_keys(self) -> None:
        """Test that keys without a mapper pass values through."""
        tags = [{"Key": "team", "Value": "ops"}]
        assert value_mapper("tags")(tags) is tags

    def test_map_to_object_graph(self) -> None:
        """Test applying mappers to a whole mapping."""
        graph = map_to_object_graph(
            {"stack-name": "web", "parameters": {"KeyName": "GNACRTEST"}}
        )

        assert graph == {
            "stack-name": "web",
            "parameters": [
                Parameter(parameter_key="KeyName", parameter_value="GNACRTEST")
            ],
        }

    def test_field_table(self) -> None:
        """Test the member-name table for a request type."""
        table = field_table(DeleteStackRequest)
        assert set(table) == {
            "StackName",
            "RetainResources",
            "RoleArn",
            "ClientRequestToken",
        }
        assert table["StackName"].name == "stack_name"


class TestToApiParams:
    """Test request serialization."""

    def test_omits_unset_fields(self) -> None:
        """Test that None fields are not sent."""
        assert DeleteStackRequest(stack_name="web").to_api_params() == {
            "StackName": "web"
        }

    def test_serializes_parameters(self) -> None:
        """Test that Parameter records become service dictionaries."""
        request = populate(
            CreateStackRequest,
            {
                "stack-name": "cf-test-stack",
                "parameters": {"KeyName": "GNACRTEST"},
                "tags": [{"Key": "team", "Value": "ops"}],
            },
        )

        assert request.to_api_params() == {
            "StackName": "cf-test-stack",
            "Parameters": [{"ParameterKey": "KeyName", "ParameterValue": "GNACRTEST"}],
            "Tags": [{"Key": "team", "Value": "ops"}],
        }
