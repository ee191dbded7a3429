"""
Round trip of stack operations against moto's CloudFormation backend.
"""

import json

import pytest
from moto import mock_aws

from aws_cf.client import ClientCache, Credential
from aws_cf.config import ClientConfig
from aws_cf.exceptions import ServiceError
from aws_cf.stack_manager import StackManager

TEMPLATE = {
    "AWSTemplateFormatVersion": "2010-09-09",
    "Description": "cf test stack",
    "Parameters": {"KeyName": {"Type": "String"}},
    "Resources": {"Queue": {"Type": "AWS::SQS::Queue"}},
    "Outputs": {"KeyNameOut": {"Value": {"Ref": "KeyName"}}},
}


@pytest.fixture
def aws_credentials(monkeypatch):
    """Mocked AWS credentials for moto."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture
def manager(aws_credentials):
    """Stack manager talking to moto."""
    with mock_aws():
        yield StackManager(cache=ClientCache(ClientConfig(region="us-east-1")))


class TestMotoRoundTrip:
    """Create, read and delete a stack through the moto backend."""

    def test_create_describe_template(self, manager) -> None:
        """Test that a created stack can be described and its template fetched."""
        cred = Credential(access_key="testing", secret_key="testing")

        stack_id = manager.create_stack(
            cred,
            {
                "stack-name": "cf-test-stack",
                "template-body": json.dumps(TEMPLATE),
                "parameters": {"KeyName": "GNACRTEST"},
            },
        )

        stacks = manager.describe_stacks(cred, "cf-test-stack")
        assert len(stacks) == 1
        stack = stacks[0]
        assert stack["stack_id"] == stack_id
        assert stack["stack_name"] == "cf-test-stack"
        assert stack["stack_status"] == "CREATE_COMPLETE"
        assert stack["parameters"] == [
            {"parameter_key": "KeyName", "parameter_value": "GNACRTEST"}
        ]
        assert stack["outputs"][0]["output_key"] == "KeyNameOut"
        assert stack["outputs"][0]["output_value"] == "GNACRTEST"

        template = manager.get_template(cred, "cf-test-stack")
        assert json.loads(template) == TEMPLATE

    def test_ambient_credentials(self, manager) -> None:
        """Test that an empty credential uses the environment chain."""
        manager.create_stack(
            None,
            {
                "stack-name": "ambient-stack",
                "template-body": json.dumps(TEMPLATE),
                "parameters": {"KeyName": "x"},
            },
        )

        names = [s["stack_name"] for s in manager.describe_stacks(None)]
        assert "ambient-stack" in names

    def test_delete_stack(self, manager) -> None:
        """Test deleting a created stack."""
        manager.create_stack(
            None,
            {
                "stack-name": "doomed-stack",
                "template-body": json.dumps(TEMPLATE),
                "parameters": {"KeyName": "x"},
            },
        )

        manager.delete_stack(None, "doomed-stack")

        active = [
            s["stack_name"]
            for s in manager.describe_stacks(None)
            if s["stack_status"] != "DELETE_COMPLETE"
        ]
        assert "doomed-stack" not in active

    def test_missing_stack(self, manager) -> None:
        """Test that describing an unknown stack raises ServiceError."""
        with pytest.raises(ServiceError) as exc_info:
            manager.describe_stacks(None, "no-such-stack")

        assert exc_info.value.error_code == "ValidationError"
        assert exc_info.value.status_code == 400
