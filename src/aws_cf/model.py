"""
Request and result shapes exchanged with the CloudFormation API.

Request dataclasses serialize to boto3 keyword arguments with
``to_api_params``. Result dataclasses are built from boto3 response
dictionaries with ``from_api``.
"""

from dataclasses import dataclass, field, fields, is_dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional


def member_name(name: str) -> str:
    """Convert a dash or underscore separated name to a CamelCase member name."""
    return "".join(part.capitalize() for part in name.replace("_", "-").split("-"))


def _member(f: Any) -> str:
    return f.metadata.get("member", member_name(f.name))


def _serialize(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return {
            _member(f): _serialize(getattr(value, f.name))
            for f in fields(value)
            if getattr(value, f.name) is not None
        }
    if isinstance(value, (list, tuple)):
        return [_serialize(item) for item in value]
    return value


class ServiceRequest:
    """Mixin for request dataclasses."""

    def to_api_params(self) -> Dict[str, Any]:
        """Keyword arguments for the matching boto3 client method."""
        return dict(_serialize(self))


# Records shared by requests and results


@dataclass
class Parameter:
    parameter_key: Optional[str] = None
    parameter_value: Optional[str] = None
    use_previous_value: Optional[bool] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Parameter":
        return cls(
            parameter_key=data.get("ParameterKey"),
            parameter_value=data.get("ParameterValue"),
            use_previous_value=data.get("UsePreviousValue"),
        )


@dataclass
class Tag:
    key: Optional[str] = None
    value: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Tag":
        return cls(key=data.get("Key"), value=data.get("Value"))


@dataclass
class Output:
    description: Optional[str] = None
    output_key: Optional[str] = None
    output_value: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Output":
        return cls(
            description=data.get("Description"),
            output_key=data.get("OutputKey"),
            output_value=data.get("OutputValue"),
        )


# Requests


@dataclass
class DescribeStacksRequest(ServiceRequest):
    stack_name: Optional[str] = None
    next_token: Optional[str] = None


@dataclass
class GetTemplateRequest(ServiceRequest):
    stack_name: Optional[str] = None
    change_set_name: Optional[str] = None
    template_stage: Optional[str] = None


@dataclass
class EstimateTemplateCostRequest(ServiceRequest):
    template_body: Optional[str] = None
    template_url: Optional[str] = field(default=None, metadata={"member": "TemplateURL"})
    parameters: Optional[List[Parameter]] = None


@dataclass
class CreateStackRequest(ServiceRequest):
    stack_name: Optional[str] = None
    template_body: Optional[str] = None
    template_url: Optional[str] = field(default=None, metadata={"member": "TemplateURL"})
    parameters: Optional[List[Parameter]] = None
    disable_rollback: Optional[bool] = None
    timeout_in_minutes: Optional[int] = None
    notification_arns: Optional[List[str]] = field(
        default=None, metadata={"member": "NotificationARNs"}
    )
    capabilities: Optional[List[str]] = None
    resource_types: Optional[List[str]] = None
    role_arn: Optional[str] = field(default=None, metadata={"member": "RoleARN"})
    on_failure: Optional[str] = None
    stack_policy_body: Optional[str] = None
    stack_policy_url: Optional[str] = field(
        default=None, metadata={"member": "StackPolicyURL"}
    )
    tags: Optional[List[Tag]] = None
    client_request_token: Optional[str] = None
    enable_termination_protection: Optional[bool] = None


@dataclass
class UpdateStackRequest(ServiceRequest):
    stack_name: Optional[str] = None
    template_body: Optional[str] = None
    template_url: Optional[str] = field(default=None, metadata={"member": "TemplateURL"})
    use_previous_template: Optional[bool] = None
    stack_policy_during_update_body: Optional[str] = None
    stack_policy_during_update_url: Optional[str] = field(
        default=None, metadata={"member": "StackPolicyDuringUpdateURL"}
    )
    parameters: Optional[List[Parameter]] = None
    capabilities: Optional[List[str]] = None
    resource_types: Optional[List[str]] = None
    role_arn: Optional[str] = field(default=None, metadata={"member": "RoleARN"})
    stack_policy_body: Optional[str] = None
    stack_policy_url: Optional[str] = field(
        default=None, metadata={"member": "StackPolicyURL"}
    )
    notification_arns: Optional[List[str]] = field(
        default=None, metadata={"member": "NotificationARNs"}
    )
    tags: Optional[List[Tag]] = None
    disable_rollback: Optional[bool] = None
    client_request_token: Optional[str] = None


@dataclass
class DeleteStackRequest(ServiceRequest):
    stack_name: Optional[str] = None
    retain_resources: Optional[List[str]] = None
    role_arn: Optional[str] = field(default=None, metadata={"member": "RoleARN"})
    client_request_token: Optional[str] = None


# Results


@dataclass
class Stack:
    """A stack as returned by DescribeStacks."""

    stack_id: Optional[str] = None
    stack_name: Optional[str] = None
    description: Optional[str] = None
    parameters: List[Parameter] = field(default_factory=list)
    creation_time: Optional[datetime] = None
    last_updated_time: Optional[datetime] = None
    stack_status: Optional[str] = None
    stack_status_reason: Optional[str] = None
    disable_rollback: Optional[bool] = None
    notification_arns: List[str] = field(default_factory=list)
    timeout_in_minutes: Optional[int] = None
    capabilities: List[str] = field(default_factory=list)
    outputs: List[Output] = field(default_factory=list)
    tags: List[Tag] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Stack":
        return cls(
            stack_id=data.get("StackId"),
            stack_name=data.get("StackName"),
            description=data.get("Description"),
            parameters=[Parameter.from_api(p) for p in data.get("Parameters", [])],
            creation_time=data.get("CreationTime"),
            last_updated_time=data.get("LastUpdatedTime"),
            stack_status=data.get("StackStatus"),
            stack_status_reason=data.get("StackStatusReason"),
            disable_rollback=data.get("DisableRollback"),
            notification_arns=list(data.get("NotificationARNs", [])),
            timeout_in_minutes=data.get("TimeoutInMinutes"),
            capabilities=list(data.get("Capabilities", [])),
            outputs=[Output.from_api(o) for o in data.get("Outputs", [])],
            tags=[Tag.from_api(t) for t in data.get("Tags", [])],
        )


@dataclass
class DescribeStacksResult:
    stacks: List[Stack] = field(default_factory=list)
    next_token: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "DescribeStacksResult":
        return cls(
            stacks=[Stack.from_api(s) for s in data.get("Stacks", [])],
            next_token=data.get("NextToken"),
        )
