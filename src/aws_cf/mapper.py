"""
Convert CloudFormation results and errors into plain dictionaries.
"""

from typing import Any, Callable, Dict, List, Optional

from botocore.exceptions import ClientError

from .exceptions import ERROR_TYPES
from .model import DescribeStacksResult, Output, Parameter, Stack, Tag


def _error_to_map(e: ClientError) -> Dict[str, Any]:
    error = e.response.get("Error", {})
    return {
        "error_code": error.get("Code"),
        "error_type": ERROR_TYPES.get(error.get("Type"), "Unknown"),
        "service_name": getattr(e, "service_name", "cloudformation"),
        "status_code": e.response.get("ResponseMetadata", {}).get("HTTPStatusCode"),
    }


def _describe_stacks_result_to_map(result: DescribeStacksResult) -> Dict[str, Any]:
    return {
        "next_token": result.next_token,
        "stacks": [to_map(s) for s in result.stacks],
    }


def _stack_to_map(s: Stack) -> Dict[str, Any]:
    return {
        "capabilities": list(s.capabilities),
        "creation_time": s.creation_time,
        "description": s.description,
        "disable_rollback": s.disable_rollback,
        "last_updated_time": s.last_updated_time,
        "notification_arns": list(s.notification_arns),
        "outputs": [to_map(o) for o in s.outputs],
        "parameters": [to_map(p) for p in s.parameters],
        "stack_id": s.stack_id,
        "stack_name": s.stack_name,
        "stack_status": s.stack_status,
        "stack_status_reason": s.stack_status_reason,
        "tags": [to_map(t) for t in s.tags],
        "timeout_in_minutes": s.timeout_in_minutes,
    }


def _output_to_map(o: Output) -> Dict[str, Any]:
    return {
        "description": o.description,
        "output_key": o.output_key,
        "output_value": o.output_value,
    }


def _parameter_to_map(p: Parameter) -> Dict[str, Any]:
    return {"parameter_key": p.parameter_key, "parameter_value": p.parameter_value}


def _tag_to_map(t: Tag) -> Dict[str, Any]:
    return {"key": t.key, "value": t.value}


CONVERTERS: Dict[type, Callable[[Any], Dict[str, Any]]] = {
    ClientError: _error_to_map,
    DescribeStacksResult: _describe_stacks_result_to_map,
    Stack: _stack_to_map,
    Output: _output_to_map,
    Parameter: _parameter_to_map,
    Tag: _tag_to_map,
}


def to_map(value: Any) -> Optional[Dict[str, Any]]:
    """
    Return a plain dictionary for a known result shape.

    ``None`` and values of unregistered types map to ``None``.
    """
    if value is None:
        return None
    for klass in type(value).__mro__:
        converter = CONVERTERS.get(klass)
        if converter is not None:
            return converter(value)
    return None


def decode_exceptions(*exceptions: ClientError) -> List[Optional[Dict[str, Any]]]:
    """Return a dictionary with the details of each service error."""
    return [to_map(e) for e in exceptions]
