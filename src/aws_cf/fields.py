"""
Build request objects from flat parameter mappings.

Callers pass ``{"stack-name": "web", "parameters": {"KeyName": "ops"}}``
instead of constructing nested request objects by hand. Keys are matched to
request fields by their CamelCase member name.
"""

import logging
from dataclasses import fields
from typing import (
    Any,
    Callable,
    Dict,
    Mapping,
    Type,
    TypeVar,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from .exceptions import MethodResolutionError
from .model import Parameter, member_name

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _to_parameters(params: Any) -> list:
    if params is None:
        return []
    pairs = params.items() if isinstance(params, Mapping) else params
    return [
        Parameter(parameter_key=str(key), parameter_value=value)
        for key, value in pairs
    ]


VALUE_MAPPERS: Dict[str, Callable[[Any], Any]] = {
    "parameters": _to_parameters,
}


def _identity(value: Any) -> Any:
    return value


def value_mapper(key: str) -> Callable[[Any], Any]:
    """Return the transform applied to the value supplied for ``key``."""
    return VALUE_MAPPERS.get(key.replace("_", "-"), _identity)


def map_to_object_graph(params: Mapping[str, Any]) -> Dict[str, Any]:
    """Apply the key-specific value mappers to every entry of ``params``."""
    return {key: value_mapper(key)(value) for key, value in params.items()}


def _is_integer(hint: Any) -> bool:
    if hint is int:
        return True
    if get_origin(hint) is Union:
        return int in get_args(hint)
    return False


def _to_int(value: Any) -> int:
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"Expected an integral value, got {value!r}")
    return int(value)


def field_table(target_type: type) -> Dict[str, Any]:
    """Map each CamelCase member name of ``target_type`` to its dataclass field."""
    return {member_name(f.name): f for f in fields(target_type)}


def populate(target_type: Type[T], params: Mapping[str, Any]) -> T:
    """
    Create a ``target_type`` instance with fields set from ``params``.

    Args:
        target_type: Request dataclass to build
        params: Mapping of dash-separated field names to values

    Returns:
        The populated request object

    Raises:
        MethodResolutionError: If a key matches no field of ``target_type``
    """
    table = field_table(target_type)
    hints = get_type_hints(target_type)
    obj = target_type()

    for key, value in params.items():
        member = member_name(key)
        target_field = table.get(member)
        if target_field is None:
            raise MethodResolutionError(key, member, target_type)

        if (
            _is_integer(hints[target_field.name])
            and value is not None
            and not isinstance(value, int)
        ):
            value = _to_int(value)

        setattr(obj, target_field.name, value_mapper(key)(value))

    logger.debug(f"Built {target_type.__name__} from keys {sorted(params)}")
    return obj
