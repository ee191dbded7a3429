"""
aws-cf - Amazon CloudFormation operations with plain dictionaries in and out.
"""

__version__ = "0.1.0"

from .client import ClientCache, Credential, get_client
from .config import ClientConfig, load_config
from .exceptions import (
    AwsCfError,
    ConfigurationError,
    MethodResolutionError,
    ServiceError,
)
from .fields import map_to_object_graph, populate
from .mapper import decode_exceptions, to_map
from .stack_manager import (
    StackManager,
    create_stack,
    delete_stack,
    describe_stacks,
    describe_stacks_page,
    estimate_cost_url,
    get_template,
    update_stack,
)

__all__ = [
    "AwsCfError",
    "ClientCache",
    "ClientConfig",
    "ConfigurationError",
    "Credential",
    "MethodResolutionError",
    "ServiceError",
    "StackManager",
    "create_stack",
    "decode_exceptions",
    "delete_stack",
    "describe_stacks",
    "describe_stacks_page",
    "estimate_cost_url",
    "get_client",
    "get_template",
    "load_config",
    "map_to_object_graph",
    "populate",
    "to_map",
    "update_stack",
]
