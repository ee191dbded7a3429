"""
CloudFormation stack operations.

Every operation takes a credential first. Pass ``None`` (or an empty
Credential) to use the ambient boto3 credential chain.
"""

import json
import logging
from typing import Any, Dict, List, Mapping, Optional

from .client import ClientCache, get_default_cache
from .config import ClientConfig
from .exceptions import service_errors
from .fields import populate
from .mapper import to_map
from .model import (
    CreateStackRequest,
    DeleteStackRequest,
    DescribeStacksRequest,
    DescribeStacksResult,
    EstimateTemplateCostRequest,
    GetTemplateRequest,
    UpdateStackRequest,
)

logger = logging.getLogger(__name__)


class StackManager:
    """Manage CloudFormation stack operations."""

    def __init__(
        self,
        cache: Optional[ClientCache] = None,
        config: Optional[ClientConfig] = None,
    ):
        """
        Initialize stack manager.

        Args:
            cache: Client cache to draw clients from. A new one is created
                from ``config`` when omitted.
            config: Client settings for a new cache
        """
        self.cache = cache or ClientCache(config)

    def client(self, cred: Any = None) -> Any:
        """Get the CloudFormation client for a credential."""
        return self.cache.get(cred)

    def describe_stacks_page(
        self,
        cred: Any,
        stack_name: Optional[str] = None,
        next_token: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Describe one page of stacks, including the token for the next page."""
        request = DescribeStacksRequest(stack_name=stack_name, next_token=next_token)
        logger.info(f"Describing stacks ({stack_name or 'all'})")

        with service_errors():
            response = self.client(cred).describe_stacks(**request.to_api_params())

        return dict(to_map(DescribeStacksResult.from_api(response)) or {})

    def describe_stacks(
        self, cred: Any, stack_name: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """List the named stack, or all stacks."""
        return list(self.describe_stacks_page(cred, stack_name)["stacks"])

    def get_template(self, cred: Any, stack_name: str) -> str:
        """Return the template body for a named stack."""
        request = GetTemplateRequest(stack_name=stack_name)
        logger.info(f"Fetching template for stack {stack_name}")

        with service_errors():
            response = self.client(cred).get_template(**request.to_api_params())

        body = response["TemplateBody"]
        # boto3 decodes JSON template bodies
        if not isinstance(body, str):
            body = json.dumps(body)
        return body

    def estimate_cost_url(self, cred: Any, template_body: str) -> str:
        """Return a URL for an estimate of the template's monthly cost."""
        request = EstimateTemplateCostRequest(template_body=template_body)
        logger.info("Estimating template cost")

        with service_errors():
            response = self.client(cred).estimate_template_cost(
                **request.to_api_params()
            )

        return str(response["Url"])

    def create_stack(self, cred: Any, params: Mapping[str, Any]) -> str:
        """Create a new stack, and return the new stack ID."""
        request = populate(CreateStackRequest, params)
        logger.info(f"Creating stack {request.stack_name}")

        with service_errors():
            response = self.client(cred).create_stack(**request.to_api_params())

        return str(response["StackId"])

    def update_stack(self, cred: Any, params: Mapping[str, Any]) -> str:
        """Update an existing stack, and return the stack ID."""
        request = populate(UpdateStackRequest, params)
        logger.info(f"Updating stack {request.stack_name}")

        with service_errors():
            response = self.client(cred).update_stack(**request.to_api_params())

        return str(response["StackId"])

    def delete_stack(self, cred: Any, stack_name: str) -> None:
        """Delete an existing stack by name."""
        request = DeleteStackRequest(stack_name=stack_name)
        logger.info(f"Deleting stack {stack_name}")

        with service_errors():
            self.client(cred).delete_stack(**request.to_api_params())


# Module-level functions share the process-wide client cache


def _default_manager() -> StackManager:
    return StackManager(cache=get_default_cache())


def describe_stacks(cred: Any, stack_name: Optional[str] = None) -> List[Dict[str, Any]]:
    """List the named stack, or all stacks."""
    return _default_manager().describe_stacks(cred, stack_name)


def describe_stacks_page(
    cred: Any, stack_name: Optional[str] = None, next_token: Optional[str] = None
) -> Dict[str, Any]:
    """Describe one page of stacks, including the token for the next page."""
    return _default_manager().describe_stacks_page(cred, stack_name, next_token)


def get_template(cred: Any, stack_name: str) -> str:
    """Return the template body for a named stack."""
    return _default_manager().get_template(cred, stack_name)


def estimate_cost_url(cred: Any, template_body: str) -> str:
    """Return a URL for an estimate of the template's monthly cost."""
    return _default_manager().estimate_cost_url(cred, template_body)


def create_stack(cred: Any, params: Mapping[str, Any]) -> str:
    """Create a new stack, and return the new stack ID."""
    return _default_manager().create_stack(cred, params)


def update_stack(cred: Any, params: Mapping[str, Any]) -> str:
    """Update an existing stack, and return the stack ID."""
    return _default_manager().update_stack(cred, params)


def delete_stack(cred: Any, stack_name: str) -> None:
    """Delete an existing stack by name."""
    _default_manager().delete_stack(cred, stack_name)
