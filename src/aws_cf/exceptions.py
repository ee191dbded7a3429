"""
Exception types raised by the CloudFormation wrapper.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from botocore.exceptions import ClientError


class AwsCfError(Exception):
    """Base class for errors raised locally by this package."""


class MethodResolutionError(AwsCfError, AttributeError):
    """Raised when a parameter key has no matching field on a request type."""

    def __init__(self, key: str, member: str, target: type):
        self.key = key
        self.member = member
        self.target = target
        super().__init__(
            f"No field {member!r} (from key {key!r}) on {target.__name__}"
        )


class ConfigurationError(AwsCfError):
    """Raised when configuration is invalid or cannot be loaded."""

    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        super().__init__(f"{message}: {details}" if details else message)


# botocore reports the fault side as Sender/Receiver
ERROR_TYPES = {"Sender": "Client", "Receiver": "Service"}


class ServiceError(ClientError):
    """A failed CloudFormation call, with the details callers usually log."""

    def __init__(
        self,
        error_response: Dict[str, Any],
        operation_name: str,
        service_name: str = "cloudformation",
    ):
        super().__init__(error_response, operation_name)
        self.service_name = service_name

    @classmethod
    def from_client_error(
        cls, error: ClientError, service_name: str = "cloudformation"
    ) -> "ServiceError":
        return cls(error.response, error.operation_name, service_name)

    @property
    def error_code(self) -> Optional[str]:
        return self.response.get("Error", {}).get("Code")

    @property
    def error_type(self) -> str:
        fault = self.response.get("Error", {}).get("Type")
        return ERROR_TYPES.get(fault, "Unknown")

    @property
    def status_code(self) -> Optional[int]:
        return self.response.get("ResponseMetadata", {}).get("HTTPStatusCode")

    def __reduce__(self) -> Any:
        return (
            self.__class__,
            (self.response, self.operation_name, self.service_name),
        )


@contextmanager
def service_errors(service_name: str = "cloudformation") -> Iterator[None]:
    """Re-raise botocore client errors as ServiceError."""
    try:
        yield
    except ServiceError:
        raise
    except ClientError as e:
        raise ServiceError.from_client_error(e, service_name) from e
