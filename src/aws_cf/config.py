"""
Configuration for CloudFormation clients.

Settings come from defaults, an optional YAML file and environment variables,
in increasing order of precedence.
"""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from jsonschema import ValidationError, validate

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "AWS_CF_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".aws-cf.yaml"

ENV_OVERRIDES = {
    "region": "AWS_CF_REGION",
    "profile": "AWS_CF_PROFILE",
    "endpoint_url": "AWS_CF_ENDPOINT_URL",
}

CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "region": {"type": "string", "minLength": 1},
        "profile": {"type": ["string", "null"]},
        "endpoint_url": {"type": ["string", "null"]},
    },
    "additionalProperties": False,
}


@dataclass(frozen=True)
class ClientConfig:
    """Settings used to construct CloudFormation clients."""

    region: str = "us-east-1"
    profile: Optional[str] = None
    endpoint_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClientConfig":
        """Create config from dictionary."""
        return cls(**data)


def _read_config_file(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(f"Failed to read configuration file {path}", str(e))
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse configuration file {path}", str(e))

    try:
        validate(instance=data, schema=CONFIG_SCHEMA)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration in {path}", e.message)

    return dict(data)


def load_config(path: Optional[Union[str, Path]] = None) -> ClientConfig:
    """
    Load client configuration.

    Args:
        path: YAML file to read. Defaults to $AWS_CF_CONFIG, then ~/.aws-cf.yaml
            when it exists.

    Returns:
        The merged ClientConfig
    """
    data: Dict[str, Any] = {}

    if path is None and os.environ.get(CONFIG_ENV_VAR):
        path = os.environ[CONFIG_ENV_VAR]

    if path is not None:
        data.update(_read_config_file(Path(path)))
    elif DEFAULT_CONFIG_PATH.exists():
        data.update(_read_config_file(DEFAULT_CONFIG_PATH))

    for key, env_var in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            data[key] = value

    config = ClientConfig.from_dict(data)
    logger.debug(f"Loaded client configuration: {config.to_dict()}")
    return config
