"""
CloudFormation client construction and caching.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import boto3

from .config import ClientConfig, load_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credential:
    """An explicit access/secret key pair, or empty for ambient credentials."""

    access_key: Optional[str] = None
    secret_key: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "Credential":
        """Build a credential from {"access-key": ..., "secret-key": ...}."""
        if not data:
            return cls()
        return cls(
            access_key=data.get("access-key", data.get("access_key")),
            secret_key=data.get("secret-key", data.get("secret_key")),
        )

    def __repr__(self) -> str:
        return f"Credential(access_key={self.access_key!r}, secret_key=***)"


AMBIENT = Credential()


def _as_credential(cred: Any) -> Credential:
    if cred is None:
        return AMBIENT
    if isinstance(cred, Credential):
        return cred
    return Credential.from_mapping(cred)


def create_client(cred: Credential, config: ClientConfig) -> Any:
    """Create a CloudFormation client for a credential."""
    if cred.access_key:
        session = boto3.Session(
            aws_access_key_id=cred.access_key,
            aws_secret_access_key=cred.secret_key,
            region_name=config.region,
        )
    else:
        session_args = {"region_name": config.region}
        if config.profile:
            session_args["profile_name"] = config.profile
        session = boto3.Session(**session_args)

    return session.client("cloudformation", endpoint_url=config.endpoint_url)


class ClientCache:
    """Memoized CloudFormation clients, one per distinct credential."""

    def __init__(self, config: Optional[ClientConfig] = None):
        self.config = config or ClientConfig()
        self.lock = threading.Lock()
        self._clients: Dict[Credential, Any] = {}

    def get(self, cred: Any = None) -> Any:
        """Get or create the client for the given credential."""
        key = _as_credential(cred)
        with self.lock:
            try:
                return self._clients[key]
            except KeyError:
                logger.debug(
                    f"Missed client lookup for {key!r}; creating CloudFormation client"
                )
                client = create_client(key, self.config)
                self._clients[key] = client
                return client

    def clear(self) -> None:
        """Drop every cached client."""
        with self.lock:
            self._clients.clear()

    def __len__(self) -> int:
        return len(self._clients)


_default_cache: Optional[ClientCache] = None
_default_cache_lock = threading.Lock()


def get_default_cache() -> ClientCache:
    """Get or create the process-wide client cache."""
    global _default_cache
    with _default_cache_lock:
        if _default_cache is None:
            _default_cache = ClientCache(load_config())
    return _default_cache


def get_client(cred: Any = None) -> Any:
    """Return the cached CloudFormation client for a credential."""
    return get_default_cache().get(cred)
