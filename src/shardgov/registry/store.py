"""Coordination store (registry center) clients."""

import base64
import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import httpx

from shardgov.config.schema import RegistryConfig
from shardgov.errors import StoreUnavailable
from shardgov.registry.node import PATH_SEPARATOR

logger = logging.getLogger(__name__)


class RegistryCenter(ABC):
    """
    Path-addressed key/value tree.

    Paths are absolute node paths such as ``/states/proxynodes/node1``.
    Implementations apply their namespace before touching the backend, so
    callers never see it.
    """

    def __init__(self, namespace: str = ""):
        self.namespace = namespace.strip(PATH_SEPARATOR)

    def full_path(self, path: str) -> str:
        """Return ``path`` inside this store's namespace."""
        if not self.namespace:
            return path
        return PATH_SEPARATOR + self.namespace + path

    @abstractmethod
    def get(self, path: str) -> Optional[str]:
        """Read the value stored at ``path``, or None if the node is absent."""

    @abstractmethod
    def persist(self, path: str, value: str) -> None:
        """Create or overwrite the node at ``path``."""

    @abstractmethod
    def get_children_keys(self, path: str) -> List[str]:
        """List child key names under ``path``, empty if there are none."""

    def close(self) -> None:
        """Release backend resources."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class MemoryRegistryCenter(RegistryCenter):
    """
    In-process registry center.

    Intermediate nodes exist implicitly: listing a path returns the distinct
    next segments of every stored key below it, sorted by name.
    """

    def __init__(self, namespace: str = "", seed: Optional[Dict[str, str]] = None):
        super().__init__(namespace)
        self._nodes: Dict[str, str] = {}
        self._lock = threading.Lock()
        for path, value in (seed or {}).items():
            self.persist(path, value)

    def get(self, path: str) -> Optional[str]:
        with self._lock:
            return self._nodes.get(self.full_path(path))

    def persist(self, path: str, value: str) -> None:
        with self._lock:
            self._nodes[self.full_path(path)] = value
        logger.debug(f"Persisted {value!r} to {path}")

    def get_children_keys(self, path: str) -> List[str]:
        prefix = self.full_path(path).rstrip(PATH_SEPARATOR) + PATH_SEPARATOR
        with self._lock:
            keys = list(self._nodes)
        children = {
            key[len(prefix):].split(PATH_SEPARATOR, 1)[0]
            for key in keys
            if key.startswith(prefix)
        }
        children.discard("")
        return sorted(children)

    def snapshot(self) -> Dict[str, str]:
        """Return every stored node keyed by its path outside the namespace."""
        prefix = self.full_path("")
        with self._lock:
            return {key[len(prefix):]: value for key, value in self._nodes.items()}


def _encode(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def _decode(data: str) -> str:
    try:
        return base64.b64decode(data, validate=True).decode("utf-8")
    except (ValueError, TypeError) as e:
        raise StoreUnavailable(f"etcd returned an undecodable key or value: {e}") from e


def _prefix_range_end(prefix: str) -> str:
    """Smallest key greater than every key starting with ``prefix``."""
    end = bytearray(prefix.encode("utf-8"))
    for i in range(len(end) - 1, -1, -1):
        if end[i] < 0xFF:
            end[i] += 1
            return base64.b64encode(bytes(end[: i + 1])).decode("ascii")
    # Prefix of all 0xff bytes: range to the end of the keyspace
    return _encode("\0")


class EtcdRegistryCenter(RegistryCenter):
    """
    Registry center backed by an etcd v3 cluster through its JSON gateway.

    Uses ``/v3/kv/range`` for reads and listings and ``/v3/kv/put`` for
    writes. Keys and values travel base64-encoded.
    """

    def __init__(
        self,
        server_lists: str,
        namespace: str = "",
        timeout: float = 5.0,
        client: Optional[httpx.Client] = None,
    ):
        """
        Initialize etcd registry center.

        Args:
            server_lists: Base URL of the etcd gateway (e.g. http://localhost:2379)
            namespace: Namespace prepended to every path
            timeout: Request timeout in seconds
            client: Preconfigured HTTP client (mainly for tests)
        """
        super().__init__(namespace)
        self.base_url = server_lists.rstrip("/")
        self._client = client or httpx.Client(base_url=self.base_url, timeout=timeout)

    def _post(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self._client.post(f"{self.base_url}{endpoint}", json=payload)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            logger.warning(f"etcd request to {endpoint} failed: {e}")
            raise StoreUnavailable(f"etcd request to {endpoint} failed: {e}") from e
        except ValueError as e:
            raise StoreUnavailable(f"etcd returned an invalid response for {endpoint}: {e}") from e

    def get(self, path: str) -> Optional[str]:
        data = self._post("/v3/kv/range", {"key": _encode(self.full_path(path))})
        kvs = data.get("kvs") or []
        if not kvs:
            return None
        # etcd omits empty values from the JSON body
        return _decode(kvs[0].get("value", ""))

    def persist(self, path: str, value: str) -> None:
        self._post(
            "/v3/kv/put",
            {"key": _encode(self.full_path(path)), "value": _encode(value)},
        )
        logger.debug(f"Persisted {value!r} to {path}")

    def get_children_keys(self, path: str) -> List[str]:
        prefix = self.full_path(path).rstrip(PATH_SEPARATOR) + PATH_SEPARATOR
        data = self._post(
            "/v3/kv/range",
            {
                "key": _encode(prefix),
                "range_end": _prefix_range_end(prefix),
                "keys_only": True,
            },
        )
        result: List[str] = []
        for kv in data.get("kvs") or []:
            child = _decode(kv["key"])[len(prefix):].split(PATH_SEPARATOR, 1)[0]
            if child and child not in result:
                result.append(child)
        return result

    def close(self) -> None:
        self._client.close()


def create_registry_center(config: RegistryConfig) -> RegistryCenter:
    """
    Create the registry center described by the configuration.

    Args:
        config: Registry configuration

    Returns:
        Registry center client
    """
    if config.backend == "etcd":
        logger.info(f"Using etcd registry center at {config.server_lists}")
        return EtcdRegistryCenter(
            server_lists=config.server_lists,
            namespace=config.namespace,
            timeout=config.timeout,
        )

    logger.info(f"Using in-memory registry center ({len(config.seed)} seeded nodes)")
    return MemoryRegistryCenter(namespace=config.namespace, seed=config.seed)
