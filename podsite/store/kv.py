"""Key-value store backends.

Records are JSON-serializable dicts keyed by strings. Besides point
get/set/delete, the only query primitive is a prefix scan.

Usage:
    store = build_kv_store(settings)

    store.set("episode_1", {"id": "episode_1", "title": "Pilot"})
    episodes = store.get_by_prefix("episode_")
"""

import copy
from typing import Any, Callable, Optional, Protocol, TypeVar

import httpx
import structlog
from supabase import Client, create_client
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from podsite.config.settings import Settings
from podsite.core.exceptions import ConfigurationError, StorageUnavailable

logger = structlog.get_logger(__name__)

T = TypeVar("T")

Record = dict[str, Any]


class KVStore(Protocol):
    """Protocol for key-value store implementations."""

    def get(self, key: str) -> Optional[Record]: ...

    def set(self, key: str, value: Record) -> None: ...

    def delete(self, key: str) -> None: ...

    def get_by_prefix(self, prefix: str) -> list[Record]: ...


class InMemoryKVStore:
    """
    In-memory store for development and tests.

    WARNING: Does not persist across restarts and does not share
    state between multiple application instances.
    """

    def __init__(self, initial: Optional[dict[str, Record]] = None):
        self._data: dict[str, Record] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str) -> Optional[Record]:
        value = self._data.get(key)
        return copy.deepcopy(value) if value is not None else None

    def set(self, key: str, value: Record) -> None:
        self._data[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def get_by_prefix(self, prefix: str) -> list[Record]:
        return [
            copy.deepcopy(value)
            for key, value in self._data.items()
            if key.startswith(prefix)
        ]

    def keys(self) -> list[str]:
        """All stored keys in insertion order."""
        return list(self._data)

    def __len__(self) -> int:
        return len(self._data)


class SupabaseKVStore:
    """
    Key-value store on a Supabase table with ``key`` / ``value`` columns.

    Transport errors are retried with exponential backoff; every failure
    that survives the retries is raised as StorageUnavailable.
    """

    def __init__(self, client: Client, table: str = "kv_store", retry_attempts: int = 3):
        self._client = client
        self._table = table
        self._retry_attempts = retry_attempts

    def _run(self, operation: str, call: Callable[[], T]) -> T:
        retrying = Retrying(
            retry=retry_if_exception_type(httpx.TransportError),
            wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
            stop=stop_after_attempt(self._retry_attempts),
            reraise=True,
            before_sleep=lambda retry_state: logger.warning(
                "kv_store_retry",
                operation=operation,
                attempt=retry_state.attempt_number,
            ),
        )
        try:
            return retrying(call)
        except Exception as e:
            logger.error(
                "kv_store_operation_failed",
                operation=operation,
                table=self._table,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise StorageUnavailable(operation, str(e), {"table": self._table}) from e

    def get(self, key: str) -> Optional[Record]:
        result = self._run(
            "get",
            lambda: self._client.table(self._table)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute(),
        )
        rows = result.data or []
        return rows[0]["value"] if rows else None

    def set(self, key: str, value: Record) -> None:
        self._run(
            "set",
            lambda: self._client.table(self._table)
            .upsert({"key": key, "value": value})
            .execute(),
        )

    def delete(self, key: str) -> None:
        self._run(
            "delete",
            lambda: self._client.table(self._table).delete().eq("key", key).execute(),
        )

    def get_by_prefix(self, prefix: str) -> list[Record]:
        result = self._run(
            "get_by_prefix",
            lambda: self._client.table(self._table)
            .select("key, value")
            .like("key", f"{prefix}%")
            .execute(),
        )
        # LIKE treats "_" as a wildcard, so re-check the literal prefix.
        return [
            row["value"]
            for row in (result.data or [])
            if row["key"].startswith(prefix)
        ]


def create_supabase_client(settings: Settings) -> Client:
    """Create a service-role Supabase client from settings."""
    if not settings.supabase_url:
        raise ConfigurationError("SUPABASE_URL is not set", config_key="supabase_url")
    if not settings.supabase_service_role_key:
        raise ConfigurationError(
            "SUPABASE_SERVICE_ROLE_KEY is not set",
            config_key="supabase_service_role_key",
        )
    return create_client(
        settings.supabase_url,
        settings.supabase_service_role_key.get_secret_value(),
    )


def build_kv_store(settings: Settings, client: Optional[Client] = None) -> KVStore:
    """
    Build the configured key-value backend.

    Args:
        settings: Application settings.
        client: Existing Supabase client to reuse (supabase backend only).

    Returns:
        KVStore implementation.
    """
    if settings.kv_backend == "memory":
        logger.info("kv_store_initialized", backend="memory")
        return InMemoryKVStore()

    store = SupabaseKVStore(
        client or create_supabase_client(settings),
        table=settings.kv_table,
        retry_attempts=settings.storage_retry_attempts,
    )
    logger.info("kv_store_initialized", backend="supabase", table=settings.kv_table)
    return store
