"""Key-value persistence backends."""

from podsite.store.kv import (
    KVStore,
    InMemoryKVStore,
    SupabaseKVStore,
    build_kv_store,
    create_supabase_client,
)

__all__ = [
    "KVStore",
    "InMemoryKVStore",
    "SupabaseKVStore",
    "build_kv_store",
    "create_supabase_client",
]
