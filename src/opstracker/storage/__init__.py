"""OpsTracker Storage Layer - Blob store adapters (in-memory, SQLAlchemy) and the state codec."""

from .base import BlobStore
from .codec import decode_state, encode_state, load_state, reconcile_state
from .memory import InMemoryBlobStore
from .sql_adapter import SqlBlobStore, SqlStoreConfig

__all__ = [
    "BlobStore",
    "InMemoryBlobStore",
    "SqlBlobStore",
    "SqlStoreConfig",
    "encode_state",
    "decode_state",
    "load_state",
    "reconcile_state",
]
