from opstracker.engine.tracker_service import TrackerService
from opstracker.platform.config import settings
from opstracker.storage.base import BlobStore
from opstracker.storage.memory import InMemoryBlobStore
from opstracker.storage.sql_adapter import SqlBlobStore, SqlStoreConfig

# Singletons
_blob_store: BlobStore | None = None
_tracker_service: TrackerService | None = None


def get_blob_store() -> BlobStore:
    global _blob_store
    if not _blob_store:
        if settings.STORAGE_BACKEND == "memory":
            _blob_store = InMemoryBlobStore()
        else:
            _blob_store = SqlBlobStore(SqlStoreConfig())
    return _blob_store


def get_tracker_service() -> TrackerService:
    global _tracker_service
    if not _tracker_service:
        _tracker_service = TrackerService(
            store=get_blob_store(),
            storage_key=settings.STORAGE_KEY,
            sprint_close_cutoff=settings.SPRINT_CLOSE_CUTOFF,
        )
    return _tracker_service


def init_resources() -> None:
    """Connect the blob store and load the tracker state."""
    get_blob_store().connect()
    get_tracker_service().state


def close_resources() -> None:
    global _blob_store, _tracker_service
    if _blob_store:
        _blob_store.close()
    _blob_store = None
    _tracker_service = None
