from typing import Dict, Optional

from .base import BlobStore


class InMemoryBlobStore(BlobStore):
    """Dict-backed store; contents last as long as the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._blobs: Dict[str, str] = dict(initial or {})

    def health_check(self) -> bool:
        return True

    def load(self, key: str) -> Optional[str]:
        return self._blobs.get(key)

    def save(self, key: str, blob: str) -> None:
        self._blobs[key] = blob
