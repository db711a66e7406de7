"""
Blob Store
Opaque storage for intake evidence (photos)
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import Optional

from config import settings
from services.exceptions import UploadError


logger = logging.getLogger(__name__)


class BlobStore(ABC):
    """Storage collaborator returning an opaque reference per upload"""

    @abstractmethod
    def upload(self, key: str, data: bytes) -> str:
        """Store `data` under `key`; raises UploadError on failure"""


class LocalBlobStore(BlobStore):
    """
    BlobStore writing to a directory on local disk.

    Files land in `<root>/<bucket>/<key>`; the returned reference is the
    key, relative to the bucket.
    """

    def __init__(
        self,
        root_dir: Optional[str] = None,
        bucket: Optional[str] = None,
        max_bytes: Optional[int] = None,
    ):
        self.root_dir = root_dir or settings.BLOB_STORAGE_DIR
        self.bucket = bucket or settings.EVIDENCE_BUCKET
        self.max_bytes = max_bytes if max_bytes is not None else settings.MAX_EVIDENCE_BYTES

    @property
    def bucket_path(self) -> str:
        return os.path.join(self.root_dir, self.bucket)

    def path_for(self, reference: str) -> str:
        return os.path.join(self.bucket_path, reference)

    def upload(self, key: str, data: bytes) -> str:
        if not key or os.sep in key or "/" in key or key in (".", ".."):
            raise UploadError(f"Invalid blob key: {key!r}")
        if self.max_bytes and len(data) > self.max_bytes:
            raise UploadError(
                f"Evidence too large: {len(data)} bytes (max {self.max_bytes})"
            )

        path = self.path_for(key)
        try:
            os.makedirs(self.bucket_path, exist_ok=True)
            # "xb" refuses to overwrite an existing object
            with open(path, "xb") as fh:
                fh.write(data)
        except OSError as e:
            raise UploadError(f"Failed to store evidence {key}: {e}") from e

        logger.info(f"Stored evidence {key} ({len(data)} bytes) in {self.bucket}")
        return key


__all__ = ["BlobStore", "LocalBlobStore"]
