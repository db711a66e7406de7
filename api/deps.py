"""
API Dependencies
Common dependencies for FastAPI endpoints
"""

from functools import lru_cache
from typing import Optional
from fastapi import Depends, Header
from sqlalchemy.orm import Session

from database import get_db
from services.blob_store import BlobStore, LocalBlobStore
from services.exceptions import AuthRequiredError
from services.intake_service import IntakeService
from services.record_store import SqlRecordStore


async def get_current_owner_id(
    x_user_id: Optional[str] = Header(None, alias="X-User-Id")
) -> str:
    """
    Owner id supplied by the auth collaborator.
    Raises AuthRequiredError when no owner context is present.
    """
    owner_id = (x_user_id or "").strip()
    if not owner_id:
        raise AuthRequiredError()
    return owner_id


@lru_cache()
def get_blob_store() -> BlobStore:
    """Evidence storage shared across requests"""
    return LocalBlobStore()


def get_intake_service(
    db: Session = Depends(get_db),
    blob_store: BlobStore = Depends(get_blob_store)
) -> IntakeService:
    """Intake service bound to the request's database session"""
    return IntakeService(SqlRecordStore(db), blob_store)


class ServiceDependency:
    """
    Dependency injection for services
    """

    @staticmethod
    def get_adherence_service():
        from services.adherence_service import adherence_service
        return adherence_service


# Service dependency instances
services = ServiceDependency()
