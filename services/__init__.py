"""
Services Module
Business logic layer for the DoseTrack application
"""

from services.exceptions import (
    IntakeError,
    ValidationError,
    NotFoundError,
    UploadError,
    AuthRequiredError,
)
from services.adherence_engine import AdherenceSummary, compute, month_bounds
from services.record_store import RecordDraft, RecordStore, SqlRecordStore
from services.blob_store import BlobStore, LocalBlobStore
from services.intake_service import IntakeService
from services.adherence_service import AdherenceService, adherence_service


__all__ = [
    # Errors
    "IntakeError",
    "ValidationError",
    "NotFoundError",
    "UploadError",
    "AuthRequiredError",
    # Engine
    "AdherenceSummary",
    "compute",
    "month_bounds",
    # Collaborators
    "RecordDraft",
    "RecordStore",
    "SqlRecordStore",
    "BlobStore",
    "LocalBlobStore",
    # Services
    "IntakeService",
    "AdherenceService",
    # Singleton instances
    "adherence_service",
]
