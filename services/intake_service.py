"""
Intake Service
Mutation workflow for medication records: insert, edit, delete,
mark taken (with optional photo evidence) and toggle taken
"""

import logging
from datetime import date, datetime
from typing import Any, Callable, Dict, Mapping, Optional, Union

import models
from config import adherence_config
from services.blob_store import BlobStore
from services.clock import epoch_millis, utcnow
from services.exceptions import NotFoundError, ValidationError
from services.record_store import RecordDraft, RecordStore


logger = logging.getLogger(__name__)


EDITABLE_FIELDS = adherence_config.REQUIRED_RECORD_FIELDS


def _clean_field(name: str, value: Any) -> Any:
    if value is None:
        raise ValidationError(f"{name} is required", field=name)

    if name == "scheduled_date":
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, str) and value.strip():
            try:
                return date.fromisoformat(value.strip())
            except ValueError:
                raise ValidationError(
                    f"scheduled_date must be YYYY-MM-DD, got {value!r}", field=name
                )
        raise ValidationError(f"{name} is required", field=name)

    value = str(value).strip()
    if not value:
        raise ValidationError(f"{name} is required", field=name)
    return value


def validate_draft(draft: Union[RecordDraft, Mapping[str, Any]]) -> RecordDraft:
    """Check every required field is present and non-empty"""
    values = draft.to_dict() if isinstance(draft, RecordDraft) else dict(draft)
    cleaned = {name: _clean_field(name, values.get(name)) for name in EDITABLE_FIELDS}
    return RecordDraft(**cleaned)


def validate_changes(changes: Mapping[str, Any]) -> Dict[str, Any]:
    """Check an edit only touches editable fields and leaves none empty"""
    unknown = set(changes) - set(EDITABLE_FIELDS)
    if unknown:
        raise ValidationError(f"Fields not editable: {', '.join(sorted(unknown))}")
    return {name: _clean_field(name, value) for name, value in changes.items()}


def evidence_key(record_id: int, now: datetime) -> str:
    """Blob key for evidence: record id plus epoch milliseconds"""
    return f"{record_id}-{epoch_millis(now)}"


class IntakeService:
    """
    Service for recording medication intake.

    Operations run at most two sequential collaborator calls (evidence
    upload, then record update). They are not transactional: an update
    failure after a successful upload leaves the blob orphaned.
    """

    def __init__(
        self,
        record_store: RecordStore,
        blob_store: Optional[BlobStore] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.record_store = record_store
        self.blob_store = blob_store
        self.clock = clock

    def _require(self, owner_id: str, record_id: int) -> models.MedicationRecord:
        record = self.record_store.get(owner_id, record_id)
        if record is None:
            raise NotFoundError(record_id)
        return record

    async def get_record(self, owner_id: str, record_id: int) -> models.MedicationRecord:
        """Fetch one record; raises NotFoundError"""
        return self._require(owner_id, record_id)

    async def insert(
        self,
        owner_id: str,
        draft: Union[RecordDraft, Mapping[str, Any]],
    ) -> models.MedicationRecord:
        """
        Create a new record, initially not taken

        Raises:
            ValidationError: name, dosage, scheduled_date or scheduled_time missing
        """
        clean = validate_draft(draft)
        record_id = self.record_store.insert(owner_id, clean)

        logger.info(
            f"Added {clean.name} {clean.dosage} for owner {owner_id} "
            f"on {clean.scheduled_date} {clean.scheduled_time}"
        )
        return self._require(owner_id, record_id)

    async def update(
        self,
        owner_id: str,
        record_id: int,
        changes: Mapping[str, Any],
    ) -> models.MedicationRecord:
        """Edit name, dosage, date or time of a record"""
        clean = validate_changes(changes)
        if clean:
            self.record_store.update(owner_id, record_id, clean)
            logger.info(f"Updated record {record_id}: {', '.join(sorted(clean))}")
        return self._require(owner_id, record_id)

    async def delete(self, owner_id: str, record_id: int) -> None:
        """Remove a record"""
        self.record_store.delete(owner_id, record_id)
        logger.info(f"Deleted record {record_id} for owner {owner_id}")

    async def mark_taken(
        self,
        owner_id: str,
        record_id: int,
        evidence: Optional[bytes] = None,
    ) -> models.MedicationRecord:
        """
        Mark a dose taken, optionally attaching photo evidence

        Args:
            owner_id: Caller's owner id
            record_id: Record to mark
            evidence: Raw photo bytes, uploaded before the record changes

        Returns:
            The updated record

        Raises:
            NotFoundError: record unknown for this owner
            UploadError: evidence could not be stored; the record is untouched
        """
        self._require(owner_id, record_id)
        now = self.clock()

        photo_ref = None
        if evidence is not None:
            if self.blob_store is None:
                raise RuntimeError("Evidence supplied but no blob store configured")
            photo_ref = self.blob_store.upload(evidence_key(record_id, now), evidence)

        try:
            self.record_store.update(owner_id, record_id, {
                "taken": True,
                "taken_at": now,
                "photo_ref": photo_ref,
            })
        except Exception:
            if photo_ref:
                logger.warning(
                    f"Evidence {photo_ref} orphaned: update of record {record_id} failed"
                )
            raise

        logger.info(
            f"Record {record_id} marked taken"
            + (f" with evidence {photo_ref}" if photo_ref else "")
        )
        return self._require(owner_id, record_id)

    async def toggle_taken(
        self,
        owner_id: str,
        record_id: int,
        current_taken: bool,
    ) -> models.MedicationRecord:
        """
        Flip `taken` relative to the caller's view of it.

        Last writer wins: the stored value is not compared with
        `current_taken`. `photo_ref` is kept when flipping to not taken.
        """
        taken = not current_taken
        self.record_store.update(owner_id, record_id, {
            "taken": taken,
            "taken_at": self.clock() if taken else None,
        })

        logger.info(f"Record {record_id} toggled to taken={taken}")
        return self._require(owner_id, record_id)


__all__ = [
    "IntakeService",
    "validate_draft",
    "validate_changes",
    "evidence_key",
]
