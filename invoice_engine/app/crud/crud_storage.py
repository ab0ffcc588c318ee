"""CRUD operations for keyed storage blobs."""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from invoice_engine.app.core.time import utc_now
from invoice_engine.app.models.storage_entry import StorageEntry
from invoice_engine.app.services.exceptions import StaleWriteError


class CRUDStorage:
    def get(self, db: Session, *, key: str) -> Optional[StorageEntry]:
        return db.query(StorageEntry).filter(StorageEntry.key == key).first()

    def get_value(self, db: Session, *, key: str) -> Optional[str]:
        entry = self.get(db, key=key)
        return entry.value if entry else None

    def put(self, db: Session, *, key: str, value: str, expected_version: Optional[int] = None) -> StorageEntry:
        """Replace the blob stored under ``key``.

        ``expected_version`` of ``None`` means last writer wins. Any other value
        must match the stored version (0 for "not stored yet"), otherwise
        :class:`StaleWriteError` is raised. The version check is repeated inside
        the UPDATE so a writer racing between read and write is also rejected.
        """
        existing = self.get(db, key=key)
        current_version = existing.version if existing else 0
        if expected_version is not None and expected_version != current_version:
            raise StaleWriteError(key, expected_version, current_version)

        if existing is None:
            entry = StorageEntry(key=key, value=value, version=1)
            db.add(entry)
            try:
                db.commit()
            except IntegrityError as exc:
                db.rollback()
                raise StaleWriteError(key, 0, None) from exc
            db.refresh(entry)
            return entry

        updated = (
            db.query(StorageEntry)
            .filter(StorageEntry.key == key, StorageEntry.version == current_version)
            .update(
                {"value": value, "version": current_version + 1, "updated_at": utc_now()},
                synchronize_session=False,
            )
        )
        if updated == 0:
            db.rollback()
            raise StaleWriteError(key, current_version, None)
        db.commit()
        db.refresh(existing)
        return existing

    def delete(self, db: Session, *, key: str) -> bool:
        entry = self.get(db, key=key)
        if entry is None:
            return False
        db.delete(entry)
        db.commit()
        return True


storage_crud = CRUDStorage()
