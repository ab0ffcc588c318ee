"""Draft invoice persistence.

All drafts live in one JSON object keyed by bill number, stored under a single
storage key. Every write is a read-modify-write of that object guarded by the
storage version, retried when another writer got there first.
"""

import json
import logging
from typing import Callable, Dict, Optional, TypeVar

from pydantic import ValidationError
from sqlalchemy.orm import Session

from invoice_engine.app.core.settings import get_settings
from invoice_engine.app.crud.crud_storage import storage_crud
from invoice_engine.app.schemas.invoice import InvoiceRecord, LineItem
from invoice_engine.app.services.exceptions import (
    DraftNotFoundError,
    LineItemNotFoundError,
    StaleWriteError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_LEGACY_FIELDS = {
    "billNo": "billNumber",
    "date": "issueDate",
}
_LEGACY_VEHICLE_FIELDS = {
    "vehicleNo": "vehicleNumber",
    "vehicleNumber": "vehicleNumber",
    "vehicleType": "vehicleType",
    "vehicleModel": "vehicleModel",
    "meterReading": "meterReading",
}


def upgrade_legacy_draft(data: dict) -> dict:
    """Rename fields of drafts written before line items had a quantity."""
    if "billNo" not in data:
        return data
    upgraded = {}
    vehicle = {}
    for key, value in data.items():
        if key in _LEGACY_FIELDS:
            upgraded[_LEGACY_FIELDS[key]] = value
        elif key in _LEGACY_VEHICLE_FIELDS:
            if value:
                vehicle.setdefault(_LEGACY_VEHICLE_FIELDS[key], value)
        elif key == "lineItems" and isinstance(value, list):
            upgraded[key] = [_upgrade_legacy_item(item) for item in value]
        else:
            upgraded[key] = value
    upgraded.setdefault("vehicleInfo", vehicle)
    return upgraded


def _upgrade_legacy_item(item):
    if not isinstance(item, dict):
        return item
    item = dict(item)
    if "particulars" in item:
        item["description"] = item.pop("particulars")
    if "rate" in item:
        item["unitRate"] = item.pop("rate")
    return item


def _decode(blob: Optional[str]) -> Dict[str, dict]:
    if not blob:
        return {}
    try:
        data = json.loads(blob)
    except (TypeError, ValueError) as exc:
        logger.error("Error parsing draft invoices: %s", exc)
        return {}
    if not isinstance(data, dict):
        logger.error("Draft invoices blob is not an object: %s", type(data).__name__)
        return {}
    return data


def _record_from_raw(bill_number: str, raw) -> Optional[InvoiceRecord]:
    if not isinstance(raw, dict):
        logger.warning("Skipping draft %s: entry is not an object", bill_number)
        return None
    try:
        return InvoiceRecord.model_validate(upgrade_legacy_draft(raw))
    except ValidationError as exc:
        logger.warning("Skipping invalid draft %s: %s", bill_number, exc.error_count())
        return None


def _to_raw(invoice: InvoiceRecord) -> dict:
    return invoice.model_dump(mode="json", by_alias=True)


class DraftStore:
    def __init__(self, db: Session, key: Optional[str] = None, retries: Optional[int] = None):
        app_settings = get_settings()
        self.db = db
        self.key = key or app_settings.drafts_storage_key
        self.retries = retries or app_settings.draft_write_retries

    def _read_raw(self) -> Dict[str, dict]:
        return _decode(storage_crud.get_value(self.db, key=self.key))

    def _mutate(self, change: Callable[[Dict[str, dict]], T], *, write: Callable[[T], bool] = lambda _: True) -> T:
        """Apply ``change`` to the stored collection and write it back.

        ``change`` may run more than once; it must only touch the mapping it is
        given. ``write`` decides from the result whether anything needs saving.
        """
        last_error: Optional[StaleWriteError] = None
        for attempt in range(1, self.retries + 1):
            entry = storage_crud.get(self.db, key=self.key)
            version = entry.version if entry else 0
            drafts = _decode(entry.value if entry else None)
            result = change(drafts)
            if not write(result):
                return result
            try:
                storage_crud.put(self.db, key=self.key, value=json.dumps(drafts), expected_version=version)
                return result
            except StaleWriteError as exc:
                logger.warning("Draft write conflict (attempt %s/%s): %s", attempt, self.retries, exc)
                last_error = exc
                self.db.expire_all()
        raise last_error

    def list_drafts(self) -> Dict[str, InvoiceRecord]:
        drafts = {}
        for bill_number, raw in self._read_raw().items():
            record = _record_from_raw(bill_number, raw)
            if record is not None:
                drafts[bill_number] = record
        return drafts

    def get_draft(self, bill_number: str) -> Optional[InvoiceRecord]:
        raw = self._read_raw().get(bill_number)
        if raw is None:
            return None
        return _record_from_raw(bill_number, raw)

    def save_draft(self, invoice: InvoiceRecord) -> InvoiceRecord:
        saved = invoice.model_copy(update={"is_draft": True}, deep=True)

        def change(drafts):
            drafts[saved.bill_number] = _to_raw(saved)
            return saved

        self._mutate(change)
        logger.info("Saved draft %s (%s items)", saved.bill_number, len(saved.line_items))
        return saved

    def delete_draft(self, bill_number: str) -> bool:
        def change(drafts):
            return drafts.pop(bill_number, None) is not None

        deleted = self._mutate(change, write=bool)
        if deleted:
            logger.info("Deleted draft %s", bill_number)
        return deleted

    def _edit_draft(self, bill_number: str, edit: Callable[[InvoiceRecord], LineItem]):
        def change(drafts):
            record = _record_from_raw(bill_number, drafts[bill_number]) if bill_number in drafts else None
            if record is None:
                raise DraftNotFoundError(bill_number)
            item = edit(record)
            drafts[bill_number] = _to_raw(record)
            return record, item

        return self._mutate(change)

    def add_line_item(self, bill_number: str, *, description: str = "", unit_rate=0, quantity=1, item_id=None):
        def edit(record: InvoiceRecord) -> LineItem:
            return record.add_line_item(description, unit_rate, quantity, item_id=item_id)

        return self._edit_draft(bill_number, edit)

    def update_line_item(self, bill_number: str, item_id: str, **changes):
        def edit(record: InvoiceRecord) -> LineItem:
            try:
                return record.update_line_item(item_id, **changes)
            except KeyError as exc:
                raise LineItemNotFoundError(bill_number, item_id) from exc

        return self._edit_draft(bill_number, edit)

    def remove_line_item(self, bill_number: str, item_id: str):
        def edit(record: InvoiceRecord) -> LineItem:
            try:
                return record.remove_line_item(item_id)
            except KeyError as exc:
                raise LineItemNotFoundError(bill_number, item_id) from exc

        return self._edit_draft(bill_number, edit)
