"""Loading, migrating and saving the persisted template settings blob."""

import json
import logging
from typing import Callable, Dict, Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session

from invoice_engine.app.core.settings import get_settings
from invoice_engine.app.crud.crud_storage import storage_crud
from invoice_engine.app.models.storage_entry import StorageEntry
from invoice_engine.app.schemas.template_settings import TemplateSettings, canonical_defaults

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 2
SCHEMA_VERSION_KEY = "schemaVersion"


def _migrate_v1_to_v2(data: dict) -> dict:
    # v1 blobs stored the tagline as businessTagline
    if "businessTagline" in data and "tagline" not in data:
        data["tagline"] = data.pop("businessTagline")
    return data


MIGRATIONS: Dict[int, Callable[[dict], dict]] = {
    1: _migrate_v1_to_v2,
}


def migrate_blob(data: dict) -> dict:
    """Bring a parsed blob up to SCHEMA_VERSION; the version tag is removed."""
    version = data.pop(SCHEMA_VERSION_KEY, 1)
    if not isinstance(version, int) or isinstance(version, bool) or version < 1:
        logger.warning("Invalid settings schema version %r; treating as 1", version)
        version = 1
    while version < SCHEMA_VERSION:
        data = MIGRATIONS[version](data)
        version += 1
    return data


def settings_from_mapping(data: dict) -> TemplateSettings:
    """Fill every canonical field missing from ``data`` with its default.

    A key counts as present even when its value is falsy, so an explicit
    ``false`` or ``""`` survives. ``null`` on a known field counts as missing.
    Fields that fail validation fall back to their default one by one.
    """
    data = migrate_blob(dict(data))
    defaults = canonical_defaults().to_wire()
    merged = dict(defaults)
    for key, value in data.items():
        if value is None and key in defaults:
            continue
        merged[key] = value

    try:
        return TemplateSettings.model_validate(merged)
    except ValidationError as exc:
        invalid = {err["loc"][0] for err in exc.errors() if err.get("loc")}
        logger.warning("Resetting invalid settings fields to defaults: %s", sorted(str(k) for k in invalid))
        for key in invalid:
            if key in defaults:
                merged[key] = defaults[key]
            else:
                merged.pop(key, None)
        return TemplateSettings.model_validate(merged)


def load_settings(persisted_blob: Optional[str], fallback: Optional[TemplateSettings] = None) -> TemplateSettings:
    """Turn a persisted blob into a fully populated TemplateSettings.

    Never raises: an absent blob yields the canonical defaults and a blob that
    cannot be parsed yields ``fallback`` (the last known good value) or the
    canonical defaults.
    """
    if not persisted_blob:
        return canonical_defaults()
    try:
        data = json.loads(persisted_blob)
    except (TypeError, ValueError) as exc:
        logger.error("Error parsing template settings: %s", exc)
        return fallback if fallback is not None else canonical_defaults()
    if not isinstance(data, dict):
        logger.error("Template settings blob is not an object: %s", type(data).__name__)
        return fallback if fallback is not None else canonical_defaults()
    return settings_from_mapping(data)


def serialize_settings(settings: TemplateSettings) -> str:
    payload = settings.to_wire()
    payload[SCHEMA_VERSION_KEY] = SCHEMA_VERSION
    return json.dumps(payload)


def save_settings(
    db: Session,
    settings: TemplateSettings,
    *,
    key: Optional[str] = None,
    expected_version: Optional[int] = None,
) -> StorageEntry:
    """Write the complete settings object, replacing the stored value.

    There is no partial write; callers merge a patch before saving.
    """
    entry = storage_crud.put(
        db,
        key=key or get_settings().settings_storage_key,
        value=serialize_settings(settings),
        expected_version=expected_version,
    )
    logger.info("Saved template settings (template=%s, version=%s)", settings.template_id, entry.version)
    return entry


def reset_settings(db: Session, *, key: Optional[str] = None, expected_version: Optional[int] = None) -> StorageEntry:
    return save_settings(db, canonical_defaults(), key=key, expected_version=expected_version)


class SettingsStore:
    """Owner of the persisted settings and of the last known good copy.

    One instance lives on the application object; request handlers receive it
    through a dependency together with their database session.
    """

    def __init__(self, key: Optional[str] = None):
        self.key = key or get_settings().settings_storage_key
        self._last_good: Optional[TemplateSettings] = None

    @property
    def last_good(self) -> Optional[TemplateSettings]:
        return self._last_good

    def load(self, db: Session) -> TemplateSettings:
        blob = storage_crud.get_value(db, key=self.key)
        settings = load_settings(blob, fallback=self._last_good)
        self._last_good = settings
        return settings

    def version(self, db: Session) -> int:
        entry = storage_crud.get(db, key=self.key)
        return entry.version if entry else 0

    def save(self, db: Session, settings: TemplateSettings, *, expected_version: Optional[int] = None) -> StorageEntry:
        entry = save_settings(db, settings, key=self.key, expected_version=expected_version)
        self._last_good = settings
        return entry

    def reset(self, db: Session, *, expected_version: Optional[int] = None) -> StorageEntry:
        return self.save(db, canonical_defaults(), expected_version=expected_version)
