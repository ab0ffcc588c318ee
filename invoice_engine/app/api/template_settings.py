"""Template settings endpoints."""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from invoice_engine.app.db.session import get_db
from invoice_engine.app.dependencies.stores import get_expected_version, get_settings_store
from invoice_engine.app.schemas.template_settings import TemplateSettings, TemplateSettingsPatch, merge_settings
from invoice_engine.app.services.exceptions import StaleWriteError
from invoice_engine.app.services.settings_store import SettingsStore, settings_from_mapping

router = APIRouter(prefix="/template-settings", tags=["template_settings"])


def _respond(response: Response, settings: TemplateSettings, version: int) -> dict:
    response.headers["ETag"] = f'"{version}"'
    return settings.to_wire()


def _save(
    db: Session,
    store: SettingsStore,
    settings: TemplateSettings,
    expected_version: int | None,
    response: Response,
) -> dict:
    try:
        entry = store.save(db, settings, expected_version=expected_version)
    except StaleWriteError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    return _respond(response, settings, entry.version)


@router.get("")
def read_template_settings(
    response: Response,
    db: Session = Depends(get_db),
    store: SettingsStore = Depends(get_settings_store),
):
    settings = store.load(db)
    return _respond(response, settings, store.version(db))


@router.put("")
def replace_template_settings(
    response: Response,
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    store: SettingsStore = Depends(get_settings_store),
    expected_version: int | None = Depends(get_expected_version),
):
    # Missing fields take their defaults, exactly as when loading a stored blob
    settings = settings_from_mapping(payload)
    return _save(db, store, settings, expected_version, response)


@router.patch("")
def update_template_settings(
    response: Response,
    patch: TemplateSettingsPatch,
    db: Session = Depends(get_db),
    store: SettingsStore = Depends(get_settings_store),
    expected_version: int | None = Depends(get_expected_version),
):
    settings = merge_settings(store.load(db), patch)
    return _save(db, store, settings, expected_version, response)


@router.post("/reset")
def reset_template_settings(
    response: Response,
    db: Session = Depends(get_db),
    store: SettingsStore = Depends(get_settings_store),
    expected_version: int | None = Depends(get_expected_version),
):
    try:
        entry = store.reset(db, expected_version=expected_version)
    except StaleWriteError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    return _respond(response, store.last_good, entry.version)
