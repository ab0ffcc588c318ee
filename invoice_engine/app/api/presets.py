"""Template preset endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from invoice_engine.app.db.session import get_db
from invoice_engine.app.dependencies.stores import get_expected_version, get_settings_store
from invoice_engine.app.services.exceptions import StaleWriteError
from invoice_engine.app.services.presets import TemplatePreset, apply_preset, get_preset, list_presets
from invoice_engine.app.services.settings_store import SettingsStore

router = APIRouter(prefix="/presets", tags=["presets"])


def _preset_read(preset: TemplatePreset) -> dict:
    return {
        "id": preset.id,
        "name": preset.name,
        "description": preset.description,
        "kind": preset.kind,
        "defaultSettings": preset.default_settings.model_dump(mode="json", by_alias=True, exclude_unset=True),
    }


def _get_or_404(preset_id: str) -> TemplatePreset:
    preset = get_preset(preset_id)
    if not preset:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Preset not found")
    return preset


@router.get("")
def read_presets(kind: str | None = None):
    return [_preset_read(preset) for preset in list_presets(kind)]


@router.get("/{preset_id}")
def read_preset(preset_id: str):
    return _preset_read(_get_or_404(preset_id))


@router.post("/{preset_id}/apply")
def apply_preset_to_settings(
    preset_id: str,
    response: Response,
    persist: bool = True,
    db: Session = Depends(get_db),
    store: SettingsStore = Depends(get_settings_store),
    expected_version: int | None = Depends(get_expected_version),
):
    preset = _get_or_404(preset_id)
    settings = apply_preset(store.load(db), preset)
    if not persist:
        return settings.to_wire()
    try:
        entry = store.save(db, settings, expected_version=expected_version)
    except StaleWriteError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    response.headers["ETag"] = f'"{entry.version}"'
    return settings.to_wire()
