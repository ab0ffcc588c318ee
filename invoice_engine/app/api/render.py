"""Preview and export planning endpoints."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlalchemy.orm import Session

from invoice_engine.app.db.session import get_db
from invoice_engine.app.dependencies.stores import get_draft_store, get_settings_store
from invoice_engine.app.schemas.invoice import InvoiceRecord
from invoice_engine.app.schemas.template_settings import TemplateSettings
from invoice_engine.app.services.drafts import DraftStore
from invoice_engine.app.services.exceptions import ExportTargetNotFoundError
from invoice_engine.app.services.rendering import build_view_model, plan_export
from invoice_engine.app.services.settings_store import SettingsStore, settings_from_mapping

router = APIRouter(prefix="/render", tags=["render"])


class RenderRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    invoice: InvoiceRecord
    # Unsaved settings from an editor; the stored settings are used otherwise
    settings: Optional[Dict[str, Any]] = None


class ExportRequest(RenderRequest):
    element_handle: Optional[str] = None


def _effective_settings(payload: RenderRequest, db: Session, store: SettingsStore) -> TemplateSettings:
    if payload.settings is not None:
        return settings_from_mapping(payload.settings)
    return store.load(db)


@router.post("/view-model")
def render_view_model(
    payload: RenderRequest,
    db: Session = Depends(get_db),
    store: SettingsStore = Depends(get_settings_store),
):
    settings = _effective_settings(payload, db, store)
    return build_view_model(payload.invoice, settings).model_dump(mode="json")


@router.get("/drafts/{bill_number}")
def render_draft(
    bill_number: str,
    db: Session = Depends(get_db),
    store: SettingsStore = Depends(get_settings_store),
    drafts: DraftStore = Depends(get_draft_store),
):
    draft = drafts.get_draft(bill_number)
    if not draft:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Draft not found")
    return build_view_model(draft, store.load(db)).model_dump(mode="json")


@router.post("/export-plan")
def export_plan(
    payload: ExportRequest,
    db: Session = Depends(get_db),
    store: SettingsStore = Depends(get_settings_store),
):
    settings = _effective_settings(payload, db, store)
    try:
        plan = plan_export(payload.element_handle, payload.invoice, settings)
    except ExportTargetNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return plan.model_dump(mode="json")
