"""Store dependencies shared by the routers."""

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.orm import Session

from invoice_engine.app.db.session import get_db
from invoice_engine.app.services.drafts import DraftStore
from invoice_engine.app.services.settings_store import SettingsStore


def get_settings_store(request: Request) -> SettingsStore:
    # One store per application so the last known good settings survive requests
    return request.app.state.settings_store


def get_draft_store(db: Session = Depends(get_db)) -> DraftStore:
    return DraftStore(db)


def get_expected_version(if_match: str | None = Header(default=None)) -> int | None:
    """Parse an ``If-Match`` header carrying a storage version ETag."""
    if if_match is None:
        return None
    tag = if_match.strip()
    if tag.startswith("W/"):
        tag = tag[2:]
    try:
        return int(tag.strip('"'))
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid If-Match header")
