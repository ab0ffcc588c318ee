# Invoice Template Engine entrypoint: FastAPI app wiring routers and stores.

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from invoice_engine.app.api import drafts
from invoice_engine.app.api import presets
from invoice_engine.app.api import render
from invoice_engine.app.api import template_settings
from invoice_engine.app.core.log_config import configure_logging
from invoice_engine.app.core.settings import get_settings
from invoice_engine.app.db.base import Base
from invoice_engine.app.db.session import engine
from invoice_engine.app.services.settings_store import SettingsStore

configure_logging()

settings = get_settings()
app = FastAPI(title=settings.app_name, version=settings.api_version)
app.state.settings_store = SettingsStore()

origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["ETag"],
)

app.include_router(template_settings.router)
app.include_router(presets.router)
app.include_router(drafts.router)
app.include_router(render.router)


@app.on_event("startup")
def create_tables():
    Base.metadata.create_all(bind=engine)


@app.get("/")
def read_root():
    return {"app": settings.app_name, "status": "ok"}


@app.get("/health")
def health_check():
    return {"status": "ok"}
