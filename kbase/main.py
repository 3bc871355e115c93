from __future__ import annotations

from fastapi import FastAPI

from kbase.environment import load_settings
from kbase.routes.api import router as api_router
from kbase.startup import configure_logging, init_database

app = FastAPI(title="kbase", description="Knowledge-base bulk import service.")
app.include_router(api_router, prefix="/api")


@app.on_event("startup")
def startup() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    init_database(settings)
