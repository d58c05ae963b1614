from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from apps.api.routers.records import router as records_router
from packages.core.settings import configure_logging, load_settings
from packages.storage.collection_io import PATIENTS_KEY
from packages.storage.service import StorageService, open_service

logger = logging.getLogger(__name__)


def create_app(service: Optional[StorageService] = None) -> FastAPI:
    if service is None:
        settings = load_settings()
        configure_logging(settings.log_level)
        service = open_service(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.service.init():
            logger.info("Store was empty; demo records written")
        yield

    app = FastAPI(title="Patientlog API", lifespan=lifespan)
    app.state.service = service
    app.include_router(records_router)

    @app.get("/")
    def root() -> dict:
        return {
            "name": "patientlog",
            "status": "ok",
            "endpoints": [
                "/healthz",
                "/readyz",
                "/v1/stats",
                "/v1/dashboard",
                "/v1/patients",
                "/v1/visits",
                "/v1/prescriptions",
                "/v1/appointments",
            ],
        }

    @app.get("/healthz")
    def healthz() -> dict:
        return {"status": "ok"}

    @app.get("/readyz")
    def readyz() -> JSONResponse:
        try:
            seeded = app.state.service.store.contains(PATIENTS_KEY)
        except Exception as exc:
            return JSONResponse(status_code=500, content={"status": "error", "detail": str(exc)})
        if not seeded:
            return JSONResponse(status_code=503, content={"status": "uninitialized"})
        return JSONResponse(status_code=200, content={"status": "ok"})

    return app


app = create_app()


__all__ = ["app", "create_app"]
