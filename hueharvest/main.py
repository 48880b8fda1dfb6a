"""
hueharvest HTTP service.

Run with: uvicorn hueharvest.main:app
"""
from fastapi import FastAPI

from hueharvest import __version__
from hueharvest.api.v1 import router as v1_router
from hueharvest.schemas import HealthResponse
from hueharvest.utils.logging import configure_logging


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="hueharvest",
        description="Median-cut palette and dominant color extraction",
        version=__version__
    )

    @app.get("/healthz", response_model=HealthResponse)
    def health_check():
        return HealthResponse(ok=True, version=__version__)

    app.include_router(v1_router)
    return app


app = create_app()
