"""ASGI entry point.

Run locally:
    uvicorn stockcalc.main:app --reload --port 7071
"""
from fastapi import FastAPI

from stockcalc.api.routes import router
from stockcalc.config.settings import settings
from stockcalc.logger import configure_logging, get_logger


def create_app() -> FastAPI:
    configure_logging(settings.log_level)
    app = FastAPI(title="Stock Price Calculator", version="1.0.0")
    app.include_router(router)
    get_logger(__name__).info("Stock Price Calculator initialized")
    return app


app = create_app()
