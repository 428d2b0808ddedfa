from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.api.api import api_router
from app.core.config import get_settings
from app.core.logger import get_logger, set_level
from app.core.services import Services, build_services

logger = get_logger(__name__)

STATIC_DIR = Path(__file__).parent / "static"

origins = [
    "http://localhost:3000",
    "http://localhost:5173",
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    owned = None
    if getattr(app.state, "services", None) is None:
        settings = get_settings()
        set_level(settings.ENV)
        owned = app.state.services = build_services(settings)
        logger.info("services initialised")
    yield
    if owned is not None:
        await owned.aclose()
        app.state.services = None
        logger.info("services closed")


def create_app(services: Optional[Services] = None) -> FastAPI:
    app = FastAPI(title="Sales Genius", lifespan=lifespan)
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api")
    app.mount("/", StaticFiles(directory=STATIC_DIR, html=True), name="ui")
    return app


app = create_app()
