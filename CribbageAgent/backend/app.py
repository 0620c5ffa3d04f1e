import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from CribbageAgent.config import API_PREFIX, CORS_ORIGINS, LOG_FILE, LOG_FORMAT, LOG_LEVEL
from CribbageAgent.backend.routers.health import router as health_router
from CribbageAgent.backend.routers.games import router as games_router


def configure_logging() -> None:
    logging.basicConfig(
        filename=LOG_FILE,
        level=LOG_LEVEL,
        format=LOG_FORMAT,
    )


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title="Cribbage")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(health_router, prefix=API_PREFIX)
    app.include_router(games_router, prefix=API_PREFIX)
    return app


app = create_app()
