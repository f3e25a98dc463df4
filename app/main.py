from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from app.api.leaderboard_api import router as leaderboard_api_router
from app.core.async_utils import run_in_thread
from app.core.config import load_settings
from app.core.metrics import api_timing_middleware
from app.logger import logger
from app.repositories import KeyValueStore, LeaderboardRepository, build_store
from app.routes.system import router as system_router

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"


async def initialize_leaderboard(store: KeyValueStore, key: str) -> None:
    """Seed an empty leaderboard on startup. Failures are logged and ignored."""
    repo = LeaderboardRepository(store, key=key)
    try:
        if await run_in_thread(repo.ensure_initialized):
            logger.info("Initialized empty leaderboard")
    except Exception as exc:
        logger.error(f"Database initialization error: {exc}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.settings
    if not settings.store_configured:
        logger.error("REPLIT_DB_URL environment variable is not defined")
    else:
        await initialize_leaderboard(app.state.store, settings.leaderboard_key)
    logger.info(f"Server running at http://{settings.host}:{settings.port}")
    yield
    close = getattr(app.state.store, "close", None)
    if callable(close):
        close()


def create_app() -> FastAPI:
    app = FastAPI(title="Game Leaderboard", lifespan=lifespan)

    settings = load_settings()
    app.state.settings = settings
    app.state.store = build_store(settings)

    app.middleware("http")(api_timing_middleware)
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    app.include_router(system_router)
    app.include_router(leaderboard_api_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=app.state.settings.host, port=app.state.settings.port)
