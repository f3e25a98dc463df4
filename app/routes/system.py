from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.core.config import Settings
from app.core.deps import get_settings

TEMPLATES_DIR = Path(__file__).resolve().parent.parent.parent / "templates"

router = APIRouter()
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


@router.get("/", response_class=HTMLResponse)
async def read_game(request: Request, settings: Settings = Depends(get_settings)):
    return templates.TemplateResponse(
        request,
        "game.html",
        {"leaderboard_size": settings.leaderboard_size},
    )


@router.get("/api/status")
async def get_status(settings: Settings = Depends(get_settings)):
    return {
        "status": "online",
        "store_configured": settings.store_configured,
    }
