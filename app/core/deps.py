from fastapi import Depends, Request

from app.core.config import Settings
from app.repositories import KeyValueStore
from app.services import LeaderboardService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> KeyValueStore:
    return request.app.state.store


def get_leaderboard_service(
    store: KeyValueStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> LeaderboardService:
    return LeaderboardService.from_settings(store, settings)
