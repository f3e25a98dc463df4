from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.core.deps import get_leaderboard_service
from app.core.errors import StoreUnavailableError, SubmissionFormatError, SubmissionValueError
from app.logger import logger
from app.models import LeaderboardResponse, parse_submission
from app.services import LeaderboardService

router = APIRouter()

FETCH_ERROR = "Failed to fetch leaderboard"
UPDATE_ERROR = "Failed to update leaderboard"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.get("/leaderboard", response_model=LeaderboardResponse)
async def get_leaderboard(service: LeaderboardService = Depends(get_leaderboard_service)):
    try:
        return await service.get_leaderboard()
    except Exception:
        logger.exception("Error fetching leaderboard")
        return _error(500, FETCH_ERROR)


@router.post("/leaderboard", response_model=LeaderboardResponse)
async def update_leaderboard(
    request: Request,
    service: LeaderboardService = Depends(get_leaderboard_service),
):
    try:
        payload = await request.json()
    except ValueError:
        payload = None

    try:
        submission = parse_submission(payload)
    except (SubmissionFormatError, SubmissionValueError) as exc:
        return _error(400, str(exc))

    try:
        return await service.submit_score(submission)
    except StoreUnavailableError as exc:
        logger.error(f"Error updating leaderboard: {exc}; cause: {exc.__cause__!r}")
        return _error(500, UPDATE_ERROR)
    except Exception:
        logger.exception("Error updating leaderboard")
        return _error(500, UPDATE_ERROR)
