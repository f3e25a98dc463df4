from typing import Any, List, Union

from pydantic import BaseModel, ConfigDict, StrictInt, StrictStr, ValidationError, confloat

from app.core.errors import SubmissionFormatError, SubmissionValueError

# JSON numbers only: bool, numeric strings and NaN/Infinity are rejected
Score = Union[StrictInt, confloat(strict=True, allow_inf_nan=False)]


class LeaderboardEntry(BaseModel):
    name: StrictStr
    score: Score
    timestamp: int = 0


class ScoreSubmission(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: StrictStr
    score: Score


LeaderboardResponse = List[LeaderboardEntry]


def parse_submission(payload: Any) -> ScoreSubmission:
    """Validate a raw ``POST /leaderboard`` body.

    Shape is checked before values, so a non-string name is always a format
    error even when it would also be blank. The returned name is trimmed.
    """
    try:
        submission = ScoreSubmission.model_validate(payload)
    except ValidationError as exc:
        raise SubmissionFormatError(SubmissionFormatError.message) from exc

    name = submission.name.strip()
    if not name or submission.score < 0:
        raise SubmissionValueError(SubmissionValueError.message)
    return ScoreSubmission(name=name, score=submission.score)
