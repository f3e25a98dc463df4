from dataclasses import dataclass
import os

from dotenv import load_dotenv

from app.logger import logger

load_dotenv(override=False)


def _env_str(name: str, default: str = "") -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip()


def _env_int(name: str, default: int, minimum: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        value = default
    else:
        try:
            value = int(raw)
        except ValueError:
            logger.warning(f"环境变量 {name}={raw} 非法，使用默认值 {default}")
            value = default
    if minimum is not None:
        value = max(minimum, value)
    return value


def _env_float(name: str, default: float, minimum: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        value = default
    else:
        try:
            value = float(raw)
        except ValueError:
            logger.warning(f"环境变量 {name}={raw} 非法，使用默认值 {default}")
            value = default
    if minimum is not None:
        value = max(minimum, value)
    return value


@dataclass(frozen=True)
class Settings:
    store_url: str
    host: str
    port: int
    leaderboard_key: str
    leaderboard_size: int
    store_retry_attempts: int
    store_retry_delay_seconds: float
    store_timeout_seconds: float

    @property
    def store_configured(self) -> bool:
        return bool(self.store_url)


def load_settings() -> Settings:
    return Settings(
        store_url=_env_str("REPLIT_DB_URL"),
        host=_env_str("HOST", "0.0.0.0") or "0.0.0.0",
        port=_env_int("PORT", 3000, minimum=1),
        leaderboard_key=_env_str("LEADERBOARD_KEY", "global_leaderboard") or "global_leaderboard",
        leaderboard_size=_env_int("LEADERBOARD_SIZE", 10, minimum=1),
        store_retry_attempts=_env_int("STORE_RETRY_ATTEMPTS", 3, minimum=1),
        store_retry_delay_seconds=_env_float("STORE_RETRY_DELAY_SECONDS", 1.0, minimum=0.0),
        store_timeout_seconds=_env_float("STORE_TIMEOUT_SECONDS", 10.0, minimum=0.1),
    )
