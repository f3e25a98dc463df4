import logging
import os
from pathlib import Path
from logging.handlers import TimedRotatingFileHandler

LOG_DIR = Path(os.getenv("LOG_DIR") or Path(__file__).parent.parent / "logs")
LOG_DIR.mkdir(parents=True, exist_ok=True)

LOG_FILE = LOG_DIR / "app.log"

LOG_FORMAT = "%(asctime)s | %(levelname)-5s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_BACKUP_COUNT = int(os.getenv("LOG_BACKUP_COUNT", "7"))

logger = logging.getLogger("game_leaderboard")
logger.setLevel(logging.INFO)
logger.propagate = False

# 避免重复添加 handler（例如 --reload 场景）
if not logger.handlers:
    file_handler = TimedRotatingFileHandler(
        LOG_FILE,
        when="midnight",
        interval=1,
        backupCount=max(1, LOG_BACKUP_COUNT),
        encoding="utf-8",
        utc=False
    )
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)
