"""Environment-driven settings for the terminal game and its logging."""

import os
from typing import Optional

LOG_LEVEL_ENV = "GAME2048_LOG_LEVEL"
LOG_FORMAT_ENV = "GAME2048_LOG_FORMAT"
SEED_ENV = "GAME2048_SEED"


def resolve_log_level() -> str:
    return os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()


def resolve_log_format() -> str:
    return os.environ.get(LOG_FORMAT_ENV, "simple").lower()


def resolve_seed() -> Optional[int]:
    raw = os.environ.get(SEED_ENV)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{SEED_ENV} must be an integer, got {raw!r}") from None
