from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from mortgage_compare.domain.loan import DEFAULT_CREDIT_SCORE
from mortgage_compare.domain.refinance import DEFAULT_RECOMMENDED_MAX_MONTHS

ENV_PREFIX = "MORTGAGE_COMPARE_"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or raw == "":
        return default

    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True, slots=True)
class Settings:
    """Runtime settings, read from MORTGAGE_COMPARE_* environment variables."""

    log_level: str = "INFO"
    refinance_recommended_max_months: int = DEFAULT_RECOMMENDED_MAX_MONTHS
    default_credit_score: int = DEFAULT_CREDIT_SCORE

    @classmethod
    def from_env(cls) -> Settings:
        """
        Raises:
            RuntimeError: If an integer setting is not an integer
        """
        return cls(
            log_level=os.getenv(ENV_PREFIX + "LOG_LEVEL") or "INFO",
            refinance_recommended_max_months=_env_int(
                "REFINANCE_RECOMMENDED_MAX_MONTHS", DEFAULT_RECOMMENDED_MAX_MONTHS
            ),
            default_credit_score=_env_int("DEFAULT_CREDIT_SCORE", DEFAULT_CREDIT_SCORE),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
