"""Runtime configuration read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple

from .services import DEFAULT_CATEGORIES

DEV_ENVIRONMENTS = {"dev", "development"}


def _split_csv(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    env: str = "prod"
    host: str = "127.0.0.1"
    port: int = 5000
    log_level: str = "INFO"
    allowed_origins: Tuple[str, ...] = ()
    categories: Tuple[str, ...] = DEFAULT_CATEGORIES

    @property
    def is_dev(self) -> bool:
        return self.env in DEV_ENVIRONMENTS

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        environ = os.environ if environ is None else environ

        raw_port = environ.get("PORT", "5000")
        try:
            port = int(raw_port)
        except ValueError as exc:
            raise ValueError(f"PORT must be an integer, got {raw_port!r}") from exc
        if not 0 < port < 65536:
            raise ValueError(f"PORT must be between 1 and 65535, got {port}")

        log_level = environ.get("EXPENSE_TRACKER_LOG_LEVEL", "INFO").strip().upper()
        if log_level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level {log_level!r}")

        categories = _split_csv(environ.get("EXPENSE_TRACKER_CATEGORIES"))
        return cls(
            env=environ.get("EXPENSE_TRACKER_ENV", "prod").strip().lower(),
            host=environ.get("EXPENSE_TRACKER_HOST", "127.0.0.1").strip(),
            port=port,
            log_level=log_level,
            allowed_origins=tuple(_split_csv(environ.get("EXPENSE_TRACKER_ALLOWED_ORIGINS"))),
            categories=tuple(categories) if categories else DEFAULT_CATEGORIES,
        )
