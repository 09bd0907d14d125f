# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Runtime configuration.

All knobs come from ``LOGINAPP_*`` environment variables and are frozen into a
:class:`Settings` instance that is handed to :func:`loginapp.app.create_app`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_MONGO_URI = "mongodb://127.0.0.1:27017/loginapp"
DEFAULT_DB_NAME = "loginapp"


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes", "y"}


@dataclass(frozen=True)
class Settings:
    mongo_uri: str = DEFAULT_MONGO_URI
    # None -> database named in the URI, else DEFAULT_DB_NAME
    mongo_db: Optional[str] = None
    mongo_collection: str = "users"
    mongo_timeout_ms: int = 5000
    # argon2 time_cost; None keeps the library default
    hash_time_cost: Optional[int] = None
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.hash_time_cost is not None and self.hash_time_cost < 1:
            raise ValueError(f"hash_time_cost must be at least 1, got {self.hash_time_cost}")

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            mongo_uri=os.getenv("LOGINAPP_MONGO_URI", DEFAULT_MONGO_URI),
            mongo_db=(os.getenv("LOGINAPP_MONGO_DB") or "").strip() or None,
            mongo_collection=os.getenv("LOGINAPP_MONGO_COLLECTION", "users"),
            mongo_timeout_ms=_env_int("LOGINAPP_MONGO_TIMEOUT_MS", 5000),
            hash_time_cost=_env_int("LOGINAPP_HASH_TIME_COST", None),
            log_level=os.getenv("LOGINAPP_LOG_LEVEL", "INFO").upper(),
        )
