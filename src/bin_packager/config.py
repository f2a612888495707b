"""Runtime settings from the environment; loads .env locally via python-dotenv."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from bin_packager.packing.heuristics import Heuristic

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    heuristic: Heuristic = Heuristic.FIRST_FIT
    cors_origins: list[str] = field(default_factory=list)


def load_settings() -> Settings:
    """Read BIN_PACKAGER_* variables. Does not override variables already set."""
    load_dotenv()

    log_level = os.getenv("BIN_PACKAGER_LOG_LEVEL", "INFO").strip().upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"Unknown BIN_PACKAGER_LOG_LEVEL '{log_level}'")

    raw_heuristic = os.getenv("BIN_PACKAGER_HEURISTIC", Heuristic.FIRST_FIT.value).strip().lower()
    try:
        heuristic = Heuristic(raw_heuristic)
    except ValueError:
        raise ValueError(
            f"Unknown BIN_PACKAGER_HEURISTIC '{raw_heuristic}'. Valid: {[h.value for h in Heuristic]}"
        ) from None

    origins = os.getenv("BIN_PACKAGER_CORS_ORIGINS", "")
    cors_origins = [o.strip() for o in origins.split(",") if o.strip()]

    return Settings(log_level=log_level, heuristic=heuristic, cors_origins=cors_origins)


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
