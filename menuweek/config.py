"""Configured canteens and environment settings.

Settings are read from the environment. A ``.env`` file in the repository
root is loaded first when present:

  - MENSA_OUTPUT_DIR (optional, default ``data/menus``; RUB_MENSA_OUTPUT_DIR
    is read when it is unset)
  - MENSA_NOTIFY_CMD (optional, command run when a run fails)
  - MENSA_REQUEST_TIMEOUT (optional, seconds, default 20)
  - MENSA_LOG_LEVEL (optional, default ``INFO``)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv

repo_root = Path(__file__).resolve().parents[1]
env_path = repo_root / ".env"

DEFAULT_OUTPUT_DIR = "data/menus"
DEFAULT_REQUEST_TIMEOUT = 20.0


@dataclass(frozen=True)
class CanteenConfig:
    slug: str
    name: str
    url: str


CANTEENS: Tuple[CanteenConfig, ...] = (
    CanteenConfig(
        slug="main",
        name="Mensa Ruhr-Universität Bochum",
        url="https://www.akafoe.de/gastronomie/speiseplaene-der-mensen/ruhr-universitaet-bochum/",
    ),
    CanteenConfig(
        slug="q-west",
        name="Q-West",
        url="https://www.akafoe.de/gastronomie/speiseplaene-der-mensen/q-west/",
    ),
    CanteenConfig(
        slug="rote-beete",
        name="Rote Beete",
        url="https://www.akafoe.de/gastronomie/speiseplaene-der-mensen/rote-bete/",
    ),
)


@dataclass(frozen=True)
class Settings:
    output_dir: Path
    notify_cmd: Optional[str]
    request_timeout: float
    log_level: str


def load_env() -> None:
    """Load ``.env`` from the repository root if it exists.

    Variables already set in the environment win.
    """
    if env_path.exists():
        load_dotenv(env_path)


def load_settings() -> Settings:
    """Build :class:`Settings` from the current environment."""
    timeout = os.environ.get("MENSA_REQUEST_TIMEOUT")
    return Settings(
        output_dir=Path(
            os.environ.get("MENSA_OUTPUT_DIR")
            or os.environ.get("RUB_MENSA_OUTPUT_DIR")
            or DEFAULT_OUTPUT_DIR
        ),
        notify_cmd=os.environ.get("MENSA_NOTIFY_CMD") or None,
        request_timeout=float(timeout) if timeout else DEFAULT_REQUEST_TIMEOUT,
        log_level=(os.environ.get("MENSA_LOG_LEVEL") or "INFO").upper(),
    )
