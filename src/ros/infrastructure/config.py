"""Runtime configuration read from environment variables.

    ROS_DATA_DIR                 directory holding the JSON stores
    ROS_DEFAULT_PRICING_SERVICE  pricing service ID attached to new carts
    ROS_LOG_LEVEL                logging level name (default WARNING)
    ROS_LOG_FILE                 optional log file, in addition to stderr
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    default_pricing_service_id: str = "1"
    log_level: str = "WARNING"
    log_file: Path | None = None


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    log_file = env.get("ROS_LOG_FILE")
    return Settings(
        data_dir=Path(env.get("ROS_DATA_DIR", DEFAULT_DATA_DIR)),
        default_pricing_service_id=env.get("ROS_DEFAULT_PRICING_SERVICE", "1"),
        log_level=env.get("ROS_LOG_LEVEL", "WARNING").upper(),
        log_file=Path(log_file) if log_file else None,
    )
