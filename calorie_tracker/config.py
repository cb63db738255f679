from __future__ import annotations

import os
from pathlib import Path
from typing import List


class Settings:
    """Centralized configuration for the calorie tracker service."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent

        self.data_file: Path = Path(
            os.environ.get("CALORIE_TRACKER_DATA_FILE") or (repo_root / "data" / "data.json")
        ).expanduser()
        self.public_dir: Path = Path(
            os.environ.get("CALORIE_TRACKER_PUBLIC_DIR") or (base_dir / "public")
        ).expanduser()

        self.host: str = os.environ.get("CALORIE_TRACKER_HOST") or os.environ.get("HOST") or "127.0.0.1"
        port_raw = os.environ.get("CALORIE_TRACKER_PORT") or os.environ.get("PORT") or "3000"
        try:
            self.port: int = int(port_raw)
        except ValueError:
            self.port = 3000
        self.log_level: str = (os.environ.get("CALORIE_TRACKER_LOG_LEVEL") or "info").lower()

        cors = os.environ.get("CALORIE_TRACKER_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
