# File: harvester/core/config/settings.py

import os
from pathlib import Path


def _default_workers() -> int:
    # Same default as ThreadPoolExecutor
    return min(32, (os.cpu_count() or 1) + 4)


class Settings:
    # --- Paths ---
    # harvester/core/config/settings.py -> harvester/core/config -> harvester/core -> harvester -> ROOT
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent.parent
    DATA_DIR: Path = BASE_DIR / "data"

    ROOT_DIR: Path = Path(os.getenv("HARVESTER_ROOT_DIR", str(DATA_DIR / "sample")))
    OUTPUT_PATH: Path = Path(os.getenv("HARVESTER_OUTPUT_PATH", str(DATA_DIR / "output" / "Output.csv")))
    LOG_PATH: Path = Path(os.getenv("HARVESTER_LOG_PATH", str(DATA_DIR / "logs" / "Log.txt")))

    # --- Scanning ---
    FILE_PATTERN: str = os.getenv("HARVESTER_FILE_PATTERN", "CustomerData*.csv")
    ENCODING: str = os.getenv("HARVESTER_ENCODING", "utf-8-sig")

    @property
    def MAX_WORKERS(self) -> int:
        # Read on access, not at import
        raw = os.getenv("HARVESTER_MAX_WORKERS")
        if raw is None:
            return _default_workers()
        try:
            return int(raw)
        except ValueError:
            raise ValueError(f"HARVESTER_MAX_WORKERS must be an integer, got {raw!r}") from None

    # --- Logging ---
    LOG_LEVEL: str = os.getenv("HARVESTER_LOG_LEVEL", "INFO")

    # --- Database (run history) ---
    @property
    def DATABASE_URL(self) -> str:
        return os.getenv("HARVESTER_DATABASE_URL", f"sqlite:///{self.DATA_DIR / 'harvester.db'}")


settings = Settings()
