from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_PACKAGE_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True)
class DealsConfig:
    """
    Where deal data lives and which wall clock happy hours are measured on.
    """

    timezone: str = os.getenv("BUZZD_TIMEZONE", "Asia/Singapore")
    data_dir: Path = Path(os.getenv("BUZZD_DATA_DIR", str(_PACKAGE_DATA_DIR)))
    deals_filename: str = "deals.csv"
    establishments_filename: str = "establishments.csv"

    @property
    def deals_path(self) -> Path:
        return self.data_dir / self.deals_filename

    @property
    def establishments_path(self) -> Path:
        return self.data_dir / self.establishments_filename


DEFAULT_DEALS_CONFIG = DealsConfig()
