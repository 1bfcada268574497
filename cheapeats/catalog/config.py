from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True)
class CatalogConfig:
    """
    Location of the restaurant dataset used for demo and offline mode.
    """

    data_path: Path = Path(
        os.getenv("CHEAPEATS_CATALOG_PATH", str(_DATA_DIR / "sample_restaurants.csv"))
    )


DEFAULT_CATALOG_CONFIG = CatalogConfig()
