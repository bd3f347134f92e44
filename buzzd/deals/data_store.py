from __future__ import annotations

import logging
from pathlib import Path
from typing import TypeVar

import pandas as pd
from pydantic import BaseModel, ValidationError

from .config import DEFAULT_DEALS_CONFIG, DealsConfig
from .models import Deal, Establishment

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Times like "0200" and "930" must survive as text, not numbers
_TEXT_COLUMNS = {
    "valid_days": str,
    "hh_start_time": str,
    "hh_end_time": str,
    "drink_name": str,
    "alcohol_category": str,
}

# Deals missing any of these cannot be shown or ranked
_REQUIRED_NUMBERS = ["id", "establishmentId", "happy_hour_price"]

# Loaded frames keyed by source path
_frames: dict[Path, pd.DataFrame] = {}


def _load_deals(config: DealsConfig) -> pd.DataFrame:
    df = pd.read_csv(config.deals_path, dtype=_TEXT_COLUMNS)
    df["valid_days"] = df["valid_days"].fillna("").str.strip()
    df["hh_start_time"] = df["hh_start_time"].fillna("").str.strip()
    df["hh_end_time"] = df["hh_end_time"].fillna("").str.strip()
    df["alcohol_category"] = df["alcohol_category"].fillna("")
    df["standard_price"] = pd.to_numeric(df["standard_price"], errors="coerce").fillna(0.0)

    for column in _REQUIRED_NUMBERS:
        df[column] = pd.to_numeric(df[column], errors="coerce")
    unreadable = df[_REQUIRED_NUMBERS].isna().any(axis=1)
    if unreadable.any():
        logger.warning("Dropping %d deals without a readable id or happy hour price", int(unreadable.sum()))
    df = df.loc[~unreadable].copy()
    df["id"] = df["id"].astype(int)
    df["establishmentId"] = df["establishmentId"].astype(int)
    return df


def _load_establishments(config: DealsConfig) -> pd.DataFrame:
    df = pd.read_csv(config.establishments_path)
    # Rows without coordinates cannot be placed on the map or ranked by distance
    missing = df["latitude"].isna() | df["longitude"].isna()
    if missing.any():
        logger.warning("Dropping %d establishments without coordinates", int(missing.sum()))
    df = df.loc[~missing].copy()
    df["name"] = df["name"].fillna("")
    df["address"] = df["address"].fillna("")
    return df


def get_deals_frame(config: DealsConfig = DEFAULT_DEALS_CONFIG) -> pd.DataFrame:
    """Return the in-memory deals DataFrame, loading it on first call."""
    if config.deals_path not in _frames:
        _frames[config.deals_path] = _load_deals(config)
    return _frames[config.deals_path]


def get_establishments_frame(config: DealsConfig = DEFAULT_DEALS_CONFIG) -> pd.DataFrame:
    if config.establishments_path not in _frames:
        _frames[config.establishments_path] = _load_establishments(config)
    return _frames[config.establishments_path]


def _clean(record: dict) -> dict:
    # NaN becomes None; numpy scalars become plain Python values
    return {
        k: None if pd.isna(v) else (v.item() if hasattr(v, "item") else v)
        for k, v in record.items()
    }


def _validate_rows(model: type[ModelT], records: list[dict]) -> list[ModelT]:
    rows: list[ModelT] = []
    for record in records:
        try:
            rows.append(model.model_validate(_clean(record)))
        except ValidationError:
            logger.warning("Skipping invalid %s row %s", model.__name__, record.get("id"), exc_info=True)
    return rows


def get_deals(config: DealsConfig = DEFAULT_DEALS_CONFIG) -> list[Deal]:
    records = get_deals_frame(config).to_dict(orient="records")
    return _validate_rows(Deal, records)


def get_establishments(config: DealsConfig = DEFAULT_DEALS_CONFIG) -> dict[int, Establishment]:
    """Establishments keyed by id, the lookup shape the ranker expects."""
    records = get_establishments_frame(config).to_dict(orient="records")
    establishments = _validate_rows(Establishment, records)
    return {e.id: e for e in establishments}


def reset_data_store() -> None:
    _frames.clear()
