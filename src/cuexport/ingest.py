from __future__ import annotations
import logging
from pathlib import Path
import pandas as pd
from . import config
from .config import (
    RAW_CU_PROFILE_XLSX, RAW_CU_SITES_XLSX, RAW_GEO_FEATURES_XLSX,
    RAW_CU_NAMES_FR_XLSX, RAW_CATEGORY_LABELS_FR_XLSX,
)
from .cleaning import normalize_columns

logger = logging.getLogger(__name__)

def read_cu_profile_raw(path: str | Path | None = None) -> pd.DataFrame:
    return pd.read_excel(path or RAW_CU_PROFILE_XLSX, engine="openpyxl")

def read_cu_sites_raw(path: str | Path | None = None) -> pd.DataFrame:
    return pd.read_excel(path or RAW_CU_SITES_XLSX, engine="openpyxl")

def read_geo_features_raw(path: str | Path | None = None) -> pd.DataFrame:
    return pd.read_excel(path or RAW_GEO_FEATURES_XLSX, engine="openpyxl")

def read_cu_names_fr_raw(path: str | Path | None = None) -> pd.DataFrame:
    return pd.read_excel(path or RAW_CU_NAMES_FR_XLSX, engine="openpyxl")

def read_category_labels_fr_raw(path: str | Path | None = None) -> pd.DataFrame:
    return pd.read_excel(path or RAW_CATEGORY_LABELS_FR_XLSX, engine="openpyxl")


_REQUIRED = {
    config.CU_PROFILE: (RAW_CU_PROFILE_XLSX.name, read_cu_profile_raw),
    config.CU_SITES: (RAW_CU_SITES_XLSX.name, read_cu_sites_raw),
    config.GEO_FEATURES: (RAW_GEO_FEATURES_XLSX.name, read_geo_features_raw),
}
_OPTIONAL = {
    config.CU_NAMES_FR: (RAW_CU_NAMES_FR_XLSX.name, read_cu_names_fr_raw),
    config.CATEGORY_LABELS_FR: (RAW_CATEGORY_LABELS_FR_XLSX.name, read_category_labels_fr_raw),
}

def load_tables(data_dir: str | Path | None = None, with_translations: bool = True) -> dict[str, pd.DataFrame]:
    """
    Read every view export into a DataFrame keyed by its source view name.

    Args:
        data_dir: Folder holding the workbooks (default: config.RAW)
        with_translations: Also read the optional French translation workbooks

    Returns:
        dict mapping view name to DataFrame with normalized column names

    Raises:
        FileNotFoundError: If one of the required workbooks is missing
    """
    data_dir = Path(data_dir) if data_dir is not None else config.RAW
    tables: dict[str, pd.DataFrame] = {}
    for name, (filename, reader) in _REQUIRED.items():
        path = data_dir / filename
        if not path.exists():
            raise FileNotFoundError(f"Missing {name} export: {path}")
        tables[name] = normalize_columns(reader(path))
        logger.info("Loaded %s: %d rows from %s", name, len(tables[name]), path.name)

    if with_translations:
        for name, (filename, reader) in _OPTIONAL.items():
            path = data_dir / filename
            if not path.exists():
                logger.info("No %s workbook at %s, using built-in labels", name, path)
                continue
            tables[name] = normalize_columns(reader(path))
            logger.info("Loaded %s: %d rows from %s", name, len(tables[name]), path.name)
    return tables
