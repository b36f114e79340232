from __future__ import annotations
from typing import Iterable
import pandas as pd
from pandera.pandas import Column, DataFrameSchema, Check
from .config import CU_PROFILE, CU_SITES, GEO_FEATURES, CU_NAMES_FR, CATEGORY_LABELS_FR


class MissingColumnsError(KeyError):
    """An input table lacks columns a query projects or filters on."""

    def __init__(self, table: str, missing: list[str]):
        self.table = table
        self.missing = missing
        super().__init__(f"{table} is missing required column(s): {', '.join(missing)}")

    def __str__(self) -> str:
        # KeyError would repr() the message
        return self.args[0]


# columns each query kind reads, per source table
REQUIRED_COLUMNS = {
    "status": {
        CU_PROFILE: [
            "CU_NAME", "FULL_CU_IN", "LH_TYPE", "SPECIES", "CU_TYPE",
            "WSP_RAPID_STATUS", "WSP_RAPID_CONFIDENCE", "WSP_RAPID_STATUS_YEAR",
            "INTEGRATED_STATUS", "INTEGRATED_STATUS_YEAR",
        ],
    },
    "boundary": {
        CU_PROFILE: ["CU_NAME", "FULL_CU_IN", "SPECIES", "CU_TYPE"],
    },
    "sites": {
        CU_SITES: [
            "SYSTEM_SITE", "GFE_ID", "Y_LAT", "X_LONGT", "GFE_TYPE",
            "FWA_WATERSHED_CDE", "WATERSHED_CDE", "CU_NAME", "FULL_CU_IN",
            "SPECIES_QUALIFIED", "CU_TYPE", "POP_ID", "FAZ_ACRO", "MAZ_ACRO", "JAZ_ACRO",
        ],
        GEO_FEATURES: ["ID", "GAZETTED_NME"],
    },
}

TRANSLATION_COLUMNS = {
    CU_NAMES_FR: ["FULL_CU_IN", "CU_NAME_FR"],
    CATEGORY_LABELS_FR: ["FIELD", "VALUE_EN", "VALUE_FR"],
}

_YEAR = Check.in_range(1900, 2100)

CU_PROFILE_SCHEMA = DataFrameSchema({
    "FULL_CU_IN": Column(nullable=True),
    "SPECIES": Column(nullable=True),
    "WSP_RAPID_STATUS_YEAR": Column(checks=_YEAR, nullable=True, required=False),
    "INTEGRATED_STATUS_YEAR": Column(checks=_YEAR, nullable=True, required=False),
})

CU_SITES_SCHEMA = DataFrameSchema({
    "GFE_ID": Column(nullable=True),
    "SPECIES_QUALIFIED": Column(nullable=True),
    "Y_LAT": Column(checks=Check.in_range(-90, 90), nullable=True, required=False),
    "X_LONGT": Column(checks=Check.in_range(-180, 180), nullable=True, required=False),
})

GEO_FEATURES_SCHEMA = DataFrameSchema({
    "ID": Column(nullable=False, unique=True),
})

SCHEMAS = {
    CU_PROFILE: CU_PROFILE_SCHEMA,
    CU_SITES: CU_SITES_SCHEMA,
    GEO_FEATURES: GEO_FEATURES_SCHEMA,
}


def require_columns(df: pd.DataFrame, columns: Iterable[str], table: str) -> None:
    """Raise MissingColumnsError naming every column of `columns` absent from df."""
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise MissingColumnsError(table, missing)

def validate_table(df: pd.DataFrame, table: str, kinds: Iterable[str] | None = None) -> pd.DataFrame:
    """
    Check a loaded view against its column set and value contracts.

    Only the columns read by `kinds` (default: every query kind) are required.
    Required columns are checked first so a bad export fails with the full list
    of missing names; value checks are collected lazily by pandera.

    Raises:
        MissingColumnsError: If required columns are absent
        pandera.errors.SchemaErrors: If value checks fail
    """
    needed: list[str] = []
    for kind in (kinds or REQUIRED_COLUMNS):
        tables = REQUIRED_COLUMNS[kind]
        for c in tables.get(table, []):
            if c not in needed:
                needed.append(c)
    needed += [c for c in TRANSLATION_COLUMNS.get(table, []) if c not in needed]
    require_columns(df, needed, table)
    schema = SCHEMAS.get(table)
    if schema is None:
        return df
    return schema.validate(df, lazy=True)
