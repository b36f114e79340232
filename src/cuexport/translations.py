"""
French labels for the localized (Fr) variants of the CU outputs.

- CATEGORY_LABELS_FR maps each output column to a {source value: French label} table.
- Values without an entry pass through unchanged, so a new status or type added
  upstream shows up in English rather than as an empty cell.
- The CATEGORY_LABELS_FR workbook (FIELD, VALUE_EN, VALUE_FR) extends or overrides
  the built-in table; the CU_NAMES_FR workbook supplies French CU names.
"""
from __future__ import annotations
import logging
from typing import Any, Mapping
import pandas as pd
from .cleaning import force_text, unit_key
from .config import UNIT_CODE

logger = logging.getLogger(__name__)

CATEGORY_LABELS_FR = {
    "SPECIES": {
        "Chinook": "Quinnat",
        "Chum": "Kéta",
        "Coho": "Coho",
        "Pink": "Rose",
        "Sockeye": "Rouge",
    },
    "LIFE_HISTORY_TYPE": {
        "Even Year": "Année paire",
        "Odd Year": "Année impaire",
        "Lake Type": "Type lacustre",
        "River Type": "Type fluvial",
        "Ocean Type": "Type océanique",
        "Stream Type": "Type rivière",
    },
    "CU_TYPE": {
        "Current": "Actuelle",
        "Extinct": "Disparue",
        "Bin": "Regroupement",
        "De Novo": "De novo",
        "VREQ[Extinct]": "VREQ[Disparue]",
        "VREQ[Bin]": "VREQ[Regroupement]",
    },
    # WSP status codes as stored in CU_PROFILE_VW
    "WSP_RAPID_STATUS": {
        "Red": "Rouge",
        "Red/Amber": "Rouge/Ambre",
        "Amber": "Ambre",
        "Amber/Green": "Ambre/Vert",
        "Green": "Vert",
        "UD": "ND",
        "Data Deficient": "Données insuffisantes",
    },
    "WSP_RAPID_CONFIDENCE": {
        "High": "Élevée",
        "Medium": "Moyenne",
        "Low": "Faible",
    },
    "INTEGRATED_STATUS": {
        "Red": "Rouge",
        "Red/Amber": "Rouge/Ambre",
        "Amber": "Ambre",
        "Amber/Green": "Ambre/Vert",
        "Green": "Vert",
        "UD": "ND",
        "Data Deficient": "Données insuffisantes",
    },
    "GFE_TYPE": {
        "Creek": "Ruisseau",
        "River": "Rivière",
        "Lake": "Lac",
        "Stream": "Cours d'eau",
        "Slough": "Marécage",
        "Channel": "Chenal",
        "Spawning Channel": "Chenal de frai",
        "Hatchery": "Écloserie",
    },
}

def translate_value(column: str, value: Any, mapping: Mapping[str, Mapping[Any, str]] = CATEGORY_LABELS_FR) -> Any:
    """Return the French label for value in column, or value itself when unmapped."""
    if pd.isna(value):
        return value
    return mapping.get(column, {}).get(value, value)


def build_category_mapping(labels_df: pd.DataFrame | None = None) -> dict[str, dict[Any, str]]:
    """
    Built-in category table, updated with rows of the CATEGORY_LABELS_FR workbook.
    Rows with an empty VALUE_FR are ignored.
    """
    mapping = {col: dict(table) for col, table in CATEGORY_LABELS_FR.items()}
    if labels_df is None:
        return mapping
    rows = labels_df.dropna(subset=["FIELD", "VALUE_EN", "VALUE_FR"])
    for field, value_en, value_fr in rows[["FIELD", "VALUE_EN", "VALUE_FR"]].itertuples(index=False):
        mapping.setdefault(str(field).strip().upper(), {})[value_en] = value_fr
    logger.debug("Category mapping extended with %d workbook rows", len(rows))
    return mapping


def translate_categories(df: pd.DataFrame, mapping: Mapping[str, Mapping[Any, str]] = CATEGORY_LABELS_FR) -> pd.DataFrame:
    """Substitute French labels in every mapped column of df; other columns are untouched."""
    df = df.copy()
    for col in mapping:
        if col not in df.columns:
            continue
        df[col] = df[col].map(lambda v, c=col: translate_value(c, v, mapping))
    return df


def join_localized_names(df: pd.DataFrame, names_df: pd.DataFrame | None) -> pd.DataFrame:
    """
    Replace CU_NAME with CU_NAME_FR from names_df (joined on FULL_CU_IN).
    CUs without a French name keep their English name.
    """
    if names_df is None or "CU_NAME" not in df.columns:
        return df
    names = (
        names_df[["CU_NAME_FR"]]
        .assign(_UNIT_KEY=unit_key(names_df[UNIT_CODE]))
        .dropna(subset=["_UNIT_KEY"])
        .drop_duplicates(subset="_UNIT_KEY")
    )
    out = df.assign(_UNIT_KEY=unit_key(df[UNIT_CODE])).merge(names, on="_UNIT_KEY", how="left", sort=False)
    out["CU_NAME"] = out["CU_NAME_FR"].where(out["CU_NAME_FR"].notna(), out["CU_NAME"])
    return out.drop(columns=["CU_NAME_FR", "_UNIT_KEY"])


def localize(
    df: pd.DataFrame,
    mapping: Mapping[str, Mapping[Any, str]] | None = None,
    names_df: pd.DataFrame | None = None,
    text_columns: list[str] | None = None,
) -> pd.DataFrame:
    """Join French CU names, translate category labels and force text_columns to strings."""
    out = join_localized_names(df, names_df)
    out = translate_categories(out, mapping if mapping is not None else CATEGORY_LABELS_FR)
    return force_text(out, text_columns or [])
