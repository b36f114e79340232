from __future__ import annotations
import logging
import re
from typing import Iterable
import pandas as pd

logger = logging.getLogger(__name__)

def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """
    Bring exported headers to the view's column names: upper-case, with every run
    of other characters turned into a single underscore ("cu name " -> "CU_NAME").

    Raises:
        ValueError: If two headers end up with the same name
    """
    names = [
        re.sub(r"[^0-9A-Z]+", "_", str(c).strip().upper()).strip("_")
        for c in df.columns
    ]
    clashes = sorted({n for n in names if names.count(n) > 1})
    if clashes:
        raise ValueError(f"Column names collide after normalisation: {', '.join(clashes)}")
    return df.set_axis(names, axis=1)

def cast_types(df: pd.DataFrame, dtypes: dict[str, str]) -> pd.DataFrame:
    """
    Cast columns to the data types given in a column -> dtype mapping.
    Columns absent from df are ignored; the validators decide what is required.
    
    Args:
        df: Input DataFrame
        dtypes: Dictionary mapping column names to target data types
        
    Returns:
        DataFrame with columns cast to specified types
    """
    df = df.copy()
    for col, t in dtypes.items():
        if col not in df.columns:
            continue
        if t == "Int64":
            # years come out of Excel as floats whenever a cell is empty
            df[col] = pd.to_numeric(df[col], errors="coerce").round().astype("Int64")
        else:
            df[col] = df[col].astype(t)
    return df

def harmonize_unit_codes(df: pd.DataFrame, col: str = "FULL_CU_IN") -> pd.DataFrame:
    """
    Standardize unit codes by stripping whitespace and upper-casing. Nulls stay null.
    
    Args:
        df: Input DataFrame
        col: Name of the unit-code column (default: "FULL_CU_IN")
        
    Returns:
        DataFrame with standardized unit-code column
    """
    df = df.copy()
    if col in df.columns:
        df[col] = unit_key(df[col])
    return df

def unit_key(codes: pd.Series) -> pd.Series:
    """Comparison key for unit codes (stripped, upper-cased); the codes themselves are left as exported."""
    return codes.astype("string").str.strip().str.upper()

def force_text(df: pd.DataFrame, columns: Iterable[str]) -> pd.DataFrame:
    """
    Cast localized text columns to the pandas string dtype.

    A missing column only logs a warning: this step is cosmetic, so unlike the
    column checks in validators it never fails the query.
    """
    df = df.copy()
    for col in columns:
        if col not in df.columns:
            logger.warning("Cannot force text on missing column %s", col)
            continue
        df[col] = df[col].astype("string")
    return df
