from __future__ import annotations
import re
from pathlib import Path
import pandas as pd
from . import config

def sanitize_stem(title: str) -> str:
    """
    Turn a human-readable title into a file stem.

    "Pink Salmon Even Year CU Boundary" -> "Pink_Salmon_Even_Year_CU_Boundary"
    """
    stem = re.sub(r"[^0-9A-Za-z]+", "_", title.strip()).strip("_")
    if not stem:
        raise ValueError(f"Title {title!r} has no usable characters for a file name")
    return stem

def save_output(df: pd.DataFrame, stem: str, output_dir: str | Path | None = None, encoding: str = "utf-8") -> Path:
    """
    Save a query result as <output_dir>/<stem>.csv (header row, no index).
    
    Args:
        df: The DataFrame to save
        stem: File name without extension
        output_dir: Target folder (default: config.OUTPUT), created if missing
        encoding: Text encoding; localized outputs use "utf-8-sig"
        
    Returns:
        Path: The full path to the saved file
    """
    out_dir = Path(output_dir) if output_dir is not None else config.OUTPUT
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / f"{stem}.csv"
    df.to_csv(path, index=False, encoding=encoding)
    return path

def load_output(stem: str, output_dir: str | Path | None = None) -> pd.DataFrame:
    """
    Load a previously written output CSV.
    
    Args:
        stem: File name without extension
        output_dir: Folder holding the file (default: config.OUTPUT)
        
    Returns:
        pd.DataFrame: The loaded DataFrame
    """
    out_dir = Path(output_dir) if output_dir is not None else config.OUTPUT
    return pd.read_csv(out_dir / f"{stem}.csv", encoding="utf-8-sig")
