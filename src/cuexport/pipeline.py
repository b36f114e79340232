from __future__ import annotations
import logging
from pathlib import Path
from typing import Iterable
from .config import CU_PROFILE, CU_SITES, GEO_FEATURES, CU_NAMES_FR, CATEGORY_LABELS_FR, LANGUAGES, UNIT_CODE
from .ingest import load_tables
from .cleaning import cast_types, harmonize_unit_codes
from .validators import validate_table
from .queries import QUERY_KINDS, build_translations, default_queries, run_queries
from .data_io import save_output

logger = logging.getLogger(__name__)

YEAR_TYPES = {"WSP_RAPID_STATUS_YEAR": "Int64", "INTEGRATED_STATUS_YEAR": "Int64"}
# empty GFE_ID cells would otherwise turn the ids into floats
SITE_TYPES = {"GFE_ID": "Int64"}

def prepare_tables(tables: dict, kinds: Iterable[str] = QUERY_KINDS) -> dict:
    """Clean and validate loaded views for the given query kinds."""
    kinds = list(kinds)
    out = dict(tables)

    # ---- CU profile (status, boundary) ----
    if {"status", "boundary"} & set(kinds):
        cu = cast_types(out[CU_PROFILE], YEAR_TYPES)
        out[CU_PROFILE] = validate_table(cu, CU_PROFILE, [k for k in kinds if k != "sites"])

    # ---- Sites ----
    if "sites" in kinds:
        sites = cast_types(out[CU_SITES], SITE_TYPES)
        out[CU_SITES] = validate_table(sites, CU_SITES, ["sites"])
        out[GEO_FEATURES] = validate_table(out[GEO_FEATURES], GEO_FEATURES, ["sites"])

    # ---- Translations ----
    if CU_NAMES_FR in out:
        out[CU_NAMES_FR] = validate_table(harmonize_unit_codes(out[CU_NAMES_FR], UNIT_CODE), CU_NAMES_FR)
    if CATEGORY_LABELS_FR in out:
        out[CATEGORY_LABELS_FR] = validate_table(out[CATEGORY_LABELS_FR], CATEGORY_LABELS_FR)
    return out

def make_outputs(
    data_dir: str | Path | None = None,
    output_dir: str | Path | None = None,
    kinds: Iterable[str] | None = None,
    languages: Iterable[str] | None = None,
) -> dict[str, Path]:
    """
    Load the view exports, run every configured query and write one CSV per query.

    Returns:
        dict mapping file stem to the written path
    """
    kinds = list(kinds or QUERY_KINDS)
    languages = list(languages or LANGUAGES)
    tables = load_tables(data_dir, with_translations="Fr" in languages)
    tables = prepare_tables(tables, kinds)

    configs = default_queries(kinds=kinds, languages=languages)
    results = run_queries(tables, configs, build_translations(tables))

    written: dict[str, Path] = {}
    for config in configs:
        df = results[config.stem]
        if df.empty:
            logger.warning("%s matched no rows; writing header only", config.stem)
        encoding = "utf-8-sig" if config.language == "Fr" else "utf-8"
        written[config.stem] = save_output(df, config.stem, output_dir, encoding=encoding)
        logger.info("Wrote %s (%d rows)", written[config.stem].name, len(df))
    return written
