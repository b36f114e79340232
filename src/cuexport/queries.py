"""
Parameterized filter/projection queries over the NuSEDS view exports.

Every output file is one QueryConfig run through run_query. The eight CU groups
(species, life-history type, inclusion list, qualifier prefix length) are crossed
with the three query kinds and the two languages by default_queries.

Query kinds:
- status:   WSP rapid and integrated status per CU (CU_PROFILE_VW)
- boundary: CU boundary metadata (CU_PROFILE_VW)
- sites:    census sites per CU (CONSERV_UNIT_SYSTEM_SITES_MV joined to GEO_FEATURES)
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Literal, Mapping, Optional, Tuple
import pandas as pd
from .config import (
    CU_PROFILE, CU_SITES, GEO_FEATURES, CU_NAMES_FR, CATEGORY_LABELS_FR,
    LANGUAGES, SBC_CHINOOK_UNITS, UNIT_CODE,
)
from .cleaning import unit_key
from .data_io import sanitize_stem
from .translations import build_category_mapping, localize
from .validators import REQUIRED_COLUMNS, require_columns

logger = logging.getLogger(__name__)

QueryKind = Literal["status", "sites", "boundary"]
QUERY_KINDS: Tuple[QueryKind, ...] = ("status", "sites", "boundary")

# (output column, source column); output order follows this list
STATUS_PROJECTION = [
    ("CU_NAME", "CU_NAME"),
    ("FULL_CU_IN", "FULL_CU_IN"),
    ("SP_QUAL", None),  # derived: unit-code prefix
    ("LIFE_HISTORY_TYPE", "LH_TYPE"),
    ("SPECIES", "SPECIES"),
    ("CU_TYPE", "CU_TYPE"),
    ("WSP_RAPID_STATUS", "WSP_RAPID_STATUS"),
    ("WSP_RAPID_CONFIDENCE", "WSP_RAPID_CONFIDENCE"),
    ("WSP_RAPID_STATUS_YEAR", "WSP_RAPID_STATUS_YEAR"),
    ("INTEGRATED_STATUS", "INTEGRATED_STATUS"),
    ("INTEGRATED_STATUS_YEAR", "INTEGRATED_STATUS_YEAR"),
]

BOUNDARY_PROJECTION = [
    ("CU_NAME", "CU_NAME"),
    ("FULL_CU_IN", "FULL_CU_IN"),
    ("SP_QUAL", None),
    ("SPECIES", "SPECIES"),
    ("CU_TYPE", "CU_TYPE"),
]

SITES_PROJECTION = [
    ("CENSUS_SITE", "SYSTEM_SITE"),
    ("GAZ_NAME", "GAZETTED_NME"),
    ("GFE_ID", "GFE_ID"),
    ("Y_LAT", "Y_LAT"),
    ("X_LONG", "X_LONGT"),
    ("GFE_TYPE", "GFE_TYPE"),
    ("FWA_WATERSHED_CDE", "FWA_WATERSHED_CDE"),
    ("WS_CDE_50K", "WATERSHED_CDE"),
    ("CU_NAME", "CU_NAME"),
    ("FULL_CU_IN", "FULL_CU_IN"),
    ("SP_QUAL", "SPECIES_QUALIFIED"),
    ("CU_TYPE", "CU_TYPE"),
    ("POP_ID", "POP_ID"),
    ("FAZ_ACRO", "FAZ_ACRO"),
    ("MAZ_ACRO", "MAZ_ACRO"),
    ("JAZ_ACRO", "JAZ_ACRO"),
]

# French text columns per kind (forced to strings after localization)
LOCALIZED_COLUMNS = {
    "status": ["CU_NAME", "LIFE_HISTORY_TYPE", "SPECIES", "CU_TYPE",
               "WSP_RAPID_STATUS", "WSP_RAPID_CONFIDENCE", "INTEGRATED_STATUS"],
    "boundary": ["CU_NAME", "SPECIES", "CU_TYPE"],
    "sites": ["CU_NAME", "GAZ_NAME", "GFE_TYPE", "CU_TYPE"],
}


@dataclass(frozen=True)
class QueryConfig:
    """
    One output file: which rows to keep and how to shape them.

    Attributes:
        name: File stem; when empty the sanitized title is used
        kind: "status", "sites" or "boundary"
        species: SPECIES value to keep (status and boundary)
        life_history: LH_TYPE value to keep, or None for all
        include_units: Explicit FULL_CU_IN values to keep, or None for all
        prefix_length: Length of the FULL_CU_IN prefix used as SP_QUAL
        species_qualified: SPECIES_QUALIFIED value to keep (sites)
        language: "En", or "Fr" for the localized variant
        title: Human-readable title
    """
    name: str
    kind: QueryKind
    species: str
    life_history: Optional[str] = None
    include_units: Optional[Tuple[str, ...]] = None
    prefix_length: int = 2
    species_qualified: Optional[str] = None
    language: str = "En"
    title: Optional[str] = None

    def __post_init__(self):
        if self.kind not in QUERY_KINDS:
            raise ValueError(f"Unknown query kind {self.kind!r}; expected one of {QUERY_KINDS}")
        if self.language not in LANGUAGES:
            raise ValueError(f"Unknown language {self.language!r}; expected one of {LANGUAGES}")
        if self.prefix_length < 1:
            raise ValueError(f"prefix_length must be positive, got {self.prefix_length}")
        if self.kind == "sites" and not self.species_qualified:
            raise ValueError(f"Sites query {self.name or self.title!r} needs species_qualified")
        if not self.name and not self.title:
            raise ValueError("QueryConfig needs a name or a title")

    @property
    def stem(self) -> str:
        return self.name or sanitize_stem(self.title)


@dataclass(frozen=True)
class CUGroup:
    """A species / life-history grouping of CUs that gets its own set of files."""
    code: str
    label: str
    species: str
    species_qualified: str
    life_history: Optional[str] = None
    include_units: Optional[Tuple[str, ...]] = None
    prefix_length: int = 2


CU_GROUPS = (
    CUGroup("CK", "Chinook Salmon", "Chinook", "CK"),
    CUGroup("CK_SBC", "SBC Chinook Salmon", "Chinook", "CK", include_units=SBC_CHINOOK_UNITS),
    CUGroup("CM", "Chum Salmon", "Chum", "CM"),
    CUGroup("CO", "Coho Salmon", "Coho", "CO"),
    CUGroup("PKE", "Pink Salmon Even Year", "Pink", "PKE", "Even Year", prefix_length=3),
    CUGroup("PKO", "Pink Salmon Odd Year", "Pink", "PKO", "Odd Year", prefix_length=3),
    CUGroup("SEL", "Sockeye Salmon Lake Type", "Sockeye", "SEL", "Lake Type", prefix_length=3),
    CUGroup("SER", "Sockeye Salmon River Type", "Sockeye", "SER", "River Type", prefix_length=3),
)


def default_queries(
    kinds: Iterable[str] = QUERY_KINDS,
    languages: Iterable[str] = LANGUAGES,
    groups: Iterable[CUGroup] = CU_GROUPS,
) -> list[QueryConfig]:
    """
    Cross CU groups with query kinds and languages.

    Stems look like "CK_CU_SITES_En" or "PKE_CU_STATUS_Fr", which is what the
    sorting rules key on.
    """
    kinds, languages = list(kinds), list(languages)
    configs = []
    for kind in kinds:
        for group in groups:
            for lang in languages:
                configs.append(QueryConfig(
                    name=f"{group.code}_CU_{kind.upper()}_{lang}",
                    kind=kind,
                    species=group.species,
                    life_history=group.life_history,
                    include_units=group.include_units,
                    prefix_length=group.prefix_length,
                    species_qualified=group.species_qualified,
                    language=lang,
                    title=f"{group.label} CU {kind.capitalize()} ({lang})",
                ))
    return configs


# -------------------------------
# Query steps
# -------------------------------

def _filter_rows(df: pd.DataFrame, config: QueryConfig) -> pd.DataFrame:
    if config.kind == "sites":
        mask = df["SPECIES_QUALIFIED"] == config.species_qualified
    else:
        mask = df["SPECIES"] == config.species
        if config.life_history is not None:
            mask &= df["LH_TYPE"] == config.life_history
    if config.include_units is not None:
        mask &= unit_key(df[UNIT_CODE]).isin([u.strip().upper() for u in config.include_units])
    return df.loc[mask.fillna(False).astype(bool)]

def _project(df: pd.DataFrame, projection: list[tuple[str, Optional[str]]], prefix_length: int) -> pd.DataFrame:
    out = pd.DataFrame(index=df.index)
    for target, source in projection:
        if source is None:
            out[target] = df[UNIT_CODE].astype("string").str[:prefix_length]
        else:
            out[target] = df[source]
    return out

def _sort_by_unit(df: pd.DataFrame) -> pd.DataFrame:
    # ORDER BY FULL_CU_IN ASC with nulls last; stable for ties
    return df.sort_values(UNIT_CODE, kind="mergesort", na_position="last").reset_index(drop=True)

def _required(config: QueryConfig) -> dict[str, list[str]]:
    required = {table: list(cols) for table, cols in REQUIRED_COLUMNS[config.kind].items()}
    if config.kind != "sites" and config.life_history is not None and "LH_TYPE" not in required[CU_PROFILE]:
        required[CU_PROFILE].append("LH_TYPE")
    return required

def _get_table(tables: Mapping[str, pd.DataFrame], name: str) -> pd.DataFrame:
    try:
        return tables[name]
    except KeyError:
        raise KeyError(f"Table {name} was not loaded; available: {sorted(tables)}") from None


def run_query(
    tables: Mapping[str, pd.DataFrame],
    config: QueryConfig,
    translations: Optional[Mapping[str, Any]] = None,
) -> pd.DataFrame:
    """
    Run one filter/projection query.

    Args:
        tables: Loaded views keyed by view name (see ingest.load_tables)
        config: The query to run
        translations: For Fr queries, {"mapping": category mapping,
            "names": CU_NAMES_FR DataFrame or None}; built-in labels when omitted

    Returns:
        Projected, renamed rows sorted ascending by FULL_CU_IN

    Raises:
        MissingColumnsError: If a source table lacks a column the query reads
    """
    required = _required(config)
    for table, cols in required.items():
        require_columns(_get_table(tables, table), cols, table)

    if config.kind == "sites":
        sites = _filter_rows(tables[CU_SITES], config)[required[CU_SITES]]
        geo = tables[GEO_FEATURES][["ID", "GAZETTED_NME"]]
        # inner join: sites without a geo feature are dropped
        joined = sites.merge(geo, left_on="GFE_ID", right_on="ID", how="inner", sort=False)
        out = _project(joined, SITES_PROJECTION, config.prefix_length)
    else:
        rows = _filter_rows(tables[CU_PROFILE], config)
        projection = STATUS_PROJECTION if config.kind == "status" else BOUNDARY_PROJECTION
        out = _project(rows, projection, config.prefix_length)
        if config.kind == "status":
            # rapid status year only means something alongside a rapid status
            out["WSP_RAPID_STATUS_YEAR"] = out["WSP_RAPID_STATUS_YEAR"].where(out["WSP_RAPID_STATUS"].notna())

    out = _sort_by_unit(out)

    if config.language == "Fr":
        translations = translations or {}
        out = localize(
            out,
            mapping=translations.get("mapping"),
            names_df=translations.get("names"),
            text_columns=LOCALIZED_COLUMNS[config.kind],
        )

    logger.debug("%s: %d rows", config.stem, len(out))
    return out


def build_translations(tables: Mapping[str, pd.DataFrame]) -> dict[str, Any]:
    """Category mapping and French CU names from whichever translation workbooks were loaded."""
    return {
        "mapping": build_category_mapping(tables.get(CATEGORY_LABELS_FR)),
        "names": tables.get(CU_NAMES_FR),
    }


def run_queries(
    tables: Mapping[str, pd.DataFrame],
    configs: Iterable[QueryConfig],
    translations: Optional[Mapping[str, Any]] = None,
) -> dict[str, pd.DataFrame]:
    """Run each query; results keyed by file stem, in config order."""
    if translations is None:
        translations = build_translations(tables)
    results: dict[str, pd.DataFrame] = {}
    for config in configs:
        if config.stem in results:
            raise ValueError(f"Duplicate output name {config.stem!r}")
        results[config.stem] = run_query(tables, config, translations)
    return results
