from __future__ import annotations
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
DATA = ROOT / "data"
RAW = DATA / "raw"
OUTPUT = ROOT / "output"

# NuSEDS view exports (see sql/input_views.sql)
RAW_CU_PROFILE_XLSX = RAW / "cu_profile_vw.xlsx"
RAW_CU_SITES_XLSX = RAW / "conserv_unit_system_sites_mv.xlsx"
RAW_GEO_FEATURES_XLSX = RAW / "geo_features.xlsx"

# optional French translation workbooks
RAW_CU_NAMES_FR_XLSX = RAW / "cu_names_fr.xlsx"
RAW_CATEGORY_LABELS_FR_XLSX = RAW / "category_labels_fr.xlsx"

# source view names, used as table keys
CU_PROFILE = "CU_PROFILE_VW"
CU_SITES = "CONSERV_UNIT_SYSTEM_SITES_MV"
GEO_FEATURES = "GEO_FEATURES"
CU_NAMES_FR = "CU_NAMES_FR"
CATEGORY_LABELS_FR = "CATEGORY_LABELS_FR"

# keys
UNIT_CODE = "FULL_CU_IN"

LANGUAGES = ("En", "Fr")
DATE_FORMAT = "%Y%m%d"

# Southern BC Chinook CUs
SBC_CHINOOK_UNITS = (
    "CK-01", "CK-02", "CK-03", "CK-04", "CK-05", "CK-06", "CK-07", "CK-08", "CK-09", "CK-10",
    "CK-11", "CK-12", "CK-13", "CK-14", "CK-15", "CK-16", "CK-17", "CK-18", "CK-19", "CK-20",
    "CK-21", "CK-22", "CK-25", "CK-27", "CK-28", "CK-29", "CK-31", "CK-32", "CK-33", "CK-34",
    "CK-35", "CK-82", "CK-83", "CK-9005", "CK-9008",
)

# keyword -> subfolder label; order matters, first match wins
DEFAULT_RULES = (
    ("CK_SBC", "Chinook_Southern_BC_CU"),
    ("CK_CU", "Chinook_Salmon_CU"),
    ("CM", "Chum_Salmon_CU"),
    ("CO", "Coho_Salmon_CU"),
    ("PKE", "Pink_Even_Year_Salmon_CU"),
    ("PKO", "Pink_Odd_Year_Salmon_CU"),
    ("SEL", "Sockeye_Lake_Type_Salmon_CU"),
    ("SER", "Sockeye_River_Type_Salmon_CU"),
)
