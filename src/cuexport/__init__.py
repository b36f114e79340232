"""
cuexport - Pacific salmon Conservation Unit open-data export.

Extracts CU status, site and boundary tables from NuSEDS view exports into one CSV
per species/life-history group and language, then sorts the CSVs into dated
subfolders by filename keyword.
"""
from .queries import QueryConfig, CUGroup, CU_GROUPS, default_queries, run_query, run_queries
from .pipeline import make_outputs
from .sorting import (
    Rule, PlanEntry, MoveOutcome, SortSettings, SortReport,
    classify, build_plan, execute_plan, sort_outputs, load_rules, plan_to_frame,
)
from .validators import MissingColumnsError

__all__ = [
    # Extraction
    "QueryConfig", "CUGroup", "CU_GROUPS", "default_queries",
    "run_query", "run_queries", "make_outputs",

    # Sorting
    "Rule", "PlanEntry", "MoveOutcome", "SortSettings", "SortReport",
    "classify", "build_plan", "execute_plan", "sort_outputs", "load_rules", "plan_to_frame",

    # Errors
    "MissingColumnsError",
]

__version__ = "0.1.0"
