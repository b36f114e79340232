"""
Simple usage example for the CU export and sorting modules.

Builds a tiny CU_PROFILE_VW table in memory, runs two of the configured queries,
writes them to a scratch folder and previews where the sorting step would put them.
"""

import tempfile
from pathlib import Path

import pandas as pd

from cuexport import QueryConfig, SortSettings, plan_to_frame, run_query, sort_outputs
from cuexport.config import CU_PROFILE
from cuexport.data_io import save_output


def create_mock_cu_profile() -> pd.DataFrame:
    """A few CU_PROFILE_VW rows with the columns the status query reads."""
    return pd.DataFrame({
        "CU_NAME": ["Fraser River (even)", "Haida Gwaii (even)", "Chilko"],
        "FULL_CU_IN": ["PKE-03", "PKE-01", "SEL-10"],
        "LH_TYPE": ["Even Year", "Even Year", "Lake Type"],
        "SPECIES": ["Pink", "Pink", "Sockeye"],
        "CU_TYPE": ["Current", "Current", "Current"],
        "WSP_RAPID_STATUS": ["Green", "Red/Amber", None],
        "WSP_RAPID_CONFIDENCE": ["High", "Low", None],
        "WSP_RAPID_STATUS_YEAR": [2018, 2018, 2020],
        "INTEGRATED_STATUS": [None, None, "Green"],
        "INTEGRATED_STATUS_YEAR": [None, None, 2017],
    })


def simple_usage_example():
    print("=== CU export - Usage Example ===\n")
    tables = {CU_PROFILE: create_mock_cu_profile()}

    print("1. Running queries...")
    configs = [
        QueryConfig("PKE_CU_STATUS_En", "status", "Pink", life_history="Even Year", prefix_length=3),
        QueryConfig("SEL_CU_STATUS_Fr", "status", "Sockeye", life_history="Lake Type",
                    prefix_length=3, language="Fr"),
    ]
    results = {c.stem: run_query(tables, c) for c in configs}
    for stem, df in results.items():
        print(f"   {stem}: {len(df)} rows")
        print(df[["FULL_CU_IN", "SP_QUAL", "SPECIES", "WSP_RAPID_STATUS"]].to_string(index=False))

    with tempfile.TemporaryDirectory() as tmp:
        out = Path(tmp) / "output"
        for config in configs:
            save_output(results[config.stem], config.stem, out)

        print("\n2. Previewing the sort (dry run)...")
        report = sort_outputs(SortSettings(out, dry_run=True, today="20260205"))
        print(plan_to_frame(report.plan)[["src", "dst", "reason"]].to_string(index=False))


if __name__ == "__main__":
    simple_usage_example()
