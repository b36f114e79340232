import pandas as pd
import pytest

from cuexport.config import CU_PROFILE, CU_SITES, GEO_FEATURES


@pytest.fixture
def cu_profile():
    rows = [
        # CU_NAME, FULL_CU_IN, LH_TYPE, SPECIES, CU_TYPE, RAPID, CONF, RAPID_YEAR, INTEGRATED, INTEGRATED_YEAR
        ("Fraser-Spring", "CK-02", "Stream Type", "Chinook", "Current", "Red", "High", 2021.0, "Red", 2022.0),
        ("Fraser-Summer", "CK-01", "Ocean Type", "Chinook", "Current", "Amber", "Medium", 2021.0, "Amber", 2022.0),
        ("Yukon", "CK-40", "Stream Type", "Chinook", "Current", None, None, 2019.0, None, None),
        ("Okanagan", "CK-9005", "Ocean Type", "Chinook", "Bin", "Green", "Low", 2023.0, None, None),
        ("Georgia Strait", "CM-01", None, "Chum", "Current", "Green", "High", 2020.0, "Green", 2021.0),
        ("Skeena", "CO-01", None, "Coho", "Current", "Amber/Green", "High", 2020.0, None, None),
        ("Fraser River (even)", "PKE-03", "Even Year", "Pink", "Current", "Green", "High", 2018.0, None, None),
        ("Haida Gwaii (even)", "PKE-01", "Even Year", "Pink", "Current", "Red/Amber", "Low", 2018.0, None, None),
        ("Fraser River (odd)", "PKO-02", "Odd Year", "Pink", "Current", "Green", "High", 2018.0, None, None),
        ("Chilko", "SEL-10", "Lake Type", "Sockeye", "Current", None, None, 2020.0, "Green", 2017.0),
        ("Harrison River", "SER-01", "River Type", "Sockeye", "Provisional", "UD", "Low", 2020.0, "UD", 2017.0),
    ]
    return pd.DataFrame(rows, columns=[
        "CU_NAME", "FULL_CU_IN", "LH_TYPE", "SPECIES", "CU_TYPE",
        "WSP_RAPID_STATUS", "WSP_RAPID_CONFIDENCE", "WSP_RAPID_STATUS_YEAR",
        "INTEGRATED_STATUS", "INTEGRATED_STATUS_YEAR",
    ])


@pytest.fixture
def cu_sites():
    rows = [
        # SYSTEM_SITE, GFE_ID, Y_LAT, X_LONGT, GFE_TYPE, FWA, WS_50K, CU_NAME, FULL_CU_IN, SP_QUAL, CU_TYPE, POP_ID, FAZ, MAZ, JAZ
        ("CHILKO RIVER", 101, 51.62, -124.14, "River", "100-1", "00-1", "Chilko", "SEL-10", "SEL", "Current", 5001, "FRCANYON", "SC", "FR"),
        ("NICOLA RIVER", 102, 50.16, -120.67, "River", "100-2", "00-2", "Fraser-Spring", "CK-02", "CK", "Current", 4002, "FRTOMP", "SC", "FR"),
        ("BIG SILVER CREEK", 103, 49.80, -122.03, "Creek", "100-3", "00-3", "Fraser-Summer", "CK-01", "CK", "Current", 4001, "LFR", "SC", "FR"),
        ("ORPHAN CREEK", 999, 50.00, -121.00, "Creek", "100-4", "00-4", "Fraser-Summer", "CK-01", "CK", "Current", 4003, "LFR", "SC", "FR"),
        ("YUKON MAINSTEM", 104, 60.72, -135.05, "River", "200-1", "10-1", "Yukon", "CK-40", "CK", "Current", 4040, "YUK", "NC", "YK"),
        ("QUALICUM RIVER", 105, 49.39, -124.62, "Hatchery", "300-1", "20-1", "Georgia Strait", "CM-01", "CM", "Current", 3001, "GSVI", "SC", "GS"),
    ]
    return pd.DataFrame(rows, columns=[
        "SYSTEM_SITE", "GFE_ID", "Y_LAT", "X_LONGT", "GFE_TYPE", "FWA_WATERSHED_CDE",
        "WATERSHED_CDE", "CU_NAME", "FULL_CU_IN", "SPECIES_QUALIFIED", "CU_TYPE",
        "POP_ID", "FAZ_ACRO", "MAZ_ACRO", "JAZ_ACRO",
    ])


@pytest.fixture
def geo_features():
    return pd.DataFrame({
        "ID": [101, 102, 103, 104, 105],
        "GAZETTED_NME": ["Chilko River", "Nicola River", "Big Silver Creek", "Yukon River", "Big Qualicum River"],
    })


@pytest.fixture
def tables(cu_profile, cu_sites, geo_features):
    return {CU_PROFILE: cu_profile, CU_SITES: cu_sites, GEO_FEATURES: geo_features}
