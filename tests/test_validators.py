import pandas as pd
import pytest
from pandera.errors import SchemaErrors

from cuexport.config import CU_PROFILE, CU_SITES, GEO_FEATURES, CU_NAMES_FR
from cuexport.validators import MissingColumnsError, require_columns, validate_table

def test_require_columns_lists_every_missing_column():
    df = pd.DataFrame({"CU_NAME": ["x"]})
    with pytest.raises(MissingColumnsError) as err:
        require_columns(df, ["CU_NAME", "FULL_CU_IN", "SPECIES"], CU_PROFILE)
    assert err.value.missing == ["FULL_CU_IN", "SPECIES"]
    assert str(err.value) == "CU_PROFILE_VW is missing required column(s): FULL_CU_IN, SPECIES"

def test_validate_tables_accepts_fixtures(cu_profile, cu_sites, geo_features):
    validate_table(cu_profile, CU_PROFILE)
    validate_table(cu_sites, CU_SITES)
    validate_table(geo_features, GEO_FEATURES)

def test_validate_only_requires_columns_of_requested_kinds(cu_profile):
    boundary_only = cu_profile[["CU_NAME", "FULL_CU_IN", "SPECIES", "CU_TYPE", "LH_TYPE"]]
    validate_table(boundary_only, CU_PROFILE, ["boundary"])
    with pytest.raises(MissingColumnsError):
        validate_table(boundary_only, CU_PROFILE, ["status"])

def test_out_of_range_latitude_is_rejected(cu_sites):
    cu_sites.loc[0, "Y_LAT"] = 151.62
    with pytest.raises(SchemaErrors):
        validate_table(cu_sites, CU_SITES)

def test_duplicate_geo_feature_ids_are_rejected(geo_features):
    dup = pd.concat([geo_features, geo_features.iloc[[0]]], ignore_index=True)
    with pytest.raises(SchemaErrors):
        validate_table(dup, GEO_FEATURES)

def test_translation_workbook_columns_are_required():
    with pytest.raises(MissingColumnsError) as err:
        validate_table(pd.DataFrame({"FULL_CU_IN": ["CK-01"]}), CU_NAMES_FR)
    assert err.value.missing == ["CU_NAME_FR"]

def test_sites_without_geo_feature_id_pass_validation(cu_sites):
    cu_sites.loc[0, "GFE_ID"] = None
    validate_table(cu_sites, CU_SITES)
