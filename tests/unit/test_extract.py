# tests/unit/test_extract.py

from unittest import mock

import pytest
import pandas as pd
import polars as pl
import geopandas as gpd

from land4health import extract
from land4health.errors import BackendCallFailure, InvalidInputKind, InvalidReducerName
from land4health.progress import ProgressSink
from land4health.reducers import Reducer

def test_rows_follow_region_order(districts_gdf, recording_backend):
    result = extract.extract_by_feature(
        "image", districts_gdf, scale=1000, backend=recording_backend, quiet=True
    )

    assert len(result) == 3
    assert result["ubigeo"].tolist() == ["160101", "160102", "160103"]
    assert result["value"].tolist() == [0.0, 1.0, 2.0]
    assert result.index.tolist() == [10, 20, 30]

def test_one_backend_call_per_singleton_feature(districts_gdf, recording_backend):
    extract.extract_by_feature(
        "image", districts_gdf, scale=30, reducer="sum", backend=recording_backend, quiet=True
    )

    assert recording_backend.call_count == 3
    for i, call in enumerate(recording_backend.calls):
        assert len(call["region"]) == 1
        assert call["region"].data["ubigeo"].iloc[0] == districts_gdf["ubigeo"].iloc[i]
        assert call["reducer"] is Reducer.SUM
        assert call["scale"] == 30
        assert call["image"] == "image"

def test_columns_are_united_not_intersected(districts_gdf, backend_factory):
    def values(index, region):
        if index == 0:
            return {"A": 1.0, "B": 2.0}
        return {"A": 3.0, "C": 4.0}

    backend = backend_factory(values=values)
    result = extract.extract_by_feature("image", districts_gdf, scale=1000, backend=backend, quiet=True)

    assert list(result.columns) == ["ubigeo", "population", "A", "B", "C"]
    assert result["A"].tolist() == [1.0, 3.0, 3.0]
    assert pd.isna(result["C"].iloc[0])
    assert result["B"].isna().tolist() == [False, True, True]

def test_invalid_reducer_fails_before_any_call(districts_gdf, recording_backend):
    with pytest.raises(InvalidReducerName, match="Must be one of"):
        extract.extract_by_feature(
            "image", districts_gdf, scale=1000, reducer="variance", backend=recording_backend
        )
    assert recording_backend.call_count == 0

def test_invalid_reducer_is_also_a_value_error(districts_gdf, recording_backend):
    with pytest.raises(ValueError):
        extract.extract_by_feature("image", districts_gdf, scale=1000, reducer="sd", backend=recording_backend)

def test_invalid_region_fails_before_any_call(recording_backend):
    with pytest.raises(InvalidInputKind):
        extract.extract_by_feature("image", [1, 2, 3], scale=1000, backend=recording_backend)
    assert recording_backend.call_count == 0

def test_missing_image_fails_before_any_call(districts_gdf, recording_backend):
    with pytest.raises(InvalidInputKind):
        extract.extract_by_feature(None, districts_gdf, scale=1000, backend=recording_backend)
    assert recording_backend.call_count == 0

@pytest.mark.parametrize("scale", [0, -30, None])
def test_non_positive_scale_is_rejected(districts_gdf, recording_backend, scale):
    with pytest.raises(ValueError, match="scale"):
        extract.extract_by_feature("image", districts_gdf, scale=scale, backend=recording_backend)
    assert recording_backend.call_count == 0

def test_backend_failure_aborts_without_partial_result(many_features_gdf, backend_factory):
    five = many_features_gdf.iloc[:5]
    backend = backend_factory(fail_on=2)
    result = None

    with pytest.raises(BackendCallFailure) as excinfo:
        result = extract.extract_by_feature("image", five, scale=1000, backend=backend, quiet=True)

    assert result is None
    assert backend.call_count == 3
    assert excinfo.value.index == 2
    assert excinfo.value.total == 5
    assert "3/5" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, ConnectionError)

def test_malformed_response_is_a_backend_failure(districts_gdf, recording_backend):
    recording_backend.reduce = lambda *args, **kwargs: pd.DataFrame({"value": [1.0, 2.0]})

    with pytest.raises(BackendCallFailure, match="expected one row, got 2 rows"):
        extract.extract_by_feature("image", districts_gdf, scale=1000, backend=recording_backend, quiet=True)

def test_quiet_never_touches_progress_sink(many_features_gdf, recording_backend):
    sink = mock.Mock(spec=ProgressSink)

    result = extract.extract_by_feature(
        "image", many_features_gdf, scale=1000, backend=recording_backend, quiet=True, progress=sink
    )

    assert len(result) == 100
    assert sink.method_calls == []

def test_progress_advances_once_per_feature(districts_gdf, recording_backend):
    sink = mock.Mock(spec=ProgressSink)

    extract.extract_by_feature("image", districts_gdf, scale=1000, backend=recording_backend, progress=sink)

    sink.start.assert_called_once_with(3, "Extracting mean")
    assert sink.advance.call_count == 3
    sink.close.assert_called_once_with()

def test_failing_progress_sink_does_not_abort(districts_gdf, recording_backend, caplog):
    sink = mock.Mock(spec=ProgressSink)
    sink.advance.side_effect = RuntimeError("terminal gone")

    result = extract.extract_by_feature("image", districts_gdf, scale=1000, backend=recording_backend, progress=sink)

    assert len(result) == 3
    assert sink.advance.call_count == 1
    assert "Progress reporting disabled" in caplog.text

def test_progress_closed_when_backend_fails(districts_gdf, backend_factory):
    sink = mock.Mock(spec=ProgressSink)

    with pytest.raises(BackendCallFailure):
        extract.extract_by_feature("image", districts_gdf, scale=1000, backend=backend_factory(fail_on=1), progress=sink)

    sink.close.assert_called_once_with()

def test_with_geometry_returns_geodataframe(districts_gdf, recording_backend):
    result = extract.extract_by_feature(
        "image", districts_gdf, scale=1000, backend=recording_backend, with_geometry=True, quiet=True
    )

    assert isinstance(result, gpd.GeoDataFrame)
    assert result.crs == districts_gdf.crs
    assert list(result.columns)[-1] == "geometry"
    assert result.geometry.equals(districts_gdf.geometry)

def test_without_geometry_returns_plain_dataframe(districts_gdf, recording_backend):
    result = extract.extract_by_feature("image", districts_gdf, scale=1000, backend=recording_backend, quiet=True)

    assert not isinstance(result, gpd.GeoDataFrame)
    assert "geometry" not in result.columns

def test_options_are_passed_verbatim(districts_gdf, recording_backend):
    extract.extract_by_feature(
        "image", districts_gdf, scale=1000, backend=recording_backend, quiet=True, tileScale=4, maxPixelsPerRegion=1e9
    )

    assert all(call["options"] == {"tileScale": 4, "maxPixelsPerRegion": 1e9} for call in recording_backend.calls)

def test_values_are_not_transformed(districts_gdf, backend_factory):
    backend = backend_factory(values=lambda index, region: {"lst": 301.15})
    result = extract.extract_by_feature("image", districts_gdf, scale=1000, backend=backend, quiet=True)

    assert result["lst"].tolist() == [301.15, 301.15, 301.15]

def test_value_column_clashing_with_attribute_is_renamed(districts_gdf, backend_factory, caplog):
    backend = backend_factory(values=lambda index, region: {"population": 1.5})
    result = extract.extract_by_feature("image", districts_gdf, scale=1000, reducer="sum", backend=backend, quiet=True)

    assert result["population"].tolist() == [1200, 35, 800]
    assert result["population_sum"].tolist() == [1.5, 1.5, 1.5]
    assert "clash" in caplog.text

def test_region_is_not_modified(districts_gdf, recording_backend):
    before = districts_gdf.copy()
    extract.extract_by_feature("image", districts_gdf, scale=1000, backend=recording_backend, with_geometry=True, quiet=True)

    assert districts_gdf.equals(before)

def test_extract_to_polars(districts_gdf, recording_backend):
    df = extract.extract_to_polars("image", districts_gdf, scale=1000, backend=recording_backend, quiet=True)

    assert isinstance(df, pl.DataFrame)
    assert df.height == 3
    assert "geometry" not in df.columns
    assert df["ubigeo"].to_list() == ["160101", "160102", "160103"]

def test_missing_geometry_fails_before_any_call(districts_gdf, recording_backend):
    region = districts_gdf.copy()
    region.loc[20, "geometry"] = None

    with pytest.raises(InvalidInputKind, match=r"positions \[1\]"):
        extract.extract_by_feature("image", region, scale=1000, backend=recording_backend, quiet=True)
    assert recording_backend.call_count == 0

def test_renamed_column_does_not_collide_with_existing_value(districts_gdf, backend_factory):
    backend = backend_factory(values=lambda index, region: {"population": 9.0, "population_mean": 7.0})
    result = extract.extract_by_feature("image", districts_gdf, scale=1000, backend=backend, quiet=True)

    assert list(result.columns) == ["ubigeo", "population", "population_mean_2", "population_mean"]
    assert result.columns.is_unique
    assert result["population_mean_2"].tolist() == [9.0, 9.0, 9.0]
    assert result["population_mean"].tolist() == [7.0, 7.0, 7.0]
