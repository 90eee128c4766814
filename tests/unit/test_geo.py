"""Tests for bounding box and GeoJSON helpers.

Tests cover:
- Validity and normalization of 2D and 3D bounding boxes
- Antimeridian detection, splitting and centering
- Union of bounding boxes (invalid entries ignored)
- Clamping of GeoJSON coordinates
"""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from stac_entities.geo import (
    center_of_bounding_box,
    ensure_bounding_box,
    fix_geojson,
    is_antimeridian_bounding_box,
    is_bounding_box,
    to_geojson,
    union_bounding_box,
)

longitudes = st.floats(min_value=-180, max_value=180, allow_nan=False)
latitudes = st.floats(min_value=-90, max_value=90, allow_nan=False)


@st.composite
def bounding_boxes(draw: st.DrawFn) -> list[float]:
    """Valid 2D bounding boxes, possibly crossing the antimeridian."""
    west = draw(longitudes)
    east = draw(longitudes)
    south, north = sorted([draw(latitudes), draw(latitudes)])
    return [west, south, east, north]


class TestIsBoundingBox:
    """Tests for is_bounding_box()."""

    @pytest.mark.unit
    def test_whole_world(self) -> None:
        assert is_bounding_box([-180, -90, 180, 90])

    @pytest.mark.unit
    def test_latitude_out_of_range(self) -> None:
        assert not is_bounding_box([-180, -91, 180, 90])

    @pytest.mark.unit
    def test_longitude_out_of_range(self) -> None:
        assert not is_bounding_box([360, -90, 0, 90])

    @pytest.mark.unit
    def test_antimeridian_box_is_valid(self) -> None:
        """West > east is allowed, the box wraps around."""
        assert is_bounding_box([179, -1, -179, 1])

    @pytest.mark.unit
    def test_south_above_north_is_invalid(self) -> None:
        assert not is_bounding_box([0, 10, 1, 5])

    @pytest.mark.unit
    def test_3d_box(self) -> None:
        assert is_bounding_box([-10, -10, 0, 10, 10, 100])

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "bbox",
        [None, [], [1, 2, 3], [1, 2, 3, 4, 5], ["0", 0, 1, 1], {"west": 0}, "0,0,1,1"],
    )
    def test_malformed(self, bbox: object) -> None:
        assert not is_bounding_box(bbox)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "bbox",
        [
            [float("nan"), 0, 10, 10],
            [0, 0, float("inf"), 10],
            [0, 0, float("nan"), 10, 10, 100],
        ],
    )
    def test_non_finite_coordinates(self, bbox: list[float]) -> None:
        assert not is_bounding_box(bbox)
        assert ensure_bounding_box(bbox) is None

    @pytest.mark.unit
    def test_no_tolerance(self) -> None:
        """Noise is only snapped by ensure_bounding_box."""
        assert not is_bounding_box([0, 0, 1, 90.00000000001])


class TestEnsureBoundingBox:
    """Tests for ensure_bounding_box()."""

    @pytest.mark.unit
    def test_snaps_floating_point_noise(self) -> None:
        result = ensure_bounding_box([-180.00000000001, -90, 180, 90.00000000001])

        assert result == [-180, -90, 180, 90]

    @pytest.mark.unit
    def test_reduces_3d_to_2d(self) -> None:
        assert ensure_bounding_box([1, 2, 0, 3, 4, 50]) == [1, 2, 3, 4]

    @pytest.mark.unit
    def test_keeps_3d_when_requested(self) -> None:
        assert ensure_bounding_box([1, 2, 0, 3, 4, 50], allow_3d=True) == [1, 2, 0, 3, 4, 50]

    @pytest.mark.unit
    def test_returns_new_list(self) -> None:
        bbox = [1, 2, 3, 4]

        result = ensure_bounding_box(bbox)

        assert result == bbox
        assert result is not bbox

    @pytest.mark.unit
    def test_invalid_is_none(self) -> None:
        assert ensure_bounding_box([0, 0, 200, 1]) is None

    @pytest.mark.unit
    def test_epsilon_from_setting(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STAC_ENTITIES_BBOX_EPSILON", "0.5")

        assert ensure_bounding_box([0, 0, 180.4, 1]) == [0, 0, 180, 1]

    @pytest.mark.unit
    def test_invalid_epsilon_setting_uses_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STAC_ENTITIES_BBOX_EPSILON", "tiny")

        assert ensure_bounding_box([0, 0, 180.00000000001, 1]) == [0, 0, 180, 1]
        assert ensure_bounding_box([0, 0, 180.4, 1]) is None

    @given(bounding_boxes())
    @settings(max_examples=50)
    @pytest.mark.unit
    def test_valid_boxes_are_kept(self, bbox: list[float]) -> None:
        assert ensure_bounding_box(bbox) == bbox


class TestAntimeridian:
    """Tests for antimeridian handling."""

    @pytest.mark.unit
    def test_detection(self) -> None:
        assert is_antimeridian_bounding_box([179, -1, -179, 1])
        assert not is_antimeridian_bounding_box([-179, -1, 179, 1])
        assert not is_antimeridian_bounding_box(None)

    @pytest.mark.unit
    def test_geojson_is_split_in_two_polygons(self) -> None:
        """Both parts end at the antimeridian."""
        geojson = to_geojson([179, -1, -179, 1])

        assert geojson is not None
        assert geojson["geometry"]["type"] == "MultiPolygon"
        east_part, west_part = geojson["geometry"]["coordinates"]
        assert east_part == [[[-180, 1], [-180, -1], [-179, -1], [-179, 1], [-180, 1]]]
        assert west_part == [[[179, 1], [179, -1], [180, -1], [180, 1], [179, 1]]]

    @pytest.mark.unit
    def test_center_wraps_around(self) -> None:
        assert center_of_bounding_box([170, 0, -170, 10]) == [180, 5]
        assert center_of_bounding_box([175, 0, -165, 10]) == [-175, 5]


class TestCenterOfBoundingBox:
    """Tests for center_of_bounding_box()."""

    @pytest.mark.unit
    def test_2d(self) -> None:
        assert center_of_bounding_box([0, 0, 10, 20]) == [5, 10]

    @pytest.mark.unit
    def test_3d(self) -> None:
        assert center_of_bounding_box([0, 0, 100, 10, 20, 200]) == [5, 10, 150]

    @pytest.mark.unit
    def test_3d_flattened(self) -> None:
        assert center_of_bounding_box([0, 0, 100, 10, 20, 200], allow_3d=False) == [5, 10]

    @pytest.mark.unit
    def test_invalid(self) -> None:
        assert center_of_bounding_box([0, 0, 10]) is None

    @given(bounding_boxes())
    @settings(max_examples=50)
    @pytest.mark.unit
    def test_center_is_valid_position(self, bbox: list[float]) -> None:
        x, y = center_of_bounding_box(bbox)  # type: ignore[misc]

        assert -180 <= x <= 180
        assert bbox[1] <= y <= bbox[3]


class TestUnionBoundingBox:
    """Tests for union_bounding_box()."""

    @pytest.mark.unit
    def test_union(self) -> None:
        assert union_bounding_box([[0, 0, 10, 10], [5, -5, 20, 5]]) == [0, -5, 20, 10]

    @pytest.mark.unit
    def test_invalid_and_null_entries_are_ignored(self) -> None:
        result = union_bounding_box([[0, 0, 10, 10], None, [0, 0, 500, 1], [1, 1, 2, 2]])

        assert result == [0, 0, 10, 10]

    @pytest.mark.unit
    def test_no_valid_entries(self) -> None:
        assert union_bounding_box([None, [1, 2]]) is None
        assert union_bounding_box([]) is None
        assert union_bounding_box(None) is None

    @given(st.lists(bounding_boxes(), min_size=1, max_size=5))
    @settings(max_examples=50)
    @pytest.mark.unit
    def test_union_contains_all_latitudes(self, bboxes: list[list[float]]) -> None:
        result = union_bounding_box(bboxes)

        assert result is not None
        for bbox in bboxes:
            assert result[1] <= bbox[1]
            assert result[3] >= bbox[3]


class TestToGeoJSON:
    """Tests for to_geojson()."""

    @pytest.mark.unit
    def test_single_box_is_a_polygon(self) -> None:
        geojson = to_geojson([0, 1, 2, 3])

        assert geojson == {
            "type": "Feature",
            "geometry": {
                "type": "Polygon",
                "coordinates": [[[0, 3], [0, 1], [2, 1], [2, 3], [0, 3]]],
            },
            "properties": {},
        }

    @pytest.mark.unit
    def test_multiple_boxes_are_a_multipolygon(self) -> None:
        geojson = to_geojson([[0, 0, 1, 1], [2, 2, 3, 3]])

        assert geojson is not None
        assert geojson["geometry"]["type"] == "MultiPolygon"
        assert len(geojson["geometry"]["coordinates"]) == 2

    @pytest.mark.unit
    def test_invalid_boxes_are_skipped(self) -> None:
        geojson = to_geojson([[0, 0, 1, 1], [0, 0, 999, 1]])

        assert geojson is not None
        assert geojson["geometry"]["type"] == "Polygon"

    @pytest.mark.unit
    def test_nothing_valid(self) -> None:
        assert to_geojson([]) is None
        assert to_geojson([[0, 0, 999, 1]]) is None
        assert to_geojson(None) is None


class TestFixGeoJSON:
    """Tests for fix_geojson()."""

    @pytest.mark.unit
    def test_clamps_geometry_in_place(self) -> None:
        geometry = {"type": "Point", "coordinates": [180.5, -90.2]}

        result = fix_geojson(geometry)

        assert result is geometry
        assert geometry["coordinates"] == [180, -90]

    @pytest.mark.unit
    def test_nested_collections_and_bbox(self) -> None:
        geojson = {
            "type": "FeatureCollection",
            "bbox": [-181, -91, 181, 91],
            "features": [
                {
                    "type": "Feature",
                    "bbox": [-181, 0, 0, 91],
                    "geometry": {
                        "type": "GeometryCollection",
                        "geometries": [
                            {"type": "LineString", "coordinates": [[-181, 0], [0, 95]]},
                            {
                                "type": "Polygon",
                                "coordinates": [[[0, 0], [200, 0], [200, 100], [0, 0]]],
                            },
                        ],
                    },
                    "properties": {},
                }
            ],
        }

        fix_geojson(geojson)

        assert geojson["bbox"] == [-180, -90, 180, 90]
        feature = geojson["features"][0]
        assert feature["bbox"] == [-180, 0, 0, 90]
        line, polygon = feature["geometry"]["geometries"]
        assert line["coordinates"] == [[-180, 0], [0, 90]]
        assert polygon["coordinates"] == [[[0, 0], [180, 0], [180, 90], [0, 0]]]

    @pytest.mark.unit
    def test_3d_bbox(self) -> None:
        geojson = {"type": "Point", "coordinates": [0, 0, 10], "bbox": [-200, -95, 0, 200, 95, 10]}

        fix_geojson(geojson)

        assert geojson["bbox"] == [-180, -90, 0, 180, 90, 10]
        assert geojson["coordinates"] == [0, 0, 10]

    @pytest.mark.unit
    def test_non_objects_pass_through(self) -> None:
        assert fix_geojson(None) is None
        assert fix_geojson([1, 2]) == [1, 2]
