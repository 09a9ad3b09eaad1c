"""Tests for the site area takeoff."""

import pytest

from site_area import resolver
from site_area.errors import GeometryError
from site_area.export.quantities import AreaTakeoff, build_area_takeoff
from site_area.models.result import AreaQuality

from conftest import geodesic_area, rect


@pytest.fixture
def mixed_zones(overlapping_zones, edge_zone, two_point_zone):
    """Overlapping wetland/setback pair, a half-outside setback and a broken ring."""
    return overlapping_zones + [edge_zone, two_point_zone]


class TestBuildAreaTakeoff:
    """Test breakdown of exclusion areas."""

    def test_headline_matches_resolver(self, site_boundary, mixed_zones):
        takeoff = build_area_takeoff(site_boundary, mixed_zones)
        result = resolver.compute_usable_area(site_boundary, mixed_zones)

        assert takeoff.total_area_m2 == result.total_area
        assert takeoff.usable_area_m2 == result.usable_area
        assert takeoff.usable_pct == pytest.approx(97.75, rel=1e-3)
        assert takeoff.quality == AreaQuality.EXACT

    def test_exclusion_accounting(self, site_boundary, mixed_zones):
        takeoff = build_area_takeoff(site_boundary, mixed_zones)

        # 10k + 10k + 10k + 5k supplied by import
        assert takeoff.raw_exclusion_area_m2 == 35_000.0
        assert takeoff.merged_exclusion_area_m2 == pytest.approx(27_500, rel=1e-3)
        assert takeoff.clipped_exclusion_area_m2 == pytest.approx(22_500, rel=1e-3)
        assert takeoff.outside_exclusion_area_m2 == pytest.approx(5_000, rel=1e-2)
        assert takeoff.overlap_area_m2 == pytest.approx(
            geodesic_area(rect(450, 450, 50)), rel=1e-2
        )

    def test_clipped_area_by_type(self, site_boundary, mixed_zones):
        """Each type is unioned and clipped on its own."""
        takeoff = build_area_takeoff(site_boundary, mixed_zones)

        assert set(takeoff.exclusion_area_by_type) == {"wetland", "setback"}
        # EZ-a only; the two-point wetland ring contributes nothing
        assert takeoff.exclusion_area_by_type["wetland"] == pytest.approx(10_000, rel=1e-3)
        # EZ-b plus the inside half of EZ-edge
        assert takeoff.exclusion_area_by_type["setback"] == pytest.approx(15_000, rel=1e-3)

    def test_input_counts(self, site_boundary, mixed_zones):
        takeoff = build_area_takeoff(site_boundary, mixed_zones)

        assert takeoff.boundary_count == 1
        assert takeoff.exclusion_count == 4
        assert takeoff.skipped_ring_count == 1

    def test_no_exclusions(self, site_boundary):
        takeoff = build_area_takeoff(site_boundary, [])

        assert takeoff.quality == AreaQuality.PASSTHROUGH
        assert takeoff.usable_pct == pytest.approx(100.0)
        assert takeoff.exclusion_area_by_type == {}
        assert takeoff.merged_exclusion_area_m2 == 0.0

    def test_fallback_leaves_breakdown_empty(self, site_boundary, mixed_zones, monkeypatch):
        def fail(*args, **kwargs):
            raise GeometryError("intersection", "boom")

        monkeypatch.setattr(resolver, "intersect_regions", fail)

        takeoff = build_area_takeoff(site_boundary, mixed_zones)

        assert takeoff.quality == AreaQuality.FALLBACK
        assert takeoff.usable_area_m2 == pytest.approx(takeoff.total_area_m2 - 30_000.0)
        assert takeoff.merged_exclusion_area_m2 == 0.0
        assert takeoff.exclusion_area_by_type == {}


class TestAreaTakeoffExport:
    """Test dict and CSV serialization."""

    def test_to_dict_rounds(self):
        takeoff = AreaTakeoff(
            total_area_m2=1000.004,
            usable_area_m2=990.123,
            usable_pct=99.0123,
            exclusion_area_by_type={"wetland": 9.876},
        )

        data = takeoff.to_dict()

        assert data["total_area_m2"] == 1000.0
        assert data["usable_area_m2"] == 990.12
        assert data["usable_pct"] == 99.01
        assert data["exclusion_area_by_type"] == {"wetland": 9.88}
        assert data["quality"] == "exact"

    def test_to_csv_string(self, site_boundary, mixed_zones):
        csv_text = build_area_takeoff(site_boundary, mixed_zones).to_csv_string()

        assert csv_text.startswith("Site Area Takeoff")
        assert "Exclusion Areas by Zone Type" in csv_text
        assert "wetland" in csv_text
        assert "Skipped Rings,1" in csv_text
