"""
Unit tests for geometry conversion and export jobs.
"""

import pytest
from shapely import wkb, wkt

from h3_grid import cells
from h3_grid.constants import GEOMETRY_COL_NAME, H3_AREA_COL_NAME, H3_INDEX_COL_NAME, H3_RES_COL_NAME
from h3_grid.data_model.job import ExportJob, JobStatus
from h3_grid.data_model.shared import GeomFormatEnum
from h3_grid.errors import CellInvalidError
from h3_grid.utils import geospatial

SF_CELL = cells.latlng_to_cell(37.775938728915946, -122.41795063018799, 9)
PENTAGON_CELL = cells.get_pentagons(4)[1]


class TestCellToPolygon:
    """Test cell to shapely conversion."""

    def test_hexagon(self):
        polygon = geospatial.cell_to_polygon(SF_CELL)
        assert polygon.is_valid
        coords = list(polygon.exterior.coords)
        assert len(coords) == 7
        assert coords[0] == coords[-1]

    def test_pentagon(self):
        polygon = geospatial.cell_to_polygon(PENTAGON_CELL)
        assert polygon.is_valid
        assert len(polygon.exterior.coords) == len(cells.cell_to_boundary(PENTAGON_CELL)) + 1

    def test_lng_lat_order(self):
        """Shapely coordinates are (lng, lat)."""
        polygon = geospatial.cell_to_polygon(SF_CELL)
        lat, lng = cells.cell_to_latlng(SF_CELL)
        assert polygon.centroid.x == pytest.approx(lng, abs=1e-3)
        assert polygon.centroid.y == pytest.approx(lat, abs=1e-3)

    def test_invalid_cell(self):
        with pytest.raises(CellInvalidError):
            geospatial.cell_to_polygon("ffffffffffffffff")


class TestFormats:
    """Test geometry text and binary formats."""

    def test_wkt(self):
        text = geospatial.h3_to_wkt(SF_CELL)
        assert text.startswith("POLYGON")
        assert wkt.loads(text).equals(geospatial.cell_to_polygon(SF_CELL))

    def test_wkb(self):
        data = geospatial.h3_to_wkb(SF_CELL)
        assert isinstance(data, bytes)
        assert wkb.loads(data).equals(geospatial.cell_to_polygon(SF_CELL))

    def test_geojson(self):
        geometry = geospatial.h3_to_geojson(SF_CELL)
        assert geometry["type"] == "Polygon"
        assert len(geometry["coordinates"][0]) == 7


class TestExportCells:
    """Test running export jobs."""

    def _job(self, **kwargs):
        return ExportJob(name="test", version="1.0.0", cells=[SF_CELL, PENTAGON_CELL], **kwargs)

    def test_export_wkt(self):
        job = self._job()
        records = geospatial.export_cells(job)
        assert job.status == JobStatus.COMPLETED_EXPORT
        assert job.updated_at is not None
        assert [r[H3_INDEX_COL_NAME] for r in records] == [SF_CELL, PENTAGON_CELL]
        assert [r[H3_RES_COL_NAME] for r in records] == [9, 4]
        assert all(r[GEOMETRY_COL_NAME].startswith("POLYGON") for r in records)
        assert records[0][H3_AREA_COL_NAME] == pytest.approx(cells.cell_area(SF_CELL))

    def test_export_formats(self):
        records = geospatial.export_cells(self._job(geometry_format=GeomFormatEnum.WKB))
        assert isinstance(records[0][GEOMETRY_COL_NAME], bytes)
        records = geospatial.export_cells(self._job(geometry_format=GeomFormatEnum.GEOJSON))
        assert records[0][GEOMETRY_COL_NAME]["type"] == "Polygon"

    def test_export_without_area(self):
        records = geospatial.export_cells(self._job(include_area=False))
        assert all(H3_AREA_COL_NAME not in r for r in records)

    def test_export_parents(self):
        records = geospatial.export_cells(self._job(h3_resolution=3))
        assert records[0][H3_INDEX_COL_NAME] == cells.cell_to_parent(SF_CELL, 3)
        assert all(r[H3_RES_COL_NAME] == 3 for r in records)

    def test_export_failure_marks_job(self):
        job = self._job()
        job.cells.append("ffffffffffffffff")
        with pytest.raises(CellInvalidError):
            geospatial.export_cells(job)
        assert job.status == JobStatus.FAILED
        assert "ffffffffffffffff" in job.error_message
