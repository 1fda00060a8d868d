"""Geospatial utility functions."""

import logging
from typing import Any

from shapely.geometry import Polygon, mapping

from h3_grid.cells import CellLike, to_index
from h3_grid.constants import GEOMETRY_COL_NAME, H3_AREA_COL_NAME, H3_INDEX_COL_NAME, H3_RES_COL_NAME
from h3_grid.data_model.job import ExportJob, JobStatus
from h3_grid.data_model.shared import GeomFormatEnum

logging.basicConfig(level=logging.INFO)


def cell_to_polygon(cell: CellLike) -> Polygon:
    """
    Convert a cell to a shapely Polygon.

    :param cell: H3 cell index.
    :return: Closed polygon with (lng, lat) coordinates in degrees.
    """
    coords = to_index(cell).to_boundary().to_degrees()

    # boundary is [lat, lng] but Shapely expects [lng, lat]
    # Also need to close the polygon by repeating first point
    boundary = [[lng, lat] for lat, lng in coords]
    boundary.append(boundary[0])

    return Polygon(boundary)


def h3_to_wkt(cell: CellLike) -> str:
    """
    Convert H3 index to WKT geometry.

    :param cell: H3 cell index.
    :return: WKT representation of the cell boundary.
    """
    return cell_to_polygon(cell).wkt


def h3_to_wkb(cell: CellLike) -> bytes:
    """
    Convert H3 index to WKB geometry bytes.

    :param cell: H3 cell index.
    :return: WKB representation of the cell boundary as bytes.
    """
    return cell_to_polygon(cell).wkb


def h3_to_geojson(cell: CellLike) -> dict[str, Any]:
    """
    Convert H3 index to a GeoJSON geometry mapping.

    :param cell: H3 cell index.
    :return: GeoJSON-like dict of the cell boundary.
    """
    return dict(mapping(cell_to_polygon(cell)))


_GEOMETRY_CONVERTERS = {
    GeomFormatEnum.WKT: h3_to_wkt,
    GeomFormatEnum.WKB: h3_to_wkb,
    GeomFormatEnum.GEOJSON: h3_to_geojson,
}


def export_cells(job: ExportJob) -> list[dict[str, Any]]:
    """
    Run an export job, converting each cell into a geometry record.

    :param job: The validated export job.
    :return: One record per cell keyed by the export column names.
    :raises ValueError: If a cell cannot be converted; the job is marked FAILED first.
    """
    job.update_status(JobStatus.RUNNING_EXPORT)
    logging.info(f"Exporting {len(job.cells)} cells as {job.geometry_format.value} for job '{job.name}'")

    to_geometry = _GEOMETRY_CONVERTERS[job.geometry_format]
    records = []
    try:
        for h in job.indexes():
            record: dict[str, Any] = {
                H3_INDEX_COL_NAME: str(h),
                H3_RES_COL_NAME: h.resolution,
                GEOMETRY_COL_NAME: to_geometry(h),
            }
            if job.include_area:
                record[H3_AREA_COL_NAME] = h.cell_area_km2()
            records.append(record)
    except ValueError as e:
        job.update_status(JobStatus.FAILED, str(e))
        logging.error(f"Export job '{job.name}' failed: {e}")
        raise

    job.update_status(JobStatus.COMPLETED_EXPORT)
    logging.info(f"Export job '{job.name}' completed with {len(records)} records")
    return records
