"""Export job config base model definition."""

import re
from datetime import datetime
from enum import Enum
from typing import Type, TypeVar

from pydantic import BaseModel, Field, field_validator, model_validator

from h3_grid.constants import MAX_H3_RES
from h3_grid.data_model.shared import GeomFormatEnum
from h3_grid.h3_index import H3Index

T = TypeVar("T", bound="ExportJob")


class JobStatus(str, Enum):
    """Job status."""

    PENDING = "PENDING"
    VALIDATED = "VALIDATED"
    RUNNING_EXPORT = "RUNNING_EXPORT"
    COMPLETED_EXPORT = "COMPLETED_EXPORT"
    FAILED = "FAILED"


class ExportJob(BaseModel):
    """
    Represents a batch conversion of cells to geometry records.

    :param name: Name of the job.
    :param version: Version.
    :param cells: Hexadecimal cell ids to export.
    :param geometry_format: Output geometry format.
    :param h3_resolution: If set, export each cell's parent at this resolution instead.
    :param include_area: Whether to include the exact cell area in km^2.
    :param status: Current status of the job.
    :param error_message: Error message if any.
    :param created_at: Timestamp when the job was created.
    :param updated_at: Timestamp when the job was last updated.
    """

    name: str
    version: str
    cells: list[str]
    geometry_format: GeomFormatEnum = GeomFormatEnum.WKT
    h3_resolution: int | None = None
    include_area: bool = True

    # metadata fields
    status: JobStatus = JobStatus.PENDING
    error_message: str | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime | None = Field(default=None)

    class Config:
        """Config class."""

        # This tells Pydantic how to serialize datetime objects when converting the model to JSON
        json_encoders = {datetime: lambda v: v.isoformat()}

    def update_status(self: "ExportJob", status: JobStatus, error: str | None = None) -> "ExportJob":
        """
        Update the job status and error message.

        :param status: The new status of the job.
        :param error: Error message if any. Defaults to None.
        :return: The updated ExportJob instance.
        """
        self.status = status
        self.error_message = error
        self.updated_at = datetime.utcnow()
        return self

    def indexes(self: "ExportJob") -> list[H3Index]:
        """
        The cells to export, coarsened to h3_resolution when it is set.

        :return: List of H3Index values in input order.
        """
        indexes = [H3Index.from_string(cell) for cell in self.cells]
        if self.h3_resolution is None:
            return indexes
        return [h.parent(self.h3_resolution) for h in indexes]

    @field_validator("version")
    @classmethod
    def validate_version(cls: Type[T], v: str) -> str:
        """
        Validate the version string format.

        Ensures the version follows semantic versioning format: #.#.#

        :param v: The version string to validate.
        :return: The validated version string.
        :raises ValueError: If version string doesn't match format #.#.#
        """
        pattern = r"^\d+\.\d+\.\d+$"
        if not re.match(pattern, v):
            raise ValueError('Version must be in format #.#.# (e.g. "1.0.0")')
        return v

    @field_validator("cells")
    @classmethod
    def validate_cells(cls: Type[T], v: list[str]) -> list[str]:
        """
        Validate that every cell id parses to a valid cell.

        :param v: The cell ids to validate.
        :return: The cell ids in lowercase hexadecimal form.
        :raises ValueError: If a cell id cannot be parsed or is not a valid cell.
        """
        normalized = []
        for cell in v:
            h = H3Index.from_string(cell)
            if not h.is_valid_cell():
                raise ValueError(f"Not a valid cell: {cell}")
            normalized.append(str(h))
        return normalized

    @field_validator("h3_resolution")
    @classmethod
    def validate_h3_resolution(cls: Type[T], v: int | None) -> int | None:
        """
        Validate the H3 resolution value.

        :param v: The H3 resolution value to validate.
        :return: The validated H3 resolution value.
        :raises AssertionError: If H3 resolution is not between 0 and 15 inclusive.
        """
        if v is None:
            return v
        assert 0 <= v <= MAX_H3_RES, f"H3 resolution must be between 0 and {MAX_H3_RES}: {v}"
        return v

    @model_validator(mode="after")
    def validate_parent_resolution(self: "ExportJob") -> "ExportJob":
        """
        Validate that the export resolution is not finer than any input cell.

        :return: The validated ExportJob instance.
        :raises ValueError: If a cell is coarser than h3_resolution.
        """
        if self.h3_resolution is None:
            return self

        for cell in self.cells:
            res = H3Index.from_string(cell).resolution
            if res < self.h3_resolution:
                raise ValueError(
                    f"Cell {cell} at resolution {res} is coarser than h3_resolution {self.h3_resolution}"
                )
        return self
