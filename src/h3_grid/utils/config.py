"""Export job config loading."""

import json
import logging
from pathlib import Path
from typing import Any, Union

import yaml

from h3_grid.data_model.job import ExportJob

logging.basicConfig(level=logging.INFO)

# config key naming a text file of cell ids, one per line
CELLS_FILE_KEY = "cells_file"


def _read_cells_file(cells_path: Path) -> list[str]:
    """
    Read cell ids from a text file, skipping blank lines and '#' comments.

    :param cells_path: Path to the cell list.
    :return: Cell ids in file order.
    :raises FileNotFoundError: If the file doesn't exist.
    """
    if not cells_path.is_file():
        raise FileNotFoundError(f"Cells file not found: {cells_path}")
    with cells_path.open("r") as f:
        lines = (line.split("#", 1)[0].strip() for line in f)
        return [line for line in lines if line]


def _build_job(config_dict: dict[str, Any], base_dir: Path | None = None) -> ExportJob:
    """
    Resolve an optional cells file into the cell list and validate the job.

    :param config_dict: Raw job fields.
    :param base_dir: Directory that relative cells file paths are resolved against.
    :return: A validated ExportJob.
    """
    config_dict = dict(config_dict)
    cells_file = config_dict.pop(CELLS_FILE_KEY, None)
    if cells_file is not None:
        cells_path = Path(cells_file)
        if base_dir is not None and not cells_path.is_absolute():
            cells_path = base_dir / cells_path
        config_dict["cells"] = list(config_dict.get("cells") or []) + _read_cells_file(cells_path)
        logging.info(f"Read {len(config_dict['cells'])} cells including {cells_path}")
    return ExportJob(**config_dict)


def read_yaml_config(config_path: Union[str, Path]) -> ExportJob:
    """
    Read and validate a YAML configuration file into an ExportJob model.

    A `cells_file` key is resolved relative to the config file and its cells
    are appended to `cells`.

    :param config_path: Path to the YAML configuration file.
    :return: A validated ExportJob model instance.
    :raises FileNotFoundError: If the config file or its cells file doesn't exist.
    """
    config_path = Path(config_path)
    if not config_path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with config_path.open("r") as f:
        config_dict = yaml.safe_load(f) or {}

    job = _build_job(config_dict, base_dir=config_path.parent)
    logging.info(f"Loaded export job '{job.name}' with {len(job.cells)} cells from {config_path}")
    return job


def read_json_config(json_input: Union[str, dict]) -> ExportJob:
    """
    Read and validate a JSON document into an ExportJob model.

    :param json_input: Parsed JSON dict, or the JSON text itself.
    :return: A validated ExportJob model instance.
    """
    if isinstance(json_input, str):
        json_input = json.loads(json_input)
    return _build_job(json_input)
