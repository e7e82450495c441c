"""Load tasks from an Asana CSV export instead of the API."""

import csv
import logging
from pathlib import Path
from typing import List, Union

from ..models import Task


TASK_ID_COLUMN = "Task ID"
NAME_COLUMN = "Name"

logger = logging.getLogger(__name__)


def default_csv_path(output_dir: Union[str, Path], version: str) -> Path:
    """Conventional export location, e.g. ``releases/v150.csv`` for 1.5.0."""
    return Path(output_dir) / f"v{version.replace('.', '')}.csv"


def load_tasks_from_csv(path: Union[str, Path]) -> List[Task]:
    """Read tasks from a CSV export with ``Task ID`` and ``Name`` columns.

    Exports are already scoped to a project, so tasks carry no project ids.

    Raises:
        OSError: if the file cannot be read
        ValueError: if a required column is missing
    """
    with open(path, "r", encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)
        columns = reader.fieldnames or []
        for column in (TASK_ID_COLUMN, NAME_COLUMN):
            if column not in columns:
                raise ValueError(f"{path}: missing column '{column}'")

        tasks = [
            Task(id=row[TASK_ID_COLUMN].strip(), name=(row[NAME_COLUMN] or "").strip())
            for row in reader
            if row.get(TASK_ID_COLUMN)
        ]

    logger.debug(f"Loaded {len(tasks)} tasks from {path}")
    return tasks
