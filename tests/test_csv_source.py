# tests/test_csv_source.py

from __future__ import annotations

import pytest

from relnotes.asana import load_tasks_from_csv
from relnotes.asana.csv_source import default_csv_path
from relnotes.models import Task


def test_load_tasks_from_export(tmp_path) -> None:
    path = tmp_path / "v150.csv"
    path.write_text(
        "\ufeffTask ID,Created At,Name,Assignee\n"
        "102,2024-01-01,Fix login,Ann\n"
        ",2024-01-01,blank row,\n"
        "57,2024-01-02, Add logout ,Bo\n",
        encoding="utf-8",
    )

    assert load_tasks_from_csv(path) == [Task("102", "Fix login"), Task("57", "Add logout")]


def test_missing_column_is_an_error(tmp_path) -> None:
    path = tmp_path / "bad.csv"
    path.write_text("ID,Name\n1,x\n", encoding="utf-8")

    with pytest.raises(ValueError, match="Task ID"):
        load_tasks_from_csv(path)


def test_default_csv_path_drops_dots(tmp_path) -> None:
    assert default_csv_path(tmp_path, "1.5.0") == tmp_path / "v150.csv"
