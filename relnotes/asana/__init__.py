"""Asana API access."""

from .client import ApiClient, AsanaClient
from .csv_source import load_tasks_from_csv

__all__ = ["ApiClient", "AsanaClient", "load_tasks_from_csv"]
