"""Release note generation module."""

from .generator import (
    build_release_notes,
    collapse_spaces,
    sort_tasks,
    release_type_checklist,
)

__all__ = [
    "build_release_notes",
    "collapse_spaces",
    "sort_tasks",
    "release_type_checklist",
]
