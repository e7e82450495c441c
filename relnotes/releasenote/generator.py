"""Release note generation logic."""

import re
from typing import Iterable, List, Optional

from ..models import ReleaseMetadata, ReleaseType, Task


# Constants
TITLE_RELEASE_TYPE = "##### Release type:"
TITLE_ITEMS_COMPLETED = "##### Items completed:"
SPACER = "&nbsp;"
INTRO = "Tasks may be viewed directly on Asana by clicking on the task ID link"

RELEASE_TYPE_LABELS = [
    (ReleaseType.MAJOR, "Major"),
    (ReleaseType.MINOR, "Minor"),
    (ReleaseType.PATCH, "Patch"),
]

# Runs of two or more spaces
SPACE_RUN_RE = re.compile(r" {2,}")


def collapse_spaces(text: str) -> str:
    """Remove runs of two or more spaces, keeping single spaces and newlines."""
    return SPACE_RUN_RE.sub("", text)


def sort_tasks(tasks: Iterable[Task]) -> List[Task]:
    """Order tasks by id using string comparison; equal ids keep their order."""
    return sorted(tasks, key=lambda task: task.id)


def release_type_checklist(release_type: Optional[ReleaseType]) -> List[str]:
    """Build the release type checklist, or nothing when the type is unknown."""
    if release_type is None:
        return []

    lines = [TITLE_RELEASE_TYPE]
    for kind, label in RELEASE_TYPE_LABELS:
        mark = "x" if kind is release_type else " "
        lines.append(f"- [{mark}] {label}")
    lines.append(SPACER)
    return lines


def format_task(task: Task, task_url_base: str) -> str:
    return f"* [`{task.id}`]({task_url_base}{task.id}) - {task.name}"


def format_timestamp(metadata: ReleaseMetadata) -> str:
    return metadata.generated_at.strftime("%Y-%m-%d %H:%M:%S %Z").strip()


def build_release_notes(metadata: ReleaseMetadata, tasks: Iterable[Task],
                        task_url_base: str) -> str:
    """Render the release notes Markdown document.

    Args:
        metadata: Version, release type and generation time
        tasks: Tasks to list under "Items completed"
        task_url_base: URL prefix each task id is appended to

    Returns:
        Markdown document text
    """
    lines = [
        f"# Version {metadata.version} Release Notes",
        INTRO,
        SPACER,
    ]
    lines.extend(release_type_checklist(metadata.release_type))
    lines.append(TITLE_ITEMS_COMPLETED)
    lines.extend(format_task(task, task_url_base) for task in sort_tasks(tasks))
    lines.append(SPACER)
    lines.append(f"Generated on {format_timestamp(metadata)}")

    return collapse_spaces("\n".join(lines) + "\n")
