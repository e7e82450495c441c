# tests/test_generator.py

from __future__ import annotations

from datetime import datetime, timezone

from relnotes.models import ReleaseMetadata, ReleaseType, Task
from relnotes.releasenote import build_release_notes, collapse_spaces, sort_tasks

BASE = "https://app.asana.com/0/430541393561890/"


def test_tasks_sorted_lexicographically_not_numerically(metadata) -> None:
    tasks = [Task("57", "Add logout"), Task("102", "Fix login")]

    doc = build_release_notes(metadata, tasks, BASE)

    assert doc.index("`102`") < doc.index("`57`")
    assert f"* [`102`]({BASE}102) - Fix login" in doc
    assert f"* [`57`]({BASE}57) - Add logout" in doc


def test_sort_is_stable_for_equal_ids() -> None:
    tasks = [Task("2", "b"), Task("1", "first"), Task("2", "a"), Task("1", "second")]

    assert [t.name for t in sort_tasks(tasks)] == ["first", "second", "b", "a"]


def test_minor_release_checklist(metadata) -> None:
    doc = build_release_notes(metadata, [], BASE)

    assert "##### Release type:" in doc
    assert "- [ ] Major" in doc
    assert "- [x] Minor" in doc
    assert "- [ ] Patch" in doc


def test_no_checklist_without_release_type() -> None:
    meta = ReleaseMetadata(version="2.0.0", generated_at=datetime(2024, 1, 1, tzinfo=timezone.utc))

    doc = build_release_notes(meta, [Task("1", "Thing")], BASE)

    assert "Release type" not in doc
    assert "[x]" not in doc


def test_document_layout(metadata) -> None:
    doc = build_release_notes(metadata, [Task("9", "Ship it")], BASE)
    lines = doc.splitlines()

    assert lines[0] == "# Version 1.5.0 Release Notes"
    assert lines[1] == "Tasks may be viewed directly on Asana by clicking on the task ID link"
    assert "##### Items completed:" in lines
    assert lines[-1] == "Generated on 2024-03-01 12:30:00 UTC"
    assert doc.endswith("\n")


def test_empty_task_list_keeps_items_section(metadata) -> None:
    doc = build_release_notes(metadata, [], BASE)
    lines = doc.splitlines()

    i = lines.index("##### Items completed:")
    assert lines[i + 1] == "&nbsp;"
    assert not any(line.startswith("* ") for line in lines)


def test_patch_release_marks_only_patch() -> None:
    meta = ReleaseMetadata(version="1.0.1", release_type=ReleaseType.PATCH)

    doc = build_release_notes(meta, [], BASE)

    assert "- [x] Patch" in doc
    assert doc.count("[x]") == 1


def test_collapse_spaces_keeps_single_spaces_and_newlines() -> None:
    text = "    # Title\n    a b  c\n\n   d"

    assert collapse_spaces(text) == "# Title\na bc\n\nd"


def test_collapse_spaces_is_idempotent() -> None:
    samples = ["", " ", "a  b", "x   \n  y z", "  lead\ntrail  ", "a \t  b"]

    for text in samples:
        once = collapse_spaces(text)
        assert collapse_spaces(once) == once
