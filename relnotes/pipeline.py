"""Release notes pipeline: resolve tag, fetch tasks, build, render, write."""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Optional, Sequence

from .asana import AsanaClient
from .config import Config
from .models import PipelineResult, PipelineState, ReleaseMetadata, StageResult, Task
from .output import MarkdownRenderer, OutputWriter
from .releasenote import build_release_notes


DERIVED_WORKER_COUNT = 2


class ReleasePipeline:
    """Runs one release notes generation from tag lookup to written files.

    Only tag resolution can abort a run. Fetch, render and write failures
    are recorded as failed stages and degrade the output instead.
    """

    def __init__(self, config: Config, client: AsanaClient,
                 renderer: MarkdownRenderer, writer: OutputWriter,
                 logger: Optional[logging.Logger] = None):
        self.config = config
        self.client = client
        self.renderer = renderer
        self.writer = writer
        self.logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_config(cls, config: Config, output_dir: Optional[str] = None) -> "ReleasePipeline":
        return cls(
            config,
            AsanaClient(config),
            MarkdownRenderer(config),
            OutputWriter(output_dir or config.output_dir),
        )

    def _enter(self, result: PipelineResult, state: PipelineState) -> None:
        self.logger.debug(f"Pipeline state: {result.state.value} -> {state.value}")
        result.state = state

    def run(self, metadata: ReleaseMetadata, tasks: Optional[Sequence[Task]] = None,
            markdown_only: bool = False, dry_run: bool = False) -> PipelineResult:
        """Generate the release notes for one version.

        Args:
            metadata: Validated release metadata
            tasks: Pre-loaded tasks; skips tag resolution and fetch when given
            markdown_only: Stop after writing the Markdown file
            dry_run: Build the document without writing anything

        Returns:
            Final state, per-stage results and the built document
        """
        result = PipelineResult()

        if tasks is None:
            self._enter(result, PipelineState.RESOLVING_TAG)
            self.logger.info(f"Resolving tag {metadata.tag_name}")
            tag_id = self.client.resolve_tag(metadata.tag_name)
            if tag_id is None:
                result.stages.append(StageResult("resolve_tag", False, f"tag {metadata.tag_name} unavailable"))
                self._enter(result, PipelineState.ABORTED)
                self.logger.error(f"Aborting: could not resolve tag {metadata.tag_name}")
                return result
            result.stages.append(StageResult("resolve_tag", True))

            self._enter(result, PipelineState.FETCHING_TASKS)
            tasks = self.client.query_tasks(tag_id)
            if tasks is None:
                result.stages.append(StageResult("fetch_tasks", False, f"task query for tag {tag_id} failed"))
                self.logger.warning("Continuing with an empty task list")
                tasks = []
            else:
                result.stages.append(StageResult("fetch_tasks", True))
        self.logger.info(f"Found {len(tasks)} tasks for {metadata.tag_name}")

        self._enter(result, PipelineState.BUILDING)
        document = build_release_notes(metadata, tasks, self.config.task_link_base)
        result.document = document
        result.stages.append(StageResult("build", True))

        if dry_run:
            self._enter(result, PipelineState.DONE)
            return result

        self._enter(result, PipelineState.WRITING_PRIMARY)
        base_path = self.writer.base_path(metadata.version)
        mkdir = self.writer.ensure_directory(base_path)
        result.stages.append(mkdir)
        result.stages.append(self.writer.write_document(base_path, "md", document))

        if markdown_only:
            self._enter(result, PipelineState.DONE)
            return result

        self._enter(result, PipelineState.RENDERING)
        fragment = self.renderer.render(document)
        if fragment is None:
            result.stages.append(StageResult("render", False, "Markdown rendering failed"))
            self.logger.warning("Skipping HTML and PDF output")
            self._enter(result, PipelineState.DONE)
            return result
        result.stages.append(StageResult("render", True))

        self._enter(result, PipelineState.WRITING_DERIVED)
        result.stages.extend(self._write_derived(base_path, fragment, f"Version {metadata.version} Release Notes"))

        self._enter(result, PipelineState.DONE)
        return result

    def _write_derived(self, base_path, fragment: str, title: str) -> List[StageResult]:
        """Write HTML and PDF concurrently; neither blocks the other."""
        results = []
        with ThreadPoolExecutor(max_workers=DERIVED_WORKER_COUNT) as executor:
            futures = {
                executor.submit(self.writer.write_html, base_path, fragment, title): "write_html",
                executor.submit(self.writer.write_pdf, base_path, fragment, title): "write_pdf",
            }
            for future in as_completed(futures):
                stage = futures[future]
                try:
                    results.append(future.result())
                except Exception as e:
                    self.logger.error(f"Unexpected error in {stage}: {e}")
                    results.append(StageResult(stage, False, str(e)))

        return sorted(results, key=lambda stage: stage.stage)
