"""Generate command implementation."""

import sys

import click

from ..asana import load_tasks_from_csv
from ..asana.csv_source import default_csv_path
from ..config import ConfigError
from ..models import ReleaseMetadata, ReleaseType, is_valid_version
from ..pipeline import ReleasePipeline


class VersionParam(click.ParamType):
    """An ``x.y.z`` version; invalid prompt answers are asked again."""

    name = "version"

    def convert(self, value, param, ctx):
        value = str(value).strip()
        if not is_valid_version(value):
            self.fail("The version must be in the format x.x.x", param, ctx)
        return value


class ReleaseTypeParam(click.ParamType):
    """``major``, ``minor`` or ``patch``; blank means no release type."""

    name = "type"

    def convert(self, value, param, ctx):
        if isinstance(value, ReleaseType):
            return value
        value = str(value).strip().lower()
        if value in ("", "none"):
            return None
        try:
            return ReleaseType(value)
        except ValueError:
            self.fail("The release type must be one of major, minor, patch", param, ctx)


@click.command()
@click.option('--version', '-v', 'version', type=VersionParam(),
              prompt='Enter the version number (ex. 1.0.0)', help='Release version (x.y.z)')
@click.option('--type', '-t', 'release_type', type=ReleaseTypeParam(), default='', show_default=False,
              prompt='Enter the release type (major, minor, patch) or leave blank',
              help='Release type: major, minor or patch')
@click.option('--output-dir', '-o', help='Root directory for release documents')
@click.option('--csv', 'csv_path', is_flag=False, flag_value='', default=None,
              help='Read tasks from an Asana CSV export instead of the API '
                   '(default file: <output-dir>/v{version without dots}.csv)')
@click.option('--markdown-only', '-mo', is_flag=True, help='Write only the Markdown document')
@click.option('--dry-run', is_flag=True, help='Print the document without writing files')
@click.pass_context
def generate(ctx, version, release_type, output_dir, csv_path, markdown_only, dry_run):
    """Generate release notes for a version tag."""

    config = ctx.obj['config']
    logger = ctx.obj['logger']

    try:
        config.require()
    except ConfigError as e:
        logger.error(str(e))
        sys.exit(1)

    tasks = None
    if csv_path is not None:
        csv_path = csv_path or default_csv_path(output_dir or config.output_dir, version)
        try:
            tasks = load_tasks_from_csv(csv_path)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read {csv_path}: {e}")
            sys.exit(1)

    metadata = ReleaseMetadata(version=version, release_type=release_type)
    logger.info(f"Generating release notes for {metadata.tag_name}")

    pipeline = ReleasePipeline.from_config(config, output_dir)
    result = pipeline.run(metadata, tasks=tasks, markdown_only=markdown_only, dry_run=dry_run)

    if not result.succeeded:
        sys.exit(1)

    if dry_run:
        click.echo(result.document, nl=False)
        return

    failures = result.failures()
    if failures:
        logger.warning(f"Completed with {len(failures)} failed step(s): "
                       + ", ".join(stage.stage for stage in failures))
    logger.info(f"Release notes for {metadata.tag_name} written to "
                f"{pipeline.writer.base_path(metadata.version).parent}")
