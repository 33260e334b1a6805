import json
import logging
from pathlib import Path

import click

from .cli_utils import reconstruct_command_line
from .compiler import AtomicWriter, CompilerConfig, CompilerError, OutputConfig, OutputMode, Registry

logger = logging.getLogger(__name__)


def _read_schema(path: str) -> dict:
    with open(path, encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise click.ClickException(f"{path} is not valid JSON: {e}") from e
        except UnicodeDecodeError as e:
            raise click.ClickException(f"{path} is not valid UTF-8: {e}") from e


def _write_output(path: Path, content: str, output_config: OutputConfig) -> None:
    writer = AtomicWriter()
    if output_config.mode is OutputMode.FORCE:
        writer.write(path, content, output_config.validate_before_write)
    else:
        writer.write_if_not_exists(path, content, output_config.validate_before_write)


@click.command()
@click.option("--output", "-o", default=None, type=click.Path(dir_okay=False, resolve_path=True), help="Output file (default: stdout)")
@click.option(
    "--root-dir",
    "-r",
    default=None,
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    help="Directory $ref paths are resolved against",
)
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--force", "-f", is_flag=True, default=False, help="Overwrite an existing output file")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug information to stderr")
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
def json_schema_to_ts(output, root_dir, config, force, verbose, paths):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if config is not None:
        with open(config) as f:
            config = CompilerConfig.from_dict(json.load(f))
    else:
        config = CompilerConfig()

    # CLI flag overrides config file
    if root_dir is not None:
        config.root_dir = root_dir

    output_config = OutputConfig(mode=OutputMode.FORCE if force else OutputMode.ERROR_IF_EXISTS)

    # All input files go into one registry and come out as one file
    registry = Registry(config, command_line=reconstruct_command_line(json_schema_to_ts))
    try:
        for path in paths:
            registry.add_schema(_read_schema(path))
        out = registry.parse()
    except CompilerError as e:
        raise click.ClickException(str(e)) from e

    if output is None:
        click.echo(out)
        return

    try:
        _write_output(Path(output), out + "\n", output_config)
    except (FileExistsError, CompilerError) as e:
        raise click.ClickException(str(e)) from e
    logger.info("Wrote %d schema(s) to %s", len(paths), output)
