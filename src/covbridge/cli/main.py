"""covbridge CLI - convert gocov JSON to Istanbul coverage JSON."""

from pathlib import Path
from typing import NoReturn

import click

from covbridge.config import load_config
from covbridge.core.errors import CovBridgeError, UsageError
from covbridge.core.logging import configure_logging, get_logger
from covbridge.coverage import convert, dumps, read_gocov, write_report_file

log = get_logger(__name__)


def _usage_exit(ctx: click.Context, path: str) -> NoReturn:
    err = UsageError.input_not_found(path)
    click.echo("covbridge [gocov.json]", err=True)
    click.echo(err.message, err=True)
    click.echo("", err=True)
    ctx.exit(1)


@click.command()
@click.version_option(version="0.1.0", prog_name="covbridge")
@click.argument("input_path", metavar="GOCOV_JSON", required=False, default=None)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the Istanbul JSON here instead of stdout",
)
@click.option(
    "--base-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Directory that relative source paths resolve against (default: cwd)",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    input_path: str | None,
    output: Path | None,
    base_dir: Path | None,
    verbose: bool,
) -> None:
    """Convert a gocov JSON report into Istanbul coverage-final.json.

    GOCOV_JSON is the report produced by `gocov test` or `gocov convert`.
    """
    if not input_path or not Path(input_path).is_file():
        _usage_exit(ctx, input_path or "")

    try:
        config = load_config()
    except CovBridgeError as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        config.logging.level = "DEBUG"
        for output_config in config.logging.outputs:
            output_config.level = None
    configure_logging(config=config.logging)

    if base_dir is None and config.conversion.base_dir:
        base_dir = Path(config.conversion.base_dir)

    try:
        document = read_gocov(Path(input_path))
        result = convert(
            document,
            base_dir=base_dir,
            ignore_marker=config.conversion.ignore_marker,
        )
    except CovBridgeError as e:
        log.error("conversion_failed", **e.to_dict())
        raise click.ClickException(str(e)) from e

    if output is not None:
        write_report_file(result, output)
        log.info("report_written", path=str(output))
    else:
        click.echo(dumps(result))


if __name__ == "__main__":
    cli()
