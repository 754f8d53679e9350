import json
import logging
from pathlib import Path

import click

from .pipeline import AtomicWriter, CodeGeneratorConfig, OutputMode, PipelineGenerator, SchemaStructError, Visibility
from .sources import load_schema

logger = logging.getLogger(__name__)


def _load_config(config_path: str | None) -> CodeGeneratorConfig:
    if config_path is None:
        return CodeGeneratorConfig()
    with open(config_path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{config_path}: config file must hold a JSON object")
    return CodeGeneratorConfig.from_dict(data)


@click.command()
@click.option("--name", "-n", default=None, type=str, help="Identifier of the root type (overrides the schema title)")
@click.option("--config", "-c", "config_path", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option(
    "--vis",
    default=None,
    type=click.Choice([v.value for v in Visibility]),
    help="Names exported through __all__: every type, only the root, or none",
)
@click.option("--no-def", is_flag=True, default=False, help="Do not append the type summary to the root docstring")
@click.option("--validate", is_flag=True, default=False, help="Check required fields, bounds and enum values when deserializing")
@click.option("--debug", is_flag=True, default=False, help="Echo the generated code to stderr")
@click.option("--force", "-f", is_flag=True, default=False, help="Overwrite the output file if it exists")
@click.option("--format", "format_code", is_flag=True, default=False, help="Format the output with ruff")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
@click.argument("source", type=str)
@click.argument("output", type=click.Path(dir_okay=False, allow_dash=True))
def schema_struct(name, config_path, vis, no_def, validate, debug, force, format_code, verbose, source, output):
    """Generate typed Python dataclasses from the JSON Schema SOURCE (file, URL or inline JSON) into OUTPUT."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = _load_config(config_path)

        # Command line flags override the config file
        if name is not None:
            config.ident = name
        if vis is not None:
            config.vis = Visibility(vis)
        if no_def:
            config.include_definition = False
        if validate:
            config.validate = True
        if debug:
            config.debug = True
        if format_code:
            config.formatter.enabled = True
        if force:
            config.output.mode = OutputMode.FORCE

        schema = load_schema(source)
        code = PipelineGenerator(schema, config).generate()

        if output == "-":
            click.echo(code, nl=False)
            return

        writer = AtomicWriter()
        path = Path(output)
        validate_output = config.output.validate_before_write
        if config.output.mode is OutputMode.FORCE:
            writer.write(path, code, validate=validate_output)
        else:
            writer.write_if_not_exists(path, code, validate=validate_output)
    # Config files surface as ValueError (bad JSON or values) and TypeError (unknown keys)
    except (SchemaStructError, ValueError, TypeError, OSError) as e:
        raise click.ClickException(str(e)) from e

    logger.info("Wrote %s", path)
