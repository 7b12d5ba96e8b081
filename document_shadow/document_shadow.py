import json
import logging
import sys
from pathlib import Path

import click

from .pipeline import (
    AtomicWriter,
    CodeGeneratorConfig,
    OutputMode,
    PipelineGenerator,
    SchemaParseError,
    ShadowGenerationError,
)


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--language", "-l", default="python", type=click.Choice(["python", "java"]))
@click.option("--only", "-o", multiple=True, help="Only generate these value classes (and the values they reference)")
@click.option("--force", "-f", is_flag=True, default=False, help="Overwrite existing output files")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log every generation step")
@click.argument("path", default=None, type=click.Path(exists=True, resolve_path=True))
@click.argument("output", default=None, type=click.Path(resolve_path=True))
def document_shadow(config, language, only, force, verbose, path, output):
    """Generate document-store shadow classes for the value classes described in PATH.

    Python output is written as one module at OUTPUT; Java output is written
    as one file per class below the OUTPUT directory.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    with open(path) as f:
        try:
            document = json.load(f)
        except json.JSONDecodeError as e:
            raise click.ClickException(f"{path} is not valid JSON: {e}") from e

    if config is not None:
        with open(config) as f:
            config = json.load(f)
            config = CodeGeneratorConfig.from_dict(config)
    else:
        config = CodeGeneratorConfig()

    # CLI flag overrides config file
    if force:
        config.output.mode = OutputMode.FORCE

    output = Path(output)
    name = output.stem if language == "python" else Path(path).stem

    try:
        result = PipelineGenerator(name, document, config, language, only=list(only)).generate()
    except SchemaParseError as e:
        raise click.ClickException(str(e)) from e

    for value_name, error in result.errors.items():
        click.echo(f"Error in {value_name}: {error}", err=True)

    if not result.files and not result.errors:
        click.echo("No value class requested a shadow class, nothing written", err=True)

    if result.files:
        writer = AtomicWriter(config.output.mode)
        validate = config.output.validate_before_write
        try:
            if language == "python":
                writer.write(output, next(iter(result.files.values())), language, validate)
                written = [output]
            else:
                written = writer.write_all(output, result.files, language, validate)
        except ShadowGenerationError as e:
            raise click.ClickException(str(e)) from e

        for written_path in written:
            click.echo(f"Wrote {written_path}")

    if result.errors:
        sys.exit(1)
