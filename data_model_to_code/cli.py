import json
import logging
from pathlib import Path

import click
import yaml

from .codegen import GeneratorConfig, ModelGenerator
from .errors import DataModelError
from .loader import load_registry
from .output import AtomicWriter
from .schema import SchemaExporter, ValueConverter
from .serialization import from_python

logger = logging.getLogger(__name__)


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug messages")
def data_model_to_code(verbose):
    """Compile data models into Python code and JSON schemas."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@data_model_to_code.command()
@click.option("--name", "-n", default=None, type=str, help="Module name, defaults to the model file name")
@click.option("--indent", "-i", default=None, type=click.IntRange(min=1), help="Indentation width")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.argument("model", type=click.Path(exists=True, resolve_path=True))
@click.argument("output_dir", type=click.Path(file_okay=False, resolve_path=True))
def generate(name, indent, config, model, output_dir):
    """Generate <name>.py and <name>.pyi from MODEL into OUTPUT_DIR."""
    if config is not None:
        with open(config) as f:
            config = GeneratorConfig.from_dict(json.load(f))
    else:
        config = GeneratorConfig()

    # Command line overrides the config file
    if indent is not None:
        config.indent = indent

    if name is None:
        name = Path(model).stem

    output = Path(output_dir)
    try:
        codegen = ModelGenerator(load_registry(model), config)
        writer = AtomicWriter()
        writer.write(output / f"{name}.py", codegen.get_source(name))
        writer.write(output / f"{name}.pyi", codegen.get_header(name))
    except DataModelError as error:
        raise click.ClickException(str(error)) from error
    logger.info("Wrote %s and %s", output / f"{name}.py", output / f"{name}.pyi")


@data_model_to_code.command()
@click.option("--schema-id", "-s", default="", type=str, help="Value of the $id keyword")
@click.argument("model", type=click.Path(exists=True, resolve_path=True))
@click.argument("root")
@click.argument("output", type=click.Path(dir_okay=False, resolve_path=True))
def schema(schema_id, model, root, output):
    """Export the JSON schema of type ROOT of MODEL to OUTPUT."""
    try:
        document = SchemaExporter(load_registry(model)).export_schema(root, schema_id)
    except DataModelError as error:
        raise click.ClickException(str(error)) from error

    AtomicWriter().write(Path(output), json.dumps(document, indent=2) + "\n", validate=False)


@data_model_to_code.command()
@click.argument("model", type=click.Path(exists=True, resolve_path=True))
@click.argument("type_name", metavar="TYPE")
@click.argument("instance", type=click.Path(exists=True, resolve_path=True))
def convert(model, type_name, instance):
    """Print INSTANCE converted to the JSON value of TYPE."""
    with open(instance, encoding="utf-8") as f:
        if Path(instance).suffix.lower() == ".json":
            data = json.load(f)
        else:
            data = yaml.safe_load(f)

    try:
        value = ValueConverter(load_registry(model)).to_json(from_python(data), type_name)
    except DataModelError as error:
        raise click.ClickException(str(error)) from error

    click.echo(json.dumps(value, indent=2))


def main():
    data_model_to_code()
