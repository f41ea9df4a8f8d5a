"""contractgen CLI — generate target-language contracts from a canonical model."""

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from contractgen import __version__
from contractgen.config import GeneratorConfig
from contractgen.errors import ContractGenError, ModelLoadError

console = Console()


def _configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _load(model_path: str, config_path: str | None, exclude: tuple = ()):
    from contractgen.ir.loader import load_model

    try:
        config = GeneratorConfig.load(config_path)
        model = load_model(model_path)
    except ModelLoadError as e:
        console.print(f"[red]Invalid model:[/] {e}")
        sys.exit(2)
    except ContractGenError as e:
        console.print(f"[red]Error:[/] {e}")
        sys.exit(2)

    config.excluded_types.update(exclude)
    return model, config


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """contractgen — mirror canonical data contracts into other SDK languages.

    Reads a canonical contract model (YAML or JSON IR) and writes one
    idiomatic source file per contract type.
    """
    _configure_logging(verbose)


# ── Generate ─────────────────────────────────────────────────────────


@main.command()
@click.argument("model_path")
@click.option("--output", "-o", default=".", help="Repo root the generated files are written under")
@click.option("--config", "-c", "config_path", default=None, help="Path to contractgen.yaml")
@click.option("--language", "-l", default="java", type=click.Choice(["java"]))
@click.option("--exclude", "-x", multiple=True, help="Type name to leave out (repeatable)")
def generate(model_path: str, output: str, config_path: str | None, language: str, exclude: tuple):
    """Generate contract sources for every type in MODEL_PATH."""
    from contractgen.generators.batch import ContractsGenerator, FileOutputWriter

    console.print(f"\n[bold blue]contractgen[/] — Generating {language} contracts: {model_path}\n")

    model, config = _load(model_path, config_path, exclude)
    generator = ContractsGenerator(model, config, language=language)
    result = generator.generate(FileOutputWriter(output))

    table = Table(title=f"Generated Contracts ({len(result.files)})")
    table.add_column("Type", style="cyan")
    table.add_column("Path")
    for generated in result.files:
        table.add_row(generated.type_name, generated.relative_path)
    console.print(table)

    if result.failures:
        console.print("\n[red]Failed:[/]")
        for failure in result.failures:
            console.print(f"  [red]x[/] {failure.type_name}: {failure.error}")

    console.print(Panel(result.summary(), title="Generation Result"))
    if not result.passed:
        sys.exit(1)


# ── Render ───────────────────────────────────────────────────────────


@main.command()
@click.argument("model_path")
@click.argument("type_name")
@click.option("--config", "-c", "config_path", default=None, help="Path to contractgen.yaml")
@click.option("--plain", is_flag=True, help="Print raw text without highlighting")
def render(model_path: str, type_name: str, config_path: str | None, plain: bool):
    """Print the generated source for one TYPE_NAME without writing files."""
    from contractgen.generators.batch import ContractsGenerator

    model, config = _load(model_path, config_path)
    try:
        generated = ContractsGenerator(model, config).render(type_name)
    except ContractGenError as e:
        console.print(f"[red]Error:[/] {e}")
        sys.exit(1)

    if plain:
        click.echo(generated.text, nl=False)
    else:
        console.print(Syntax(generated.text, "java", line_numbers=False))


# ── Validate ─────────────────────────────────────────────────────────


@main.command()
@click.argument("model_path")
def validate(model_path: str):
    """Validate a model file against the IR schema."""
    from contractgen.ir.loader import build_model, read_document

    console.print(f"\n[bold blue]contractgen[/] — Validating: {model_path}\n")

    try:
        model = build_model(read_document(model_path))
    except ModelLoadError as e:
        console.print("[red]Model validation FAILED:[/]")
        for issue in e.issues or [str(e)]:
            console.print(f"  [red]x[/] {issue}")
        sys.exit(1)

    console.print(f"  [green]v[/] {model.type_count} type(s) in namespace {model.namespace}")
    console.print("\n[green]Valid![/]")


# ── Types ────────────────────────────────────────────────────────────


@main.command(name="types")
@click.argument("model_path")
@click.option("--config", "-c", "config_path", default=None, help="Path to contractgen.yaml")
def list_types(model_path: str, config_path: str | None):
    """List the top-level types in a model and whether they are generated."""
    model, config = _load(model_path, config_path)

    table = Table(title=f"{model.namespace} ({len(model.types)} types)")
    table.add_column("Name", style="cyan")
    table.add_column("Kind")
    table.add_column("Members", justify="right")
    table.add_column("Nested", justify="right")
    table.add_column("Generated", justify="center")

    for t in model.types:
        generated = "[red]N[/]" if t.name in config.excluded_types else "[green]Y[/]"
        table.add_row(t.name, t.kind.value, str(len(t.members)), str(len(t.nested_types)), generated)

    console.print(table)


# ── Schema ───────────────────────────────────────────────────────────


@main.command(name="schema")
def dump_schema():
    """Print the JSON Schema for IR model files."""
    import json

    from contractgen.ir.schema import get_schema

    click.echo(json.dumps(get_schema(), indent=2))


if __name__ == "__main__":
    main()
