"""Command-line interface for dashlist."""

import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Tuple

import click
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from .config import OUTPUT_FORMATS, ConfigModel, get_config, load_config
from .exceptions import ParseError
from .pipeline import ParseResult, parse_file
from .storage import ItemTextFormat, format_datetime
from .todo import Item
from .tree import build_tree

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def get_console() -> Console:
    return Console()


def get_error_console() -> Console:
    return Console(stderr=True)


def setup_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level, logging.WARNING), format=LOG_FORMAT)


def checkbox_label(item: Item) -> str:
    if item.todo is None:
        return ""
    return "[x]" if item.todo else "[ ]"


def format_item_for_display(item: Item) -> str:
    """Format an item as a single rich markup line."""
    parts = []
    box = checkbox_label(item)
    if box:
        style = "green" if item.todo else "yellow"
        parts.append(f"[{style}]{escape(box)}[/{style}]")
    parts.append(f"[bold]{escape(item.text)}[/bold]")
    if item.time:
        parts.append(f"[cyan]{format_datetime(item.time)}[/cyan]")
    if item.description:
        parts.append(f"[dim]{escape(item.description)}[/dim]")
    return " ".join(parts)


def render_table(items: List[Tuple[int, Item]]) -> Table:
    table = Table(title="Items", show_header=True, header_style="bold blue")
    table.add_column("Depth", style="magenta", justify="right")
    table.add_column("Done", style="green")
    table.add_column("Title", style="bold")
    table.add_column("When", style="cyan")
    table.add_column("Body", style="dim")

    for depth, item in items:
        table.add_row(
            str(depth),
            Text(checkbox_label(item)),
            Text(item.text),
            format_datetime(item.time) if item.time else "",
            Text(item.description or ""),
        )
    return table


def render_tree(items: List[Tuple[int, Item]], title: str) -> Tree:
    root = Tree(f"[bold]{title}[/bold]")

    def add(branch: Tree, item: Item) -> None:
        node = branch.add(format_item_for_display(item))
        for child in item.children:
            add(node, child)

    for item in build_tree(items):
        add(root, item)
    return root


def report_failures(result: ParseResult) -> None:
    console = get_error_console()
    console.print(f"[yellow]Dropped {len(result.failures)} malformed block(s)[/yellow]")
    for failure in result.failures:
        console.print(f"  [red]block {failure.index} (depth {failure.depth}): {escape(str(failure.cause))}[/red]")


def load_document(path: str, config: ConfigModel) -> ParseResult:
    try:
        return parse_file(path, config)
    except (ParseError, OSError) as e:
        get_error_console().print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@click.group()
@click.option("--config", "config_path", type=click.Path(), help="Path to config file")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.pass_context
def cli(ctx, config_path, verbose):
    """dashlist - parse dash-marked todo lists."""
    ctx.ensure_object(dict)

    try:
        config = load_config(Path(config_path)) if config_path else get_config()
    except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
        get_error_console().print(f"[red]Configuration error: {e}[/red]")
        sys.exit(1)

    setup_logging("DEBUG" if verbose else config.log_level)
    ctx.obj['config'] = config


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--format", "-f", "output_format", type=click.Choice(OUTPUT_FORMATS),
              help="Output format (defaults to the configured one)")
@click.option("--strict", is_flag=True, help="Fail on the first malformed block")
@click.pass_context
def parse(ctx, path, output_format, strict):
    """Parse a list file and print its items.

    Examples:
      dashlist parse todo.txt
      dashlist parse todo.txt --format json
      dashlist parse todo.txt --format tree --strict
    """
    config = ctx.obj['config']
    if strict:
        config = replace(config, strict=True)
    output_format = output_format or config.output_format

    result = load_document(path, config)

    if output_format == "json":
        payload = [{"depth": depth, "item": item.to_dict()} for depth, item in result.items]
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
    elif output_format == "tree":
        get_console().print(render_tree(result.items, Path(path).name))
    else:
        get_console().print(render_table(result.items))

    if result.failures and config.show_failures:
        report_failures(result)


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def check(ctx, path):
    """Report blocks that would be dropped; exit 1 if there are any."""
    result = load_document(path, replace(ctx.obj['config'], strict=False))

    if result.preamble:
        get_console().print(f"[dim]Ignored text before the first item: {escape(repr(result.preamble))}[/dim]")

    if result.failures:
        report_failures(result)
        sys.exit(1)

    get_console().print(f"[green]✓ {len(result.items)} item(s), no malformed blocks[/green]")


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def fmt(ctx, path):
    """Print the file in canonical form.

    Unmarked leading text and malformed blocks are not written; they are
    reported on stderr unless ``show_failures`` is off.
    """
    config = ctx.obj['config']
    result = load_document(path, config)
    if result.items:
        click.echo(ItemTextFormat.to_document(result.items))

    if config.show_failures:
        if result.preamble:
            get_error_console().print(
                f"[yellow]Left out text before the first item: {escape(repr(result.preamble))}[/yellow]"
            )
        if result.failures:
            report_failures(result)


@cli.group(name="config")
def config_group():
    """Inspect configuration."""
    pass


@config_group.command(name="show")
@click.pass_context
def show_config(ctx):
    """Print the effective configuration as YAML."""
    click.echo(ctx.obj['config'].to_yaml(), nl=False)


def main(*args, **kwargs):
    """Entry point for the ``dashlist`` command."""
    return cli(*args, **kwargs)


if __name__ == "__main__":
    main()
