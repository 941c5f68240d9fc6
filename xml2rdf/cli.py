# xml2rdf/cli.py
from __future__ import annotations

import functools
import logging
from pathlib import Path
from typing import Optional

import click
from rdflib import Graph
from rich.console import Console
from rich.table import Table

from . import __version__
from .core import convert_to_file, convert_to_graph, graph_info, run_sparql
from .errors import Xml2RdfError
from .terms import DEFAULT_NAMESPACE

console = Console()
# Status messages go to stderr so stdout can carry N-Triples.
err_console = Console(stderr=True)


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


namespace_option = click.option(
    "-n",
    "--namespace",
    type=str,
    default=DEFAULT_NAMESPACE,
    show_default=True,
    envvar="XML2RDF_NAMESPACE",
    help="Base namespace for generated resources and predicates.",
)


def xml_inputs(func):
    """Accept input files as ``-x a.xml -x b.xml`` or ``--xml a.xml b.xml``.

    Paths given with the option come first, trailing paths after them.
    """

    @click.option(
        "-x",
        "--xml",
        "xml_paths",
        type=click.Path(dir_okay=False, path_type=Path),
        multiple=True,
        help="XML input file(s), converted in order.",
    )
    @click.argument(
        "extra_xml",
        nargs=-1,
        type=click.Path(dir_okay=False, path_type=Path),
    )
    @functools.wraps(func)
    def wrapper(
        *args, xml_paths: tuple[Path, ...], extra_xml: tuple[Path, ...], **kwargs
    ):
        paths = tuple(xml_paths) + tuple(extra_xml)
        if not paths:
            raise click.UsageError("Provide at least one XML file with -x/--xml.")
        return func(*args, xml_paths=paths, **kwargs)

    return wrapper


@click.group()
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (-v, -vv).",
)
def cli(verbose: int) -> None:
    """Convert XML documents into RDF triples."""
    _configure_logging(verbose)


@cli.command("version")
def version_cmd() -> None:
    """Show version."""
    click.echo(f"xml2rdf {__version__}")


@cli.command("convert")
@namespace_option
@xml_inputs
@click.option(
    "-o",
    "--output-file",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output N-Triples file. If omitted, write to stdout.",
)
@click.option(
    "--append/--overwrite",
    default=False,
    show_default=True,
    help="Append to the output file instead of replacing it.",
)
def convert_cmd(
    namespace: str,
    xml_paths: tuple[Path, ...],
    output_path: Optional[Path],
    append: bool,
) -> None:
    """Convert XML files to N-Triples."""
    try:
        count = convert_to_file(
            xml_paths, output_path=output_path, namespace=namespace, append=append
        )
    except Xml2RdfError as exc:
        raise click.ClickException(str(exc)) from exc
    if output_path is not None:
        err_console.print(f"[green]Wrote {count} triples to {output_path}[/green]")


def _load(xml_paths: tuple[Path, ...], namespace: str) -> Graph:
    try:
        return convert_to_graph(xml_paths, namespace=namespace)
    except Xml2RdfError as exc:
        raise click.ClickException(str(exc)) from exc


@cli.command("info")
@namespace_option
@xml_inputs
def info_cmd(namespace: str, xml_paths: tuple[Path, ...]) -> None:
    """Show statistics of the graph converted from XML files."""
    graph = _load(xml_paths, namespace)
    info = graph_info(graph)

    table = Table(title="Graph info")
    table.add_column("Metric")
    table.add_column("Value")
    for key, value in info.items():
        table.add_row(key, str(value))
    console.print(table)


@cli.command("query")
@namespace_option
@xml_inputs
@click.option(
    "-q",
    "--query",
    "query_str",
    type=str,
    help="SPARQL query string. If omitted, read from stdin.",
)
@click.option(
    "-f",
    "--file",
    "query_file",
    type=click.Path(exists=True, dir_okay=False, readable=True, path_type=Path),
    help="File containing a SPARQL query.",
)
def query_cmd(
    namespace: str,
    xml_paths: tuple[Path, ...],
    query_str: Optional[str],
    query_file: Optional[Path],
) -> None:
    """Run a SPARQL query over the graph converted from XML files."""
    if query_file is not None:
        query_str = query_file.read_text(encoding="utf8")
    if not query_str:
        query_str = click.get_text_stream("stdin").read()
    if not query_str.strip():
        raise click.UsageError("Empty SPARQL query.")

    graph = _load(xml_paths, namespace)
    try:
        result = run_sparql(graph, query_str)
    except Xml2RdfError as exc:
        raise click.ClickException(str(exc)) from exc

    if isinstance(result, bool):
        click.echo(str(result).lower())
    elif isinstance(result, list):
        if not result:
            err_console.print("[yellow]No rows.[/yellow]")
            return
        vars_ = list(result[0].keys())
        table = Table(title=f"{len(result)} rows")
        for v in vars_:
            table.add_column(v)
        for row in result:
            table.add_row(*("" if row.get(v) is None else str(row[v]) for v in vars_))
        console.print(table)
    else:
        click.echo(f"{len(result)} triples")


def main() -> None:
    """Entry point for the ``xml2rdf`` console script."""
    cli(standalone_mode=True)


if __name__ == "__main__":
    main()
