# xml2rdf/core.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import logging

from lxml import etree
from rdflib import Graph, Literal, URIRef

from .errors import InputError, WalkerError, Xml2RdfError, XmlParseError
from .events import iter_events
from .sinks import GraphSink, StreamSink, TripleSink
from .terms import DEFAULT_NAMESPACE, normalize_namespace
from .walker import TreeWalker, WalkerState

logger = logging.getLogger(__name__)


def _as_path(path: str | Path) -> Path:
    """Normalize a path-like input into a Path."""
    return path if isinstance(path, Path) else Path(path)


def _convert_file(path: Path, sink: TripleSink, namespace: str) -> int:
    """Stream one XML file through a fresh walker into ``sink``."""
    walker = TreeWalker(sink, namespace)
    try:
        source = open(path, "rb")
    except OSError as exc:
        msg = f"Cannot open {str(path)!r}: {exc}"
        logger.error(msg)
        raise InputError(msg, path=path) from exc

    logger.info("Converting %s", path)
    with source:
        try:
            walker.walk(iter_events(source))
        except etree.XMLSyntaxError as exc:
            line, column = getattr(exc, "position", (None, None))
            msg = f"Malformed XML in {str(path)!r}: {exc}"
            logger.error(msg)
            raise XmlParseError(msg, path=path, line=line, column=column) from exc
        except WalkerError as exc:
            msg = f"Malformed XML in {str(path)!r}: {exc}"
            logger.error(msg)
            raise XmlParseError(msg, path=path) from exc
        except OSError as exc:
            msg = f"Failed to read {str(path)!r}: {exc}"
            logger.error(msg)
            raise InputError(msg, path=path) from exc

    if walker.state is not WalkerState.DONE:
        msg = f"Malformed XML in {str(path)!r}: document has no complete root element"
        logger.error(msg)
        raise XmlParseError(msg, path=path)

    logger.debug("%s produced %d triples", path, walker.triple_count)
    return walker.triple_count


def convert(
    input_paths: Iterable[str | Path],
    sink: TripleSink,
    namespace: str = DEFAULT_NAMESPACE,
) -> int:
    """Convert XML files into triples delivered to ``sink``.

    Files are processed in the given order, each with its own walker; only
    the sink is shared between them. The first failure stops the run;
    triples delivered for earlier files stay in the sink.

    Args:
        input_paths: XML files to convert.
        sink: Destination of every produced triple.
        namespace: Base namespace for minted resources and predicates.

    Returns:
        Total number of triples delivered to the sink.

    Raises:
        InputError: If an input file cannot be opened or read.
        XmlParseError: If an input file is not well-formed XML.
        SinkError: If the sink fails to accept a triple.
        Xml2RdfError: If the namespace is not a usable IRI prefix.
    """
    ns = normalize_namespace(namespace)
    total = 0
    count = 0
    for p in input_paths:
        total += _convert_file(_as_path(p), sink, ns)
        count += 1
    logger.info("Converted %d file(s) into %d triples", count, total)
    return total


def convert_to_graph(
    input_paths: Iterable[str | Path],
    namespace: str = DEFAULT_NAMESPACE,
    graph: Optional[Graph] = None,
) -> Graph:
    """Convert XML files into an in-memory graph.

    Args:
        input_paths: XML files to convert.
        namespace: Base namespace for minted resources and predicates.
        graph: Existing graph to add to. A new one is created if omitted.

    Returns:
        The graph holding the converted triples.
    """
    sink = GraphSink(graph)
    convert(input_paths, sink, namespace)
    return sink.graph


def convert_to_file(
    input_paths: Iterable[str | Path],
    output_path: Optional[str | Path] = None,
    namespace: str = DEFAULT_NAMESPACE,
    append: bool = False,
) -> int:
    """Convert XML files to N-Triples written to a file or stdout.

    The output file is opened for the duration of this call only.

    Args:
        input_paths: XML files to convert.
        output_path: Destination file; standard output when None.
        namespace: Base namespace for minted resources and predicates.
        append: Append to ``output_path`` instead of truncating it.

    Returns:
        Number of triples written.
    """
    if output_path is None:
        sink = StreamSink.to_stdout()
    else:
        sink = StreamSink.to_file(output_path, append=append)
    with sink:
        return convert(input_paths, sink, namespace)


def graph_info(graph: Graph) -> Dict[str, Any]:
    """Compute some quick statistics about a converted graph.

    Args:
        graph: RDF graph.

    Returns:
        Dictionary with triple, subject, predicate and literal counts.
    """
    subjects: set = set()
    predicates: set = set()
    resources: set = set()
    num_literals = 0
    for s, p, o in graph:
        subjects.add(s)
        predicates.add(p)
        resources.add(s)
        if isinstance(o, Literal):
            num_literals += 1
        elif isinstance(o, URIRef):
            resources.add(o)

    info = {
        "num_triples": len(graph),
        "num_subjects": len(subjects),
        "num_predicates": len(predicates),
        "num_resources": len(resources),
        "num_literal_triples": num_literals,
        "num_link_triples": len(graph) - num_literals,
    }
    logger.debug("Graph info: %r", info)
    return info


def run_sparql(graph: Graph, query_str: str) -> Any:
    """Execute a SPARQL query on a converted graph.

    Args:
        graph: RDF graph.
        query_str: SPARQL query string.

    Returns:
        - SELECT: list of dicts mapping variable names to RDF terms.
        - ASK: bool.
        - CONSTRUCT / DESCRIBE: a new Graph instance.

    Raises:
        Xml2RdfError: If SPARQL parsing or execution fails.
    """
    try:
        result = graph.query(query_str)
    except Exception as exc:  # noqa: BLE001
        msg = f"SPARQL query failed: {exc}"
        logger.exception(msg)
        raise Xml2RdfError(msg) from exc

    if result.type == "SELECT":
        vars_ = list(result.vars or [])
        rows: List[Dict[str, Any]] = []
        for row in result:
            rows.append({str(var): row[var] for var in vars_})
        return rows

    if result.type == "ASK":
        return bool(result.askAnswer)

    g = Graph()
    for triple in result:
        g.add(triple)
    return g
