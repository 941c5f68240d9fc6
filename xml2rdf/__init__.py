# xml2rdf/__init__.py
"""
Top-level package for xml2rdf.

Converts schema-less XML documents into RDF triples, delivered either to an
in-memory rdflib graph or as an N-Triples stream.
"""

from __future__ import annotations

from .core import (
    convert,
    convert_to_file,
    convert_to_graph,
    graph_info,
    run_sparql,
)
from .errors import (
    ConversionError,
    InputError,
    SinkError,
    WalkerError,
    Xml2RdfError,
    XmlParseError,
)
from .sinks import GraphSink, StreamSink, TripleSink
from .terms import DEFAULT_NAMESPACE, mint_literal, mint_predicate, mint_resource
from .walker import TreeWalker

__all__ = [
    "DEFAULT_NAMESPACE",
    "ConversionError",
    "GraphSink",
    "InputError",
    "SinkError",
    "StreamSink",
    "TreeWalker",
    "TripleSink",
    "WalkerError",
    "Xml2RdfError",
    "XmlParseError",
    "convert",
    "convert_to_file",
    "convert_to_graph",
    "graph_info",
    "mint_literal",
    "mint_predicate",
    "mint_resource",
    "run_sparql",
    "__version__",
]

__version__ = "0.1.0"
