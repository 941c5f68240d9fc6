# xml2rdf/sinks.py
"""Destinations for converted triples.

A sink has a single capability, `TripleSink.accept`. `GraphSink` collects
triples into an in-memory rdflib graph for further in-process use;
`StreamSink` writes each triple as one N-Triples line as soon as it arrives.
"""

from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, TextIO

from rdflib import Graph, Literal, URIRef
from rdflib.plugins.serializers.nt import _nt_row

from .errors import SinkError

logger = logging.getLogger(__name__)


class TripleSink(ABC):
    """Accepts (subject, predicate, object) triples one at a time.

    Sinks do not deduplicate; repeated triples are passed on as they come.
    Sinks are context managers; leaving the block calls `close`.
    """

    @abstractmethod
    def accept(self, subject: URIRef, predicate: URIRef, obj: URIRef | Literal) -> None:
        """Take one triple.

        Raises:
            SinkError: If the triple cannot be stored or written.
        """

    def close(self) -> None:
        """Release resources owned by the sink."""

    def __enter__(self) -> "TripleSink":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class GraphSink(TripleSink):
    """Insert triples into an rdflib graph.

    Args:
        graph: Graph to fill. A new empty graph is created when omitted. The
            caller keeps ownership and may pass the same graph to several
            conversions to accumulate them.
    """

    def __init__(self, graph: Optional[Graph] = None) -> None:
        self.graph = graph if graph is not None else Graph()

    def accept(self, subject: URIRef, predicate: URIRef, obj: URIRef | Literal) -> None:
        self.graph.add((subject, predicate, obj))


class StreamSink(TripleSink):
    """Write triples to a text stream as N-Triples.

    Every triple is flushed to the stream before `accept` returns.

    Args:
        stream: Writable text stream.
        close_stream: Whether `close` also closes the stream. Set for
            streams the sink opened itself.
    """

    def __init__(self, stream: TextIO, close_stream: bool = False) -> None:
        self.stream = stream
        self.close_stream = close_stream
        self.name = getattr(stream, "name", repr(stream))

    @classmethod
    def to_file(cls, path: str | Path, append: bool = False) -> "StreamSink":
        """Open ``path`` for writing and return a sink owning the file.

        Args:
            path: Output file. Its directory must exist.
            append: Append to an existing file instead of truncating it.

        Raises:
            SinkError: If the file cannot be opened.
        """
        mode = "a" if append else "w"
        try:
            stream = open(path, mode, encoding="utf-8", newline="\n")
        except OSError as exc:
            msg = f"Cannot open output file {str(path)!r}: {exc}"
            logger.error(msg)
            raise SinkError(msg) from exc
        logger.info("Writing N-Triples to %s (mode=%r)", path, mode)
        return cls(stream, close_stream=True)

    @classmethod
    def to_stdout(cls) -> "StreamSink":
        return cls(sys.stdout, close_stream=False)

    def accept(self, subject: URIRef, predicate: URIRef, obj: URIRef | Literal) -> None:
        line = _nt_row((subject, predicate, obj))
        try:
            self.stream.write(line)
            self.stream.flush()
        except (OSError, ValueError) as exc:
            msg = f"Failed to write triple to {self.name}: {exc}"
            logger.error(msg)
            raise SinkError(msg) from exc

    def close(self) -> None:
        if not self.close_stream or self.stream.closed:
            return
        try:
            self.stream.close()
        except OSError as exc:
            msg = f"Failed to close {self.name}: {exc}"
            logger.error(msg)
            raise SinkError(msg) from exc
