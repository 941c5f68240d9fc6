# xml2rdf/events.py
"""Forward-only XML event stream on top of lxml's feed parser."""

from __future__ import annotations

import io
from collections import deque
from dataclasses import dataclass
from typing import BinaryIO, Deque, Iterator, Tuple, Union

from lxml import etree


DEFAULT_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class StartElement:
    """An element start tag.

    Attributes:
        name: Local name of the element.
        attributes: (local name, value) pairs in document order.
    """

    name: str
    attributes: Tuple[Tuple[str, str], ...] = ()


@dataclass(frozen=True)
class Text:
    """A chunk of character data. One text run may arrive as several chunks."""

    text: str


@dataclass(frozen=True)
class EndElement:
    name: str


XmlEvent = Union[StartElement, Text, EndElement]


def _local_name(tag: str) -> str:
    # Tags arrive in Clark notation; only the local name takes part in minting.
    return etree.QName(tag).localname


class _EventCollector:
    """lxml parser target that buffers structural events."""

    def __init__(self) -> None:
        self.events: Deque[XmlEvent] = deque()

    def start(self, tag, attrib) -> None:
        attributes = tuple((_local_name(k), v) for k, v in attrib.items())
        self.events.append(StartElement(_local_name(tag), attributes))

    def end(self, tag) -> None:
        self.events.append(EndElement(_local_name(tag)))

    def data(self, data) -> None:
        self.events.append(Text(data))

    def close(self) -> None:
        return None


def _make_parser(target: _EventCollector) -> etree.XMLParser:
    return etree.XMLParser(
        target=target,
        resolve_entities="internal",
        no_network=True,
        huge_tree=True,
        remove_comments=True,
        remove_pis=True,
    )


def iter_events(
    source: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE
) -> Iterator[XmlEvent]:
    """Stream parse events from a binary file object.

    The source is read ``chunk_size`` bytes at a time, so memory stays bounded
    by the chunk size plus the events of one chunk, whatever the document size.

    Args:
        source: Binary file-like object positioned at the document start.
        chunk_size: Number of bytes fed to the parser per step.

    Yields:
        `StartElement`, `Text` and `EndElement` events in document order.

    Raises:
        lxml.etree.XMLSyntaxError: If the document is not well-formed.
    """
    collector = _EventCollector()
    parser = _make_parser(collector)
    while True:
        chunk = source.read(chunk_size)
        if not chunk:
            break
        parser.feed(chunk)
        while collector.events:
            yield collector.events.popleft()
    parser.close()
    while collector.events:
        yield collector.events.popleft()


def iter_string_events(text: Union[str, bytes]) -> Iterator[XmlEvent]:
    """Parse events from an in-memory document."""
    data = text.encode("utf-8") if isinstance(text, str) else text
    return iter_events(io.BytesIO(data))
