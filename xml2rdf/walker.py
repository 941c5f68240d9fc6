# xml2rdf/walker.py
"""Stateful traversal of one XML document's event stream.

The walker keeps an explicit stack of `NodeContext` objects, one per open
element, and turns each event into triples handed straight to a sink:

* element start: ``parent --<name>--> child`` (except for the root) and one
  ``child --<attr>--> "value"`` per attribute;
* text: ``element --value--> "trimmed text"`` per non-blank contiguous run;
* element end: pops the context.
"""

from __future__ import annotations

import enum
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from rdflib import URIRef

from .errors import WalkerError
from .events import EndElement, StartElement, Text, XmlEvent
from .sinks import TripleSink
from .terms import (
    mint_literal,
    mint_predicate,
    mint_resource,
    normalize_namespace,
    path_segment,
    value_predicate,
)

logger = logging.getLogger(__name__)


class WalkerState(enum.Enum):
    AWAITING_ROOT = "awaiting_root"
    IN_ELEMENT = "in_element"
    DONE = "done"


@dataclass
class NodeContext:
    """One open element.

    Attributes:
        name: Local element name.
        subject: Resource minted for the element.
        segments: IRI path segments from the root down to this element.
        counters: Occurrences seen so far of each child element name.
        parent: Enclosing context, None for the root.
    """

    name: str
    subject: URIRef
    segments: Tuple[str, ...]
    counters: Counter = field(default_factory=Counter)
    parent: Optional["NodeContext"] = None


class TreeWalker:
    """Convert the events of a single document into triples.

    Args:
        sink: Destination for the produced triples.
        namespace: Base namespace for minted resources and predicates.
    """

    def __init__(self, sink: TripleSink, namespace: str) -> None:
        self.sink = sink
        self.namespace = normalize_namespace(namespace)
        self.state = WalkerState.AWAITING_ROOT
        self.stack: List[NodeContext] = []
        self.triple_count = 0
        self._value = value_predicate(self.namespace)
        self._text: List[str] = []

    @property
    def current(self) -> Optional[NodeContext]:
        return self.stack[-1] if self.stack else None

    def walk(self, events: Iterable[XmlEvent]) -> int:
        """Consume a whole event stream.

        Returns:
            Number of triples emitted for this document.
        """
        for event in events:
            self.handle(event)
        return self.triple_count

    def handle(self, event: XmlEvent) -> None:
        if self.state is WalkerState.DONE:
            if isinstance(event, Text) and not event.text.strip():
                return
            raise WalkerError(f"Unexpected {event!r} after the root element closed.")

        if isinstance(event, StartElement):
            self._start(event)
        elif isinstance(event, Text):
            if self.state is WalkerState.AWAITING_ROOT:
                if event.text.strip():
                    raise WalkerError("Text content outside of the root element.")
                return
            self._text.append(event.text)
        elif isinstance(event, EndElement):
            self._end(event)
        else:
            raise WalkerError(f"Unknown XML event {event!r}.")

    def _emit(self, subject, predicate, obj) -> None:
        self.sink.accept(subject, predicate, obj)
        self.triple_count += 1

    def _flush_text(self) -> None:
        # Only called with a non-empty stack.
        if not self._text:
            return
        text = "".join(self._text).strip()
        self._text = []
        if text:
            self._emit(self.stack[-1].subject, self._value, mint_literal(text))

    def _start(self, event: StartElement) -> None:
        parent = self.current
        if parent is None:
            segments: Tuple[str, ...] = ()
            index = 0
        else:
            self._flush_text()
            segments = parent.segments
            index = parent.counters[event.name]
            parent.counters[event.name] += 1

        subject = mint_resource(self.namespace, segments + (event.name,), index)
        if parent is not None:
            self._emit(parent.subject, mint_predicate(self.namespace, event.name), subject)
        for name, value in event.attributes:
            self._emit(subject, mint_predicate(self.namespace, name), mint_literal(value))

        own_segment = path_segment(event.name, index)
        self.stack.append(
            NodeContext(
                name=event.name,
                subject=subject,
                segments=segments + (own_segment,),
                parent=parent,
            )
        )
        self.state = WalkerState.IN_ELEMENT
        logger.debug("Entered %s", subject)

    def _end(self, event: EndElement) -> None:
        current = self.current
        if current is None:
            raise WalkerError(f"End of element {event.name!r} before any start.")
        if current.name != event.name:
            raise WalkerError(
                f"End of element {event.name!r} while {current.name!r} is open."
            )
        self._flush_text()
        self.stack.pop()
        if not self.stack:
            self.state = WalkerState.DONE
