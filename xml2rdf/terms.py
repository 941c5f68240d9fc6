# xml2rdf/terms.py
"""Minting of RDF terms from XML names and nesting.

Resources are addressed by their path from the document root: each element
contributes one segment, its percent-encoded local name, suffixed with
``~<n>`` for the n-th (n > 0) same-named sibling. ``~`` cannot appear in an
XML name, so ``item~1`` never collides with an element literally called
``item~1``. Predicates are the namespace plus the attribute or element name.
"""

from __future__ import annotations

import re
from typing import Sequence
from urllib.parse import quote, urlsplit

from rdflib import Literal, URIRef

from .errors import Xml2RdfError


DEFAULT_NAMESPACE = "https://decisym.ai/xml2rdf/data"
VALUE_PREDICATE_NAME = "value"
OCCURRENCE_SEPARATOR = "~"

# Characters that make rdflib refuse to serialize a URIRef.
_INVALID_IRI_CHARS = re.compile(r'[\s<>"{}|\\^`]')


def normalize_namespace(namespace: str) -> str:
    """Validate a base namespace and make it end in a separator.

    Args:
        namespace: Base IRI prefix, e.g. ``http://example.org/data``.

    Returns:
        The namespace ending in ``/`` or ``#``.

    Raises:
        Xml2RdfError: If the namespace is empty, relative, or not usable as
            an IRI prefix.
    """
    text = namespace.strip()
    if not text:
        raise Xml2RdfError("Namespace must not be empty.")
    if _INVALID_IRI_CHARS.search(text):
        raise Xml2RdfError(f"Namespace {namespace!r} is not a valid IRI prefix.")
    if not urlsplit(text).scheme:
        raise Xml2RdfError(f"Namespace {namespace!r} must be an absolute IRI.")
    if not text.endswith(("/", "#")):
        text += "/"
    return text


def _encode(name: str) -> str:
    return quote(name, safe="")


def path_segment(name: str, occurrence_index: int = 0) -> str:
    """Return the IRI path segment for one element occurrence."""
    segment = _encode(name)
    if occurrence_index > 0:
        segment = f"{segment}{OCCURRENCE_SEPARATOR}{occurrence_index}"
    return segment


def mint_resource(
    namespace: str,
    path_segments: Sequence[str],
    occurrence_index: int = 0,
) -> URIRef:
    """Mint the resource IRI for an element.

    Args:
        namespace: Normalized base namespace.
        path_segments: Segments of the ancestors (as returned by
            `path_segment`) followed by the element's own local name.
        occurrence_index: Position of the element among same-named siblings.

    Returns:
        The element's resource; a pure function of the arguments.
    """
    *ancestors, name = path_segments
    segments = [*ancestors, path_segment(name, occurrence_index)]
    return URIRef(namespace + "/".join(segments))


def mint_predicate(namespace: str, name: str) -> URIRef:
    """Mint the predicate for an attribute or child element name."""
    return URIRef(namespace + _encode(name))


def value_predicate(namespace: str) -> URIRef:
    return mint_predicate(namespace, VALUE_PREDICATE_NAME)


def mint_literal(text: str) -> Literal:
    return Literal(text)
