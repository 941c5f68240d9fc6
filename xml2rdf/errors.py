# xml2rdf/errors.py
from __future__ import annotations

from pathlib import Path
from typing import Optional


class Xml2RdfError(Exception):
    """Base exception for xml2rdf errors."""


class ConversionError(Xml2RdfError):
    """A single input document could not be converted.

    Attributes:
        path: The offending input file, when known.
    """

    def __init__(self, message: str, path: Optional[str | Path] = None) -> None:
        super().__init__(message)
        self.path = path


class XmlParseError(ConversionError):
    """Malformed XML in an input document."""

    def __init__(
        self,
        message: str,
        path: Optional[str | Path] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        super().__init__(message, path)
        self.line = line
        self.column = column


class InputError(ConversionError):
    """An input document could not be opened or read."""


class SinkError(Xml2RdfError):
    """A triple sink failed to accept a triple."""


class WalkerError(Xml2RdfError):
    """The tree walker received an event it cannot handle in its state."""
