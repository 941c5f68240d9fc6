# tests/conftest.py
from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

import pytest

from xml2rdf.sinks import TripleSink

RESOURCES = Path(__file__).parent / "resources"


class ListSink(TripleSink):
    """Keeps triples in arrival order, duplicates included."""

    def __init__(self) -> None:
        self.triples: List[Tuple] = []

    def accept(self, subject, predicate, obj) -> None:
        self.triples.append((subject, predicate, obj))


@pytest.fixture
def list_sink() -> ListSink:
    return ListSink()


@pytest.fixture
def people_xml() -> Path:
    return RESOURCES / "people.xml"


@pytest.fixture
def write_xml(tmp_path):
    """Write an XML string to a file under tmp_path and return its path."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
