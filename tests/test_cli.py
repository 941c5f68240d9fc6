# tests/test_cli.py
from __future__ import annotations

from click.testing import CliRunner
from rdflib import Graph

from xml2rdf import __version__
from xml2rdf.cli import cli

NS = "http://ex/"


def test_version() -> None:
    result = CliRunner().invoke(cli, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_convert_to_stdout(write_xml) -> None:
    path = write_xml("doc.xml", '<root attr="1"><child>text</child></root>')
    result = CliRunner().invoke(cli, ["convert", "--namespace", NS, "--xml", str(path)])
    assert result.exit_code == 0, result.output
    g = Graph().parse(data=result.stdout, format="nt")
    assert len(g) == 3


def test_convert_multiple_files_to_output_file(tmp_path, people_xml, write_xml) -> None:
    other = write_xml("other.xml", "<c><d/><d/></c>")
    out = tmp_path / "out.nt"
    result = CliRunner().invoke(
        cli,
        ["convert", "-n", NS, "-x", str(people_xml), "-x", str(other), "-o", str(out)],
    )
    assert result.exit_code == 0, result.output
    assert len(out.read_text(encoding="utf-8").splitlines()) == 17


def test_convert_several_paths_after_one_xml_flag(tmp_path, people_xml, write_xml) -> None:
    other = write_xml("other.xml", "<c><d/><d/></c>")
    out = tmp_path / "out.nt"
    result = CliRunner().invoke(
        cli,
        ["convert", "-n", NS, "--xml", str(people_xml), str(other), "-o", str(out)],
    )
    assert result.exit_code == 0, result.output
    lines = out.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 17
    # Files are converted in the order given.
    assert lines[-1] == f"<{NS}c> <{NS}d> <{NS}c/d~1> ."


def test_convert_relative_namespace_fails(people_xml) -> None:
    result = CliRunner().invoke(cli, ["convert", "-n", "foo", "-x", str(people_xml)])
    assert result.exit_code == 1
    assert "absolute" in result.output


def test_convert_append(tmp_path, write_xml) -> None:
    path = write_xml("doc.xml", "<r>v</r>")
    out = tmp_path / "out.nt"
    runner = CliRunner()
    args = ["convert", "-n", NS, "-x", str(path), "-o", str(out)]
    runner.invoke(cli, args)
    runner.invoke(cli, args + ["--append"])
    assert len(out.read_text(encoding="utf-8").splitlines()) == 2


def test_convert_namespace_from_environment(write_xml) -> None:
    path = write_xml("doc.xml", "<r>v</r>")
    result = CliRunner().invoke(
        cli, ["convert", "-x", str(path)], env={"XML2RDF_NAMESPACE": "http://env.example/"}
    )
    assert result.exit_code == 0, result.output
    assert result.stdout == '<http://env.example/r> <http://env.example/value> "v" .\n'


def test_convert_requires_xml() -> None:
    result = CliRunner().invoke(cli, ["convert"])
    assert result.exit_code != 0


def test_convert_missing_input_fails(tmp_path) -> None:
    result = CliRunner().invoke(cli, ["convert", "-x", str(tmp_path / "nope.xml")])
    assert result.exit_code == 1


def test_convert_malformed_input_fails(write_xml) -> None:
    path = write_xml("bad.xml", "<a><b></a>")
    result = CliRunner().invoke(cli, ["convert", "-x", str(path)])
    assert result.exit_code == 1


def test_convert_unwritable_output_fails(tmp_path, people_xml) -> None:
    out = tmp_path / "missing" / "out.nt"
    result = CliRunner().invoke(cli, ["convert", "-x", str(people_xml), "-o", str(out)])
    assert result.exit_code == 1
    assert not out.exists()


def test_info(people_xml) -> None:
    result = CliRunner().invoke(cli, ["info", "-x", str(people_xml)])
    assert result.exit_code == 0, result.output
    assert "num_triples" in result.output
    assert "15" in result.output


def test_query_ask(people_xml) -> None:
    query = f'ASK {{ ?p <{NS}name> ?n . ?n <{NS}value> "Alice" }}'
    result = CliRunner().invoke(
        cli, ["query", "-n", NS, "-x", str(people_xml), "-q", query]
    )
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "true"


def test_query_from_stdin(people_xml) -> None:
    query = f"SELECT ?v WHERE {{ ?s <{NS}value> ?v }}"
    result = CliRunner().invoke(
        cli, ["query", "-n", NS, "-x", str(people_xml)], input=query
    )
    assert result.exit_code == 0, result.output
    assert "Alice" in result.output


def test_query_empty_is_usage_error(people_xml) -> None:
    result = CliRunner().invoke(cli, ["query", "-x", str(people_xml)], input="  ")
    assert result.exit_code == 2


def test_query_construct_prints_triple_count(people_xml) -> None:
    query = f"CONSTRUCT {{ ?s <{NS}id> ?o }} WHERE {{ ?s <{NS}id> ?o }}"
    result = CliRunner().invoke(
        cli, ["query", "-n", NS, "-x", str(people_xml), "-q", query]
    )
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "2 triples"
