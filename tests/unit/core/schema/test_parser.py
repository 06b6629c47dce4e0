from __future__ import annotations

"""
Unit tests for the Structure Definition Parser.

Verifies:
1. Tree construction in document order.
2. The 'allowotherfiles' attribute, looked up by name.
3. Rejection of empty, malformed and misrooted definitions.
4. File loading.
"""

import pytest

from repostruct.core.schema.parser import load_schema, parse_schema
from repostruct.domain.errors import SchemaError
from repostruct.domain.schema_models import NodeKind


def test_parse_sample_definition(sample_schema_xml: str) -> None:
    root = parse_schema(sample_schema_xml)

    assert root.kind is NodeKind.DIRECTORY
    assert [c.name_pattern for c in root.children] == ["Module description", "Exercises"]

    module, exercises = root.children
    assert module.allow_other_entries is False
    assert [(c.kind, c.name_pattern) for c in module.children] == [
        (NodeKind.FILE, "Description.*"),
        (NodeKind.FILE, "Readme.txt"),
    ]
    assert exercises.allow_other_entries is True
    assert [c.name_pattern for c in exercises.children] == ["Solutions", "Data"]


def test_allowotherfiles_is_order_independent() -> None:
    root = parse_schema('<repoRoot><directory allowotherfiles="no" name="A"/></repoRoot>')

    assert root.children[0].name_pattern == "A"
    assert root.children[0].allow_other_entries is False


@pytest.mark.parametrize("value", ["yes", "No", "", "false"])
def test_only_no_closes_a_directory(value: str) -> None:
    root = parse_schema(f'<repoRoot><directory name="A" allowotherfiles="{value}"/></repoRoot>')

    assert root.children[0].allow_other_entries is True


def test_duplicate_siblings_and_unknown_elements() -> None:
    root = parse_schema(
        "<repoRoot>"
        "<!-- comment -->"
        '<file name="a.txt"/><note>ignored</note><file name="a.txt"/>'
        "</repoRoot>"
    )

    assert [c.name_pattern for c in root.children] == ["a.txt", "a.txt"]


def test_nested_elements_under_file_are_ignored() -> None:
    root = parse_schema('<repoRoot><file name="a.txt"><file name="b.txt"/></file></repoRoot>')

    assert root.children[0].children == ()


@pytest.mark.parametrize("source", ["", "   \n"])
def test_empty_definition_is_rejected(source: str) -> None:
    with pytest.raises(SchemaError, match="empty"):
        parse_schema(source)


def test_malformed_definition_is_rejected() -> None:
    with pytest.raises(SchemaError, match="not valid XML"):
        parse_schema("<repoRoot><directory name='A'></repoRoot>")


def test_wrong_root_element_is_rejected() -> None:
    with pytest.raises(SchemaError, match="root element"):
        parse_schema('<structure><directory name="A"/></structure>')


def test_entry_without_name_is_rejected() -> None:
    with pytest.raises(SchemaError, match="name"):
        parse_schema("<repoRoot><directory/></repoRoot>")


def test_load_schema_honors_encoding_declaration(tmp_path) -> None:
    path = tmp_path / "structure.xml"
    path.write_bytes(
        '<?xml version="1.0" encoding="ISO-8859-1"?>\n'
        '<repoRoot><directory name="Énoncés"/></repoRoot>'.encode("latin-1")
    )

    root = load_schema(str(path))

    assert root.children[0].name_pattern == "Énoncés"


def test_load_missing_schema_raises_schema_error(tmp_path) -> None:
    with pytest.raises(SchemaError, match="Cannot read"):
        load_schema(str(tmp_path / "missing.xml"))

