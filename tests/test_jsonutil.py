import json

import pytest

from wclkit.jsonutil import (
    format_single_line,
    indent,
    indent_string,
    split,
    split_objects,
    split_string,
    unescape,
)


def test_unescape_reverses_html_escapes():
    escaped = split_string('["<a>&"]')[0]
    assert "\\u003c" in escaped and "\\u0026" in escaped
    assert json.loads(unescape(escaped)) == "<a>&"
    assert unescape(escaped) == '"<a>&"'


def test_unescape_leaves_other_text():
    text = '{"k": "plain \\u0041"}'
    assert unescape(text) == text


def test_split_escapes_html():
    assert split(b'[{"a":"<"}]') == [b'{"a":"\\u003c"}']


def test_split_round_trip():
    source = '[{"name": "a"}, {"name": "b", "n": [1, 2]}, "x", null, true]'
    parts = split_string(source)
    assert [json.loads(p) for p in parts] == json.loads(source)
    assert len(parts) == 5


def test_split_sorts_keys_and_is_compact():
    part = split_string('[{"z": 1, "a": 2, "m": {"y": 0, "b": 0}}]')[0]
    decoded = json.loads(part)
    assert list(decoded) == sorted(decoded)
    assert list(decoded["m"]) == sorted(decoded["m"])
    assert " " not in part


def test_split_number_formatting():
    assert split_string("[1, 2.5, 1e21]") == ["1", "2.5", "1e+21"]


def test_split_returns_bytes():
    parts = split('[{"a": 1}]')
    assert all(isinstance(p, bytes) for p in parts)
    assert json.loads(parts[0]) == {"a": 1}


def test_split_null_is_empty():
    assert split_string("null") == []


@pytest.mark.parametrize("bad", ['{"a": 1}', "not json", "[1,", "[NaN]", "[1e400]"])
def test_split_rejects_non_arrays(bad):
    with pytest.raises(ValueError):
        split(bad)


def test_format_single_line_round_trip():
    source = '[{"name": "a"},\n {"name": "b"}, {"name": "c"}]'
    result = format_single_line(source)
    lines = result.split("\n")
    assert json.loads(result) == json.loads(source)
    assert len(lines) == 5
    assert lines[0] == "[" and lines[-1] == "]"
    assert all(line.startswith("  ") for line in lines[1:-1])


def test_format_single_line_passes_invalid_through():
    assert format_single_line("not json") == "not json"
    assert format_single_line("[]") == "[]"


def test_indent_string_object():
    assert indent_string('{"a":1}') == '{\n  "a": 1\n}\n'


def test_indent_string_short_array_single_line():
    assert (
        indent_string('{"children":["Sara","Alex","Jack"]}')
        == '{\n  "children": ["Sara", "Alex", "Jack"]\n}\n'
    )


@pytest.mark.parametrize(
    "source",
    [
        '{"a":{"b":[1,2,{"c":null}]},"d":[],"e":{}}',
        "[" + ",".join(str(i * 1000) for i in range(60)) + "]",
        '[[1,2],[3,[4,5]],"s\\"q"]',
        "42",
    ],
)
def test_indent_string_round_trip(source):
    result = indent_string(source)
    assert json.loads(result) == json.loads(source)
    assert result.endswith("\n")


def test_indent_long_array_breaks_lines():
    source = "[" + ",".join(str(i * 1000) for i in range(60)) + "]"
    lines = indent_string(source).splitlines()
    assert len(lines) == 62
    assert lines[1].startswith("  ")


def test_indent_bytes_matches_string():
    source = '{"k":[true,false],"v":"x"}'
    assert indent(source.encode()) == indent_string(source).encode()


def test_indent_rejects_malformed():
    with pytest.raises(ValueError):
        indent_string('{"a":')


def test_split_objects():
    assert split_objects('[{"a":1},{"b":{"c":2}}]') == ['{"a":1}', '{"b":{"c":2}}']


def test_split_objects_single():
    assert split_objects('[{"a":1}]') == ['{"a":1}']


@pytest.mark.parametrize("bad", ["[1,2]", "[]", '[{"a":1}\n,{"b":2}]', '{"a":1}'])
def test_split_objects_rejects(bad):
    with pytest.raises(ValueError):
        split_objects(bad)


def test_split_objects_unbalanced():
    with pytest.raises(IndexError):
        split_objects("[{}},{}]")