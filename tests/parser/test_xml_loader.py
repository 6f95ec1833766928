import gzip

import pytest

from ableton_inspector.errors import DecompressionError, ParseError
from ableton_inspector.parser.xml_loader import (
    coerce_value,
    decompress,
    parse_xml,
    read_als_file,
)


def test_decompress_returns_xml_text(sample_set_xml, sample_set_als):
    """
    Test gzip-framed .als bytes decompress to the original XML text.
    """
    assert decompress(sample_set_als) == sample_set_xml


def test_decompress_rejects_non_gzip_data():
    with pytest.raises(DecompressionError) as exc_info:
        decompress(b"<Ableton></Ableton>")

    assert "Failed to decompress .als data" in str(exc_info.value)


def test_decompress_rejects_truncated_data(sample_set_als):
    with pytest.raises(DecompressionError):
        decompress(sample_set_als[:20])


def test_decompress_replaces_invalid_utf8():
    """
    Test undecodable bytes are replaced instead of failing the whole file.
    """
    text = decompress(gzip.compress(b"<A>\xff</A>"))

    assert text == "<A>�</A>"


def test_parse_xml_keys_root_by_tag():
    tree = parse_xml('<Ableton MajorVersion="5"><LiveSet /></Ableton>')

    assert list(tree) == ["Ableton"]
    assert tree["Ableton"]["@MajorVersion"] == 5
    assert tree["Ableton"]["LiveSet"] == {}


def test_parse_xml_collapses_repeated_siblings_into_list():
    tree = parse_xml('<R><Item Id="1" /><Item Id="2" /><Other /></R>')

    assert tree["R"]["Item"] == [{"@Id": 1}, {"@Id": 2}]
    assert tree["R"]["Other"] == {}


def test_parse_xml_keeps_single_child_as_mapping():
    tree = parse_xml('<R><Item Id="1" /></R>')

    assert tree["R"]["Item"] == {"@Id": 1}


def test_parse_xml_text_content():
    """
    Test text-only elements become their value and mixed ones keep #text.
    """
    tree = parse_xml('<R><Plain>hello</Plain><Mixed Id="3">42</Mixed></R>')

    assert tree["R"]["Plain"] == "hello"
    assert tree["R"]["Mixed"] == {"@Id": 3, "#text": 42}


def test_parse_xml_raises_parse_error_on_malformed_xml():
    with pytest.raises(ParseError) as exc_info:
        parse_xml("<Ableton><LiveSet></Ableton>")

    assert "Failed to parse XML content" in str(exc_info.value)


@pytest.mark.parametrize("text,expected", [
    ("true", True),
    ("false", False),
    ("120", 120),
    ("-63072000", -63072000),
    ("128.5", 128.5),
    ("007", "007"),
    ("1.10", "1.10"),
    ("1e5", "1e5"),
    ("", ""),
    ("Drums", "Drums"),
])
def test_coerce_value_only_converts_losslessly(text, expected):
    value = coerce_value(text)

    assert value == expected
    assert type(value) is type(expected)


def test_read_als_file_decompresses_als(tmp_path, sample_set_als, sample_set_xml):
    path = tmp_path / "song.als"
    path.write_bytes(sample_set_als)

    assert read_als_file(path) == sample_set_xml


def test_read_als_file_reads_plain_xml(tmp_path, sample_set_xml):
    path = tmp_path / "song.xml"
    path.write_text(sample_set_xml, encoding="utf-8")

    assert read_als_file(str(path)) == sample_set_xml


def test_read_als_file_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_als_file(tmp_path / "missing.als")


def test_read_als_file_unsupported_extension(tmp_path):
    path = tmp_path / "song.txt"
    path.write_text("not a set")

    with pytest.raises(ValueError, match="Unsupported file type"):
        read_als_file(path)


def test_decompress_rejects_empty_data():
    """
    Test an empty upload or empty .als file is a decompression failure.
    """
    with pytest.raises(DecompressionError) as exc_info:
        decompress(b"")

    assert "may be corrupted" in str(exc_info.value)


def test_parse_xml_handles_deeply_nested_documents():
    depth = 5000
    tree = parse_xml("<R>" + "<A>" * depth + '<Leaf Id="7" />' + "</A>" * depth + "</R>")

    node = tree["R"]
    for _ in range(depth):
        node = node["A"]
    assert node == {"Leaf": {"@Id": 7}}


def test_parse_xml_keeps_sibling_order_across_depths():
    tree = parse_xml('<R><Item Id="1"><Item Id="2" /></Item><Item Id="3" /></R>')

    assert tree["R"]["Item"] == [{"@Id": 1, "Item": {"@Id": 2}}, {"@Id": 3}]
