import pytest

from gputop import inifile
from gputop.inifile import IniEntry, parse_ini, parse_ini_file, parse_ini_string


def test_sections_and_pairs():
    result = parse_ini_string("[General]\nUseColor = true\n[Other]\nkey: value\n")
    assert result.ok
    assert result.entries == [
        IniEntry("General", "UseColor", "true", 2),
        IniEntry("Other", "key", "value", 4),
    ]


def test_pair_before_any_section():
    result = parse_ini_string("name=value\n")
    assert [(e.section, e.name, e.value) for e in result] == [("", "name", "value")]


def test_start_of_line_comments_and_blank_lines():
    result = parse_ini_string("; one\n# two\n\n[s]\na = b\n")
    assert result.ok
    assert [(e.name, e.value, e.lineno) for e in result] == [("a", "b", 5)]


def test_inline_comment_needs_preceding_space():
    result = parse_ini_string("[s]\na = b ; note\nc = d;e\n")
    assert [(e.name, e.value) for e in result] == [("a", "b"), ("c", "d;e")]


def test_multiline_continuation():
    result = parse_ini_string("[s]\nitem = first\n  second\n\n  third\n")
    assert [(e.name, e.value) for e in result] == [
        ("item", "first"),
        ("item", "second"),
        ("item", "third"),
    ]


def test_new_section_stops_continuation():
    result = parse_ini_string("[s]\nitem = first\n[t]\n  other\n")
    assert result.first_error == 4
    assert len(result.entries) == 1


def test_errors_are_reported_and_parsing_continues():
    result = parse_ini_string("garbage\n[s]\nok = yes\nmore garbage\n")
    assert not result.ok
    assert result.first_error == 1
    assert result.error_lines == [1, 4]
    assert [(e.section, e.name, e.value) for e in result] == [("s", "ok", "yes")]


def test_unterminated_section_is_error():
    result = parse_ini_string("[broken\nk=v\n")
    assert result.first_error == 1
    assert result.entries[0].section == ""


def test_inline_comment_before_separator_is_error():
    result = parse_ini_string("name ;= value\n")
    assert result.first_error == 1
    assert result.entries == []


def test_bom_is_skipped():
    result = parse_ini_string("\ufeff[s]\nk = v\n")
    assert result.ok
    assert result.entries[0].section == "s"


def test_crlf_line_endings():
    result = parse_ini_string("[s]\r\nk = v\r\n")
    assert [(e.section, e.name, e.value) for e in result] == [("s", "k", "v")]


def test_long_section_name_is_truncated():
    result = parse_ini_string("[" + "s" * 80 + "]\nk=v\n")
    assert result.entries[0].section == "s" * (inifile.MAX_SECTION - 1)


def test_overlong_line_is_split():
    long_value = "v" * 300
    result = parse_ini_string("name=" + long_value + "\n")
    assert result.first_error == 2
    value = result.entries[0].value
    assert long_value.startswith(value)
    assert len(value) < len(long_value)


def test_parse_lines_iterable():
    result = parse_ini(["[a]\n", "x = 1\n"])
    assert [(e.section, e.name, e.value) for e in result] == [("a", "x", "1")]


def test_parse_file(tmp_path):
    path = tmp_path / "interface.ini"
    path.write_text("[Device]\nPdev = 0000:01:00.0\nMonitor = true\n", encoding="utf-8")
    result = parse_ini_file(path)
    assert result.ok
    assert [(e.name, e.value) for e in result] == [
        ("Pdev", "0000:01:00.0"),
        ("Monitor", "true"),
    ]


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        parse_ini_file(tmp_path / "absent.ini")