import io
import logging

import pytest

from pyinidata import (
    DuplicatePropertiesBehaviour,
    IniData,
    IniDataParser,
    IniParseError,
    IniParserConfiguration,
    IniScheme,
)

DUPLICATED_KEYS = "[S]\nk=1\nk=2\n"


def _parser(**options) -> IniDataParser:
    return IniDataParser(IniParserConfiguration(**options))


def test_basic_document():
    text = (
        "g = global\n"
        "\n"
        "[First]\n"
        "a = 1\n"
        "b=two words \n"
        "[Second]\n"
        "c = x = y\n"
        "empty =\n"
    )
    data = _parser().parse(text)

    assert isinstance(data, IniData)
    assert dict(data.global_properties) == {"g": "global"}
    assert list(data.sections) == ["First", "Second"]
    assert dict(data["First"]) == {"a": "1", "b": "two words"}
    assert data["Second"]["c"] == "x = y"
    assert data["Second"]["empty"] == ""


def test_duplicate_key_disallowed():
    parser = _parser()
    with pytest.raises(IniParseError) as err:
        parser.parse(DUPLICATED_KEYS)
    assert err.value.line_number == 3
    assert err.value.line == "k=2"
    assert parser.has_error


@pytest.mark.parametrize("behaviour, expected", [
    (DuplicatePropertiesBehaviour.ALLOW_AND_KEEP_FIRST_VALUE, "1"),
    (DuplicatePropertiesBehaviour.ALLOW_AND_KEEP_LAST_VALUE, "2"),
    (DuplicatePropertiesBehaviour.ALLOW_AND_CONCATENATE_VALUES, "1;2"),
])
def test_duplicate_key_policies(behaviour, expected):
    data = _parser(duplicate_properties_behaviour=behaviour).parse(
        DUPLICATED_KEYS)
    assert data["S"]["k"] == expected
    assert len(data["S"]) == 1


def test_concatenate_with_custom_separator():
    data = _parser(
        duplicate_properties_behaviour=(
            DuplicatePropertiesBehaviour.ALLOW_AND_CONCATENATE_VALUES),
        concatenate_duplicate_properties_string=", ",
    ).parse("[S]\nk=1\nk=2\nk=3\n")
    assert data["S"]["k"] == "1, 2, 3"


def test_duplicate_key_keeps_comments():
    data = _parser(
        duplicate_properties_behaviour=(
            DuplicatePropertiesBehaviour.ALLOW_AND_KEEP_LAST_VALUE),
    ).parse("[S]\n;one\nk=1\n;two\nk=2\n")
    assert data["S"].get_property("k").comments == ["one", "two"]


def test_comment_attached_to_property():
    data = _parser().parse("[S]\n;a comment\nKey=Value\n")
    assert data["S"].get_property("Key").comments[0] == "a comment"


def test_comments_attached_to_section():
    text = "# first\n; second\n[S]\nk=v\n"
    data = _parser().parse(text)
    assert data.sections["S"].comments == [" first", " second"]
    assert data["S"].get_property("k").comments == []


def test_indented_comment():
    data = _parser().parse("[S]\n   ;indented\nk=v\n")
    assert data["S"].get_property("k").comments == ["indented"]


def test_trailing_comments_are_discarded():
    data = _parser().parse("[S]\nk=v\n;dangling\n")
    assert data.sections["S"].comments == []
    assert data["S"].get_property("k").comments == []


def test_case_insensitive_parse():
    data = _parser(case_insensitive=True).parse("[Test]\nKey=1\n")
    assert data.sections["test"] is data.sections["TEST"]
    assert data["test"]["KEY"] == "1"


def test_case_insensitive_duplicates():
    with pytest.raises(IniParseError):
        _parser(case_insensitive=True).parse("[S]\nkey=1\nKEY=2\n")
    with pytest.raises(IniParseError):
        _parser(case_insensitive=True).parse("[S]\n[s]\n")


def test_case_sensitive_keys_are_distinct():
    data = _parser().parse("[S]\nkey=1\nKEY=2\n")
    assert dict(data["S"]) == {"key": "1", "KEY": "2"}


def test_invalid_line_skipped():
    text = "[S]\na=1\nthis is garbage\nb=2\n"
    data = _parser(skip_invalid_lines=True).parse(text)
    assert dict(data["S"]) == {"a": "1", "b": "2"}


def test_invalid_line_fails():
    text = "[S]\na=1\nthis is garbage\nb=2\n"
    with pytest.raises(IniParseError) as err:
        _parser().parse(text)
    assert err.value.line_number == 3
    assert err.value.line == "this is garbage"
    assert "line 3" in str(err.value)


def test_invalid_line_returns_none_without_exceptions():
    parser = _parser(throw_exceptions_on_error=False)
    assert parser.parse("[S]\na=1\nthis is garbage\n") is None
    assert parser.has_error
    assert parser.errors[0].line_number == 3

    # errors are reset on the next run
    assert parser.parse("[S]\na=1\n") is not None
    assert not parser.has_error


@pytest.mark.parametrize("line", ["[S", "[]", "[   ]", "=value", "  = v"])
def test_malformed_shapes(line):
    with pytest.raises(IniParseError):
        _parser().parse(f"[Ok]\n{line}\n")
    data = _parser(skip_invalid_lines=True).parse(f"[Ok]\n{line}\nk=v\n")
    assert dict(data["Ok"]) == {"k": "v"}


def test_skipped_line_is_logged(caplog):
    caplog.set_level(logging.DEBUG, logger="pyinidata.ini.parser")
    _parser(skip_invalid_lines=True).parse("[S]\na=1\ngarbage\n")
    assert "Skipped invalid line 3" in caplog.text


def test_error_is_logged(caplog):
    caplog.set_level(logging.WARNING, logger="pyinidata.ini.parser")
    assert _parser(throw_exceptions_on_error=False).parse("garbage") is None
    assert "INI parsing stopped" in caplog.text


def test_keys_without_section():
    data = _parser().parse("a=1\n[S]\nb=2\n")
    assert dict(data.global_properties) == {"a": "1"}
    assert dict(data["S"]) == {"b": "2"}

    with pytest.raises(IniParseError) as err:
        _parser(allow_keys_without_section=False).parse("a=1\n[S]\nb=2\n")
    assert err.value.line_number == 1


def test_global_duplicate_key_policy():
    data = _parser(
        duplicate_properties_behaviour=(
            DuplicatePropertiesBehaviour.ALLOW_AND_KEEP_FIRST_VALUE),
    ).parse("a=1\na=2\n")
    assert data.global_properties["a"] == "1"


def test_duplicate_section_disallowed():
    parser = _parser(throw_exceptions_on_error=False)
    assert parser.parse("[S]\na=1\n[T]\n[S]\nb=2\n") is None
    assert parser.errors[0].line_number == 4


def test_duplicate_section_reused():
    text = ";first\n[S]\na=1\n[T]\nx=y\n;second\n[S]\nb=2\n"
    data = _parser(allow_duplicate_sections=True).parse(text)

    assert list(data.sections) == ["S", "T"]
    assert dict(data["S"]) == {"a": "1", "b": "2"}
    # comments of the first header are kept
    assert data.sections["S"].comments == ["first", "second"]


def test_duplicate_section_still_checks_keys():
    with pytest.raises(IniParseError):
        _parser(allow_duplicate_sections=True).parse("[S]\na=1\n[S]\na=2\n")


def test_trimming_disabled():
    data = _parser(trim_properties=False, trim_sections=False).parse(
        "[ S ]\n k = v \n")
    assert list(data.sections) == [" S "]
    assert data[" S "][" k "] == " v "


def test_trimming_enabled():
    data = _parser().parse("[  S  ]\n   k   =   v   \n")
    assert data["S"]["k"] == "v"


def test_custom_scheme():
    scheme = IniScheme(
        comment_strings=("//",),
        section_start="<",
        section_end=">",
        property_assignment=":",
    )
    text = "// about s\n<S>\nkey: a=b\n"
    data = IniDataParser(scheme=scheme).parse(text)
    assert data.sections["S"].comments == [" about s"]
    assert data["S"]["key"] == "a=b"

    with pytest.raises(IniParseError):
        IniDataParser(scheme=scheme).parse("[S]\n")


def test_overridden_recognition_rule():
    class NoHashComments(IniDataParser):
        def is_comment(self, line):
            return line.lstrip().startswith(";")

    data = NoHashComments().parse("[S]\n#k=v\n")
    assert data["S"]["#k"] == "v"


def test_parser_keeps_own_configuration():
    cfg = IniParserConfiguration()
    parser = IniDataParser(cfg)
    cfg.skip_invalid_lines = True
    with pytest.raises(IniParseError):
        parser.parse("garbage\n")


def test_parse_stream_with_crlf_and_bom():
    buf = io.StringIO("\ufeff[S]\r\nk=v\r\n", newline="")
    data = _parser().parse_stream(buf)
    assert dict(data["S"]) == {"k": "v"}


def test_parse_lines():
    data = _parser().parse_lines(["[S]", "k=v"])
    assert data["S"]["k"] == "v"


def test_empty_input():
    data = _parser().parse("")
    assert len(data.sections) == 0
    assert len(data.global_properties) == 0


def test_parse_keeps_control_characters_in_values():
    text = "[S]\nk=a\x0cb\nm=x\x1cy\n"
    parser = _parser()
    data = parser.parse(text)
    assert data == parser.parse_stream(io.StringIO(text))
    assert data["S"]["k"] == "a\x0cb"
    assert data["S"]["m"] == "x\x1cy"


def test_parse_mixed_line_breaks():
    data = _parser().parse("[S]\r\na=1\rb=2\nc=3")
    assert dict(data["S"]) == {"a": "1", "b": "2", "c": "3"}


def test_failed_parse_leaves_nothing_behind():
    parser = _parser(throw_exceptions_on_error=False)
    assert parser.parse("g=1\n[S]\na=1\ngarbage\n") is None
    assert len(parser._data.sections) == 0
    assert len(parser._data.global_properties) == 0
    assert parser._current is None

    with pytest.raises(IniParseError):
        _parser().parse("[S]\na=1\ngarbage\n")
