import pytest

from exchron.adapters.csv_tokenizer import tokenize, tokenize_line
from exchron.utils.exceptions import DatasetParseError, MalformedCSVError


def test_quoted_delimiter_stays_in_one_field():
    assert tokenize_line('a,"b,c",d') == ["a", "b,c", "d"]


def test_escaped_quote_collapses():
    assert tokenize_line('a,"b""c",d') == ["a", 'b"c', "d"]


def test_fields_are_trimmed():
    assert tokenize_line("  a , b ,c  ") == ["a", "b", "c"]


def test_trailing_delimiter_yields_empty_last_field():
    assert tokenize_line("a,b,") == ["a", "b", ""]


def test_blank_lines_are_skipped():
    assert tokenize("a,b\n\n   \nc,d") == [["a", "b"], ["c", "d"]]


def test_crlf_line_endings():
    assert tokenize("a,b\r\nc,d\r\n") == [["a", "b"], ["c", "d"]]


def test_no_type_coercion():
    assert tokenize("1,2.5,true") == [["1", "2.5", "true"]]


def test_unterminated_quote_raises_with_line_number():
    with pytest.raises(MalformedCSVError, match="line 3"):
        tokenize('a,b\n\n"c,d\ne,f')


def test_malformed_csv_is_a_parse_error():
    with pytest.raises(DatasetParseError):
        tokenize_line('"open')


def test_empty_text():
    assert tokenize("") == []
