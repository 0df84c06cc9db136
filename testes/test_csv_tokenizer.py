import os
import sys

# Ensure project root is on sys.path for imports when running tests directly
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from blog_porter.extractors.csv_tokenizer import split_records, tokenize_line


def test_quoted_field_with_delimiter_and_escaped_quote():
    assert tokenize_line('"a,b""c"') == ['a,b"c']


def test_mixed_quoted_and_bare_fields():
    assert tokenize_line('x,"a,b""c",y') == ["x", 'a,b"c', "y"]


def test_empty_fields_are_kept():
    assert tokenize_line("a,,b,") == ["a", "", "b", ""]


def test_trailing_carriage_return_is_ignored():
    assert tokenize_line("a,b\r") == ["a", "b"]


def test_unterminated_quote_degrades_without_raising():
    line = 'a,"b,c'
    fields = tokenize_line(line)
    assert fields == ["a", "b,c"]
    assert len(fields) <= len(line.split(","))


def test_custom_delimiter():
    assert tokenize_line('a;"b;c";d', delimiter=";") == ["a", "b;c", "d"]


def test_split_records_keeps_quoted_newlines_together():
    text = 'title,content\n"One","<p>first\nsecond</p>"\n\n"Two","x"\n'
    assert split_records(text) == [
        "title,content",
        '"One","<p>first\nsecond</p>"',
        '"Two","x"',
    ]


def test_split_records_handles_crlf():
    text = "title,content\r\nA,b\r\n"
    assert split_records(text) == ["title,content", "A,b"]


def test_stray_quote_inside_bare_value_stays_on_its_line():
    text = 'title,content\nRow one,He said "hi there\nRow two,body two\n'
    assert split_records(text) == ["title,content", 'Row one,He said "hi there', "Row two,body two"]


def test_unterminated_quoted_field_does_not_swallow_later_rows():
    text = 'title,content\nRow one,"never closed\nRow two,body two\n\nRow three,body three\n'
    assert split_records(text) == [
        "title,content",
        'Row one,"never closed',
        "Row two,body two",
        "Row three,body three",
    ]
