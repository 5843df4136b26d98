"""Tokenizer tests."""

import pytest

from exline.tokens import (
    TK_EOF,
    TK_IDENT,
    TK_INTEGER,
    TK_NEWLINE,
    TK_OP,
    TK_STRING,
    LexError,
    tokenize,
)


def _types(source: str) -> list[str]:
    return [t.type for t in tokenize(source)]


def _values(source: str) -> list[str]:
    return [t.value for t in tokenize(source)]


def test_declaration_tokens():
    toks = tokenize("Int n1 = 1")
    assert [t.type for t in toks] == ["Int", TK_IDENT, TK_OP, TK_INTEGER, TK_EOF]
    assert toks[1].value == "n1"
    assert toks[3].value == "1"


def test_arithmetic_tokens():
    assert _values("n1 + n2 * 3 / 4 - 5") == [
        "n1", "+", "n2", "*", "3", "/", "4", "-", "5", "",
    ]


def test_keywords_and_identifiers():
    assert _types("def end if else class interface implements void String") == [
        "def", "end", "if", "else", "class", "interface", "implements", "void",
        "String", TK_EOF,
    ]
    # print and new are plain identifiers
    assert _types("print new") == [TK_IDENT, TK_IDENT, TK_EOF]


def test_multi_char_operators():
    assert _values("-> == = #{ }") == ["->", "==", "=", "#{", "}", ""]


def test_newlines_are_tokens():
    toks = tokenize("a\nb")
    assert [t.type for t in toks] == [TK_IDENT, TK_NEWLINE, TK_IDENT, TK_EOF]
    assert (toks[2].line, toks[2].col) == (2, 1)


def test_positions_are_one_based():
    toks = tokenize("Int  x")
    assert (toks[0].line, toks[0].col) == (1, 1)
    assert (toks[1].line, toks[1].col) == (1, 6)


def test_string_is_raw_and_keeps_markers():
    toks = tokenize('"Hello #{name}!"')
    assert toks[0].type == TK_STRING
    assert toks[0].value == "Hello #{name}!"


def test_string_may_span_lines():
    toks = tokenize('"a\nb" x')
    assert toks[0].value == "a\nb"
    assert toks[1].line == 2


def test_comment_runs_to_end_of_line():
    assert _types("x # a comment\ny") == [TK_IDENT, TK_NEWLINE, TK_IDENT, TK_EOF]


def test_single_eof_at_end():
    toks = tokenize("   ")
    assert len(toks) == 1
    assert toks[0].type == TK_EOF


def test_unicode_identifier():
    toks = tokenize("café")
    assert toks[0].type == TK_IDENT
    assert toks[0].value == "café"


def test_unexpected_character():
    with pytest.raises(LexError) as exc:
        tokenize("Int x = 1,")
    assert "unexpected character" in str(exc.value)
    assert exc.value.line == 1
    assert exc.value.col == 10


def test_unterminated_string():
    with pytest.raises(LexError) as exc:
        tokenize('print("oops)')
    assert "unterminated string" in str(exc.value)
    assert exc.value.col == 7


def test_integer_out_of_range():
    tokenize("9223372036854775807")
    with pytest.raises(LexError, match="invalid number"):
        tokenize("9223372036854775808")
