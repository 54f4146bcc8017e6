import sys
from fractions import Fraction

import pytest

from clove.errors import CloveSyntaxError, UnexpectedEOF
from clove.reader.parser import lex, read_all, read_one
from clove.types.compound import Char, List, Map, Set, Vector
from clove.types.nil import Nil
from clove.types.symbol import Keyword, Symbol


@pytest.mark.parametrize(
    "source,expected",
    [
        ("a", [("atom", "a")]),
        ("'a", [("quote", "'"), ("atom", "a")]),
        ("(a b)", [("lparen", "("), ("atom", "a"), ("atom", "b"), ("rparen", ")")]),
        ("[1, 2]", [("lbracket", "["), ("atom", "1"), ("atom", "2"), ("rbracket", "]")]),
        ("#{1}", [("set_open", "#{"), ("atom", "1"), ("rbrace", "}")]),
        ("{:a 1}", [("lbrace", "{"), ("atom", ":a"), ("atom", "1"), ("rbrace", "}")]),
        ('"hi there"', [("string", '"hi there"')]),
        ("\\a \\space", [("char", "\\a"), ("char", "\\space")]),
        (" ; comment\n a b", [("atom", "a"), ("atom", "b")]),
        ("   ,,  ", []),
    ],
)
def test_lexer_basic(source, expected):
    assert list(lex(source)) == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ("nil", Nil),
        ("true", True),
        ("false", False),
        ("42", 42),
        ("-7", -7),
        ("+5", 5),
        ("3.14", 3.14),
        ("1e3", 1000.0),
        ("-2.5e-3", -0.0025),
        ("1/3", Fraction(1, 3)),
        ("4/2", 2),
        (":else", Keyword("else")),
        ("fact-iter", Symbol("fact-iter")),
        ("+", Symbol("+")),
        ("-", Symbol("-")),
        ("even?", Symbol("even?")),
        ('"a\\nb"', "a\nb"),
        ('"say \\"hi\\""', 'say "hi"'),
        ("\\a", Char("a")),
        ("\\space", Char(" ")),
        ("\\newline", Char("\n")),
        ("\\(", Char("(")),
        ("'x", List((Symbol("quote"), Symbol("x")))),
        ("(+ 2 4)", List((Symbol("+"), 2, 4))),
        ("[1 [2]]", Vector((1, Vector((2,))))),
        ("{:a 1, :b 2}", Map({Keyword("a"): 1, Keyword("b"): 2}.items())),
        ("#{1 2}", Set((1, 2))),
        ("()", List()),
    ],
)
def test_read_one(source, expected):
    assert read_one(source) == expected


def test_collections_keep_their_kind():
    assert type(read_one("(1 2)")) is List
    assert type(read_one("[1 2]")) is Vector
    assert type(read_one("#{1}")) is Set
    assert type(read_one("{}")) is Map
    assert type(read_one("\\a")) is Char
    assert type(read_one("4/2")) is int


def test_comments_and_commas_are_separators():
    forms = list(read_all("; leading comment\n(+ 1,2) ; trailing\n[3,,4]"))
    assert forms == [List((Symbol("+"), 1, 2)), Vector((3, 4))]


def test_read_all_is_lazy_per_top_level_form():
    forms = read_all("1 (def x 2) )")
    assert next(forms) == 1
    assert next(forms) == List((Symbol("def"), Symbol("x"), 2))
    with pytest.raises(CloveSyntaxError):
        next(forms)


def test_read_all_empty_input():
    assert list(read_all("  ; nothing here\n")) == []
    with pytest.raises(UnexpectedEOF):
        read_one("")


@pytest.mark.parametrize("source", ["(1 2", "[1 (2 3)", '"unterminated', "'", "#{1", "\\"])
def test_incomplete_input_raises_unexpected_eof(source):
    with pytest.raises(UnexpectedEOF):
        list(read_all(source))


@pytest.mark.parametrize(
    "source",
    [")", "(1 2]", "[1 2)", "12abc", "1.2.3", ":", "::a", "\\xyz", "{:a}", '"bad \\q escape"', "#foo", "1/0"],
)
def test_malformed_input_raises_syntax_error(source):
    with pytest.raises(CloveSyntaxError):
        list(read_all(source))


def test_unexpected_eof_is_a_syntax_error():
    assert issubclass(UnexpectedEOF, CloveSyntaxError)


def test_deeply_nested_input_is_a_syntax_error():
    source = "[" * 20000 + "]" * 20000
    with pytest.raises(CloveSyntaxError, match="Nesting too deep"):
        list(read_all(source))
    with pytest.raises(CloveSyntaxError, match="Nesting too deep"):
        read_one(source)


def test_reader_recovers_after_deep_nesting():
    with pytest.raises(CloveSyntaxError):
        list(read_all("(" * 20000))
    assert read_one("[[1]]") == Vector((Vector((1,)),))


@pytest.mark.skipif(not hasattr(sys, "set_int_max_str_digits"), reason="no int digit limit")
def test_integer_literal_past_digit_limit():
    previous = sys.get_int_max_str_digits()
    sys.set_int_max_str_digits(1000)
    try:
        with pytest.raises(CloveSyntaxError, match="too long"):
            read_one("9" * 2000)
    finally:
        sys.set_int_max_str_digits(previous)
