"""
  clove Reader: lexer and parser

- Streaming, lazy parsing: one top-level form at a time
- Emits Python values directly, no cons cells:

    - nil -> Nil
    - true / false -> True / False
    - integers -> int, decimals -> float, ratios (1/3) -> Fraction
    - strings -> str
    - characters (\\a, \\space) -> Char
    - :keywords -> Keyword
    - symbols -> Symbol
    - (lists) -> List
    - [vectors] -> Vector
    - {maps} -> Map
    - #{sets} -> Set
    - 'x -> (quote x)
"""

from __future__ import annotations

import re
from fractions import Fraction
from typing import Iterator, Optional

from clove import SExpression
from clove.errors import CloveSyntaxError, UnexpectedEOF
from clove.types.compound import Char, List, Map, Set, Vector
from clove.types.nil import Nil
from clove.types.symbol import Keyword, Symbol

_TOKEN_CHARS = r"[^\s,()\[\]{}\"';]"

TOKEN_RE = re.compile(
    r"[\s,]*(?:"
    r"(?P<comment>;[^\n]*)"  # line comment
    r"|(?P<quote>')"  # 'x
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<lbracket>\[)"  # [
    r"|(?P<rbracket>\])"  # ]
    r"|(?P<set_open>#\{)"  # #{
    r"|(?P<lbrace>\{)"  # {
    r"|(?P<rbrace>\})"  # }
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted string
    r'|(?P<open_string>")'  # string that never closes
    r"|(?P<char>\\." + _TOKEN_CHARS + r"*)"  # \c, \space, ...
    r"|(?P<backslash>\\)"  # lone backslash at end of input
    r"|(?P<atom>" + _TOKEN_CHARS + r"+)"  # numbers, symbols, keywords, ...
    r")",
    re.DOTALL,
)

NAMED_CHARS: dict[str, str] = {
    "space": " ",
    "newline": "\n",
    "tab": "\t",
    "return": "\r",
    "backspace": "\b",
    "formfeed": "\f",
}

STRING_ESCAPES: dict[str, str] = {
    '"': '"',
    "\\": "\\",
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
}

INT_RE = re.compile(r"[+-]?\d+")
RATIO_RE = re.compile(r"([+-]?\d+)/(\d+)")
FLOAT_RE = re.compile(r"[+-]?\d+(\.\d*([eE][+-]?\d+)?|[eE][+-]?\d+)")
_ESCAPE_RE = re.compile(r"\\(u[0-9a-fA-F]{4}|.)", re.DOTALL)

SPECIAL_FLOATS: dict[str, float] = {
    "##Inf": float("inf"),
    "##-Inf": float("-inf"),
    "##NaN": float("nan"),
}

CLOSERS = {"lparen": "rparen", "lbracket": "rbracket", "lbrace": "rbrace", "set_open": "rbrace"}
CLOSER_TEXT = {"rparen": ")", "rbracket": "]", "rbrace": "}"}


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples, skipping comments."""
    pos = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if m is None or m.lastgroup is None:
            # Only separators remain.
            break
        pos = m.end()
        tok_type = m.lastgroup
        if tok_type == "comment":
            continue
        if tok_type == "open_string":
            raise UnexpectedEOF("EOF while reading string")
        if tok_type == "backslash":
            raise UnexpectedEOF("EOF while reading character")
        yield tok_type, m.group(tok_type)


def _parse_int(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        # Literal longer than the interpreter's int digit limit.
        raise CloveSyntaxError(f"Integer literal too long: {len(text)} digits") from None


def parse_atom(token: str) -> SExpression:
    """Classify a bare token as a number, boolean, nil, keyword or symbol."""
    if INT_RE.fullmatch(token):
        return _parse_int(token)
    m = RATIO_RE.fullmatch(token)
    if m:
        numerator, denominator = _parse_int(m.group(1)), _parse_int(m.group(2))
        if denominator == 0:
            raise CloveSyntaxError(f"Invalid number: {token}")
        ratio = Fraction(numerator, denominator)
        return ratio.numerator if ratio.denominator == 1 else ratio
    if FLOAT_RE.fullmatch(token):
        return float(token)
    if token in SPECIAL_FLOATS:
        return SPECIAL_FLOATS[token]
    if token[0].isdigit() or (token[0] in "+-" and token[1:2].isdigit()):
        raise CloveSyntaxError(f"Invalid number: {token}")
    if token == "nil":
        return Nil
    if token == "true":
        return True
    if token == "false":
        return False
    if token.startswith(":"):
        name = token[1:]
        if not name or name.startswith(":") or name.endswith(":"):
            raise CloveSyntaxError(f"Invalid token: {token}")
        return Keyword(name)
    if token.startswith("#"):
        raise CloveSyntaxError(f"Unsupported dispatch macro: {token}")
    return Symbol(token)


def parse_char(token: str) -> Char:
    body = token[1:]
    if len(body) == 1:
        return Char(body)
    if body in NAMED_CHARS:
        return Char(NAMED_CHARS[body])
    if len(body) == 5 and body[0] == "u":
        try:
            return Char(chr(int(body[1:], 16)))
        except ValueError:
            pass
    raise CloveSyntaxError(f"Unsupported character: {token}")


def parse_string(token: str) -> str:
    def _unescape(m: re.Match) -> str:
        esc = m.group(1)
        if esc in STRING_ESCAPES:
            return STRING_ESCAPES[esc]
        if len(esc) == 5 and esc[0] == "u":
            return chr(int(esc[1:], 16))
        raise CloveSyntaxError(f"Unsupported escape character: \\{esc}")

    return _ESCAPE_RE.sub(_unescape, token[1:-1])


class TokenStream:
    def __init__(self, token_iter: Iterator[tuple[str, str]]):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, str]] = []

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def parse_expr(self) -> SExpression:
        """Read the next complete form; None when the input is exhausted."""
        tok_type, tok_val = self.peek()
        if tok_type is None:
            return None
        return self._parse_top()

    def _parse_top(self) -> SExpression:
        try:
            return self._parse_form()
        except RecursionError:
            raise CloveSyntaxError("Nesting too deep") from None

    def _parse_form(self) -> SExpression:
        tok_type, tok_val = self.advance()
        if tok_type is None:
            raise UnexpectedEOF("EOF while reading")

        if tok_type == "atom":
            return parse_atom(tok_val)

        if tok_type == "string":
            return parse_string(tok_val)

        if tok_type == "char":
            return parse_char(tok_val)

        if tok_type == "quote":
            return List((Symbol("quote"), self._parse_form()))

        if tok_type in CLOSERS:
            items = self._parse_until(CLOSERS[tok_type])
            if tok_type == "lparen":
                return List(items)
            if tok_type == "lbracket":
                return Vector(items)
            if tok_type == "set_open":
                return Set(items)
            if len(items) % 2:
                raise CloveSyntaxError("Map literal must contain an even number of forms")
            return Map(zip(items[::2], items[1::2]))

        if tok_type in CLOSER_TEXT:
            raise CloveSyntaxError(f"Unmatched delimiter: {tok_val}")

        raise CloveSyntaxError(f"Unknown token: {tok_type} {tok_val}")

    def _parse_until(self, closer: str) -> list[SExpression]:
        items: list[SExpression] = []
        while True:
            tok_type, tok_val = self.peek()
            if tok_type is None:
                raise UnexpectedEOF("EOF while reading, expected " + CLOSER_TEXT[closer])
            if tok_type == closer:
                self.advance()
                return items
            if tok_type in CLOSER_TEXT:
                raise CloveSyntaxError(
                    f"Unmatched delimiter: {tok_val}, expected {CLOSER_TEXT[closer]}"
                )
            items.append(self._parse_form())

    def parse_all(self) -> Iterator[SExpression]:
        while True:
            tok_type, _ = self.peek()
            if tok_type is None:
                break
            yield self._parse_top()


def read_all(source: str) -> Iterator[SExpression]:
    """Lazily read every top-level form in `source`."""
    return TokenStream(lex(source)).parse_all()


def read_one(source: str) -> SExpression:
    """Read the first top-level form in `source`; raises UnexpectedEOF when there is none."""
    expr = TokenStream(lex(source)).parse_expr()
    if expr is None:
        raise UnexpectedEOF("EOF while reading")
    return expr
