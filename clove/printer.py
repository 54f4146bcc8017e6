"""Readable textual representation of clove values.

`to_str` produces text the reader accepts back for every data value
(numbers, strings, chars, booleans, nil, keywords, symbols and the
collections built from them). Procedures and vars print in an unreadable
`#<...>` / `#'...` form.
"""

from __future__ import annotations

import math
from fractions import Fraction

from clove import LispValue
from clove.types.compound import Char, List, Map, Set, Vector
from clove.types.nil import NilType
from clove.types.symbol import Keyword, Symbol

_STRING_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
    "\b": "\\b",
    "\f": "\\f",
}

_CHAR_NAMES = {
    " ": "space",
    "\n": "newline",
    "\t": "tab",
    "\r": "return",
    "\b": "backspace",
    "\f": "formfeed",
}


def _float_to_str(x: float) -> str:
    if math.isnan(x):
        return "##NaN"
    if math.isinf(x):
        return "##Inf" if x > 0 else "##-Inf"
    return repr(x)


def to_str(value: LispValue) -> str:
    """Return the printed representation of `value`."""
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, NilType):
        return "nil"
    if isinstance(value, Char):
        return "\\" + _CHAR_NAMES.get(value, str(value))
    if isinstance(value, str):
        return '"' + "".join(_STRING_ESCAPES.get(c, c) for c in value) + '"'
    if isinstance(value, float):
        return _float_to_str(value)
    if isinstance(value, (int, Fraction)):
        return str(value)
    if isinstance(value, (Symbol, Keyword)):
        return str(value)
    if isinstance(value, List):
        return "(" + " ".join(to_str(v) for v in value) + ")"
    if isinstance(value, Vector):
        return "[" + " ".join(to_str(v) for v in value) + "]"
    if isinstance(value, Set):
        return "#{" + " ".join(to_str(v) for v in value) + "}"
    if isinstance(value, Map):
        return "{" + ", ".join(f"{to_str(k)} {to_str(v)}" for k, v in value.items()) + "}"
    return str(value)
