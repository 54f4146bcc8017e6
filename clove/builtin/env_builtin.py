"""Built-in procedures for the clove runtime environment.

This module defines core arithmetic, comparison, equality, predicates,
sequence helpers and the registration utility that installs them into a
global Environment as Primitive values.

Every implementation receives the list of already-evaluated arguments;
arity is checked by Primitive before the call.
"""
from __future__ import annotations

import math
import random
from fractions import Fraction

from clove import LispValue
from clove.errors import CloveTypeError, DivideByZeroError
from clove.evaluation.apply import apply as apply_engine
from clove.evaluation.evaluator import evaluate0
from clove.printer import to_str
from clove.types.compound import Char, List, Map, Set, Vector
from clove.types.environment import Environment
from clove.types.lambda_fn import Lambda
from clove.types.nil import Nil, NilType
from clove.types.primitive import Primitive
from clove.types.symbol import Keyword, Symbol


# -------------------------------
# Number helpers
# -------------------------------
def is_number(x: LispValue) -> bool:
    return isinstance(x, (int, float, Fraction)) and not isinstance(x, bool)


def _is_exact(x: LispValue) -> bool:
    return isinstance(x, (int, Fraction))


def _normalize(x: LispValue) -> LispValue:
    """Collapse whole ratios back to integers, e.g. 6/2 -> 3."""
    if isinstance(x, Fraction) and x.denominator == 1:
        return x.numerator
    return x


def _check_numbers(name: str, args: list[LispValue]) -> None:
    for a in args:
        if not is_number(a):
            raise CloveTypeError(f"{name} expects numbers, got {to_str(a)}")


def _check_integers(name: str, args: list[LispValue]) -> None:
    for a in args:
        if not isinstance(a, int) or isinstance(a, bool):
            raise CloveTypeError(f"{name} expects integers, got {to_str(a)}")


def _check_divisor(name: str, d: LispValue) -> None:
    if d == 0:
        raise DivideByZeroError(f"Divide by zero in {name}")


# -------------------------------
# Arithmetic
# -------------------------------
def add(args: list[LispValue]) -> LispValue:
    """Return the numeric sum of all arguments; (+) is 0."""
    _check_numbers("+", args)
    return _normalize(sum(args, 0))


def sub(args: list[LispValue]) -> LispValue:
    """Subtract all subsequent numbers from the first; unary negation for one arg."""
    _check_numbers("-", args)
    if len(args) == 1:
        return -args[0]
    result = args[0]
    for x in args[1:]:
        result -= x
    return _normalize(result)


def mul(args: list[LispValue]) -> LispValue:
    """Return the product of all arguments; (*) is 1."""
    _check_numbers("*", args)
    result = 1
    for x in args:
        result *= x
    return _normalize(result)


def div(args: list[LispValue]) -> LispValue:
    """Divide left-to-right; with one arg returns the reciprocal.

    Exact operands give an exact result (an integer or a ratio such as 1/3);
    any float operand makes the result a float.
    """
    _check_numbers("/", args)
    if len(args) == 1:
        args = [1, *args]
    result = args[0]
    for x in args[1:]:
        _check_divisor("/", x)
        if _is_exact(result) and _is_exact(x):
            result = Fraction(result) / x
        else:
            result = result / x
    return _normalize(result)


def quot(args: list[LispValue]) -> LispValue:
    """(quot n d): quotient truncated toward zero."""
    _check_numbers("quot", args)
    n, d = args
    _check_divisor("quot", d)
    if isinstance(n, int) and isinstance(d, int):
        q = abs(n) // abs(d)
        return q if (n >= 0) == (d > 0) else -q
    return _normalize(math.trunc(n / d)) if _is_exact(n) and _is_exact(d) else float(math.trunc(n / d))


def rem(args: list[LispValue]) -> LispValue:
    """(rem n d): remainder of quot, takes the sign of n."""
    n, d = args
    return _normalize(n - d * quot(args))


def mod(args: list[LispValue]) -> LispValue:
    """(mod n d): modulus, takes the sign of d."""
    _check_numbers("mod", args)
    n, d = args
    _check_divisor("mod", d)
    return _normalize(n % d)


def inc(args: list[LispValue]) -> LispValue:
    _check_numbers("inc", args)
    return args[0] + 1


def dec(args: list[LispValue]) -> LispValue:
    _check_numbers("dec", args)
    return args[0] - 1


def abs_(args: list[LispValue]) -> LispValue:
    _check_numbers("abs", args)
    return abs(args[0])


def max_(args: list[LispValue]) -> LispValue:
    _check_numbers("max", args)
    return max(args)


def min_(args: list[LispValue]) -> LispValue:
    _check_numbers("min", args)
    return min(args)


def _float_fn(name, fn):
    """Wrap a math function so domain errors give NaN/Infinity instead of raising."""
    def impl(args: list[LispValue]) -> float:
        _check_numbers(name, args)
        try:
            return float(fn(*args))
        except ValueError:
            return math.nan
        except OverflowError:
            return math.inf
    return impl


def _log(x):
    return -math.inf if x == 0 else math.log(x)


def expt(args: list[LispValue]) -> LispValue:
    """(expt base power): exact for integer powers of exact bases."""
    _check_numbers("expt", args)
    base, power = args
    if base == 0 and power < 0:
        raise DivideByZeroError("Divide by zero in expt")
    if _is_exact(base) and isinstance(power, int):
        return _normalize(Fraction(base) ** power)
    try:
        return math.pow(base, power)
    except ValueError:
        return math.nan
    except OverflowError:
        return math.inf


def rand_int(args: list[LispValue]) -> int:
    """(rand-int n): random integer in [0, n)."""
    _check_numbers("rand-int", args)
    n = int(args[0])
    if n <= 0:
        raise CloveTypeError(f"rand-int expects a positive bound, got {to_str(args[0])}")
    return random.randrange(n)


def rand(args: list[LispValue]) -> float:
    """(rand) or (rand n): random float in [0, n), n defaults to 1."""
    _check_numbers("rand", args)
    return random.random() * (args[0] if args else 1)


# -------------------------------
# Comparison
# -------------------------------
def _chain(name, op):
    def impl(args: list[LispValue]) -> bool:
        _check_numbers(name, args)
        return all(op(a, b) for a, b in zip(args, args[1:]))
    return impl


lt = _chain("<", lambda a, b: a < b)
lte = _chain("<=", lambda a, b: a <= b)
gt = _chain(">", lambda a, b: a > b)
gte = _chain(">=", lambda a, b: a >= b)


# -------------------------------
# Equality
# -------------------------------
def is_equal(a: LispValue, b: LispValue) -> bool:
    """Structural equality as used by `=`.

    Numbers are equal only within a category: exact (integers, ratios) or
    floating. Lists and vectors compare element-wise in order and are equal
    to each other; maps and sets ignore order.
    """
    if is_number(a) and is_number(b):
        return _is_exact(a) == _is_exact(b) and a == b
    if a is b:
        return True
    if isinstance(a, bool) or isinstance(b, bool):
        return False
    if isinstance(a, (List, Vector)) and isinstance(b, (List, Vector)):
        if len(a) != len(b):
            return False
        return all(is_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, Map) and isinstance(b, Map):
        if len(a) != len(b):
            return False
        return all(k in b and is_equal(v, b[k]) for k, v in a.items())
    if isinstance(a, Set) and isinstance(b, Set):
        if len(a) != len(b):
            return False
        return all(any(is_equal(x, y) for y in b) for x in a)
    if isinstance(a, Char) != isinstance(b, Char):
        return False
    if isinstance(a, (tuple, frozenset, Map)) or isinstance(b, (tuple, frozenset, Map)):
        return False
    return a == b


def equals(args: list[LispValue]) -> bool:
    """(= x y ...): true if every argument is equal to the first."""
    first = args[0]
    return all(is_equal(first, other) for other in args[1:])


def not_equals(args: list[LispValue]) -> bool:
    return not equals(args)


def numeric_equals(args: list[LispValue]) -> bool:
    """(== x y ...): numeric equality across categories, so (== 1 1.0) is true.

    A single argument is always equal to itself; otherwise every argument
    must be a number.
    """
    if len(args) == 1:
        return True
    _check_numbers("==", args)
    first = args[0]
    return all(first == other for other in args[1:])


# -------------------------------
# Predicates
# -------------------------------
def _predicate(test):
    def impl(args: list[LispValue]) -> bool:
        return bool(test(args[0]))
    return impl


def _numeric_predicate(name, test):
    def impl(args: list[LispValue]) -> bool:
        _check_numbers(name, args)
        return bool(test(args[0]))
    return impl


def _integer_predicate(name, test):
    def impl(args: list[LispValue]) -> bool:
        _check_integers(name, args)
        return bool(test(args[0]))
    return impl


def is_procedure(x: LispValue) -> bool:
    return isinstance(x, (Lambda, Primitive))


# -------------------------------
# Sequences and collections
# -------------------------------
def _seq(name: str, x: LispValue) -> tuple:
    if isinstance(x, NilType):
        return ()
    if isinstance(x, Char):
        raise CloveTypeError(f"Don't know how to create a sequence from: {to_str(x)}")
    if isinstance(x, str):
        return tuple(Char(c) for c in x)
    if isinstance(x, (List, Vector, Set)):
        return tuple(x)
    if isinstance(x, Map):
        return tuple(Vector(kv) for kv in x.items())
    raise CloveTypeError(f"{name}: don't know how to create a sequence from: {to_str(x)}")


def count(args: list[LispValue]) -> int:
    x = args[0]
    if isinstance(x, (str, List, Vector, Set, Map)) and not isinstance(x, Char):
        return len(x)
    if isinstance(x, NilType):
        return 0
    raise CloveTypeError(f"count not supported on this type: {to_str(x)}")


def first(args: list[LispValue]) -> LispValue:
    items = _seq("first", args[0])
    return items[0] if items else Nil


def rest(args: list[LispValue]) -> List:
    return List(_seq("rest", args[0])[1:])


def next_(args: list[LispValue]) -> LispValue:
    items = _seq("next", args[0])[1:]
    return List(items) if items else Nil


def cons(args: list[LispValue]) -> List:
    head, tail = args
    return List((head, *_seq("cons", tail)))


def conj(args: list[LispValue]) -> LispValue:
    """(conj coll x ...): add items where the collection adds them cheaply."""
    coll, *items = args
    if isinstance(coll, NilType):
        coll = List()
    if isinstance(coll, List):
        return List((*reversed(items), *coll))
    if isinstance(coll, Vector):
        return Vector((*coll, *items))
    if isinstance(coll, Set):
        return Set((*coll, *items))
    if isinstance(coll, Map):
        for item in items:
            if not isinstance(item, Vector) or len(item) != 2:
                raise CloveTypeError("conj on a map expects [key value] vectors")
            coll = coll.assoc(item[0], item[1])
        return coll
    raise CloveTypeError(f"conj not supported on this type: {to_str(coll)}")


def nth(args: list[LispValue]) -> LispValue:
    coll, index = args[0], args[1]
    _check_integers("nth", [index])
    items = _seq("nth", coll)
    if 0 <= index < len(items):
        return items[index]
    if len(args) == 3:
        return args[2]
    raise CloveTypeError(f"Index {index} out of bounds for nth")


def get(args: list[LispValue]) -> LispValue:
    """(get coll key [default]): lookup in maps, sets, vectors and strings."""
    coll, key = args[0], args[1]
    default = args[2] if len(args) == 3 else Nil
    if isinstance(coll, Map):
        return coll.get(key, default)
    if isinstance(coll, Set):
        return key if key in coll else default
    if isinstance(coll, (Vector, str)) and isinstance(key, int) and not isinstance(key, bool):
        items = _seq("get", coll)
        return items[key] if 0 <= key < len(items) else default
    return default


def assoc(args: list[LispValue]) -> Map:
    coll, *kvs = args
    if len(kvs) % 2:
        raise CloveTypeError("assoc expects even number of arguments after map")
    if isinstance(coll, NilType):
        coll = Map()
    if not isinstance(coll, Map):
        raise CloveTypeError(f"assoc not supported on this type: {to_str(coll)}")
    for k, v in zip(kvs[::2], kvs[1::2]):
        coll = coll.assoc(k, v)
    return coll


def contains(args: list[LispValue]) -> bool:
    coll, key = args
    if isinstance(coll, (Map, Set)):
        return key in coll
    if isinstance(coll, (Vector, str)) and isinstance(key, int) and not isinstance(key, bool):
        return 0 <= key < len(coll)
    if isinstance(coll, NilType):
        return False
    raise CloveTypeError(f"contains? not supported on type: {to_str(coll)}")


def is_empty(args: list[LispValue]) -> bool:
    return len(_seq("empty?", args[0])) == 0


def hash_map(args: list[LispValue]) -> Map:
    if len(args) % 2:
        raise CloveTypeError("hash-map expects an even number of arguments")
    return Map(zip(args[::2], args[1::2]))


# -------------------------------
# Strings, names and identity
# -------------------------------
def str_(args: list[LispValue]) -> str:
    """Concatenate the display form of each argument; nil contributes nothing."""
    parts = []
    for x in args:
        if isinstance(x, NilType):
            continue
        parts.append(x if isinstance(x, str) else to_str(x))
    return "".join(parts)


def name(args: list[LispValue]) -> str:
    x = args[0]
    if isinstance(x, (Symbol, Keyword)):
        return x.id
    if isinstance(x, str) and not isinstance(x, Char):
        return x
    raise CloveTypeError(f"name expects a string, symbol or keyword, got {to_str(x)}")


def keyword(args: list[LispValue]) -> Keyword:
    x = args[0]
    if isinstance(x, Keyword):
        return x
    if isinstance(x, Symbol):
        return Keyword(x.id)
    if isinstance(x, str) and not isinstance(x, Char):
        return Keyword(x)
    raise CloveTypeError(f"keyword expects a string or symbol, got {to_str(x)}")


def symbol(args: list[LispValue]) -> Symbol:
    x = args[0]
    if isinstance(x, Symbol):
        return x
    if isinstance(x, str) and not isinstance(x, Char):
        return Symbol(x)
    raise CloveTypeError(f"symbol expects a string, got {to_str(x)}")


# -------------------------------
# Function application
# -------------------------------
def apply(args: list[LispValue]) -> LispValue:
    """(apply f x y [more]): call f with the leading args followed by the items of the last."""
    fn, *leading, last = args
    return apply_engine(fn, [*leading, *_seq("apply", last)], evaluate0)


# -------------------------------
# Registration
# -------------------------------
def register(env: Environment) -> None:
    """Install every primitive into `env` (normally the global frame)."""
    table = [
        # arithmetic
        ("+", add, 0, None),
        ("-", sub, 1, None),
        ("*", mul, 0, None),
        ("/", div, 1, None),
        ("quot", quot, 2, 2),
        ("rem", rem, 2, 2),
        ("mod", mod, 2, 2),
        ("inc", inc, 1, 1),
        ("dec", dec, 1, 1),
        ("abs", abs_, 1, 1),
        ("max", max_, 1, None),
        ("min", min_, 1, None),
        ("expt", expt, 2, 2),
        ("sqrt", _float_fn("sqrt", math.sqrt), 1, 1),
        ("exp", _float_fn("exp", math.exp), 1, 1),
        ("log", _float_fn("log", _log), 1, 1),
        ("sin", _float_fn("sin", math.sin), 1, 1),
        ("cos", _float_fn("cos", math.cos), 1, 1),
        ("atan", _float_fn("atan", math.atan), 1, 1),
        ("rand-int", rand_int, 1, 1),
        ("rand", rand, 0, 1),
        # comparison and equality
        ("<", lt, 1, None),
        ("<=", lte, 1, None),
        (">", gt, 1, None),
        (">=", gte, 1, None),
        ("=", equals, 1, None),
        ("not=", not_equals, 1, None),
        ("==", numeric_equals, 1, None),
        # predicates
        ("zero?", _numeric_predicate("zero?", lambda x: x == 0), 1, 1),
        ("pos?", _numeric_predicate("pos?", lambda x: x > 0), 1, 1),
        ("neg?", _numeric_predicate("neg?", lambda x: x < 0), 1, 1),
        ("even?", _integer_predicate("even?", lambda x: x % 2 == 0), 1, 1),
        ("odd?", _integer_predicate("odd?", lambda x: x % 2 == 1), 1, 1),
        ("number?", _predicate(is_number), 1, 1),
        ("integer?", _predicate(lambda x: isinstance(x, int) and not isinstance(x, bool)), 1, 1),
        ("float?", _predicate(lambda x: isinstance(x, float)), 1, 1),
        ("ratio?", _predicate(lambda x: isinstance(x, Fraction)), 1, 1),
        ("string?", _predicate(lambda x: isinstance(x, str) and not isinstance(x, Char)), 1, 1),
        ("char?", _predicate(lambda x: isinstance(x, Char)), 1, 1),
        ("keyword?", _predicate(lambda x: isinstance(x, Keyword)), 1, 1),
        ("symbol?", _predicate(lambda x: isinstance(x, Symbol)), 1, 1),
        ("nil?", _predicate(lambda x: x is Nil), 1, 1),
        ("some?", _predicate(lambda x: x is not Nil), 1, 1),
        ("true?", _predicate(lambda x: x is True), 1, 1),
        ("false?", _predicate(lambda x: x is False), 1, 1),
        ("fn?", _predicate(is_procedure), 1, 1),
        ("list?", _predicate(lambda x: isinstance(x, List)), 1, 1),
        ("vector?", _predicate(lambda x: isinstance(x, Vector)), 1, 1),
        ("map?", _predicate(lambda x: isinstance(x, Map)), 1, 1),
        ("set?", _predicate(lambda x: isinstance(x, Set)), 1, 1),
        ("empty?", is_empty, 1, 1),
        ("contains?", contains, 2, 2),
        # sequences and collections
        ("count", count, 1, 1),
        ("first", first, 1, 1),
        ("rest", rest, 1, 1),
        ("next", next_, 1, 1),
        ("cons", cons, 2, 2),
        ("conj", conj, 1, None),
        ("nth", nth, 2, 3),
        ("get", get, 2, 3),
        ("assoc", assoc, 1, None),
        ("list", lambda args: List(args), 0, None),
        ("vector", lambda args: Vector(args), 0, None),
        ("hash-map", hash_map, 0, None),
        ("hash-set", lambda args: Set(args), 0, None),
        # strings, names, application
        ("str", str_, 0, None),
        ("name", name, 1, 1),
        ("keyword", keyword, 1, 1),
        ("symbol", symbol, 1, 1),
        ("identity", lambda args: args[0], 1, 1),
        ("apply", apply, 2, None),
    ]
    env.update({
        Symbol(sym): Primitive(sym, fn, min_arity, max_arity)
        for sym, fn, min_arity, max_arity in table
    })
