# Core type aliases for clove's data model.
# Code and runtime values share one representation: Python scalars (int, float,
# Fraction, str, bool) plus the small immutable wrappers in clove.types
# (Symbol, Keyword, Char, List, Vector, Map, Set, Nil).
#
# Naming guidance:
# - SExpression: use in reader/special-form code to denote syntactic forms.
# - LispValue:  use in evaluator/runtime code to denote evaluated values.

from typing import Any, Callable

__version__ = "0.1.0"

LispValue = Any
SExpression = LispValue

# Evaluator function type passed to special forms: (expr, env, is_tail_call)
EvaluatorFn = Callable[..., LispValue]
