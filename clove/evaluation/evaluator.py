"""Core evaluator and trampoline for the clove interpreter.

`evaluate` is the entry point: a case analysis over the expression kinds
with special-form dispatch, and tail-call aware application via a trampoline
over TailCall objects.
"""

from __future__ import annotations

from clove import SExpression, LispValue
from clove.evaluation.apply import apply, trampoline
from clove.evaluation.special_forms import SPECIAL_FORMS
from clove.types.compound import List, Map, Set, Vector
from clove.types.environment import Environment
from clove.types.symbol import Symbol


def evaluate(expr: SExpression, env: Environment) -> LispValue:
    """
    Trampoline evaluator: evaluate `expr` fully, running any tail calls.
    """
    return trampoline(evaluate0(expr, env, True), evaluate0)


def evaluate0(
    expr: SExpression,
    env: Environment,
    is_tail_call: bool = False,
) -> LispValue:
    """
    Core evaluator: single-step evaluation with tail-call awareness.

    With is_tail_call set, an application of a compound procedure is returned
    as a TailCall instead of being run; otherwise the result is always a
    plain value.
    """
    match expr:
        case Symbol():
            return env.lookup(expr)

        case List() if expr:
            head, *tail_args = expr
            # --- Special forms handling ---
            if isinstance(head, Symbol) and head in SPECIAL_FORMS:
                return SPECIAL_FORMS[head](tail_args, env, evaluate0, is_tail_call)

            # --- Application: operator first, then operands left to right ---
            fn = evaluate0(head, env)
            args = [evaluate0(arg, env) for arg in tail_args]
            return apply(fn, args, evaluate0, is_tail_call)

        case Vector():
            return Vector(evaluate0(item, env) for item in expr)

        case Map():
            return Map((evaluate0(k, env), evaluate0(v, env)) for k, v in expr.items())

        case Set():
            return Set(evaluate0(item, env) for item in expr)

    # --- Atoms (numbers, strings, chars, booleans, nil, keywords) and () ---
    return expr
