"""Application engine for clove.

This module centralizes procedure application for the interpreter:
- Tail-call awareness via TailCall objects (consumed by the trampoline).
- Compound procedures bind arguments through Environment.extend on the
  procedure's captured environment.
- Primitive procedures run their Python implementation after an arity check.

Keeping this logic in one place prevents duplication between the evaluator
and builtin helpers such as `apply`.
"""

from clove import LispValue, EvaluatorFn
from clove.errors import NotAProcedureError
from clove.printer import to_str
from clove.runtime_context import check_deadline
from clove.types.lambda_fn import Lambda
from clove.types.primitive import Primitive
from clove.types.tail_call import TailCall


def trampoline(result: LispValue, evaluate_fn: EvaluatorFn) -> LispValue:
    """Run pending tail calls until an ordinary value comes back.

    Each step replaces the current (body, environment) pair instead of
    nesting a Python call, so loops written as tail calls use constant stack.
    """
    while isinstance(result, TailCall):
        check_deadline()
        result = evaluate_fn(result.fn.body, result.env, True)
    return result


def apply_lambda(
    fn: Lambda,
    args: list[LispValue],
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool,
) -> LispValue:
    """Apply a compound procedure.

    In tail position the prepared call is returned as a TailCall for the
    enclosing trampoline; otherwise the body is run to completion here.
    Argument count mismatches raise ArityError from Environment.extend.
    """
    new_env = fn.extend_env(args)
    if is_tail_call:
        return TailCall(fn, new_env)
    return trampoline(evaluate_fn(fn.body, new_env, True), evaluate_fn)


def apply(
    head: LispValue,
    args: list[LispValue],
    evaluate_fn: EvaluatorFn,
    tail: bool = False,
) -> LispValue:
    """Apply either a Lambda or a Primitive.

    Anything else raises NotAProcedureError.
    """
    check_deadline()
    if isinstance(head, Lambda):
        return apply_lambda(head, args, evaluate_fn, tail)
    elif isinstance(head, Primitive):
        return head(args)
    else:
        raise NotAProcedureError(f"{to_str(head)} cannot be called as a procedure")
