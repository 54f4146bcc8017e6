from clove import SExpression, LispValue, EvaluatorFn
from clove.errors import ArityError
from clove.types.environment import Environment
from clove.types.nil import Nil


def is_truthy(val: LispValue) -> bool:
    """Everything is truthy except `false` and `nil`; 0 and "" are truthy."""
    return not (val is False or val is Nil)


def and_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn, is_tail_call: bool = False) -> LispValue:
    """Short-circuiting logical AND special form.

    (and a b c ...) evaluates each operand left-to-right until a falsey value
    (nil or false) is found, which is returned immediately; later operands are
    never evaluated. Otherwise returns the value of the last operand, which is
    evaluated in tail position. With zero operands, returns true.
    """
    if not tail:
        return True
    for expr in tail[:-1]:
        val = evaluate_fn(expr, env)
        if not is_truthy(val):
            return val
    return evaluate_fn(tail[-1], env, is_tail_call)


def or_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn, is_tail_call: bool = False) -> LispValue:
    """Short-circuiting logical OR special form.

    (or a b c ...) evaluates each operand left-to-right and returns the first
    truthy value. If none of the leading operands is truthy the last operand
    is evaluated in tail position and its value returned. With zero operands,
    returns false.
    """
    if not tail:
        return False
    for expr in tail[:-1]:
        val = evaluate_fn(expr, env)
        if is_truthy(val):
            return val
    return evaluate_fn(tail[-1], env, is_tail_call)


def not_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn, _: bool = False) -> bool:
    if len(tail) != 1:
        raise ArityError(f"Wrong number of args ({len(tail)}) passed to: not")
    return not is_truthy(evaluate_fn(tail[0], env))
