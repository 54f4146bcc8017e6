from clove import EvaluatorFn
from clove import SExpression, LispValue
from clove.errors import CloveSyntaxError
from clove.evaluation.special_forms.do_form import do_form
from clove.types.compound import Vector
from clove.types.environment import Environment
from clove.types.symbol import Symbol


def let_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool = False,
) -> LispValue:
    """
    (let [name1 expr1 name2 expr2 ...] body...)

    Bindings are made one after another in a fresh child frame, so each
    expression sees the names bound before it.
    """
    if not tail or not isinstance(tail[0], Vector):
        raise CloveSyntaxError("let requires a vector for its binding")
    bindings = tail[0]
    if len(bindings) % 2:
        raise CloveSyntaxError("let requires an even number of forms in binding vector")

    local_env = Environment(outer=env)
    for name, expr in zip(bindings[::2], bindings[1::2]):
        if not isinstance(name, Symbol):
            raise CloveSyntaxError(f"Unsupported binding form: {name!r}")
        local_env.define(name, evaluate_fn(expr, local_env))
    return do_form(list(tail[1:]), local_env, evaluate_fn, is_tail_call)
