from clove import SExpression, LispValue, EvaluatorFn
from clove.errors import CloveSyntaxError
from clove.types.environment import Environment


def quote_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn, _: bool = False) -> LispValue:
    if len(tail) != 1:
        raise CloveSyntaxError("quote expects exactly 1 argument")
    return tail[0]
