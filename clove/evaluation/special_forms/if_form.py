from clove import EvaluatorFn
from clove import SExpression, LispValue
from clove.errors import CloveSyntaxError
from clove.evaluation.special_forms.logic_forms import is_truthy
from clove.types.nil import Nil
from clove.types.environment import Environment


def if_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool = False,
) -> LispValue:
    if len(tail) < 2:
        raise CloveSyntaxError("Too few arguments to if")
    if len(tail) > 3:
        raise CloveSyntaxError("Too many arguments to if")

    if is_truthy(evaluate_fn(tail[0], env)):
        return evaluate_fn(tail[1], env, is_tail_call)
    elif len(tail) > 2:
        return evaluate_fn(tail[2], env, is_tail_call)
    else:
        return Nil
