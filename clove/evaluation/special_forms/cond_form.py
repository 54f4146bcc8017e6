"""Special form: cond, the multi-branch conditional."""

from clove import SExpression, LispValue, EvaluatorFn
from clove.errors import CloveSyntaxError
from clove.evaluation.special_forms.logic_forms import is_truthy
from clove.types.environment import Environment
from clove.types.nil import Nil


def cond_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn, is_tail_call: bool = False) -> LispValue:
    """Evaluate (cond test1 expr1 test2 expr2 ...).

    Tests are evaluated in order; the expression paired with the first truthy
    test is evaluated (in tail position) and returned. `:else` gets no special
    treatment: it is a keyword, hence truthy, so it only acts as a default
    when it is the last test. If no test is truthy, returns nil.
    """
    if len(tail) % 2:
        raise CloveSyntaxError("cond requires an even number of forms")

    for test, expr in zip(tail[::2], tail[1::2]):
        if is_truthy(evaluate_fn(test, env)):
            return evaluate_fn(expr, env, is_tail_call)
    return Nil
