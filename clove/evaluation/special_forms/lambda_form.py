from typing import Optional

from clove import EvaluatorFn
from clove import SExpression, LispValue
from clove.errors import CloveSyntaxError
from clove.types.compound import List, Vector
from clove.types.environment import Environment
from clove.types.lambda_fn import Lambda
from clove.types.nil import Nil
from clove.types.symbol import Symbol


def make_body(body_forms: list[SExpression]) -> SExpression:
    """Collapse a sequence of body forms into one expression (implicit do)."""
    # No body forms: calling the function yields nil.
    if not body_forms:
        return Nil
    if len(body_forms) == 1:
        return body_forms[0]
    return List((Symbol("do"), *body_forms))


def make_lambda(
    form_name: str,
    params: SExpression,
    body_forms: list[SExpression],
    env: Environment,
    name: Optional[str] = None,
) -> Lambda:
    if not isinstance(params, Vector):
        raise CloveSyntaxError(f"{form_name} parameter declaration should be a vector")
    return Lambda(list(params), make_body(body_forms), env, name)


def lambda_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    _: bool = False,
) -> LispValue:
    """(fn [params] body...) or (fn name [params] body...).

    The body is not evaluated here. The named variant binds `name` to the
    procedure itself in a frame between the body and `env`, so the body can
    recur on it without a global definition.
    """
    if not tail:
        raise CloveSyntaxError("fn requires a parameter vector")

    if isinstance(tail[0], Symbol):
        name, rest = tail[0], tail[1:]
        if not rest:
            raise CloveSyntaxError("fn requires a parameter vector")
        self_env = Environment(outer=env)
        fn = make_lambda("fn", rest[0], list(rest[1:]), self_env, str(name))
        self_env.define(name, fn)
        return fn

    return make_lambda("fn", tail[0], list(tail[1:]), env)
