from clove import EvaluatorFn
from clove import SExpression, LispValue
from clove.errors import CloveSyntaxError
from clove.evaluation.special_forms.lambda_form import make_lambda
from clove.types.environment import Environment
from clove.types.lambda_fn import Lambda
from clove.types.nil import Nil
from clove.types.symbol import Symbol
from clove.types.var import Var


def _bind_global(name: Symbol, value: LispValue, env: Environment) -> Var:
    root = env.root()
    root.define(name, value)
    return Var(name, root)


def define_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    _: bool = False,
) -> LispValue:
    """
    (def name), (def name value) or (def name "docstring" value)

    The value is evaluated in the current environment and bound in the global
    frame, whatever the nesting. Returns the Var naming the binding.
    """
    if not tail or len(tail) > 3:
        raise CloveSyntaxError("def requires a name and at most one value")
    name = tail[0]
    if not isinstance(name, Symbol):
        raise CloveSyntaxError("First argument to def must be a symbol")
    if len(tail) == 3 and not isinstance(tail[1], str):
        raise CloveSyntaxError("Too many arguments to def")

    value = evaluate_fn(tail[-1], env) if len(tail) > 1 else Nil
    if isinstance(value, Lambda) and value.name is None:
        value.name = str(name)
    return _bind_global(name, value, env)


def defn_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    _: bool = False,
) -> LispValue:
    """
    (defn name "docstring"? [params] body...)

    Shorthand for (def name (fn [params] body...)); the procedure closes over
    the current environment and refers to itself through the global binding.
    """
    if len(tail) < 2:
        raise CloveSyntaxError("defn requires a name and a parameter vector")
    name, rest = tail[0], list(tail[1:])
    if not isinstance(name, Symbol):
        raise CloveSyntaxError("First argument to defn must be a symbol")
    if isinstance(rest[0], str) and len(rest) > 1:
        rest = rest[1:]
    fn = make_lambda("defn", rest[0], rest[1:], env, str(name))
    return _bind_global(name, fn, env)
