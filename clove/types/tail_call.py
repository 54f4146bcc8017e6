from clove.types.lambda_fn import Lambda
from clove.types.environment import Environment


class TailCall:
    """A pending application of `fn` whose body is to be evaluated in `env`."""

    __slots__ = ("fn", "env")

    def __init__(self, fn: Lambda, env: Environment):
        self.fn = fn
        self.env = env
