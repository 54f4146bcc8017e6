"""Compound procedure representation for clove."""

from __future__ import annotations

from io import StringIO
from typing import Optional

from clove import SExpression, LispValue
from clove.types.environment import Environment, split_params
from clove.types.symbol import Symbol


class Lambda:
    """A first-class procedure with formal parameters, body, and closure env.

    `env` is the environment the `fn` form was evaluated in; it is fixed here
    and every call extends it, never the caller's environment.
    """

    __slots__ = ("formals", "body", "env", "name")

    def __init__(
        self,
        formals: list[Symbol],
        body: SExpression,
        env: Environment,
        name: Optional[str] = None,
    ):
        split_params(formals)  # validates the parameter vector
        self.formals: list[Symbol] = list(formals)
        self.body: SExpression = body
        self.env: Environment = env
        self.name: Optional[str] = name

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("#<fn ")
            buffer.write(self.name or "anonymous")
            buffer.write(" [")
            buffer.write(" ".join(str(f) for f in self.formals))
            buffer.write("]>")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return str(self)

    def extend_env(self, args: list[LispValue]) -> Environment:
        """Bind argument values to the formals in a child of the closure env."""
        return self.env.extend(self.formals, args, self.name or "fn")
