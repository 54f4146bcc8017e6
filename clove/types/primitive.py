"""Built-in procedures implemented in Python."""

from __future__ import annotations

from typing import Callable, Optional

from clove import LispValue
from clove.errors import ArityError


class Primitive:
    """A named native operation with an arity range.

    `max_arity` of None means variadic. The implementation receives the list
    of evaluated arguments.
    """

    __slots__ = ("name", "fn", "min_arity", "max_arity")

    def __init__(
        self,
        name: str,
        fn: Callable[[list[LispValue]], LispValue],
        min_arity: int = 0,
        max_arity: Optional[int] = None,
    ):
        self.name = name
        self.fn = fn
        self.min_arity = min_arity
        self.max_arity = max_arity

    def __call__(self, args: list[LispValue]) -> LispValue:
        n = len(args)
        if n < self.min_arity or (self.max_arity is not None and n > self.max_arity):
            raise ArityError(f"Wrong number of args ({n}) passed to: {self.name}")
        return self.fn(args)

    def __repr__(self) -> str:
        return f"#<primitive {self.name}>"
