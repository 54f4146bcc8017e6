from __future__ import annotations

from clove import LispValue
from clove.types.environment import Environment
from clove.types.symbol import Symbol


class Var:
    """Reference to a global binding, as returned by `def`."""

    __slots__ = ("ns", "symbol", "env")

    def __init__(self, symbol: Symbol, env: Environment, ns: str = "user"):
        self.symbol = symbol
        self.env = env
        self.ns = ns

    @property
    def value(self) -> LispValue:
        return self.env.lookup(self.symbol)

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Var)
            and self.symbol == other.symbol
            and self.env is other.env
        )

    def __hash__(self) -> int:
        return hash((self.ns, self.symbol))

    def __str__(self) -> str:
        return f"#'{self.ns}/{self.symbol}"

    def __repr__(self) -> str:
        return str(self)
