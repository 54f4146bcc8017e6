"""Runtime environment for clove.

The Environment stores bindings of Symbols to evaluated values and supports
nested scopes via an `outer` link. The frame with no `outer` is the global
frame of a session; procedures keep a reference to the frame they were
created in, so frames are shared rather than owned.
"""

from __future__ import annotations

from typing import Optional, Sequence

from clove import LispValue
from clove.errors import ArityError, CloveSyntaxError, UnboundSymbolError
from clove.types.compound import List
from clove.types.nil import Nil
from clove.types.symbol import Symbol

VARIADIC_MARKER = Symbol("&")


def split_params(params: Sequence[Symbol]) -> tuple[list[Symbol], Optional[Symbol]]:
    """Split a parameter list into fixed parameters and the optional rest parameter.

    `[a b & more]` -> ([a, b], more). Raises CloveSyntaxError for a malformed
    list such as `[a &]` or `[& x y]`.
    """
    params = list(params)
    for p in params:
        if not isinstance(p, Symbol):
            raise CloveSyntaxError(f"Parameter must be a symbol, got {p!r}")
    if VARIADIC_MARKER not in params:
        return params, None
    idx = params.index(VARIADIC_MARKER)
    if len(params) != idx + 2:
        raise CloveSyntaxError("& must be followed by exactly one parameter")
    return params[:idx], params[idx + 1]


class Environment:
    """Hierarchical mapping from Symbols to values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[Symbol, LispValue] = {}
        self.outer: Environment | None = outer

    def define(self, name: Symbol, value: LispValue) -> None:
        """Bind `name` to `value` in this frame, replacing any binding here.

        Bindings of the same name in outer frames are shadowed, never changed.
        """
        if not isinstance(name, Symbol):
            raise CloveSyntaxError(f"Cannot define {name!r}: not a symbol")
        self.vars[name] = value

    def find(self, symbol: Symbol) -> Optional[Environment]:
        """Find the nearest environment in the chain that contains `symbol`."""
        env: Optional[Environment] = self
        while env is not None:
            if symbol in env.vars:
                return env
            env = env.outer
        return None

    def lookup(self, name: Symbol) -> LispValue:
        """Look up the value bound to `name`, innermost frame first.

        Raises UnboundSymbolError if no frame in the chain binds it.
        """
        env = self.find(name)
        if env is None:
            raise UnboundSymbolError(name)
        return env.vars[name]

    def root(self) -> Environment:
        """Return the global frame at the end of the chain."""
        env = self
        while env.outer is not None:
            env = env.outer
        return env

    def extend(
        self,
        params: Sequence[Symbol],
        args: Sequence[LispValue],
        name: str = "fn",
    ) -> Environment:
        """Return a child frame binding `params` to `args` positionally.

        A trailing `& rest` parameter collects surplus arguments into a List
        (nil when there are none). Any other count mismatch raises ArityError.
        """
        fixed, rest = split_params(params)
        args = list(args)
        if len(args) < len(fixed) or (rest is None and len(args) > len(fixed)):
            raise ArityError(f"Wrong number of args ({len(args)}) passed to: {name}")

        local_env = Environment(outer=self)
        for param, arg in zip(fixed, args):
            local_env.vars[param] = arg
        if rest is not None:
            surplus = args[len(fixed):]
            local_env.vars[rest] = List(surplus) if surplus else Nil
        return local_env

    def update(self, mapping: dict[Symbol, LispValue]) -> None:
        """Bulk-define a mapping of Symbol -> value in the current frame."""
        for k, v in mapping.items():
            self.define(k, v)

    def depth(self) -> int:
        """Number of frames between this one and the global frame."""
        n = 0
        env = self.outer
        while env is not None:
            n += 1
            env = env.outer
        return n

    def __str__(self) -> str:
        names = " ".join(str(k) for k in self.vars)
        if self.outer is None:
            return f"<global frame: {len(self.vars)} bindings>"
        return f"<frame depth={self.depth()}: {names}>"

    def __repr__(self) -> str:
        return str(self)
