from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterator, Literal, Optional

from clove import SExpression, LispValue
from clove import config
from clove.builtin.env_builtin import register
from clove.errors import StackOverflowError
from clove.evaluation.evaluator import evaluate
from clove.printer import to_str
from clove.reader.parser import read_all, read_one
from clove.runtime_context import reset_deadline, set_deadline
from clove.types.environment import Environment
from clove.types.nil import Nil

logger = logging.getLogger(__name__)


class Interpreter:
    """
    One evaluation session: a global Environment holding the primitives and
    every `def` made so far, plus the reader/evaluator plumbing around it.

    Sessions are independent; no frame is shared between two Interpreters.
    Each top-level form is evaluated to completion or failure before the
    next is read, and a failing form leaves earlier definitions in place.
    """

    def __init__(
        self,
        prelude: str | None | Literal['auto'] = 'auto',
        *,
        timeout: Optional[float] = None,
        recursion_limit: Optional[int] = None,
    ):
        self.env: Environment = Environment()
        register(self.env)

        self.timeout: Optional[float] = timeout if timeout is not None else config.get_eval_timeout()

        limit = recursion_limit if recursion_limit is not None else config.get_recursion_limit()
        # Only ever raise the process-wide limit; other sessions may rely on it.
        if limit > sys.getrecursionlimit():
            sys.setrecursionlimit(limit)

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            for path in config.get_prelude_paths():
                try:
                    self.load_file(path)
                except FileNotFoundError:
                    logger.warning("Prelude file not found: %s", path)
        else:
            self.eval_prelude(prelude)

    def eval_prelude(self, code: str) -> None:
        logger.debug("Loading prelude (%d chars)", len(code))
        for _ in self.eval_forms(code):
            pass

    def load_file(self, path: str | Path) -> LispValue:
        """Evaluate every form in the file at `path`; returns the last value."""
        logger.debug("Loading %s", path)
        code = Path(path).read_text(encoding="utf-8")
        return self.eval(code)

    def read_one(self, code: str) -> SExpression:
        return read_one(code)

    def eval_expr(self, expr: SExpression) -> LispValue:
        """Evaluate one top-level form in the global environment.

        Applies the session timeout, and reports exhaustion of the Python
        stack by a deeply recursive process as StackOverflowError.
        """
        token = set_deadline(self.timeout)
        try:
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("Evaluating %s", to_str(expr))
            return evaluate(expr, self.env)
        except RecursionError:
            raise StackOverflowError("Recursion too deep: the process ran out of stack")
        finally:
            reset_deadline(token)

    def eval_forms(self, code: str) -> Iterator[LispValue]:
        """Read and evaluate each top-level form of `code` in turn, yielding its value."""
        for expr in read_all(code):
            yield self.eval_expr(expr)

    def eval(self, code: str) -> LispValue:
        """Evaluate all forms in `code`; returns the value of the last (nil if none)."""
        result: LispValue = Nil
        for result in self.eval_forms(code):
            pass
        return result
