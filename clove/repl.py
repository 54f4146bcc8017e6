"""
Line-oriented read-eval-print loop for clove.

Lines are buffered until they hold complete forms; each complete form is
evaluated in the session's global environment and its printed value (or an
`ErrorKind: message` summary) is written out. Errors never end the loop;
end of input does.
"""

from __future__ import annotations

import logging
import sys
from typing import Callable, Optional, TextIO

from clove.errors import CloveError, UnexpectedEOF
from clove.interpreter import Interpreter
from clove.printer import to_str
from clove.reader.parser import read_all

logger = logging.getLogger(__name__)

PROMPT = "user=> "
CONTINUATION_PROMPT = "  #_=> "


def format_error(ex: BaseException) -> str:
    kind = ex.kind if isinstance(ex, CloveError) else type(ex).__name__
    return f"{kind}: {ex}"


class Repl:
    def __init__(
        self,
        interp: Optional[Interpreter] = None,
        input_fn: Callable[[str], str] = input,
        output: Optional[TextIO] = None,
    ):
        self.interp = interp if interp is not None else Interpreter()
        self.input_fn = input_fn
        self.output = output if output is not None else sys.stdout
        self.pending: list[str] = []

    @property
    def prompt(self) -> str:
        return CONTINUATION_PROMPT if self.pending else PROMPT

    def feed(self, line: str) -> list[str]:
        """Add a line of input; return the printed result of each form it completes.

        An incomplete form is kept pending and nothing is returned until a
        later line closes it.
        """
        self.pending.append(line)
        source = "\n".join(self.pending)
        exprs = []
        syntax_error: Optional[CloveError] = None
        try:
            for expr in read_all(source):
                exprs.append(expr)
        except UnexpectedEOF:
            return []
        except CloveError as ex:
            # Forms read before the bad token still run.
            syntax_error = ex
        self.pending = []

        results = []
        for expr in exprs:
            try:
                results.append(to_str(self.interp.eval_expr(expr)))
            except Exception as ex:
                logger.debug("Evaluation failed", exc_info=True)
                results.append(format_error(ex))
        if syntax_error is not None:
            results.append(format_error(syntax_error))
        return results

    def run(self) -> None:
        while True:
            try:
                line = self.input_fn(self.prompt)
            except EOFError:
                self.output.write("\n")
                break
            except KeyboardInterrupt:
                self.pending = []
                self.output.write("\n")
                continue
            for text in self.feed(line):
                self.output.write(text + "\n")
            self.output.flush()
