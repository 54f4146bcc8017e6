class CloveError(Exception):
    """ Base class for all clove errors"""
    kind = "Error"


class CloveSyntaxError(CloveError):
    """ Raised when source text cannot be read"""
    kind = "SyntaxError"


class UnexpectedEOF(CloveSyntaxError):
    """ Raised when input ends inside an open form or string literal"""


class UnboundSymbolError(CloveError):
    """ Raised when a symbol is absent from the whole environment chain"""
    kind = "UnboundSymbolError"

    def __init__(self, symbol):
        super().__init__(f"Unable to resolve symbol: {symbol} in this context")
        self.symbol = symbol


class ArityError(CloveError):
    """ Raised when a procedure is called with the wrong number of arguments"""
    kind = "ArityError"


class CloveTypeError(CloveError):
    """ Raised when an operand kind is not supported by a primitive"""
    kind = "TypeError"


class NotAProcedureError(CloveError):
    """ Raised when the head of an application is not callable"""
    kind = "NotAProcedureError"


class DivideByZeroError(CloveError):
    """ Raised on division or modulo by zero"""
    kind = "DivideByZeroError"


class StackOverflowError(CloveError):
    """ Raised when a recursive process exhausts the host stack"""
    kind = "StackOverflowError"


class EvalTimeoutError(CloveError):
    """ Raised when a top-level evaluation runs past its deadline"""
    kind = "EvalTimeoutError"
