from __future__ import annotations

from enum import Enum, auto


class LispyError(Exception):
    """ Base class for all host-level Lispy errors"""
    pass

class LispySyntaxError(LispyError):
    """ Raised when source text cannot be tokenized or parsed"""

    def __init__(self, message: str, position: int | None = None):
        super().__init__(message)
        self.position = position

class LispyReaderError(LispyError):
    """ Raised when the reader is handed a parse node it does not understand"""


# Language-level failures are not raised: they travel as Error values. The kind
# is kept as data so callers can match on it, the text lives in ERROR_MESSAGES.
class ErrorKind(Enum):
    DIV_BY_ZERO = auto()
    POW_ON_NEG = auto()
    OP_ON_NAN = auto()
    STR_TO_NUM = auto()
    BAD_OP = auto()
    SEXPR_NO_FUNC = auto()
    MOD_OVERFLOW = auto()
    LIST_TOO_MANY_ARGS = auto()
    LIST_BAD_TYPE = auto()
    LIST_EMPTY = auto()
    UNBOUND_SYMBOL = auto()
    NO_SUCH_FUNCTION = auto()
    TOO_MANY_ARGS = auto()
    BAD_VARIADIC = auto()
    ARG_COUNT = auto()
    ARG_TYPE = auto()
    NO_ARGS = auto()
    NON_SYMBOL = auto()
    DEFINE_NON_SYMBOL = auto()
    SYMBOL_COUNT = auto()
    MISSING_PLACEHOLDER = auto()


ERROR_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.DIV_BY_ZERO: "Division by zero!",
    ErrorKind.POW_ON_NEG: "Pow base on negative number!",
    ErrorKind.OP_ON_NAN: "Cannot operate on non-number!",
    ErrorKind.STR_TO_NUM: "This String cannot cast to number!",
    ErrorKind.BAD_OP: "This operation is not supported!",
    ErrorKind.SEXPR_NO_FUNC: "First element is not a function!",
    ErrorKind.MOD_OVERFLOW: (
        "Numbers in mod-op shouldn't be float type! "
        "Overflow occurred in type cast!"
    ),
    ErrorKind.LIST_TOO_MANY_ARGS: "Function '{func}' passed too many arguments!",
    ErrorKind.LIST_BAD_TYPE: "Function '{func}' passed incorrect type!",
    ErrorKind.LIST_EMPTY: "Function '{func}' passed {{}}!",
    ErrorKind.UNBOUND_SYMBOL: "Unbound symbol: {name}!",
    ErrorKind.NO_SUCH_FUNCTION: "No such function in environment!",
    ErrorKind.TOO_MANY_ARGS: (
        "Function passed too many arguments. Got {given}, Expected {total}."
    ),
    ErrorKind.BAD_VARIADIC: "Symbol '&' not followed by single symbol.",
    ErrorKind.ARG_COUNT: (
        "Function '{func}' passed incorrect number of arguments. "
        "Got {got}, Expected {expected}."
    ),
    ErrorKind.ARG_TYPE: (
        "Function '{func}' passed incorrect type for argument {index}. "
        "Got {got}, Expected {expected}."
    ),
    ErrorKind.NO_ARGS: "Function '{func}' passed no arguments!",
    ErrorKind.NON_SYMBOL: "Cannot define non-symbol. Got {got}, Expected {expected}.",
    ErrorKind.DEFINE_NON_SYMBOL: (
        "Function '{func}' cannot define non-symbol. "
        "Got {got}, Expected {expected}."
    ),
    ErrorKind.SYMBOL_COUNT: (
        "Function '{func}' passed too many arguments for symbols. "
        "Got {got}, Expected {expected}."
    ),
    ErrorKind.MISSING_PLACEHOLDER: "Function '{func}' has no argument!",
}


def error_message(kind: ErrorKind, **fields) -> str:
    """Render the message template registered for `kind`."""
    return ERROR_MESSAGES[kind].format(**fields)
