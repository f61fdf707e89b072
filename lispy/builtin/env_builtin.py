"""Built-in functions for the Lispy runtime environment.

This module defines arithmetic, list processing, variable and lambda
definition, and the REPL control builtins, plus the registration helper that
installs them into the global environment.

Every builtin takes `(env, args)` where `args` is an S-Expression of already
evaluated values owned by the builtin. Invalid input never raises: the first
failed check returns an Error value describing it.
"""
from __future__ import annotations

import logging
import math
from typing import Callable

from lispy.debug_utils.pprint import format_env
from lispy.errors import ErrorKind
from lispy.evaluation.evaluator import evaluate
from lispy.types.environment import Environment
from lispy.types.lambda_fn import Lambda
from lispy.types.value import (
    Builtin,
    Error,
    Number,
    QExpr,
    SExpr,
    Symbol,
    Value,
)

logger = logging.getLogger(__name__)

EXIT_SENTINEL = "exit"
PENV_SENTINEL = "penv"


# -------------------------------
# Argument checks
# -------------------------------
def check_count(func: str, args: SExpr, expected: int) -> Error | None:
    if len(args) != expected:
        return Error.of(ErrorKind.ARG_COUNT, func=func, got=len(args), expected=expected)
    return None


def check_type(func: str, args: SExpr, index: int, expected: type[Value]) -> Error | None:
    cell = args[index]
    if not isinstance(cell, expected):
        return Error.of(
            ErrorKind.ARG_TYPE,
            func=func,
            index=index,
            got=cell.type_name,
            expected=expected.type_name,
        )
    return None


def check_list_arg(func: str, args: SExpr) -> Error | None:
    """Checks shared by head/tail/init: arity, then type, then emptiness."""
    if len(args) != 1:
        return Error.of(ErrorKind.LIST_TOO_MANY_ARGS, func=func)
    if not isinstance(args[0], QExpr):
        return Error.of(ErrorKind.LIST_BAD_TYPE, func=func)
    if len(args[0]) == 0:
        return Error.of(ErrorKind.LIST_EMPTY, func=func)
    return None


# -------------------------------
# Arithmetic
# -------------------------------
def _add(x: float, y: float) -> float:
    return x + y


def _sub(x: float, y: float) -> float:
    return x - y


def _mul(x: float, y: float) -> float:
    return x * y


def _div(x: float, y: float) -> float | Error:
    if y == 0:
        return Error.of(ErrorKind.DIV_BY_ZERO)
    return x / y


def _mod(x: float, y: float) -> float | Error:
    """Remainder of the operands truncated toward zero, sign of the dividend."""
    try:
        ix, iy = int(x), int(y)
    except (OverflowError, ValueError):
        return Error.of(ErrorKind.MOD_OVERFLOW)
    if iy == 0:
        return Error.of(ErrorKind.DIV_BY_ZERO)
    return math.fmod(ix, iy)


def _pow(x: float, y: float) -> float | Error:
    if x < 0:
        return Error.of(ErrorKind.POW_ON_NEG)
    if x == 0 and y == 0:
        return 1.0
    if x == 0 and y < 0:
        return math.inf
    try:
        return math.pow(x, y)
    except OverflowError:
        return math.inf


OPERATORS: dict[str, Callable[[float, float], float | Error]] = {
    "+": _add,
    "-": _sub,
    "*": _mul,
    "/": _div,
    "%": _mod,
    "^": _pow,
}


def builtin_op(env: Environment, args: SExpr, op: str) -> Value:
    """Fold the numeric arguments left-to-right with operator `op`."""
    if len(args) == 0:
        return Error.of(ErrorKind.NO_ARGS, func=op)
    for cell in args:
        if not isinstance(cell, Number):
            return Error.of(ErrorKind.OP_ON_NAN)
    operator = OPERATORS.get(op)
    if operator is None:
        return Error.of(ErrorKind.BAD_OP)

    x = args.pop(0).num

    # Unary negation
    if op == "-" and len(args) == 0:
        return Number(-x)

    while len(args):
        y = args.pop(0).num
        result = operator(x, y)
        if isinstance(result, Error):
            return result
        x = result
    return Number(x)


def add(env: Environment, args: SExpr) -> Value:
    return builtin_op(env, args, "+")


def sub(env: Environment, args: SExpr) -> Value:
    return builtin_op(env, args, "-")


def mul(env: Environment, args: SExpr) -> Value:
    return builtin_op(env, args, "*")


def div(env: Environment, args: SExpr) -> Value:
    return builtin_op(env, args, "/")


def mod(env: Environment, args: SExpr) -> Value:
    return builtin_op(env, args, "%")


def power(env: Environment, args: SExpr) -> Value:
    return builtin_op(env, args, "^")


# -------------------------------
# List operations
# -------------------------------
def list_builtin(env: Environment, args: SExpr) -> Value:
    """Turn the argument list itself into a Q-Expression."""
    return args.to_qexpr()


def head(env: Environment, args: SExpr) -> Value:
    """Q-Expression holding only the first item of the argument."""
    err = check_list_arg("head", args)
    if err is not None:
        return err
    x = args.take(0)
    del x.cells[1:]
    return x


def tail(env: Environment, args: SExpr) -> Value:
    """The argument with its first item removed."""
    err = check_list_arg("tail", args)
    if err is not None:
        return err
    x = args.take(0)
    x.pop(0)
    return x


def init(env: Environment, args: SExpr) -> Value:
    """The argument with its last item removed."""
    err = check_list_arg("init", args)
    if err is not None:
        return err
    x = args.take(0)
    x.pop(-1)
    return x


def eval_builtin(env: Environment, args: SExpr) -> Value:
    """Evaluate a Q-Expression as if it were an S-Expression."""
    if len(args) != 1:
        return Error.of(ErrorKind.LIST_TOO_MANY_ARGS, func="eval")
    if not isinstance(args[0], QExpr):
        return Error.of(ErrorKind.LIST_BAD_TYPE, func="eval")
    x = args.take(0).to_sexpr()
    return evaluate(env, x)


def join(env: Environment, args: SExpr) -> Value:
    """Concatenate one or more Q-Expressions in argument order."""
    if len(args) == 0:
        return Error.of(ErrorKind.NO_ARGS, func="join")
    for cell in args:
        if not isinstance(cell, QExpr):
            return Error.of(ErrorKind.LIST_BAD_TYPE, func="join")
    x = args.pop(0)
    while len(args):
        x.join(args.pop(0))
    return x


def cons(env: Environment, args: SExpr) -> Value:
    """Prepend a value to a Q-Expression."""
    err = check_count("cons", args, 2) or check_type("cons", args, 1, QExpr)
    if err is not None:
        return err
    x = args.pop(0)
    return args.take(0).add_head(x)


def length(env: Environment, args: SExpr) -> Value:
    """Number of items in a Q-Expression."""
    err = check_count("len", args, 1) or check_type("len", args, 0, QExpr)
    if err is not None:
        return err
    return Number(len(args[0]))


# -------------------------------
# Variables and lambdas
# -------------------------------
def builtin_var(env: Environment, args: SExpr, func: str) -> Value:
    """Shared body of `def` (global binding) and `=` (local binding)."""
    if len(args) == 0:
        return Error.of(ErrorKind.NO_ARGS, func=func)
    err = check_type(func, args, 0, QExpr)
    if err is not None:
        return err

    syms = args[0]
    for sym in syms:
        if not isinstance(sym, Symbol):
            return Error.of(
                ErrorKind.DEFINE_NON_SYMBOL,
                func=func,
                got=sym.type_name,
                expected=Symbol.type_name,
            )

    if len(syms) != len(args) - 1:
        return Error.of(
            ErrorKind.SYMBOL_COUNT, func=func, got=len(syms), expected=len(args) - 1
        )

    for sym, value in zip(syms, args.cells[1:]):
        if func == "def":
            logger.debug("def %s (global)", sym.id)
            env.define_global(sym.id, value)
        else:
            logger.debug("= %s (local)", sym.id)
            env.put(sym.id, value)
    return SExpr()


def define(env: Environment, args: SExpr) -> Value:
    return builtin_var(env, args, "def")


def put(env: Environment, args: SExpr) -> Value:
    return builtin_var(env, args, "=")


def lambda_builtin(env: Environment, args: SExpr) -> Value:
    """(\\ {formals} {body}) builds a lambda with an empty environment."""
    err = (
        check_count("\\", args, 2)
        or check_type("\\", args, 0, QExpr)
        or check_type("\\", args, 1, QExpr)
    )
    if err is not None:
        return err

    for formal in args[0]:
        if not isinstance(formal, Symbol):
            return Error.of(
                ErrorKind.NON_SYMBOL, got=formal.type_name, expected=Symbol.type_name
            )

    formals = args.pop(0)
    body = args.pop(0)
    return Lambda(formals, body)


# -------------------------------
# REPL control
# -------------------------------
def exit_builtin(env: Environment, args: SExpr) -> Value:
    """Drop every binding of the current frame and signal the REPL to stop."""
    if len(args) != 1:
        return Error.of(ErrorKind.MISSING_PLACEHOLDER, func="exit")
    logger.debug("exit: releasing %d bindings", len(env))
    env.clear()
    return Symbol(EXIT_SENTINEL)


def penv(env: Environment, args: SExpr) -> Value:
    """Signal the REPL to dump the current frame's bindings."""
    if len(args) != 1:
        return Error.of(ErrorKind.MISSING_PLACEHOLDER, func="penv")
    logger.debug("penv:\n%s", format_env(env, color=False))
    return Symbol(PENV_SENTINEL)


BUILTINS: dict[str, Callable[[Environment, SExpr], Value]] = {
    # List functions
    "list": list_builtin,
    "head": head,
    "tail": tail,
    "eval": eval_builtin,
    "join": join,
    "cons": cons,
    "len": length,
    "init": init,
    # Mathematical functions
    "+": add,
    "-": sub,
    "*": mul,
    "/": div,
    "%": mod,
    "^": power,
    # Variable functions
    "def": define,
    "=": put,
    # Lambda functions
    "\\": lambda_builtin,
    # REPL control
    "exit": exit_builtin,
    "penv": penv,
}


def register(env: Environment) -> None:
    """Register all builtin functions into the given environment."""
    env.update({name: Builtin(name, fn) for name, fn in BUILTINS.items()})
