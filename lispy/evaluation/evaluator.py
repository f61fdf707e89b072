"""Core evaluator for the Lispy interpreter.

Symbols resolve through the environment chain; S-Expressions reduce by
evaluating every cell, surfacing the first Error, and applying the head to the
rest; every other value is a fixed point.
"""

from __future__ import annotations

import logging

from lispy.errors import ErrorKind
from lispy.evaluation.apply import apply
from lispy.types.environment import Environment
from lispy.types.lambda_fn import Lambda
from lispy.types.value import Builtin, Error, SExpr, Symbol, Value

logger = logging.getLogger(__name__)


def evaluate(env: Environment, value: Value) -> Value:
    """Evaluate `value` in `env`. Errors come back as Error values."""
    match value:
        case Symbol():
            return env.get(value.id).named(value.id)
        case SExpr():
            return evaluate_sexpr(env, value)

    # --- Atoms, Q-Expressions and functions return as-is ---
    return value


def evaluate_sexpr(env: Environment, sexpr: SExpr) -> Value:
    """Reduce an S-Expression. The list is consumed in the process."""
    sexpr.cells = [evaluate(env, cell) for cell in sexpr.cells]

    # Lowest index wins; later errors are dropped unseen
    for i, cell in enumerate(sexpr.cells):
        if isinstance(cell, Error):
            return sexpr.take(i)

    if len(sexpr) == 0:
        return sexpr
    if len(sexpr) == 1:
        return sexpr.take(0)

    head = sexpr.pop(0)
    if not isinstance(head, (Builtin, Lambda)):
        logger.debug("head of s-expression is a %s, not a function", head.type_name)
        return Error.of(ErrorKind.SEXPR_NO_FUNC)

    result = apply(env, head, sexpr, evaluate)

    # Unnamed results of native calls carry the name the builtin is bound under
    if isinstance(head, Builtin) and result.name is None:
        symbol = env.lookup_by_builtin(head.fn)
        if isinstance(symbol, Symbol):
            result.named(symbol.id)
    return result
