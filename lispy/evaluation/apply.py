"""Application engine for Lispy.

This module centralizes the call protocol used by the evaluator:
- Builtins receive the caller's environment and their evaluated arguments.
- Lambdas bind arguments positionally into their own environment. Supplying
  fewer arguments than formals yields a partially applied copy (currying);
  the formal `&` gathers every remaining argument into one Q-Expression.
- Once every formal is bound, the lambda's environment is re-parented onto the
  caller's environment and the body is evaluated there. Free symbols in a body
  therefore resolve through the call site, not the definition site.
"""

from __future__ import annotations

import logging

from lispy import EvaluatorFn
from lispy.errors import ErrorKind
from lispy.types.environment import Environment
from lispy.types.lambda_fn import Lambda
from lispy.types.value import Builtin, Error, QExpr, SExpr, Symbol, Value

logger = logging.getLogger(__name__)

VARIADIC_MARKER = "&"


def _is_marker(formal: Value) -> bool:
    return isinstance(formal, Symbol) and formal.id == VARIADIC_MARKER


def _bind_rest(fn: Lambda, rest: QExpr) -> Error | None:
    """Consume the '&' marker and bind the symbol after it to `rest`."""
    if len(fn.formals) != 2:
        return Error.of(ErrorKind.BAD_VARIADIC)
    fn.formals.pop(0)
    sym = fn.formals.pop(0)
    fn.env.put(sym.id, rest)
    return None


def apply_lambda(
    env: Environment, fn: Lambda, args: SExpr, evaluate_fn: EvaluatorFn
) -> Value:
    """Bind `args` into `fn` and either evaluate its body or return a partial.

    `fn` is consumed: its formals are popped as they get bound.
    """
    given = len(args)
    total = len(fn.formals)

    while len(args):
        if not len(fn.formals):
            return Error.of(ErrorKind.TOO_MANY_ARGS, given=given, total=total)

        if _is_marker(fn.formals[0]):
            err = _bind_rest(fn, args.to_qexpr())
            if err is not None:
                return err
            break

        sym = fn.formals.pop(0)
        fn.env.put(sym.id, args.pop(0))

    # Variadic formal left over with nothing to gather: bind an empty list
    if len(fn.formals) and _is_marker(fn.formals[0]):
        err = _bind_rest(fn, QExpr())
        if err is not None:
            return err

    if len(fn.formals):
        logger.debug(
            "partial application of %s: %d of %d formals bound",
            fn.name or "lambda", given, total,
        )
        return fn.copy()

    fn.env.outer = env
    body = fn.body.copy().to_sexpr()
    return evaluate_fn(fn.env, body)


def apply(
    env: Environment, head: Builtin | Lambda, args: SExpr, evaluate_fn: EvaluatorFn
) -> Value:
    """Apply either a Builtin or a Lambda to already-evaluated arguments."""
    if isinstance(head, Builtin):
        logger.debug("calling builtin %s with %d args", head.builtin_name, len(args))
        return head.fn(env, args)
    return apply_lambda(env, head, args, evaluate_fn)
