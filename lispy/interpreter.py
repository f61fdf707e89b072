from __future__ import annotations

import logging
from typing import Literal

from lispy import __version__
from lispy.builtin.env_builtin import EXIT_SENTINEL, PENV_SENTINEL, register
from lispy.config import get_prelude_paths
from lispy.evaluation.evaluator import evaluate
from lispy.reader.parser import parse
from lispy.reader.reader import read
from lispy.types.environment import Environment
from lispy.types.value import Builtin, Error, Symbol, Value

logger = logging.getLogger(__name__)


def is_exit(value: Value) -> bool:
    """True for the sentinel returned by `exit`, or the `exit` builtin itself."""
    if isinstance(value, Symbol):
        return value.id == EXIT_SENTINEL
    return isinstance(value, Builtin) and value.builtin_name == EXIT_SENTINEL


def is_penv(value: Value) -> bool:
    return isinstance(value, Symbol) and value.id == PENV_SENTINEL


class Interpreter:
    """
    Orchestrates reading and evaluating Lispy code.
    Maintains the global Environment across calls.
    """

    def __init__(self, prelude: str | None | Literal['auto'] = 'auto'):
        self.env: Environment = Environment()
        register(self.env)
        logger.info("Lispy %s: %d builtins registered", __version__, len(self.env))

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            self.load_configured_prelude()
        elif prelude:
            self.eval_prelude(prelude)

    def load_configured_prelude(self) -> None:
        for path in get_prelude_paths():
            try:
                code = path.read_text(encoding='utf-8')
            except FileNotFoundError:
                # Be permissive: a missing prelude file is skipped
                logger.warning("prelude file %s not found, skipping", path)
                continue
            logger.info("loading prelude %s", path)
            if not self.eval_prelude(code, filename=str(path)):
                break

    def eval_prelude(self, code: str, filename: str = "<prelude>") -> bool:
        """Evaluate prelude source, stopping at the first exit request.

        Returns False when the prelude asked to exit. The builtins an `exit`
        cleared are registered again so the interpreter stays usable.
        """
        root = parse(code, filename)
        for node in root.children:
            if node.tag == "regex":
                continue
            result = evaluate(self.env, read(node))
            if isinstance(result, Error):
                logger.warning("prelude %s: %s", filename, result)
            elif is_exit(result):
                logger.warning("prelude %s: exit requested, prelude loading stopped", filename)
                register(self.env)
                return False
        return True

    def eval(self, code: str, filename: str = "<stdin>") -> list[Value]:
        """Evaluate every top-level expression in `code`, in order.

        Each expression is evaluated on its own, so a bare `+ 1 2` yields the
        builtin and the two numbers; write `(+ 1 2)` to get the sum.
        """
        root = parse(code, filename)
        results: list[Value] = []
        for node in root.children:
            if node.tag == "regex":
                continue
            results.append(evaluate(self.env, read(node)))
        return results
