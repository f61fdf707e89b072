"""Interactive read-eval-print loop for Lispy.

Every top-level expression on a line is evaluated and printed on its own, so
function calls need their parentheses: `(+ 1 2)` prints 3, while `+ 1 2`
prints the builtin followed by both numbers.
"""

from __future__ import annotations

import logging
import readline  # noqa: F401  (line editing and history for input())
import sys
from typing import Callable, TextIO

from lispy import __version__
from lispy.config import color_enabled, get_log_level, get_prompt
from lispy.debug_utils.pprint import format_env, to_str
from lispy.errors import LispySyntaxError
from lispy.interpreter import Interpreter, is_exit, is_penv

BANNER = f"Lispy Version {__version__}\nPress Ctrl+c to Exit\n"


def repl(
    interp: Interpreter | None = None,
    input_fn: Callable[[str], str] = input,
    output: TextIO = sys.stdout,
    color: bool = False,
) -> int:
    if interp is None:
        interp = Interpreter()
    prompt = get_prompt()
    print(BANNER, file=output)

    while True:
        try:
            line = input_fn(prompt)
        except (EOFError, KeyboardInterrupt):
            print(file=output)
            return 0

        try:
            results = interp.eval(line)
        except LispySyntaxError as ex:
            print(ex, file=output)
            continue

        for value in results:
            print(to_str(value, color), file=output)
            if is_penv(value):
                print(format_env(interp.env, color), file=output)
            if is_exit(value):
                return 0


def main() -> int:
    logging.basicConfig(level=get_log_level())
    color = color_enabled() and sys.stdout.isatty()
    return repl(color=color)


if __name__ == "__main__":
    sys.exit(main())
