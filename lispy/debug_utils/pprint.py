from __future__ import annotations

from lispy.types.environment import Environment
from lispy.types.lambda_fn import Lambda
from lispy.types.value import Builtin, Error, Expr, Number, Symbol, Value

# ----------------- ANSI colors -----------------
RESET = "\033[0m"
COLOR_NUMBER = "\033[96m"
COLOR_SYMBOL = "\033[94m"
COLOR_ERROR = "\033[91m"
COLOR_LAMBDA = "\033[92m"
COLOR_BUILTIN = "\033[95m"

# ----------------- Defaults -----------------
DEFAULT_OPTIONS = {
    "color_numbers": True,
    "color_symbols": True,
    "color_errors": True,
    "color_lambda": True,
    "color_builtins": True,
}

NO_COLOR_OPTIONS = {key: False for key in DEFAULT_OPTIONS}


# ----------------- Colorize utility -----------------
def colorize(obj: Value, text: str, options: dict = DEFAULT_OPTIONS) -> str:
    if isinstance(obj, Number) and options.get("color_numbers", True):
        return f"{COLOR_NUMBER}{text}{RESET}"
    if isinstance(obj, Symbol) and options.get("color_symbols", True):
        return f"{COLOR_SYMBOL}{text}{RESET}"
    if isinstance(obj, Error) and options.get("color_errors", True):
        return f"{COLOR_ERROR}{text}{RESET}"
    if isinstance(obj, Lambda) and options.get("color_lambda", True):
        return f"{COLOR_LAMBDA}{text}{RESET}"
    if isinstance(obj, Builtin) and options.get("color_builtins", True):
        return f"{COLOR_BUILTIN}{text}{RESET}"
    return text


# ----------------- Pretty printer -----------------
def to_str(value: Value, color: bool = False) -> str:
    """Render a value the way the REPL prints it."""
    options = DEFAULT_OPTIONS if color else NO_COLOR_OPTIONS
    return _render(value, options)


def _render(value: Value, options: dict) -> str:
    if isinstance(value, Expr):
        inner = " ".join(_render(c, options) for c in value)
        return f"{value.open_char}{inner}{value.close_char}"
    if isinstance(value, Lambda):
        text = f"(\\ {_render(value.formals, options)} {_render(value.body, options)})"
        return colorize(value, text, options)
    return colorize(value, str(value), options)


def format_env(env: Environment, color: bool = False) -> str:
    """Table of the frame's bindings: name, type, and a total footer."""
    options = DEFAULT_OPTIONS if color else NO_COLOR_OPTIONS
    lines = [f"{'<name>':>10}  --  {'<type>':>10}"]
    for name, value in env:
        type_text = colorize(value, f"{value.type_name:>10}", options)
        lines.append(f"{name:>10}  --  {type_text}")
    lines.append(f"total: {len(env)}")
    return "\n".join(lines)
